"""Tools for formatting resourcekit logs."""
import logging
from functools import lru_cache

MAX_THREAD_NAME_LEN = 12
MAX_NAME_LEN = 26

LOG_FORMAT = f"%(asctime)s.%(msecs)03d %(rk_level)5s --- [%(rk_thread){MAX_THREAD_NAME_LEN}s] %(rk_name)-{MAX_NAME_LEN}s : %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

CUSTOM_LEVEL_NAMES = {
    50: "FATAL",
    40: "ERROR",
    30: "WARN",
    20: "INFO",
    10: "DEBUG",
}


class DefaultFormatter(logging.Formatter):
    """
    A formatter that uses ``LOG_FORMAT`` and ``LOG_DATE_FORMAT``.
    """

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)


class AddFormattedAttributes(logging.Filter):
    """
    Filter that adds three attributes to a log record:

    - rk_level: the abbreviated loglevel that's max 5 characters long
    - rk_name: the abbreviated name of the logger (e.g., `r.services.glue.waiters`), trimmed to ``MAX_NAME_LEN``
    - rk_thread: the abbreviated thread name (prefix trimmed, .e.g, ``omeThread-108``)
    """

    max_name_len: int
    max_thread_len: int

    def __init__(self, max_name_len: int = None, max_thread_len: int = None):
        super().__init__()
        self.max_name_len = max_name_len if max_name_len else MAX_NAME_LEN
        self.max_thread_len = max_thread_len if max_thread_len else MAX_THREAD_NAME_LEN

    def filter(self, record):
        record.rk_level = CUSTOM_LEVEL_NAMES.get(record.levelno, record.levelname)
        record.rk_name = self._get_compressed_logger_name(record.name)
        record.rk_thread = record.threadName[-self.max_thread_len :]
        return True

    @lru_cache(maxsize=256)
    def _get_compressed_logger_name(self, name):
        return compress_logger_name(name, self.max_name_len)


def compress_logger_name(name: str, length: int) -> str:
    """
    Creates a short version of a logger name. For example ``my.very.long.logger.name`` with length=17 turns into
    ``m.v.l.logger.name``. Parts are expanded from the right, as long as the result fits into ``length``.

    :param name: the logger name
    :param length: the max length of the logger name
    :return: the compressed name
    """
    if len(name) <= length:
        return name

    parts = name.split(".")
    compressed = [part[0] for part in parts]
    # characters left after collapsing every part to one letter (n letters + n-1 dots)
    budget = length - (2 * len(parts) - 1)

    for index in reversed(range(len(parts))):
        extra = len(parts[index]) - 1
        if extra > budget:
            # the last part is never reduced to a single letter if there is room for more
            if index == len(parts) - 1 and budget > 0:
                compressed[index] = parts[index][: budget + 1]
            break
        compressed[index] = parts[index]
        budget -= extra

    return ".".join(compressed)
