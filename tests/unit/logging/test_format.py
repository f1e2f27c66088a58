import logging

from resourcekit.logging.format import (
    AddFormattedAttributes,
    DefaultFormatter,
    compress_logger_name,
)


def test_compress_logger_name():
    assert compress_logger_name("log", 1) == "l"
    assert compress_logger_name("log", 2) == "lo"
    assert compress_logger_name("log", 3) == "log"
    assert compress_logger_name("log", 5) == "log"
    assert compress_logger_name("my.very.long.logger.name", 1) == "m.v.l.l.n"
    assert compress_logger_name("my.very.long.logger.name", 11) == "m.v.l.l.nam"
    assert compress_logger_name("my.very.long.logger.name", 12) == "m.v.l.l.name"
    assert compress_logger_name("my.very.long.logger.name", 16) == "m.v.l.l.name"
    assert compress_logger_name("my.very.long.logger.name", 17) == "m.v.l.logger.name"
    assert compress_logger_name("my.very.long.logger.name", 24) == "my.very.long.logger.name"


def test_compress_resourcekit_logger_names():
    name = "resourcekit.services.glue.waiters"
    assert compress_logger_name(name, 26) == "r.services.glue.waiters"
    assert compress_logger_name("resourcekit.utils.sync", 26) == "resourcekit.utils.sync"


def test_add_formatted_attributes():
    record = logging.LogRecord(
        name="resourcekit.services.s3.resource_providers.aws_s3_bucketwebsiteconfiguration",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="S3 Bucket Website Configuration (%s) not found, removing from state",
        args=("my-bucket",),
        exc_info=None,
    )
    record.threadName = "ThreadPoolExecutor-0_1"

    assert AddFormattedAttributes(max_name_len=20, max_thread_len=8).filter(record)

    assert record.rk_level == "WARN"
    assert len(record.rk_name) <= 20
    assert record.rk_name == "r.s.s.r.aws_s3_bucke"
    assert record.rk_thread == "utor-0_1"

    formatted = DefaultFormatter().format(record)
    assert "WARN --- [" in formatted
    assert formatted.endswith(
        ": S3 Bucket Website Configuration (my-bucket) not found, removing from state"
    )
