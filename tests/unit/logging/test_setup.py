import logging

import pytest

from resourcekit import config
from resourcekit.logging.format import AddFormattedAttributes, DefaultFormatter
from resourcekit.logging.setup import (
    create_default_handler,
    get_log_level_from_config,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    loggers = {
        name: logging.getLogger(name).level
        for name in ("resourcekit", "botocore", "resourcekit.utils.sync", "resourcekit.aws.waiter")
    }
    yield
    root.handlers = handlers
    root.setLevel(level)
    for name, logger_level in loggers.items():
        logging.getLogger(name).setLevel(logger_level)


@pytest.mark.parametrize(
    "rk_log, debug, expected",
    [
        (False, False, logging.INFO),
        (False, True, logging.DEBUG),
        ("warn", False, logging.WARNING),
        ("error", False, logging.ERROR),
        ("trace", False, logging.DEBUG),
        ("trace-internal", False, logging.DEBUG),
    ],
)
def test_get_log_level_from_config(monkeypatch, rk_log, debug, expected):
    monkeypatch.setattr(config, "RK_LOG", rk_log)
    monkeypatch.setattr(config, "DEBUG", debug)

    assert get_log_level_from_config() == expected


def test_create_default_handler():
    handler = create_default_handler(logging.WARNING)

    assert handler.level == logging.WARNING
    assert isinstance(handler.formatter, DefaultFormatter)
    assert any(isinstance(f, AddFormattedAttributes) for f in handler.filters)


def test_setup_logging(restore_logging):
    setup_logging(logging.DEBUG)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("resourcekit").level == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.ERROR
    assert logging.getLogger("resourcekit.utils.sync").level == logging.INFO


def test_setup_logging_from_config_with_trace(monkeypatch, restore_logging):
    monkeypatch.setattr(config, "RK_LOG", "trace")
    monkeypatch.setattr(config, "DEBUG", True)

    setup_logging_from_config()

    assert logging.getLogger("resourcekit.utils.sync").level == logging.DEBUG
    assert logging.getLogger("resourcekit.aws.waiter").level == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.ERROR
