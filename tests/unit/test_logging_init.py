from __future__ import annotations

import logging
from io import StringIO

from size_table.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_setup_logging_debug():
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_labeled_prefixes_and_module_propagation():
    stream = StringIO()
    logger = setup_logging(stream=stream)
    logger.info("info message")
    logging.getLogger(f"{LOGGER_NAME}.services.grouper").warning("child warning")
    logger.error("error message")
    log_summary("file=x.xlsx items=1")

    lines = stream.getvalue().strip().split("\n")
    assert lines == [
        "INFO info message",
        "WARN child warning",
        "ERROR error message",
        "SUMMARY file=x.xlsx items=1",
    ]


def test_formatter_unknown_level_uses_level_name():
    record = logging.LogRecord("x", 5, __file__, 1, "msg", None, None)
    record.levelname = "TRACE"
    assert LabeledFormatter().format(record) == "TRACE msg"
    assert SUMMARY_LEVEL == 25
