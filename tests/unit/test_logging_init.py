from __future__ import annotations

import logging
from io import StringIO
from unittest.mock import patch

from tempcsv.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME == "tempcsv"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_tempcsv_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_get_logger_returns_configured_logger():
    logger = setup_logging()
    assert get_logger() is logger


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_child_loggers_reach_app_handler(capsys):
    setup_logging()
    logging.getLogger("tempcsv.parsing.text").warning("csv: Skipping line 3")
    assert "WARN csv: Skipping line 3" in capsys.readouterr().out


def test_summary_level_logging():
    logger = setup_logging()
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"
    with patch.object(logger, "_log") as mock_log:
        log_summary("files=1 loaded=1")
        mock_log.assert_called_once()
        assert mock_log.call_args[0][0] == SUMMARY_LEVEL


def test_set_debug_lowers_levels():
    logger = setup_logging()
    set_debug(logger)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
