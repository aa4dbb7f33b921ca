import logging
import re

import pytest

from syskit.logsetup import (
    TRACE,
    console_logger,
    file_and_console_logger,
    pattern_formatter,
    rolling_file_logger,
    simple_formatter,
)


@pytest.fixture
def cleanup():
    loggers = []
    yield loggers.append
    for logger in loggers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def _record(name="test", level=logging.INFO, msg="Hello world"):
    return logging.LogRecord(name, level, "/src/main.py", 33, msg, None, None)


def test_simple_formatter_layout():
    assert simple_formatter().format(_record()) == "INFO - Hello world"


def test_pattern_formatter_layout():
    line = pattern_formatter().format(_record())
    head, tail = line.split("] ", 1)
    assert tail == "INFO  test - Hello world [/src/main.py:33]"
    stamp, thread = head.split(" [", 1)
    assert thread.isdigit()
    assert len(stamp) == 27
    assert re.fullmatch(
        r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2},\d{3}\.\d{3}", stamp
    ) is not None


def test_console_logger_respects_level(capsys, cleanup):
    logger = console_logger("syskit-test-console", logging.INFO)
    cleanup(logger)
    logger.info("Hello world")
    logger.debug("hidden")
    assert capsys.readouterr().out == "INFO - Hello world\n"


def test_console_logger_does_not_duplicate_handlers(capsys, cleanup):
    console_logger("syskit-test-twice")
    logger = console_logger("syskit-test-twice")
    cleanup(logger)
    logger.warning("once")
    assert capsys.readouterr().out.count("once") == 1


def test_file_and_console_logger_appends(tmp_path, capsys, cleanup):
    path = tmp_path / "logs" / "log.txt"
    logger = file_and_console_logger("syskit-test-file", path)
    cleanup(logger)
    logger.info("first")
    logger = file_and_console_logger("syskit-test-file", path)
    logger.info("second")
    for handler in logger.handlers:
        handler.flush()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert " INFO  syskit-test-file - first [" in lines[0]
    assert " INFO  syskit-test-file - second [" in lines[1]
    assert capsys.readouterr().out == "INFO - first\nINFO - second\n"


def test_rolling_file_logger_rolls_over(tmp_path, cleanup):
    path = tmp_path / "roll" / "roll_file_log"
    logger = rolling_file_logger("syskit-test-roll", path, max_bytes=500, backup_count=2)
    cleanup(logger)
    for i in range(200):
        logger.debug("Entering loop #%d", i)
    logger.log(TRACE, "trace message")
    for handler in logger.handlers:
        handler.flush()
    files = sorted(p.name for p in path.parent.iterdir())
    assert files == ["roll_file_log", "roll_file_log.1", "roll_file_log.2"]
    assert all(p.stat().st_size <= 500 for p in path.parent.iterdir())
    assert "trace message" in path.read_text(encoding="utf-8")