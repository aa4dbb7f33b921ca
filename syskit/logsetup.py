"""Ready-made loggers: console, file plus console, and rolling file."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
import time

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

PATTERN = (
    "%(asctime)s [%(thread)d] %(levelname)-5s %(name)s - %(message)s "
    "[%(pathname)s:%(lineno)d]"
)
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class _PatternFormatter(logging.Formatter):
    """Timestamps carry milliseconds with a microsecond fraction: 16:13:03,481.502."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = time.strftime(datefmt or DATE_FORMAT, self.converter(record.created))
        millis = (record.created % 1) * 1000
        return f"{stamp},{millis:07.3f}"


def simple_formatter() -> logging.Formatter:
    """Level and message only: ``INFO - Hello world``."""
    return logging.Formatter("%(levelname)s - %(message)s")


def pattern_formatter() -> logging.Formatter:
    """Time, thread, level, logger name, message and source location."""
    return _PatternFormatter(PATTERN, DATE_FORMAT)


def _attach(logger: logging.Logger, handler: logging.Handler, name: str) -> None:
    for existing in [h for h in logger.handlers if h.get_name() == name]:
        logger.removeHandler(existing)
        existing.close()
    handler.set_name(name)
    logger.addHandler(handler)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(simple_formatter())
    return handler


def _make_parent(path: str | os.PathLike) -> None:
    parent = os.path.dirname(os.fspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)


def console_logger(name: str = "test", level: int = logging.INFO) -> logging.Logger:
    """A logger writing the simple layout to standard output."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    _attach(logger, _console_handler(), "console")
    return logger


def file_and_console_logger(
    name: str = "test",
    path: str | os.PathLike = "./logs/log.txt",
    level: int = logging.INFO,
) -> logging.Logger:
    """A logger writing to standard output and appending the pattern layout to a file."""
    logger = console_logger(name, level)
    _make_parent(path)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    file_handler.setFormatter(pattern_formatter())
    _attach(logger, file_handler, "file")
    return logger


def rolling_file_logger(
    name: str = "roll_file",
    path: str | os.PathLike = "./logs/roll_log/roll_file_log",
    max_bytes: int = 200 * 1024,
    backup_count: int = 5,
    level: int = TRACE,
) -> logging.Logger:
    """A logger writing the pattern layout to a file that rolls over by size."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    _make_parent(path)
    handler = logging.handlers.RotatingFileHandler(
        path, mode="a", maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(pattern_formatter())
    _attach(logger, handler, "roll file test")
    return logger


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Logging set-up demonstration.")
    parser.add_argument("--demo", choices=("console", "file", "rolling"), default="console")
    parser.add_argument("--path")
    args = parser.parse_args(argv)

    if args.demo == "console":
        console_logger().info("Hello world")
    elif args.demo == "file":
        file_and_console_logger(path=args.path or "./logs/log.txt").info("Hello world")
    else:
        logger = rolling_file_logger(path=args.path or "./logs/roll_log/roll_file_log")
        for i in range(5000):
            logger.debug("Entering loop #%d", i)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())