"""Wait for keyboard input with a readiness selector and echo each character."""

from __future__ import annotations

import argparse
import os
import selectors
import sys
from typing import Any, TextIO


def format_input(char: str) -> str:
    """The line reported for one input character."""
    return f"the input is {char}"


def _fileno(stream: Any) -> int:
    return stream if isinstance(stream, int) else stream.fileno()


def watch_input(stream: Any, out: TextIO | None = None, timeout: float = 5.0) -> list[str]:
    """Read ``stream`` one byte at a time until ``q`` or end of input.

    Each character other than a newline is reported to ``out``; each wait for
    readiness lasts at most ``timeout`` seconds before waiting again.
    Returns the characters reported.
    """
    target = sys.stdout if out is None else out
    fd = _fileno(stream)
    seen: list[str] = []
    with selectors.DefaultSelector() as selector:
        selector.register(fd, selectors.EVENT_READ)
        while True:
            if not selector.select(timeout):
                continue
            try:
                data = os.read(fd, 1)
            except BlockingIOError:
                continue
            if not data:
                break
            char = data.decode("latin-1")
            if char == "\n":
                continue
            if char == "q":
                break
            seen.append(char)
            print(format_input(char), file=target, flush=True)
    return seen


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Echo keyboard input until 'q'.")
    parser.add_argument("--timeout", type=float, default=5.0)
    args = parser.parse_args(argv)
    try:
        tty = open("/dev/tty", "rb", buffering=0)
    except OSError:
        watch_input(sys.stdin, timeout=args.timeout)
        return 0
    with tty:
        watch_input(tty, timeout=args.timeout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())