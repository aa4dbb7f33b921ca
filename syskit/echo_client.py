"""Line-oriented TCP client: send each input line, print each reply."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Iterable, Iterator, Optional, TextIO

MAXLINE = 4096
SERV_PORT = 5555


def _pieces(data: bytes) -> Iterator[bytes]:
    """Split a line the way a bounded line reader would, leaving room for a NUL."""
    step = MAXLINE - 1
    for start in range(0, len(data), step):
        yield data[start : start + step]


def run_client(
    host: str = "127.0.0.1",
    port: int = SERV_PORT,
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> list[str]:
    """Send every line as a NUL-padded fixed-size frame and write each reply.

    Raises ConnectionError if the server closes before replying.
    Returns the replies in order.
    """
    source = sys.stdin if lines is None else lines
    target = sys.stdout if out is None else out
    replies: list[str] = []
    with socket.create_connection((host, port)) as sock:
        for line in source:
            for piece in _pieces(line.encode("utf-8")):
                sock.sendall(piece.ljust(MAXLINE, b"\0"))
                data = sock.recv(MAXLINE)
                if not data:
                    raise ConnectionError("server terminated prematurely")
                text = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
                target.write(text)
                target.flush()
                replies.append(text)
    return replies


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send stdin lines to a TCP server.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=SERV_PORT)
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port, sys.stdin, sys.stdout)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())