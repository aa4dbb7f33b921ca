"""Request/reply greeting: the client says Hello, the server answers World."""

from __future__ import annotations

import argparse
import time
from typing import Optional

import zmq

REPLY_CAP = 10


def run_server(
    endpoint: str = "tcp://*:5555", delay: float = 1.0, count: Optional[int] = None
) -> int:
    """Answer each request with ``World`` after ``delay`` seconds.

    Serves ``count`` requests, or forever when ``count`` is None; returns how many.
    """
    print(f"Current ZeroMQ version is {zmq.zmq_version()}", flush=True)
    ctx = zmq.Context()
    try:
        responder = ctx.socket(zmq.REP)
        responder.bind(endpoint)
        handled = 0
        while count is None or handled < count:
            responder.recv()
            print("Received Hello", flush=True)
            time.sleep(delay)
            responder.send(b"World")
            handled += 1
        return handled
    finally:
        ctx.destroy(linger=0)


def run_client(endpoint: str = "tcp://localhost:5555", count: int = 10) -> list[str]:
    """Send ``count`` greetings and return the replies, each cut to 10 bytes."""
    print("Connecting to hello world server...", flush=True)
    ctx = zmq.Context()
    replies: list[str] = []
    try:
        requester = ctx.socket(zmq.REQ)
        requester.connect(endpoint)
        for number in range(count):
            print(f"Sending Hello {number}...", flush=True)
            requester.send(b"Hello")
            reply = requester.recv()[:REPLY_CAP]
            replies.append(reply.decode("utf-8", errors="replace"))
            print(f"Received World {number}", flush=True)
    finally:
        ctx.destroy(linger=0)
    return replies


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Hello/World request-reply demo.")
    sub = parser.add_subparsers(dest="role", required=True)
    server = sub.add_parser("server")
    server.add_argument("--endpoint", default="tcp://*:5555")
    server.add_argument("--delay", type=float, default=1.0)
    client = sub.add_parser("client")
    client.add_argument("--endpoint", default="tcp://localhost:5555")
    client.add_argument("--count", type=int, default=10)
    args = parser.parse_args(argv)
    try:
        if args.role == "server":
            run_server(args.endpoint, args.delay)
        else:
            run_client(args.endpoint, args.count)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())