"""A DEALER echo server that reports its socket events, and a matching client."""

from __future__ import annotations

import argparse
import struct
import sys
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO, Union

import zmq

DEFAULT_PORT = 5555
_EVENT_HEADER = struct.Struct("=Hi")

_DESCRIPTIONS = {
    zmq.EVENT_LISTENING: "listening socket address ",
    zmq.EVENT_ACCEPTED: "accepted socket address ",
    zmq.EVENT_CONNECTED: "connected socket address ",
    zmq.EVENT_CLOSE_FAILED: "socket address ",
    zmq.EVENT_CLOSED: "closed socket address ",
    zmq.EVENT_DISCONNECTED: "disconnected socket address ",
    zmq.EVENT_HANDSHAKE_FAILED_NO_DETAIL: "HANDSHAKE_FAILED ",
}


@dataclass(frozen=True)
class MonitorEvent:
    """One socket event: its number, its value and the endpoint it concerns."""

    event: int
    value: int
    address: str


def decode_event(frame: bytes, address: Union[bytes, str]) -> MonitorEvent:
    """Decode the two frames of a monitor message."""
    if len(frame) < _EVENT_HEADER.size:
        raise ValueError(
            f"event frame needs {_EVENT_HEADER.size} bytes, got {len(frame)}"
        )
    event, value = _EVENT_HEADER.unpack_from(frame)
    if isinstance(address, bytes):
        address = address.decode("utf-8", errors="replace")
    return MonitorEvent(event, value, address)


def describe_event(event: MonitorEvent) -> str:
    """Human-readable lines for an event: what happened, its value and number."""
    lines = []
    prefix = _DESCRIPTIONS.get(event.event)
    if prefix is not None:
        lines.append(prefix + event.address)
    lines.append(f"socket event value {event.value}")
    lines.append(f"socket event num {event.event}")
    return "\n".join(lines)


class MonitorServer:
    """Echoes every message back on a DEALER socket while logging its socket events."""

    _POLL_MS = 100

    def __init__(self, endpoint: str = f"tcp://0.0.0.0:{DEFAULT_PORT}") -> None:
        self.endpoint = endpoint
        self.events: list[MonitorEvent] = []
        self.received: list[bytes] = []
        self._lock = threading.Lock()
        self._running = threading.Event()
        self._threads: list[threading.Thread] = []
        self._context = zmq.Context()
        self._socket = self._context.socket(zmq.DEALER)
        self._socket.setsockopt(zmq.HANDSHAKE_IVL, 0)
        self._monitor_addr = f"inproc://monitor.{id(self)}"
        self._monitor: Optional[zmq.Socket] = None

    def start(self) -> None:
        """Bind, attach the event monitor and start the monitor and echo threads."""
        if self._running.is_set():
            raise RuntimeError("server already running")
        self._running.set()
        self._socket.bind(self.endpoint)
        self._socket.monitor(self._monitor_addr, zmq.EVENT_ALL)
        self._monitor = self._context.socket(zmq.PAIR)
        self._monitor.connect(self._monitor_addr)
        self._threads = [
            threading.Thread(target=self._watch_events, name="monitorThread", daemon=True),
            threading.Thread(target=self._echo, name="pollerThread", daemon=True),
        ]
        for thread in self._threads:
            thread.start()

    def stop(self) -> None:
        """Stop both threads and release the sockets."""
        self._running.clear()
        for thread in self._threads:
            thread.join()
        self._threads = []
        if self._monitor is not None:
            self._socket.disable_monitor()
        self._context.destroy(linger=0)

    def _watch_events(self) -> None:
        assert self._monitor is not None
        print("starting monitor...", flush=True)
        poller = zmq.Poller()
        poller.register(self._monitor, zmq.POLLIN)
        while self._running.is_set():
            if not dict(poller.poll(self._POLL_MS)):
                continue
            frames = self._monitor.recv_multipart()
            if len(frames) < 2:
                continue
            event = decode_event(frames[0], frames[1])
            with self._lock:
                self.events.append(event)
            print(describe_event(event), flush=True)

    def _echo(self) -> None:
        poller = zmq.Poller()
        poller.register(self._socket, zmq.POLLIN)
        while self._running.is_set():
            if not dict(poller.poll(self._POLL_MS)):
                continue
            data = self._socket.recv()
            with self._lock:
                self.received.append(data)
            text = data.split(b"\0", 1)[0]
            print(f"msg size = {len(data)}", flush=True)
            print("Receive: \n" + text.decode("utf-8", errors="replace"), flush=True)
            self._socket.send(text)


def _endpoint(host: str) -> str:
    if ":" in host:
        return f"tcp://{host}"
    return f"tcp://{host}:{DEFAULT_PORT}"


def run_client(
    host: str = "127.0.0.1",
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> list[str]:
    """Send each line (without its newline) to the server and report the replies.

    ``host`` is an address, optionally followed by ``:port``; the port defaults to 5555.
    Returns the replies in order.
    """
    source = sys.stdin if lines is None else lines
    target = sys.stdout if out is None else out
    replies: list[str] = []
    ctx = zmq.Context()
    try:
        sock = ctx.socket(zmq.DEALER)
        sock.setsockopt(zmq.HANDSHAKE_IVL, 0)
        sock.connect(_endpoint(host))
        for line in source:
            while not sock.poll(1000, zmq.POLLOUT):
                pass
            target.write("Send:\n")
            sock.send(line.removesuffix("\n").encode("utf-8"))
            reply = sock.recv()
            text = reply.decode("utf-8", errors="replace")
            target.write(f"msg size = {len(reply)}\nReceive: \n{text}\n")
            target.flush()
            replies.append(text)
    finally:
        ctx.destroy(linger=0)
    return replies


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Socket event monitor demo.")
    sub = parser.add_subparsers(dest="role", required=True)
    server = sub.add_parser("server")
    server.add_argument("--endpoint", default=f"tcp://0.0.0.0:{DEFAULT_PORT}")
    client = sub.add_parser("client")
    client.add_argument("--host")
    args = parser.parse_args(argv)

    if args.role == "server":
        print("Hello, World!")
        monitor_server = MonitorServer(args.endpoint)
        monitor_server.start()
        try:
            sys.stdin.readline()
        except KeyboardInterrupt:
            pass
        finally:
            monitor_server.stop()
        return 0

    host = args.host
    if host is None:
        print("Enter the address to connect to:")
        host = sys.stdin.readline().strip()
    try:
        run_client(host, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())