"""Blocking TCP servers that answer each message with its letters' case swapped.

One variant gives each connection its own thread, the other its own process.
"""

from __future__ import annotations

import argparse
import errno
import logging
import multiprocessing
import socket
import threading
from typing import Optional

from syskit.textcase import swap_case_bytes

log = logging.getLogger(__name__)

SERV_PORT = 5555
RECV_SIZE = 128
BACKLOG = 1024

_STOPPED_ERRNOS = (errno.EBADF, errno.EINVAL)


def handle_connection(conn: socket.socket) -> int:
    """Echo case-swapped messages on ``conn`` until the peer closes it.

    Each received chunk is cut at its first NUL byte before conversion.
    Returns the number of chunks received.
    """
    log.debug("handling connection fd=%d", conn.fileno())
    received = 0
    while True:
        try:
            data = conn.recv(RECV_SIZE)
        except OSError as exc:
            log.debug("read error: %s", exc)
            break
        if not data:
            break
        received += 1
        reply = swap_case_bytes(data.split(b"\0", 1)[0])
        if not reply:
            continue
        try:
            conn.sendall(reply)
        except OSError as exc:
            log.debug("write error: %s", exc)
            break
    log.debug("connection finished")
    return received


def tcp_server_listen(port: int = SERV_PORT, host: str = "") -> socket.socket:
    """Create a listening TCP socket with address reuse enabled."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(BACKLOG)
    except OSError:
        listener.close()
        raise
    return listener


def _accept(listener: socket.socket) -> Optional[socket.socket]:
    """Accept one connection, or return None once the listener is shut down."""
    try:
        conn, _ = listener.accept()
    except OSError as exc:
        if listener.fileno() == -1 or exc.errno in _STOPPED_ERRNOS:
            return None
        raise
    return conn


def serve_threaded(listener: socket.socket) -> None:
    """Serve each accepted connection on its own thread until the listener stops."""
    while (conn := _accept(listener)) is not None:

        def run(connection: socket.socket = conn) -> None:
            with connection:
                handle_connection(connection)

        threading.Thread(target=run, daemon=True).start()


def _child_run(conn: socket.socket) -> None:
    with conn:
        handle_connection(conn)


def serve_forking(listener: socket.socket) -> None:
    """Serve each accepted connection in a child process until the listener stops."""
    try:
        while (conn := _accept(listener)) is not None:
            worker = multiprocessing.Process(target=_child_run, args=(conn,), daemon=True)
            worker.start()
            conn.close()
            # Reaps finished children so they do not linger as zombies.
            multiprocessing.active_children()
    finally:
        multiprocessing.active_children()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Blocking case-swapping TCP server.")
    parser.add_argument("--mode", choices=("thread", "fork"), default="thread")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=SERV_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    with tcp_server_listen(args.port, args.host) as listener:
        serve = serve_threaded if args.mode == "thread" else serve_forking
        try:
            serve(listener)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())