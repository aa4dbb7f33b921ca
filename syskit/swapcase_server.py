"""TCP server that answers every message with its letters' case swapped."""

from __future__ import annotations

import argparse
import logging
import socket
from typing import Optional

from syskit.reactor import Handler, Reactor
from syskit.textcase import swap_case_bytes

log = logging.getLogger(__name__)

MAX_BUFFLEN = 1024


class SwapCaseServer:
    """Reactor-driven server: read a message, swap its case, write it back."""

    def __init__(self, port: int = 5555, host: str = "") -> None:
        self.port = port
        self.host = host
        self.reactor = Reactor()
        self.address: Optional[tuple] = None
        self._listener: Optional[socket.socket] = None
        self._handlers: dict[int, Handler] = {}

    def startup(self) -> None:
        """Create the listening socket and register it for incoming connections."""
        if self._listener is not None:
            raise RuntimeError("server already started")
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setblocking(False)
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((self.host, self.port))
            listener.listen(16)
        except OSError:
            listener.close()
            raise
        self._listener = listener
        self.address = listener.getsockname()

        handler = Handler(listener)
        self._handlers[handler.fd] = handler
        handler.set_read_callback(self._accept_conn)
        handler.enable_read()
        self.reactor.register_handler(handler)

    def start(self) -> None:
        """Start up if needed and serve until ``stop`` is called."""
        if self._listener is None:
            self.startup()
        try:
            self.reactor.loop()
        finally:
            self._close_all()

    def stop(self) -> None:
        """Ask the serving loop to finish; safe to call from another thread."""
        self.reactor.stop()

    def _accept_conn(self, fd: int) -> None:
        assert self._listener is not None
        try:
            conn, peer = self._listener.accept()
        except BlockingIOError:
            return
        conn.setblocking(False)
        log.debug("accepted %s", peer)
        handler = Handler(conn)
        self._handlers[handler.fd] = handler
        handler.set_read_callback(self._read_data)
        handler.enable_read()
        self.reactor.register_handler(handler)

    def _read_data(self, fd: int) -> None:
        handler = self._handlers[fd]
        try:
            data = handler.sock.recv(MAX_BUFFLEN)
        except BlockingIOError:
            return
        except OSError as exc:
            log.debug("read error on fd %d: %s", fd, exc)
            self._close(handler)
            return
        if not data:
            log.debug("closing fd %d", fd)
            self._close(handler)
            return
        text = data.split(b"\0", 1)[0]
        handler.buffer = swap_case_bytes(text)
        log.info("%s", handler.buffer.decode("latin-1"))
        handler.set_write_callback(self._send_data)
        handler.enable_write()
        self.reactor.register_handler(handler)

    def _send_data(self, fd: int) -> None:
        handler = self._handlers[fd]
        try:
            sent = handler.sock.send(handler.buffer)
        except BlockingIOError:
            return
        except OSError as exc:
            log.debug("write error on fd %d: %s", fd, exc)
            self._close(handler)
            return
        handler.buffer = handler.buffer[sent:]
        if handler.buffer:
            return
        handler.set_read_callback(self._read_data)
        handler.enable_read()
        self.reactor.register_handler(handler)

    def _close(self, handler: Handler) -> None:
        if handler.in_poller:
            self.reactor.remove_handler(handler)
        handler.sock.close()
        self._handlers.pop(handler.fd, None)

    def _close_all(self) -> None:
        for handler in list(self._handlers.values()):
            self._close(handler)
        self._listener = None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve case-swapped echoes over TCP.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=5555)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    server = SwapCaseServer(args.port, args.host)
    try:
        server.start()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())