"""A small single-threaded reactor: handlers, a readiness poller and a dispatch loop."""

from __future__ import annotations

import enum
import logging
import selectors
import socket
import threading
from typing import Callable, Optional, Union

log = logging.getLogger(__name__)

EventCallback = Callable[[int], None]


class Event(enum.IntFlag):
    """Kinds of readiness a handler can wait for."""

    NONE = 0
    READ = selectors.EVENT_READ
    WRITE = selectors.EVENT_WRITE


class Handler:
    """A file descriptor together with the events it waits for and its callbacks.

    The handler never closes its socket; whoever owns the connection does.
    """

    def __init__(self, sock: Union[socket.socket, int]) -> None:
        self.sock = sock
        self.fd: int = sock if isinstance(sock, int) else sock.fileno()
        self.events = Event.NONE
        self.revents = Event.NONE
        self.in_poller = False
        self.buffer = b""
        self.read_callback: Optional[EventCallback] = None
        self.write_callback: Optional[EventCallback] = None
        self.close_callback: Optional[EventCallback] = None

    def handle_event(self) -> None:
        """Run the callbacks that match the events that fired."""
        if self.revents & Event.READ and self.read_callback is not None:
            self.read_callback(self.fd)
        if self.revents & Event.WRITE and self.write_callback is not None:
            self.write_callback(self.fd)

    def set_read_callback(self, cb: EventCallback) -> None:
        self.read_callback = cb

    def set_write_callback(self, cb: EventCallback) -> None:
        self.write_callback = cb

    def set_close_callback(self, cb: EventCallback) -> None:
        self.close_callback = cb

    def enable_read(self) -> None:
        """Wait for readability only."""
        self.events = Event.READ

    def enable_write(self) -> None:
        """Wait for writability only."""
        self.events = Event.WRITE

    def enable_all(self) -> None:
        """Wait for both readability and writability."""
        self.events |= Event.READ | Event.WRITE

    def disable_all(self) -> None:
        self.events = Event.NONE

    def __repr__(self) -> str:
        return f"Handler(fd={self.fd}, events={self.events!r}, in_poller={self.in_poller})"


class Poller:
    """Event demultiplexer built on the platform's best selector."""

    def __init__(self) -> None:
        self._selector = selectors.DefaultSelector()

    def update(self, handler: Handler) -> None:
        """Add the handler, or change the events it waits for if already added."""
        if not handler.events:
            raise ValueError(f"handler on fd {handler.fd} has no events enabled")
        if handler.in_poller:
            self._selector.modify(handler.fd, handler.events, handler)
        else:
            self._selector.register(handler.fd, handler.events, handler)
            handler.in_poller = True
        log.debug("poller update fd=%d events=%#x", handler.fd, int(handler.events))

    def remove(self, handler: Handler) -> None:
        """Stop watching the handler."""
        if not handler.in_poller:
            raise ValueError(f"handler on fd {handler.fd} is not registered")
        handler.in_poller = False
        self._selector.unregister(handler.fd)

    def poll(self, timeout: Optional[float] = None) -> list[Handler]:
        """Wait for readiness and return the ready handlers with ``revents`` set.

        When a handler is both readable and writable, ``revents`` is WRITE.
        """
        active: list[Handler] = []
        for key, mask in self._selector.select(timeout):
            handler: Handler = key.data
            if mask & Event.READ:
                handler.revents = Event.READ
            if mask & Event.WRITE:
                handler.revents = Event.WRITE
            active.append(handler)
        return active

    def close(self) -> None:
        self._selector.close()


class Reactor:
    """Registers handlers with a poller and dispatches their events."""

    _TICK = 0.1

    def __init__(self) -> None:
        self.poller = Poller()
        self._stopping = threading.Event()

    def register_handler(self, handler: Handler) -> None:
        self.poller.update(handler)

    def remove_handler(self, handler: Handler) -> None:
        self.poller.remove(handler)

    def run_once(self, timeout: Optional[float] = None) -> int:
        """Wait once for events and dispatch them; return how many handlers ran."""
        active = self.poller.poll(timeout)
        for handler in active:
            handler.handle_event()
        return len(active)

    def loop(self) -> None:
        """Dispatch events until ``stop`` is called."""
        while not self._stopping.is_set():
            self.run_once(self._TICK)
        self._stopping.clear()

    def stop(self) -> None:
        """Ask the loop to return; safe to call from another thread."""
        self._stopping.set()