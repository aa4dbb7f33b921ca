import socket
import threading

import pytest

from syskit.swapcase_server import SwapCaseServer
from syskit.textcase import swap_case_bytes


@pytest.fixture
def server():
    srv = SwapCaseServer(0, "127.0.0.1")
    srv.startup()
    thread = threading.Thread(target=srv.start, daemon=True)
    thread.start()
    yield srv, thread
    srv.stop()
    thread.join(5)


def _connect(srv):
    client = socket.create_connection(srv.address, timeout=5)
    client.settimeout(5)
    return client


def _recv_exact(sock, n):
    data = b""
    while len(data) < n:
        chunk = sock.recv(n - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_swaps_case_of_message(server):
    srv, _ = server
    with _connect(srv) as client:
        client.sendall(b"leacock")
        assert _recv_exact(client, 7) == b"LEACOCK"


def test_text_after_nul_is_dropped(server):
    srv, _ = server
    with _connect(srv) as client:
        client.sendall(b"abc\0def")
        assert _recv_exact(client, 3) == b"ABC"
        client.sendall(b"1a2B3C4d")
        assert _recv_exact(client, 8) == swap_case_bytes(b"1a2B3C4d")


def test_several_messages_on_one_connection(server):
    srv, _ = server
    with _connect(srv) as client:
        for payload in (b"Hello World", b"MiXeD 123", b"zz"):
            client.sendall(payload)
            reply = _recv_exact(client, len(payload))
            assert reply == swap_case_bytes(payload)
            assert swap_case_bytes(reply) == payload


def test_serves_after_another_client_leaves(server):
    srv, _ = server
    first = _connect(srv)
    first.sendall(b"one")
    assert _recv_exact(first, 3) == swap_case_bytes(b"one")
    first.close()
    with _connect(srv) as second:
        second.sendall(b"Two")
        assert _recv_exact(second, 3) == swap_case_bytes(b"Two")


def test_startup_twice_raises(server):
    srv, _ = server
    with pytest.raises(RuntimeError):
        srv.startup()


def test_stop_ends_start_and_closes_listener():
    srv = SwapCaseServer(0, "127.0.0.1")
    srv.startup()
    address = srv.address
    thread = threading.Thread(target=srv.start, daemon=True)
    thread.start()
    srv.stop()
    thread.join(5)
    assert not thread.is_alive()
    with pytest.raises(ConnectionRefusedError):
        socket.create_connection(address, timeout=5)
    srv.reactor.poller.close()