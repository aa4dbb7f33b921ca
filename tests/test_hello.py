import socket
import threading

from syskit.hello import run_client, run_server


def _free_port():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_client_and_server_exchange_greetings(capsys):
    endpoint = f"tcp://127.0.0.1:{_free_port()}"
    result = {}

    def serve():
        result["handled"] = run_server(endpoint, 0, 3)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    replies = run_client(endpoint, 3)
    thread.join(10)
    assert replies == ["World", "World", "World"]
    assert result["handled"] == 3
    out = capsys.readouterr().out
    assert "Sending Hello 0..." in out
    assert "Received World 2" in out
    assert out.count("Received Hello") == 3


def test_server_with_zero_count_returns_immediately():
    endpoint = f"tcp://127.0.0.1:{_free_port()}"
    assert run_server(endpoint, 0, 0) == 0


def test_client_with_zero_count_sends_nothing():
    assert run_client(f"tcp://127.0.0.1:{_free_port()}", 0) == []