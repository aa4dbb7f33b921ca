import io
import os
import threading

from syskit.inputwatch import format_input, watch_input


def test_format_input():
    assert format_input("a") == "the input is a"


def test_watch_input_stops_at_q():
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, b"ab\nqz")
        out = io.StringIO()
        assert watch_input(read_fd, out, 0.1) == ["a", "b"]
        assert out.getvalue() == format_input("a") + "\n" + format_input("b") + "\n"
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_watch_input_stops_at_end_of_input():
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"x\ny")
    os.close(write_fd)
    try:
        out = io.StringIO()
        assert watch_input(read_fd, out, 0.1) == ["x", "y"]
        assert out.getvalue().count("\n") == 2
    finally:
        os.close(read_fd)


def test_watch_input_waits_through_timeouts():
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "rb", buffering=0)

    def feed():
        os.write(write_fd, b"k")
        os.write(write_fd, b"q")

    timer = threading.Timer(0.2, feed)
    timer.start()
    try:
        out = io.StringIO()
        assert watch_input(reader, out, 0.05) == ["k"]
    finally:
        timer.join()
        reader.close()
        os.close(write_fd)