"""ASCII case swapping: upper case becomes lower case and the other way round."""

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"

_TEXT_TABLE = str.maketrans(_UPPER + _LOWER, _LOWER + _UPPER)
_BYTES_TABLE = bytes.maketrans(
    (_UPPER + _LOWER).encode("ascii"), (_LOWER + _UPPER).encode("ascii")
)


def convert_char(c: str) -> str:
    """Swap the case of one ASCII letter; any other character is returned unchanged."""
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return c.translate(_TEXT_TABLE)


def swap_case(text: str) -> str:
    """Swap the case of every ASCII letter in ``text``."""
    return text.translate(_TEXT_TABLE)


def swap_case_bytes(data: bytes) -> bytes:
    """Swap the case of every ASCII letter in ``data``."""
    return bytes(data).translate(_BYTES_TABLE)