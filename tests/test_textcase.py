import pytest

from syskit.textcase import convert_char, swap_case, swap_case_bytes


def test_convert_char_letters():
    assert convert_char("a") == "A"
    assert convert_char("Z") == "z"


@pytest.mark.parametrize("char", ["1", " ", "\n", "é", "[", "@"])
def test_convert_char_leaves_non_letters(char):
    assert convert_char(char) == char


def test_convert_char_rejects_strings():
    with pytest.raises(ValueError):
        convert_char("ab")
    with pytest.raises(ValueError):
        convert_char("")


def test_swap_case_demo_strings():
    assert swap_case("leacock") == "LEACOCK"
    assert swap_case("ABCDEFG") == "abcdefg"
    assert swap_case("1a2B3C4d") == "1A2b3c4D"


@pytest.mark.parametrize("text", ["", "Hello, World!", "mixed ÄÖ text", "123"])
def test_swap_case_round_trip(text):
    assert swap_case(swap_case(text)) == text


def test_swap_case_non_ascii_unchanged():
    assert swap_case("äöü") == "äöü"


def test_swap_case_bytes_matches_text():
    text = "Some Text 42\n"
    assert swap_case_bytes(text.encode("ascii")) == swap_case(text).encode("ascii")


def test_swap_case_bytes_keeps_high_bytes():
    data = bytes(range(128, 256))
    assert swap_case_bytes(data) == data