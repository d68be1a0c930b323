import pytest

from uasmerrors import MalformedWordLength
from uasmhex import (
    HEADER, DUAL_INTERLEAVED, DUAL_SEPARATE, SINGLE_WORD,
    format_image, resolve_layout, split_word
)

WORDS = ["0000000010000001", "0000000000010000", "0000000001111100"]

def test_split_word():
    assert split_word("0000000010000001") == ("00", "81")
    assert split_word("1111111100001010") == ("FF", "0A")

@pytest.mark.parametrize("word", ["", "0101", "0" * 17, "000000001000000x", "0000 00001000000"])
def test_malformed_word(word):
    with pytest.raises(MalformedWordLength):
        split_word(word)

def test_dual_interleaved():
    assert format_image(WORDS, DUAL_INTERLEAVED) == {"out": HEADER + "00 81 00 10 00 7C "}

def test_dual_separate():
    image = format_image(WORDS, DUAL_SEPARATE)
    assert image == {
        "high": HEADER + "00 00 00 ",
        "low":  HEADER + "81 10 7C ",
    }

def test_single_word():
    assert format_image(WORDS, SINGLE_WORD) == {"out": HEADER + "0081 0010 007C "}

def test_default_layout():
    assert format_image(WORDS) == format_image(WORDS, DUAL_INTERLEAVED)
    assert format_image(WORDS, None) == format_image(WORDS, DUAL_INTERLEAVED)

def test_newline_separated_stream():
    assert format_image("\n".join(WORDS) + "\n", SINGLE_WORD) == format_image(WORDS, SINGLE_WORD)

def test_empty_program_is_just_the_header():
    assert format_image([], DUAL_SEPARATE) == {"high": HEADER, "low": HEADER}

def test_layouts_agree():
    words = ["1010101111001101", "0000000100100011", "1111111111111111"]
    inter = format_image(words, DUAL_INTERLEAVED)["out"][len(HEADER):].split()
    sep = format_image(words, DUAL_SEPARATE)
    high = sep["high"][len(HEADER):].split()
    low = sep["low"][len(HEADER):].split()
    single = format_image(words, SINGLE_WORD)["out"][len(HEADER):].split()

    assert inter[0::2] == high
    assert inter[1::2] == low
    assert single == [ h + l for h, l in zip(high, low) ]

@pytest.mark.parametrize("name, layout", [
    ("D8", DUAL_INTERLEAVED),
    ("s8", DUAL_SEPARATE),
    ("S16", SINGLE_WORD),
    ("single-word", SINGLE_WORD),
])
def test_resolve_layout(name, layout):
    assert resolve_layout(name) == layout

def test_resolve_unknown_layout():
    with pytest.raises(ValueError):
        resolve_layout("D16")

@pytest.mark.parametrize("stream", [
    "0000000010000001\n\n0000000001111100\n",
    "\n0000000010000001\n",
    "0000000010000001\n\n",
])
def test_empty_word_in_stream(stream):
    with pytest.raises(MalformedWordLength):
        format_image(stream, SINGLE_WORD)

def test_stream_without_trailing_newline():
    assert format_image("\n".join(WORDS), SINGLE_WORD) == format_image(WORDS, SINGLE_WORD)
    assert format_image("", SINGLE_WORD) == {"out": HEADER}
