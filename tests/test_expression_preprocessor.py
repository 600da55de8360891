import pytest

from base_converter import NumberSystem
from errors import InvalidNumeralError
from expression_preprocessor import OTHER, WORD, auto_close_parentheses, preprocess, tokenize_words


def test_auto_close_appends_missing_parentheses():
    assert preprocess("(1+2", NumberSystem.DEC) == "(1+2)"
    assert preprocess("((1", NumberSystem.DEC) == "((1))"


def test_balanced_or_plain_expressions_are_unchanged():
    assert preprocess("(1+2)", NumberSystem.DEC) == "(1+2)"
    assert preprocess("1+2", NumberSystem.DEC) == "1+2"
    assert auto_close_parentheses("1+2)") == "1+2)"


def test_decimal_mode_leaves_numerals_alone():
    assert preprocess("A+10", NumberSystem.DEC) == "A+10"


def test_numerals_rewritten_to_decimal():
    assert preprocess("FF+1", NumberSystem.HEX) == "255+1"
    assert preprocess("1010*11", NumberSystem.BIN) == "10*3"
    assert preprocess("(17", NumberSystem.OCT) == "(15)"
    assert preprocess("1_0", NumberSystem.BIN) == "2"


def test_identifiers_keep_their_digits():
    assert preprocess("log10(10)", NumberSystem.HEX) == "log10(16)"
    assert preprocess("sin(PI)", NumberSystem.OCT) == "sin(PI)"


def test_explicit_base_markers_are_untouched():
    assert preprocess("101b+10", NumberSystem.HEX) == "101b+16"
    assert preprocess("FFh+1", NumberSystem.BIN) == "FFh+1"
    assert preprocess("0x1F+1", NumberSystem.BIN) == "0x1F+1"


def test_invalid_digit_for_active_base_raises():
    with pytest.raises(InvalidNumeralError):
        preprocess("12", NumberSystem.BIN)
    with pytest.raises(InvalidNumeralError):
        preprocess("9+1", NumberSystem.OCT)


def test_tokenize_words():
    assert tokenize_words("sin(10)+π") == [
        (WORD, "sin"),
        (OTHER, "("),
        (WORD, "10"),
        (OTHER, ")"),
        (OTHER, "+"),
        (OTHER, "π"),
    ]
