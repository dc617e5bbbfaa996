# tests/test_tokenizer.py
"""
Unit tests for the validator/tokenizer stage.
"""
import pytest

from pgn_insight.exceptions import EmptyInputError, NoMovesFoundError
from pgn_insight.pgn.tokenizer import split_sections, strip_result, tokenize, tokenize_movetext


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_empty_input_is_rejected(text):
    with pytest.raises(EmptyInputError) as exc_info:
        tokenize(text)
    assert exc_info.value.reason == "Empty PGN string"


def test_headers_without_moves_are_rejected():
    with pytest.raises(NoMovesFoundError) as exc_info:
        tokenize('[Event "X"]\n\n')
    assert exc_info.value.reason == "No moves found in PGN"


def test_movetext_without_move_numbers_is_rejected():
    with pytest.raises(NoMovesFoundError):
        tokenize("e4 e5 Nf3 Nc6")


def test_comment_with_whitespace_stays_one_token():
    tokens = tokenize_movetext("1. e4 {a long  comment\tspanning words} e5")
    assert tokens == ["1.", "e4", "{a long  comment\tspanning words}", "e5"]


def test_comment_glued_to_move_is_split_off():
    assert tokenize_movetext("1. e4{best} e5") == ["1.", "e4", "{best}", "e5"]


def test_variation_is_one_token_even_when_nested():
    tokens = tokenize_movetext("1. e4 (1. d4 d5 (1... Nf6 {Indian}) 2. c4) e5")
    assert tokens == ["1.", "e4", "(1. d4 d5 (1... Nf6 {Indian}) 2. c4)", "e5"]


def test_unterminated_comment_runs_to_end():
    assert tokenize_movetext("1. e4 {never closed e5") == ["1.", "e4", "{never closed e5"]


def test_glued_move_numbers_are_split():
    assert tokenize_movetext("1.e4 e5 2.Nf3 Nc6 3...a6") == ["1.", "e4", "e5", "2.", "Nf3", "Nc6", "3...", "a6"]


@pytest.mark.parametrize("number", ["1.", "1..", "1...", "12..."])
def test_standalone_move_numbers_stay_whole(number):
    assert tokenize_movetext(f"1. e4 {{c}} {number} e5") == ["1.", "e4", "{c}", number, "e5"]


@pytest.mark.parametrize("movetext, expected", [
    ("1. e4 e5 1-0", "1. e4 e5"),
    ("1. e4 e5 0-1", "1. e4 e5"),
    ("1. e4 e5 1/2-1/2", "1. e4 e5"),
    ("1. e4 e5 *", "1. e4 e5"),
    ("1. e4 e5", "1. e4 e5"),
    ("1. e4 {1-0}", "1. e4 {1-0}"),
])
def test_strip_result(movetext, expected):
    assert strip_result(movetext) == expected


def test_split_sections_separates_headers_and_movetext():
    headers, movetext = split_sections('[White "A"]\n[Black "B"]\n\n1. e4 e5\n2. Nf3\n% escape line\n')
    assert headers == ['[White "A"]', '[Black "B"]']
    assert movetext == "1. e4 e5 2. Nf3"


def test_bracket_line_inside_movetext_is_not_a_header():
    headers, movetext = split_sections('[Event "X"]\n\n1. e4 {long comment\n[%clk 0:03:00]} e5 2. Nf3\n')
    assert headers == ['[Event "X"]']
    assert movetext == "1. e4 {long comment [%clk 0:03:00]} e5 2. Nf3"


def test_tokenize_strips_result_and_keeps_headers():
    tokenized = tokenize('[Event "Test"]\n\n1. e4 e5 2. Nf3 1-0\n')
    assert tokenized.header_lines == ('[Event "Test"]',)
    assert tokenized.tokens == ("1.", "e4", "e5", "2.", "Nf3")


def test_malformed_moves_are_not_rejected_here():
    tokenized = tokenize("1. e4 ZZZ 2. ???")
    assert "ZZZ" in tokenized.tokens
