# tests/test_tactical_highlighter.py
"""
Unit tests for the tactical highlighter and position replay.
"""
import chess
import pytest

from pgn_insight.analysis.tactical_highlighter import TacticalHighlighter
from pgn_insight.config import settings
from pgn_insight.types import HighlightType
from pgn_insight.utils.chess_utils import iter_plies, replay_positions


def _fen_after(*sans: str) -> str:
    board = chess.Board()
    for san in sans:
        board.push_san(san)
    return board.fen()


@pytest.mark.parametrize("annotation, expected_type, expected_score", [
    ("!!", HighlightType.BRILLIANT, 200),
    ("!", HighlightType.TACTICAL, 100),
    ("??", HighlightType.BLUNDER, -200),
    # A single '?' is deliberately classified as a blunder.
    ("?", HighlightType.BLUNDER, -100),
    ("!?", HighlightType.TACTICAL, 100),
    ("?!", HighlightType.TACTICAL, 100),
])
def test_annotation_tables(annotation, expected_type, expected_score):
    highlighter = TacticalHighlighter()
    assert highlighter.classify_annotation(annotation) is expected_type
    assert highlighter.score_annotation(annotation) == expected_score


def test_unannotated_move_scores_zero():
    assert TacticalHighlighter().score_annotation("") == 0


def test_brilliant_move_yields_exactly_one_highlight(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 e5 2. Nf3!! Nc6"))
    assert len(highlights) == 1
    highlight = highlights[0]
    assert highlight.type is HighlightType.BRILLIANT
    assert highlight.evaluation == 200
    assert highlight.move_number == 2
    assert highlight.description.startswith("Brilliant move Nf3!")


def test_blunder_yields_exactly_one_highlight(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 e5 2. Nf3 f6?? 3. Nxe5"))
    blunders = [h for h in highlights if h.type is HighlightType.BLUNDER]
    assert len(blunders) == 1
    assert blunders[0].evaluation == -200
    assert blunders[0].move_number == 2


def test_capture_emits_tactical_highlight_scored_by_annotation(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 d5 2. exd5 Qxd5!"))
    assert [(h.move_number, h.type, h.evaluation) for h in highlights] == [
        (2, HighlightType.TACTICAL, 100),
        (2, HighlightType.TACTICAL, 100),
    ]
    assert highlights[0].description.startswith("Tactical move Qxd5.")
    assert highlights[1].description == "Tactical capture that changes the position"


def test_captures_by_both_sides_yield_one_highlight(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 d5 2. exd5 Qxd5"))
    assert [(h.move_number, h.type, h.evaluation) for h in highlights] == [(2, HighlightType.TACTICAL, 0)]


def test_white_annotation_wins_when_both_sides_are_annotated(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4!! e5!! 2. Nf3!! Nc6"))
    assert [(h.move_number, h.type, h.evaluation) for h in highlights] == [
        (1, HighlightType.BRILLIANT, 200),
        (2, HighlightType.BRILLIANT, 200),
    ]
    assert highlights[0].description.startswith("Brilliant move e4!")


def test_black_annotation_is_used_when_white_has_none(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 e5?? 2. Nf3"))
    assert len(highlights) == 1
    assert highlights[0].type is HighlightType.BLUNDER
    assert highlights[0].description.startswith("Blunder e5.")


def test_highlights_are_per_entry_in_discovery_order(parse_moves, shilling_trap):
    highlights = TacticalHighlighter().find_highlights(parse_moves(shilling_trap))
    assert [(h.move_number, h.type, h.evaluation) for h in highlights] == [
        (4, HighlightType.BRILLIANT, 200),
        (4, HighlightType.TACTICAL, 200),
        (5, HighlightType.BLUNDER, -200),
        (5, HighlightType.TACTICAL, -200),
        (6, HighlightType.TACTICAL, 0),
    ]


def test_position_is_fen_after_the_entry(parse_moves):
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 d5 2. exd5"))
    assert highlights[0].position == _fen_after("e4", "d5", "exd5")
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 d5 2. exd5 Nf6"))
    assert highlights[0].position == _fen_after("e4", "d5", "exd5", "Nf6")


def test_unreplayable_game_uses_placeholder_position(parse_moves):
    # 2. Ke7 is not a legal White move.
    highlights = TacticalHighlighter().find_highlights(parse_moves("1. e4 e5 2. Ke7!! Nc6"))
    assert highlights[0].position == settings.STARTING_POSITION_FEN


def test_replay_positions_falls_back_after_first_illegal_ply(parse_moves):
    plies = iter_plies(parse_moves("1. e4 e5 2. Qh8 Nc6 3. Nf3"))
    positions = replay_positions(plies)
    assert len(positions) == 5
    assert positions[1] == _fen_after("e4", "e5")
    assert positions[2:] == [settings.STARTING_POSITION_FEN] * 3


def test_no_annotations_or_captures_means_no_highlights(parse_moves):
    assert TacticalHighlighter().find_highlights(parse_moves("1. d4 d5 2. c4 e6")) == ()
