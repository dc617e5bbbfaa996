# tests/test_opening_classifier.py
"""
Unit tests for the ordered opening classifier.
"""
import pytest

from pgn_insight.analysis.opening_classifier import OpeningClassifier


@pytest.mark.parametrize("movetext, name, eco", [
    ("1. e4 e5", "Open Game", "C20"),
    ("1. e4 e5 2. Nf3 Nc6 3. Bb5", "Open Game", "C20"),
    ("1. e4 c5 2. Nf3 d6", "Sicilian Defense", "B20"),
    ("1. d4 d5 2. c4", "Closed Game", "D00"),
    ("1. d4 Nf6 2. c4 g6", "Indian Defense", "A40"),
    ("1. c4 e5", "Irregular Opening", "A00"),
    ("1. Nf3 d5 2. g3", "Irregular Opening", "A00"),
])
def test_known_openings(parse_moves, movetext, name, eco):
    opening = OpeningClassifier().classify(parse_moves(movetext))
    assert (opening.name, opening.eco) == (name, eco)


def test_first_matching_entry_wins(parse_moves):
    # "d4 d5 e4 e5" contains both the Closed Game and Open Game patterns.
    opening = OpeningClassifier().classify(parse_moves("1. d4 d5 2. e4 e5"))
    assert opening.name == "Open Game"


def test_only_first_ten_plies_are_considered(parse_moves):
    moves = parse_moves("1. Nf3 Nf6 2. Nc3 Nc6 3. Rb1 Rb8 4. Ra1 Ra8 5. Rb1 Rb8 6. d4 d5")
    opening = OpeningClassifier().classify(moves)
    assert opening.name == "Irregular Opening"
    assert len(opening.moves) == 10
    assert opening.moves[-1] == "Rb8"


def test_fallback_description_and_recorded_plies(parse_moves):
    opening = OpeningClassifier().classify(parse_moves("1. b3 e5"))
    assert opening.moves == ("b3", "e5")
    assert "recognized classical opening pattern" in opening.description
    assert opening.variation is None


def test_custom_table_order_is_respected(parse_moves):
    table = [
        ("nf3", "Reti Opening", "A04", "Flexible knight development."),
        ("e4 e5", "Open Game", "C20", "Open game."),
    ]
    opening = OpeningClassifier(table=table).classify(parse_moves("1. e4 e5 2. Nf3"))
    assert (opening.name, opening.eco) == ("Reti Opening", "A04")


def test_empty_move_list_falls_back():
    opening = OpeningClassifier().classify(())
    assert opening.name == "Irregular Opening"
    assert opening.moves == ()
