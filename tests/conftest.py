# tests/conftest.py
"""
Shared fixtures for the PGN Insight test suite.
"""
from typing import Callable, Tuple

import pytest

from pgn_insight.game_analyzer import GameAnalyzer
from pgn_insight.pgn.move_parser import MoveParser
from pgn_insight.pgn.tokenizer import tokenize
from pgn_insight.types import AnnotatedMove, ParsedMoves

IMMORTAL_GAME = """[Event "Casual Game"]
[Site "London ENG"]
[Date "1851.06.21"]
[Round "?"]
[White "Anderssen"]
[Black "Kieseritzky"]
[Result "1-0"]
[ECO "C33"]
[Annotator "Unknown"]

1. e4 e5 2. f4 exf4 3. Bc4 Qh4+ 4. Kf1 b5 5. Bxb5 Nf6 6. Nf3 Qh6 7. d3 Nh5
8. Nh4 Qg5 9. Nf5 c6 10. g4 Nf6 11. Rg1 cxb5 12. h4 Qg6 13. h5 Qg5 14. Qf3 Ng8
15. Bxf4 Qf6 16. Nc3 Bc5 17. Nd5 Qxb2 18. Bd6 Bxg1 19. e5 Qxa1+ 20. Ke2 Na6
21. Nxg7+ Kd8 22. Qf6+ Nxf6 23. Be7# 1-0
"""

# Blackburne Shilling trap, with annotations added for the highlight tests.
SHILLING_TRAP = """1. e4 e5 2. Nf3 Nc6 3. Bc4 Nd4 4. Nxe5 Qg5!! 5. Nxf7?? Qxg2
6. Rf1 Qxe4+ 7. Be2 Nf3# 0-1"""


@pytest.fixture
def analyzer() -> GameAnalyzer:
    """A lenient analyzer shared by a single test."""
    return GameAnalyzer()


@pytest.fixture
def immortal_game() -> str:
    return IMMORTAL_GAME


@pytest.fixture
def shilling_trap() -> str:
    return SHILLING_TRAP


@pytest.fixture
def parse_movetext() -> Callable[..., ParsedMoves]:
    """Returns a helper that tokenizes and parses a transcript."""
    def _parse(text: str, strict: bool = False) -> ParsedMoves:
        return MoveParser(strict=strict).parse(tokenize(text).tokens)
    return _parse


@pytest.fixture
def parse_moves(parse_movetext) -> Callable[[str], Tuple[AnnotatedMove, ...]]:
    """Returns a helper that yields only the parsed move entries."""
    def _moves(text: str) -> Tuple[AnnotatedMove, ...]:
        return parse_movetext(text).moves
    return _moves
