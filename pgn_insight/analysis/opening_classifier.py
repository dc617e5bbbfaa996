# pgn_insight/pgn_insight/analysis/opening_classifier.py
"""
Names the opening played from the first plies of a game.

Classification is a first-match-wins substring search over an ordered table,
so the table order in `settings.OPENING_TABLE` decides between overlapping
patterns.
"""
import logging
from typing import Sequence, Tuple

from pgn_insight.config import settings
from pgn_insight.types import AnnotatedMove, OpeningInfo
from pgn_insight.utils.chess_utils import iter_plies

logger = logging.getLogger(settings.APP_NAME + ".OpeningClassifier")


class OpeningClassifier:
    """Matches the opening plies against an ordered table of known openings."""

    def __init__(
        self,
        table: Sequence[Tuple[str, str, str, str]] = settings.OPENING_TABLE,
        ply_limit: int = settings.OPENING_PLY_LIMIT,
    ):
        """
        Initializes the OpeningClassifier.

        Args:
            table: Ordered (pattern, name, ECO, description) entries. Copied into
                   a tuple so the order cannot change after construction.
            ply_limit: Maximum number of plies considered.
        """
        self._table: Tuple[Tuple[str, str, str, str], ...] = tuple(table)
        self._ply_limit = ply_limit
        logger.debug(f"OpeningClassifier initialized with {len(self._table)} openings.")

    def classify(self, moves: Sequence[AnnotatedMove]) -> OpeningInfo:
        """Returns the opening for a parsed move list, or the irregular-opening fallback."""
        opening_plies = tuple(ply.san for ply in iter_plies(moves)[: self._ply_limit])
        move_string = " ".join(opening_plies).lower()

        for pattern, name, eco, description in self._table:
            if pattern in move_string:
                logger.debug(f"Opening matched '{pattern}' -> {name} ({eco}).")
                return OpeningInfo(name=name, eco=eco, moves=opening_plies, description=description)

        return OpeningInfo(
            name=settings.FALLBACK_OPENING_NAME,
            eco=settings.FALLBACK_OPENING_ECO,
            moves=opening_plies,
            description=settings.FALLBACK_OPENING_DESCRIPTION,
        )
