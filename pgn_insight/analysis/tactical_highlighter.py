# pgn_insight/pgn_insight/analysis/tactical_highlighter.py
"""
Finds the tactical highlights of a game from annotation glyphs and captures.

Each numbered move entry is inspected in order. An entry whose White or
Black move carries a glyph yields one highlight, classified and scored from
that glyph (White's wins when both sides are annotated). An entry where
either side captured yields one additional 'tactical' highlight with the
same score. Scores come only from the annotation score table, so a
highlight is always worth one of +200, +100, 0, -100 or -200.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from pgn_insight.config import settings
from pgn_insight.types import AnnotatedMove, HighlightType, Move, TacticalHighlight
from pgn_insight.utils.chess_utils import iter_plies, replay_positions

logger = logging.getLogger(settings.APP_NAME + ".TacticalHighlighter")


class TacticalHighlighter:
    """Emits TacticalHighlight events for annotated and capturing move entries."""

    def __init__(self):
        """Initializes the TacticalHighlighter with its ordered lookup tables."""
        self._classification: Tuple[Tuple[str, HighlightType], ...] = tuple(settings.ANNOTATION_CLASSIFICATION)
        self._scores: Tuple[Tuple[str, int], ...] = tuple(settings.ANNOTATION_SCORES)
        self._descriptions = dict(settings.HIGHLIGHT_DESCRIPTIONS)
        logger.debug("TacticalHighlighter initialized.")

    def classify_annotation(self, annotation: str) -> HighlightType:
        """Maps a glyph to a highlight type. Note that a single '?' counts as a blunder."""
        for glyph, highlight_type in self._classification:
            if glyph in annotation:
                return highlight_type
        return HighlightType.TACTICAL

    def score_annotation(self, annotation: str) -> int:
        """Maps a glyph to its score; 0 when the move carries no recognised glyph."""
        for glyph, score in self._scores:
            if glyph in annotation:
                return score
        return 0

    def describe(self, ply: Move, highlight_type: HighlightType) -> str:
        template = self._descriptions.get(highlight_type, settings.DEFAULT_HIGHLIGHT_DESCRIPTION)
        return template.format(san=ply.san)

    @staticmethod
    def annotated_ply(entry: AnnotatedMove) -> Optional[Move]:
        """Returns the entry's annotated move, White's first, or None."""
        return next((ply for ply in entry.plies() if ply.annotation), None)

    def find_highlights(self, moves: Sequence[AnnotatedMove]) -> Tuple[TacticalHighlight, ...]:
        """
        Scans every move entry of the game and returns the highlights in discovery order.

        Args:
            moves: The parsed move list.

        Returns:
            A tuple of highlights. An entry contributes at most one annotation
            highlight and at most one capture highlight. Each highlight's
            position is the FEN after the entry's last move.
        """
        positions = replay_positions(iter_plies(moves))

        highlights: List[TacticalHighlight] = []
        plies_seen = 0
        for entry in moves:
            plies = entry.plies()
            plies_seen += len(plies)
            position = positions[plies_seen - 1]

            annotated = self.annotated_ply(entry)
            score = self.score_annotation(annotated.annotation if annotated else "")

            if annotated is not None:
                highlight_type = self.classify_annotation(annotated.annotation)
                highlights.append(TacticalHighlight(
                    move_number=entry.move_number,
                    type=highlight_type,
                    description=self.describe(annotated, highlight_type),
                    evaluation=score,
                    position=position,
                ))

            if any(ply.capture for ply in plies):
                highlights.append(TacticalHighlight(
                    move_number=entry.move_number,
                    type=HighlightType.TACTICAL,
                    description=settings.CAPTURE_HIGHLIGHT_DESCRIPTION,
                    evaluation=score,
                    position=position,
                ))

        logger.debug(f"Found {len(highlights)} tactical highlights.")
        return tuple(highlights)
