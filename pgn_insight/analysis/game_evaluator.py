# pgn_insight/pgn_insight/analysis/game_evaluator.py
"""
Aggregates tactical highlights and the final position into a game evaluation.
"""
import logging
from typing import Sequence

from pgn_insight.config import settings
from pgn_insight.types import AnnotatedMove, GameEvaluation, GameQuality, HighlightType, TacticalHighlight

logger = logging.getLogger(settings.APP_NAME + ".GameEvaluator")


def determine_result(moves: Sequence[AnnotatedMove]) -> str:
    """Returns '1-0' or '0-1' when the last move entry delivers mate, else the draw result."""
    if not moves:
        return settings.DEFAULT_RESULT
    last = moves[-1]
    if last.white_move is not None and last.white_move.checkmate:
        return "1-0"
    if last.black_move is not None and last.black_move.checkmate:
        return "0-1"
    return settings.DEFAULT_RESULT


def assess_quality(brilliant_count: int, blunder_count: int) -> GameQuality:
    """Applies the quality thresholds, checked from best to worst."""
    if brilliant_count > settings.EXCELLENT_MIN_BRILLIANT_EXCLUSIVE and blunder_count <= settings.EXCELLENT_MAX_BLUNDERS:
        return GameQuality.EXCELLENT
    if brilliant_count > settings.GOOD_MIN_BRILLIANT_EXCLUSIVE and blunder_count <= settings.GOOD_MAX_BLUNDERS:
        return GameQuality.GOOD
    if blunder_count <= settings.AVERAGE_MAX_BLUNDERS:
        return GameQuality.AVERAGE
    return GameQuality.POOR


class GameEvaluator:
    """Builds the GameEvaluation summary for a parsed and highlighted game."""

    def __init__(self):
        logger.debug("GameEvaluator initialized.")

    def evaluate(self, moves: Sequence[AnnotatedMove], highlights: Sequence[TacticalHighlight]) -> GameEvaluation:
        brilliant_count = sum(1 for h in highlights if h.type is HighlightType.BRILLIANT)
        blunder_count = sum(1 for h in highlights if h.type is HighlightType.BLUNDER)

        evaluation = GameEvaluation(
            final_result=determine_result(moves),
            white_advantage=sum(h.evaluation for h in highlights),
            critical_moments=tuple(h.move_number for h in highlights),
            game_quality=assess_quality(brilliant_count, blunder_count),
        )
        logger.debug(
            f"Evaluation: result={evaluation.final_result}, quality={evaluation.game_quality.value}, "
            f"brilliant={brilliant_count}, blunders={blunder_count}."
        )
        return evaluation
