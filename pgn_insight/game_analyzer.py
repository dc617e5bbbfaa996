# pgn_insight/pgn_insight/game_analyzer.py
"""
Analyses a single game transcript into a GameRecord.

This module contains the GameAnalyzer class, which runs the linear analysis
pipeline: tokenize, extract metadata, parse moves, classify the opening,
find tactical highlights, evaluate the game and generate the narrative.
Malformed input never raises to the caller; it produces an error record.
"""
import logging
from typing import Optional

from pgn_insight.analysis.game_evaluator import GameEvaluator
from pgn_insight.analysis.opening_classifier import OpeningClassifier
from pgn_insight.analysis.tactical_highlighter import TacticalHighlighter
from pgn_insight.config import settings
from pgn_insight.exceptions import PGNValidationError
from pgn_insight.pgn.metadata import extract_metadata
from pgn_insight.pgn.move_parser import MoveParser
from pgn_insight.pgn.tokenizer import tokenize
from pgn_insight.reporting import narrative_generator as narrative
from pgn_insight.types import GameRecord

logger = logging.getLogger(settings.APP_NAME + ".GameAnalyzer")


def build_error_record(title: str, summary: str, reason: Optional[str]) -> GameRecord:
    """Returns an error record: no moves, empty opening, default evaluation."""
    return GameRecord(title=title, summary=summary, error=True, error_reason=reason)


class GameAnalyzer:
    """
    A stateless analysis engine.

    All lookup tables are built once in the constructor and never modified,
    so one instance can serve any number of concurrent `analyze` calls.
    """

    def __init__(self, strict: bool = False):
        """
        Initializes the GameAnalyzer and its stage components.

        Args:
            strict: If True, a malformed movetext token turns the whole game
                    into an error record instead of being skipped.
        """
        self.strict = strict
        self.move_parser = MoveParser(strict=strict)
        self.opening_classifier = OpeningClassifier()
        self.tactical_highlighter = TacticalHighlighter()
        self.game_evaluator = GameEvaluator()
        logger.debug(f"GameAnalyzer initialized (strict={strict}).")

    def analyze(self, text: str) -> GameRecord:
        """
        Runs the full pipeline over one transcript.

        Returns:
            A GameRecord. Validation failures and unexpected internal errors
            are returned as records with `error=True`, never raised.
        """
        try:
            return self._run_pipeline(text)
        except PGNValidationError as e:
            logger.info(f"Game rejected: {e.reason}")
            return build_error_record(settings.INVALID_GAME_TITLE, settings.INVALID_GAME_SUMMARY, e.reason)
        except Exception as e:
            logger.exception(f"Unexpected error while analysing game: {e}")
            return build_error_record(settings.ANALYSIS_ERROR_TITLE, settings.ANALYSIS_ERROR_SUMMARY, str(e))

    def _run_pipeline(self, text: str) -> GameRecord:
        tokenized = tokenize(text)

        metadata = extract_metadata(tokenized.header_lines)
        parsed = self.move_parser.parse(tokenized.tokens)

        opening = self.opening_classifier.classify(parsed.moves)
        highlights = self.tactical_highlighter.find_highlights(parsed.moves)
        evaluation = self.game_evaluator.evaluate(parsed.moves, highlights)

        title = narrative.generate_title(metadata, opening, evaluation)
        summary = narrative.generate_summary(metadata, opening, highlights, evaluation)

        return GameRecord(
            title=title,
            summary=summary,
            metadata=metadata,
            moves=parsed.moves,
            opening=opening,
            tactical_highlights=highlights,
            evaluation=evaluation,
            diagnostics=parsed.diagnostics,
        )


def analyze(text: str, strict: bool = False) -> GameRecord:
    """Convenience entry point: analyses `text` with a fresh GameAnalyzer."""
    return GameAnalyzer(strict=strict).analyze(text)
