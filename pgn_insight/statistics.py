# pgn_insight/pgn_insight/statistics.py
"""
Manages statistics tracking for batch analysis runs.

This module provides the StatisticsTracker class, a centralized component
for aggregating and reporting metrics from an analysis run.
"""
import logging
import os
from collections import Counter
from typing import Optional

from pgn_insight.config import settings
from pgn_insight.types import GameRecord, TokenKind

logger = logging.getLogger(settings.APP_NAME + ".Statistics")


class StatisticsTracker:
    """
    A stateful class to aggregate and report statistics for a batch run.
    """

    def __init__(self):
        """Initializes the StatisticsTracker with all counters set to zero."""
        self.stats: Counter[str] = Counter()
        self.error_reasons: Counter[str] = Counter()
        self.output_path: Optional[str] = None
        self.report_path: Optional[str] = None
        self.interrupted_by: Optional[str] = None
        logger.debug("StatisticsTracker initialized.")

    def reset(self) -> None:
        """Resets all statistics to their initial state for a new run."""
        self.stats.clear()
        self.error_reasons.clear()
        self.output_path = None
        self.report_path = None
        self.interrupted_by = None
        logger.debug("StatisticsTracker has been reset.")

    def add_game_read(self) -> None:
        self.stats["games_read"] += 1

    def add_record(self, record: GameRecord) -> None:
        """Counts one analysed record, bucketing error records by reason."""
        if record.error:
            self.stats["games_with_errors"] += 1
            self.error_reasons[record.error_reason or "unknown"] += 1
            return
        self.stats["games_analyzed"] += 1
        self.stats["move_entries"] += len(record.moves)
        self.stats["tactical_highlights"] += len(record.tactical_highlights)
        self.stats["malformed_tokens"] += sum(1 for d in record.diagnostics if d.kind is TokenKind.MALFORMED)
        self.stats["skipped_tokens"] += sum(1 for d in record.diagnostics if d.kind is TokenKind.SKIPPED)

    def mark_interrupted(self, signal_name: str) -> None:
        """Records that the run was stopped early by a shutdown signal."""
        self.interrupted_by = signal_name

    def set_output_path(self, path: str) -> None:
        self.output_path = os.path.abspath(path)

    def set_report_path(self, path: str) -> None:
        self.report_path = os.path.abspath(path)

    def log_summary(self) -> None:
        """Logs a formatted summary of all collected statistics for the run."""
        logger.info("--- Analysis Run Summary ---")

        display_order = [
            ("games_read", "Total Games Read from PGN"),
            ("games_analyzed", "Games Fully Analyzed"),
            ("games_with_errors", "Games Returned as Error Records"),
            ("move_entries", "Move Entries Parsed"),
            ("tactical_highlights", "Tactical Highlights Found"),
            ("malformed_tokens", "Malformed Tokens Skipped"),
            ("skipped_tokens", "Other Tokens Skipped"),
        ]
        for key, display_text in display_order:
            if key in self.stats:
                logger.info(f"{display_text}: {self.stats[key]}")

        for reason, count in self.error_reasons.most_common():
            logger.info(f"  - {reason}: {count}")
        if self.interrupted_by:
            logger.warning(f"Run interrupted by {self.interrupted_by}; remaining games were not analysed.")
        logger.info("---")

        if self.output_path:
            logger.info(f"JSON Output: '{self.output_path}'")
        if self.report_path:
            if os.path.exists(self.report_path):
                logger.info(f"CSV Report Generated: '{self.report_path}'")
            else:
                logger.info(f"CSV Report Target (not generated): '{self.report_path}'")
