# pgn_insight/pgn_insight/reporting/report_generator.py
"""
Generates summary reports from analysed game records.

This module provides the `ReportGenerator` class, which writes a CSV report
with one row per successfully analysed game.
"""
import csv
import logging
import os
from typing import Any, Dict, List, Sequence

from pgn_insight.config import settings
from pgn_insight.exceptions import CSVReportError
from pgn_insight.types import GameRecord, HighlightType

logger = logging.getLogger(settings.APP_NAME + ".ReportGenerator")


class ReportGenerator:
    """Generates reports from analysed game records."""

    _CSV_HEADERS: List[str] = [
        "Title", "White", "Black", "Event", "Date",
        "Opening", "ECO", "FinalResult", "GameQuality", "TotalMoves",
        "Brilliant", "Tactical", "Blunder", "WhiteAdvantage", "CriticalMoments",
    ]

    def __init__(self):
        logger.debug("ReportGenerator initialized.")

    def _build_row(self, record: GameRecord) -> Dict[str, Any]:
        counts = {t: 0 for t in HighlightType}
        for highlight in record.tactical_highlights:
            counts[highlight.type] += 1

        return {
            "Title": record.title,
            "White": record.metadata.white or settings.DEFAULT_WHITE_NAME,
            "Black": record.metadata.black or settings.DEFAULT_BLACK_NAME,
            "Event": record.metadata.event or "",
            "Date": record.metadata.date or "",
            "Opening": record.opening.name,
            "ECO": record.opening.eco,
            "FinalResult": record.evaluation.final_result,
            "GameQuality": record.evaluation.game_quality.value,
            "TotalMoves": len(record.moves),
            "Brilliant": counts[HighlightType.BRILLIANT],
            "Tactical": counts[HighlightType.TACTICAL],
            "Blunder": counts[HighlightType.BLUNDER],
            "WhiteAdvantage": record.evaluation.white_advantage,
            "CriticalMoments": " ".join(str(n) for n in record.evaluation.critical_moments),
        }

    def generate_csv_report(self, records: Sequence[GameRecord], output_report_path: str) -> None:
        """Writes one CSV row per non-error record. Nothing is written if there are none."""
        rows = [self._build_row(r) for r in records if not r.error]
        if not rows:
            logger.info("No analysed games to include in the CSV report.")
            return

        logger.info(f"Generating CSV summary report for {len(rows)} games at: '{output_report_path}'")
        try:
            if (output_dir := os.path.dirname(output_report_path)):
                os.makedirs(output_dir, exist_ok=True)

            with open(output_report_path, "w", newline="", encoding="utf-8") as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=self._CSV_HEADERS)
                writer.writeheader()
                writer.writerows(rows)
        except (IOError, OSError) as e:
            raise CSVReportError(f"Could not write CSV report to '{output_report_path}': {e}") from e
