# pgn_insight/pgn_insight/pipeline.py
"""
The batch analysis pipeline for the PGN Insight application.

Reads every game of a PGN file, analyses each one with a shared
GameAnalyzer, and writes the records as JSON plus an optional CSV summary.
"""
import logging
import threading
import time
from typing import List, Optional

from tqdm import tqdm

from pgn_insight.config import settings
from pgn_insight.exceptions import PGNError, ReportGenerationError
from pgn_insight.game_analyzer import GameAnalyzer
from pgn_insight.pgn.pgn_handler import PGNHandler
from pgn_insight.reporting.report_generator import ReportGenerator
from pgn_insight.statistics import StatisticsTracker
from pgn_insight.types import GameRecord, ProgressReporter
from pgn_insight.utils.signal_manager import SignalManager

logger = logging.getLogger(settings.APP_NAME + ".Pipeline")


class TqdmProgressReporter:
    """An adapter that makes a tqdm progress bar conform to our ProgressReporter protocol."""
    def __init__(self, pbar: tqdm):
        self._pbar = pbar

    def reset(self, total: int = 0) -> None:
        self._pbar.reset(total=total)

    def update(self, n: int = 1) -> None:
        self._pbar.update(n)

    def set_description(self, desc: str) -> None:
        self._pbar.set_description_str(desc)

    def close(self) -> None:
        self._pbar.close()


class AnalysisPipeline:
    """
    Orchestrates a batch run from PGN input to JSON/CSV output.
    """

    def __init__(self, strict: bool = False, **kwargs):
        """Initializes the pipeline components. Any component may be injected via kwargs."""
        self.analyzer: GameAnalyzer = kwargs.get("analyzer") or GameAnalyzer(strict=strict)
        self.pgn_handler: PGNHandler = kwargs.get("pgn_handler") or PGNHandler()
        self.report_generator: ReportGenerator = kwargs.get("report_generator") or ReportGenerator()
        self.stats_tracker = StatisticsTracker()
        self.shutdown_event = threading.Event()

    def analyze_games(self, input_pgn_path: str, progress: Optional[ProgressReporter] = None) -> List[GameRecord]:
        """Analyses every game of a PGN file in order, reporting progress per game."""
        records: List[GameRecord] = []
        if progress is not None:
            progress.reset(total=self.pgn_handler.count_games(input_pgn_path))
            progress.set_description("Analysing games")

        for game_text in self.pgn_handler.stream_game_texts(input_pgn_path, self.shutdown_event):
            self.stats_tracker.add_game_read()
            record = self.analyzer.analyze(game_text)
            self.stats_tracker.add_record(record)
            records.append(record)
            if progress is not None:
                progress.update(1)
        return records

    def run(self, input_pgn_path: str, output_path: str, report_path: Optional[str] = None) -> List[GameRecord]:
        """
        Executes a full batch run.

        Raises:
            PGNError: If the input cannot be read or the output cannot be written.
            ReportGenerationError: If the CSV report cannot be written.
        """
        start_time = time.time()
        self.stats_tracker.reset()
        self.stats_tracker.set_output_path(output_path)
        if report_path:
            self.stats_tracker.set_report_path(report_path)

        logger.info(f"Starting analysis run on '{input_pgn_path}'...")
        records: List[GameRecord] = []
        with SignalManager(self.shutdown_event, self.stats_tracker):
            try:
                with tqdm(total=0, unit="games", bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt}") as pbar:
                    records = self.analyze_games(input_pgn_path, TqdmProgressReporter(pbar))

                self.pgn_handler.export_records(records, output_path)
                if report_path:
                    self.report_generator.generate_csv_report(records, report_path)
            except (PGNError, ReportGenerationError) as e:
                logger.error(f"Analysis run failed: {e}")
                raise
            finally:
                logger.info(f"Analysis run finished in {time.time() - start_time:.2f} seconds.")
                self.stats_tracker.log_summary()
        return records
