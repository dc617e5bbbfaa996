# pgn_insight/pgn_insight/pgn/pgn_handler.py
"""
Handles PGN file input and analysed-record output for batch runs.

Reading uses python-chess to find game boundaries in a multi-game PGN file
and hands each game's raw text to the analysis engine, which does its own
move parsing. Writing stores the serialized records as a single JSON array.
"""
import json
import logging
import os
import threading
from typing import Generator, List, Optional, TextIO

import chess.pgn

from pgn_insight.config import settings
from pgn_insight.exceptions import PGNExportError, PGNImportError
from pgn_insight.serialization import records_to_list
from pgn_insight.types import GameRecord

logger = logging.getLogger(settings.APP_NAME + ".PGNHandler")


class PGNHandler:
    """Reads game transcripts from PGN files and writes analysed records."""

    def split_games(self, pgn_file: TextIO) -> Generator[str, None, None]:
        """
        Yields the raw text of each game in an open PGN file.

        python-chess finds the game boundaries: `chess.pgn.read_headers`
        consumes exactly one game, so the file offsets before and after the
        call delimit that game's text, which is then re-read verbatim for the
        analyzer. Comments spanning lines are kept intact.
        """
        while True:
            start = pgn_file.tell()
            try:
                headers = chess.pgn.read_headers(pgn_file)
            except (ValueError, RuntimeError) as e:
                logger.warning(f"Skipping malformed game at offset ~{start}: {e}")
                if pgn_file.tell() == start:
                    break
                continue
            if headers is None:
                break
            yield self._read_span(pgn_file, start, pgn_file.tell())

    @staticmethod
    def _read_span(pgn_file: TextIO, start: int, end: int) -> str:
        """Re-reads the lines between two offsets and leaves the file at `end`."""
        pgn_file.seek(start)
        lines: List[str] = []
        while pgn_file.tell() != end:
            line = pgn_file.readline()
            if not line:
                break
            lines.append(line)
        pgn_file.seek(end)
        return "".join(lines)

    def stream_game_texts(
        self, input_pgn_path: str, shutdown_event: Optional[threading.Event] = None
    ) -> Generator[str, None, None]:
        """Streams game transcripts one by one from an input PGN file."""
        if not os.path.exists(input_pgn_path):
            raise PGNImportError(f"Input PGN file not found: {input_pgn_path}")

        game_count = 0
        try:
            with open(input_pgn_path, "r", encoding="utf-8", errors="replace") as pgn_file:
                for game_text in self.split_games(pgn_file):
                    if shutdown_event and shutdown_event.is_set():
                        break
                    game_count += 1
                    yield game_text
        except (IOError, OSError) as e:
            raise PGNImportError(f"IOError reading PGN file '{input_pgn_path}'") from e

        logger.info(f"Finished streaming {game_count} games from '{input_pgn_path}'.")

    def count_games(self, input_pgn_path: str) -> int:
        """Counts the games in a PGN file, for sizing the progress bar."""
        if not os.path.exists(input_pgn_path):
            raise PGNImportError(f"Input PGN file not found: {input_pgn_path}")
        count = 0
        try:
            with open(input_pgn_path, "r", encoding="utf-8", errors="replace") as pgn_file:
                while chess.pgn.skip_game(pgn_file):
                    count += 1
        except (IOError, OSError) as e:
            raise PGNImportError(f"Cannot count games in PGN file '{input_pgn_path}'") from e
        return count

    def export_records(self, records: List[GameRecord], output_path: str) -> None:
        """Writes analysed records to `output_path` as a JSON array."""
        try:
            if (output_dir := os.path.dirname(output_path)):
                os.makedirs(output_dir, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as outfile:
                json.dump(records_to_list(records), outfile, indent=settings.JSON_OUTPUT_INDENT, ensure_ascii=False)
                outfile.write("\n")
            logger.info(f"Wrote {len(records)} analysed games to '{output_path}'.")
        except (IOError, OSError) as e:
            raise PGNExportError(f"IOError exporting records to '{output_path}': {e}") from e
