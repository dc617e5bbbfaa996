# pgn_insight/pgn_insight/pgn/metadata.py
"""
Extracts game metadata from bracketed PGN header lines.
"""
import logging
import re
from typing import Dict, Iterable, Optional

from pgn_insight.config import settings
from pgn_insight.types import GameMetadata

logger = logging.getLogger(settings.APP_NAME + ".MetadataExtractor")

_HEADER_PATTERN = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\s*\]$')
_ESCAPE_PATTERN = re.compile(r"\\(.)")

# PGN tag name -> GameMetadata field
_TAG_TO_FIELD: Dict[str, str] = {
    "Event": "event",
    "Site": "site",
    "Date": "date",
    "Round": "round",
    "White": "white",
    "Black": "black",
    "Result": "result",
    "WhiteElo": "white_elo",
    "BlackElo": "black_elo",
    "TimeControl": "time_control",
    "ECO": "eco",
}


def parse_header_line(line: str) -> Optional[tuple]:
    """Returns (tag, value) for a well-formed header line, otherwise None."""
    match = _HEADER_PATTERN.match(line.strip())
    if not match:
        return None
    tag, raw_value = match.groups()
    return tag, _ESCAPE_PATTERN.sub(r"\1", raw_value)


def extract_metadata(header_lines: Iterable[str]) -> GameMetadata:
    """
    Builds a GameMetadata record from header lines.

    Unrecognised tags and lines that are not of the form `[Key "Value"]` are
    ignored. When a tag repeats, the last value wins. This function never fails.
    """
    values: Dict[str, str] = {}
    for line in header_lines:
        parsed = parse_header_line(line)
        if parsed is None:
            logger.debug(f"Ignoring unparseable header line: {line!r}")
            continue
        tag, value = parsed
        field_name = _TAG_TO_FIELD.get(tag)
        if field_name is not None:
            values[field_name] = value
    return GameMetadata(**values)
