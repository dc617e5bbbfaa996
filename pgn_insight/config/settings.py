# pgn_insight/pgn_insight/config/settings.py
"""
Configuration settings for the PGN Insight application.

This module centralizes all tunable parameters, default values, lookup tables,
thresholds, and text templates used throughout the application. Tables whose
iteration order affects the result are stored as tuples of pairs so that the
order is explicit and cannot be mutated at runtime.
"""
from typing import Final, Tuple

from pgn_insight.types import GameQuality, HighlightType

# --- Application Specific ---
APP_NAME: Final[str] = "PGNInsight"
"""Application name, used for logging and other identifiers."""

# --- Logging ---
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
"""Default logging level for the application."""

DEFAULT_LOG_FILENAME: Final[str] = "pgn_insight.log"
"""Default filename for the application log."""

CONSOLE_LOG_FORMAT: Final[str] = "%(levelname)-8s - %(name)s - %(message)s"
FILE_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# --- Batch Runs ---
SHUTDOWN_SIGNALS: Final[Tuple[str, ...]] = ("SIGINT", "SIGTERM")
"""Signals that stop a batch run after the game being analysed. Missing ones (SIGTERM on Windows) are skipped."""

FORCED_EXIT_CODE: Final[int] = 130
"""Exit code used when a second shutdown signal arrives during a batch run."""

# --- Output Files ---
DEFAULT_CUSTOM_REPORT_FILENAME: Final[str] = "game_summary_report.csv"
"""Default filename for the generated CSV summary report."""

JSON_OUTPUT_INDENT: Final[int] = 2
"""Indentation used when writing analysed records as JSON."""

# --- Validation / Tokenizing ---
EMPTY_INPUT_REASON: Final[str] = "Empty PGN string"
NO_MOVES_REASON: Final[str] = "No moves found in PGN"

RESULT_TOKENS: Final[Tuple[str, ...]] = ("1-0", "0-1", "1/2-1/2", "*")
"""Game termination markers recognised at the end of the movetext."""

# --- Move Parsing ---
ANNOTATION_GLYPHS: Final[Tuple[str, ...]] = ("!!", "??", "!?", "?!", "!", "?")
"""The move-quality glyphs accepted either standalone or as a SAN suffix."""

NAG_TO_GLYPH: Final[Tuple[Tuple[str, str], ...]] = (
    ("$1", "!"),
    ("$2", "?"),
    ("$3", "!!"),
    ("$4", "??"),
    ("$5", "!?"),
    ("$6", "?!"),
)
"""Numeric Annotation Glyphs that have a direct move-quality glyph equivalent."""

MATE_SCORE_EQUIVALENT_CP: Final[int] = 30000
"""A large centipawn value used to numerically represent a mate in [%eval] commands."""

# --- Opening Classification ---
OPENING_PLY_LIMIT: Final[int] = 10
"""Number of plies (half-moves) inspected when classifying the opening."""

# Ordered: the first pattern found in the joined, lower-cased ply string wins.
# Patterns can overlap, so the order here is part of the observable behaviour.
OPENING_TABLE: Final[Tuple[Tuple[str, str, str, str], ...]] = (
    # (substring pattern, name, ECO, description)
    (
        "e4 e5", "Open Game", "C20",
        "A classic opening starting with 1.e4 e5, leading to open positions with tactical opportunities.",
    ),
    (
        "e4 c5", "Sicilian Defense", "B20",
        "A sharp and complex defense that leads to dynamic positions with chances for both sides.",
    ),
    (
        "d4 d5", "Closed Game", "D00",
        "A solid opening starting with 1.d4 d5, often leading to closed positions with strategic play.",
    ),
    (
        "d4 nf6", "Indian Defense", "A40",
        "A flexible defense that allows Black to develop pieces quickly and control the center.",
    ),
)

FALLBACK_OPENING_NAME: Final[str] = "Irregular Opening"
FALLBACK_OPENING_ECO: Final[str] = "A00"
FALLBACK_OPENING_DESCRIPTION: Final[str] = (
    "An unconventional opening that doesn't follow a recognized classical opening pattern."
)

# --- Tactical Highlights ---
# Both tables are matched by substring, first match wins. A single '?' is
# classified as a blunder, the same as '??'.
ANNOTATION_CLASSIFICATION: Final[Tuple[Tuple[str, HighlightType], ...]] = (
    ("!!", HighlightType.BRILLIANT),
    ("??", HighlightType.BLUNDER),
    ("!", HighlightType.TACTICAL),
    ("?", HighlightType.BLUNDER),
)

ANNOTATION_SCORES: Final[Tuple[Tuple[str, int], ...]] = (
    ("!!", 200),
    ("!", 100),
    ("??", -200),
    ("?", -100),
)

CAPTURE_HIGHLIGHT_DESCRIPTION: Final[str] = "Tactical capture that changes the position"

HIGHLIGHT_DESCRIPTIONS: Final[Tuple[Tuple[HighlightType, str], ...]] = (
    (HighlightType.BRILLIANT, "Brilliant move {san}! A deep tactical combination that creates winning chances."),
    (HighlightType.BLUNDER, "Blunder {san}. This move gives away the advantage and should be avoided."),
    (HighlightType.TACTICAL, "Tactical move {san}. A sharp continuation that requires accurate calculation."),
)
DEFAULT_HIGHLIGHT_DESCRIPTION: Final[str] = "Interesting move {san} that changes the character of the position."

STARTING_POSITION_FEN: Final[str] = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
"""Placeholder position used for highlights whose position cannot be replayed."""

# --- Game Evaluation ---
DEFAULT_RESULT: Final[str] = "1/2-1/2"
"""Result reported when neither side delivered mate on the final move."""

EXCELLENT_MIN_BRILLIANT_EXCLUSIVE: Final[int] = 2
EXCELLENT_MAX_BLUNDERS: Final[int] = 0
GOOD_MIN_BRILLIANT_EXCLUSIVE: Final[int] = 0
GOOD_MAX_BLUNDERS: Final[int] = 1
AVERAGE_MAX_BLUNDERS: Final[int] = 2

# --- Narrative Templates ---
DEFAULT_WHITE_NAME: Final[str] = "White"
DEFAULT_BLACK_NAME: Final[str] = "Black"
DEFAULT_EVENT_PHRASE: Final[str] = "this game"

TITLE_WHITE_WIN: Final[str] = "{white} vs {black}: A Masterful Victory in {opening}"
TITLE_BLACK_WIN: Final[str] = "{black} vs {white}: Tactical Brilliance in {opening}"
TITLE_DRAW: Final[str] = "{white} vs {black}: A Hard-Fought Draw in {opening}"

SUMMARY_OPENING_SENTENCE: Final[str] = "{white} and {black} contested {event} using the {opening}."
SUMMARY_HIGHLIGHT_SENTENCE: Final[str] = "The game featured {brilliant} brilliant moves and {tactical} tactical moments."
"""Added to the summary only when the game has at least one brilliant move."""

CLOSING_SENTENCES: Final[Tuple[Tuple[GameQuality, str], ...]] = (
    (GameQuality.EXCELLENT, "This was an excellent game with high-quality play from both sides."),
    (GameQuality.GOOD, "Both players showed good understanding of the position."),
)
DEFAULT_CLOSING_SENTENCE: Final[str] = "The game had its ups and downs with some interesting moments."

# --- Error Records ---
INVALID_GAME_TITLE: Final[str] = "Invalid Game"
INVALID_GAME_SUMMARY: Final[str] = "Unable to parse the provided PGN."
ANALYSIS_ERROR_TITLE: Final[str] = "Analysis Error"
ANALYSIS_ERROR_SUMMARY: Final[str] = "An error occurred while analyzing the game."
