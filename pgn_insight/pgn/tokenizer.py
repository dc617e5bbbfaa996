# pgn_insight/pgn_insight/pgn/tokenizer.py
"""
Validates the gross structure of a game transcript and splits it into tokens.

The tokenizer separates bracketed header lines from the movetext, removes a
trailing game-result marker, and breaks the movetext into atomic tokens.
Brace comments and parenthesised variations are kept whole regardless of the
whitespace they contain. Individual moves are not checked here; that is the
move parser's job.
"""
import logging
import re
from typing import List, Tuple

from pgn_insight.config import settings
from pgn_insight.exceptions import EmptyInputError, NoMovesFoundError
from pgn_insight.types import TokenizedGame

logger = logging.getLogger(settings.APP_NAME + ".Tokenizer")

MOVE_NUMBER_PATTERN = re.compile(r"^\d+\.")
_GLUED_MOVE_NUMBER = re.compile(r"^(\d+\.+)([^.\s]\S*)$")
_TRAILING_RESULT = re.compile(
    r"(?:^|\s)(?:" + "|".join(re.escape(r) for r in settings.RESULT_TOKENS) + r")\s*$"
)


def split_sections(text: str) -> Tuple[List[str], str]:
    """
    Separates header lines from movetext.

    Header lines are the bracketed lines before the first movetext line; a
    later line starting with '[' (such as a wrapped `[%clk ...]` comment)
    belongs to the movetext.

    Returns:
        A tuple of (header_lines, movetext). Lines starting with '%' are PGN
        escape lines and are dropped.
    """
    header_lines: List[str] = []
    movetext_parts: List[str] = []
    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("%"):
            continue
        if trimmed.startswith("[") and not movetext_parts:
            header_lines.append(trimmed)
        else:
            movetext_parts.append(trimmed)
    return header_lines, " ".join(movetext_parts)


def strip_result(movetext: str) -> str:
    """Removes a single trailing game-result token, if present."""
    return _TRAILING_RESULT.sub("", movetext).rstrip()


def _read_group(movetext: str, start: int) -> int:
    """
    Returns the index just past the comment or variation starting at `start`.

    Comments end at the first '}'. Variations may nest and may contain
    comments. An unterminated group runs to the end of the text.
    """
    if movetext[start] == "{":
        end = movetext.find("}", start + 1)
        return len(movetext) if end == -1 else end + 1

    depth = 0
    i = start
    while i < len(movetext):
        char = movetext[i]
        if char == "{":
            i = _read_group(movetext, i)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(movetext)


def tokenize_movetext(movetext: str) -> List[str]:
    """Splits movetext on whitespace, keeping `{...}` and `(...)` spans atomic."""
    tokens: List[str] = []
    current: List[str] = []
    i = 0
    while i < len(movetext):
        char = movetext[i]
        if char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
            i += 1
        elif char in "{(":
            if current:
                tokens.append("".join(current))
                current = []
            end = _read_group(movetext, i)
            tokens.append(movetext[i:end])
            i = end
        else:
            current.append(char)
            i += 1
    if current:
        tokens.append("".join(current))

    # "1.e4" and "3...Nf6" become a move number followed by the move.
    split_tokens: List[str] = []
    for token in tokens:
        match = _GLUED_MOVE_NUMBER.match(token)
        if match and not token.startswith(("{", "(")):
            split_tokens.extend(match.groups())
        else:
            split_tokens.append(token)
    return split_tokens


def tokenize(text: str) -> TokenizedGame:
    """
    Validates the transcript and produces its header lines and movetext tokens.

    Raises:
        EmptyInputError: If the trimmed text is empty.
        NoMovesFoundError: If no token looks like a move number.
    """
    if text is None or len(text.strip()) == 0:
        raise EmptyInputError(settings.EMPTY_INPUT_REASON)

    header_lines, movetext = split_sections(text.strip())
    tokens = tokenize_movetext(strip_result(movetext))

    if not any(MOVE_NUMBER_PATTERN.match(token) for token in tokens):
        raise NoMovesFoundError(settings.NO_MOVES_REASON)

    logger.debug(f"Tokenized transcript: {len(header_lines)} header lines, {len(tokens)} movetext tokens.")
    return TokenizedGame(header_lines=tuple(header_lines), tokens=tuple(tokens))
