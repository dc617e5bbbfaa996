# pgn_insight/pgn_insight/pgn/move_parser.py
"""
Builds the numbered move list from movetext tokens.

The parser walks the tokens once, keeping a cursor on the move entry being
filled. Every token receives a `TokenResult` verdict: matched, skipped
(recognised but carrying no move data) or malformed (with a reason). In
lenient mode malformed tokens are logged and parsing carries on; in strict
mode the first one raises `MalformedMoveError`.
"""
import dataclasses
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pgn_insight.config import settings
from pgn_insight.exceptions import MalformedMoveError
from pgn_insight.types import AnnotatedMove, Move, ParsedMoves, TokenKind, TokenResult

logger = logging.getLogger(settings.APP_NAME + ".MoveParser")

_MOVE_NUMBER = re.compile(r"^(\d+)(\.+)$")
_SAN = re.compile(r"^([KQRBN])?([a-h])?([1-8])?(x)?([a-h][1-8])(?:=([QRBN]))?([+#])?$")
_CASTLE = re.compile(r"^(O-O-O|O-O|0-0-0|0-0)([+#])?$")
_SUFFIX_GLYPH = re.compile(r"^(.+?)([!?]{1,2})$")
_GLYPH_ONLY = re.compile(r"^[!?]+$")
_NAG = re.compile(r"^\$\d+$")
_EVAL_COMMAND = re.compile(r"\[%eval\s+([^\]\s]+)[^\]]*\]")
_CLK_COMMAND = re.compile(r"\[%clk\s+([\d:\.]+)\s*\]")
_ANY_COMMAND = re.compile(r"\[%[^\]]*\]")


def parse_san(token: str) -> Optional[Move]:
    """
    Decodes a SAN token (optionally carrying a glyph suffix) into a Move.

    Returns None when the token is not SAN-shaped.
    """
    annotation: Optional[str] = None
    san = token
    suffix_match = _SUFFIX_GLYPH.match(token)
    if suffix_match and suffix_match.group(2) in settings.ANNOTATION_GLYPHS:
        san, annotation = suffix_match.groups()

    castle_match = _CASTLE.match(san)
    if castle_match:
        kind, marker = castle_match.groups()
        return Move(
            san=san,
            piece="K",
            check=marker == "+",
            checkmate=marker == "#",
            castle=kind.replace("0", "O"),
            annotation=annotation,
        )

    san_match = _SAN.match(san)
    if not san_match:
        return None

    piece, _file, _rank, capture, to_square, promotion, marker = san_match.groups()
    return Move(
        san=san,
        to_square=to_square,
        piece=piece or "P",
        capture=capture is not None,
        check=marker == "+",
        checkmate=marker == "#",
        promotion=promotion,
        annotation=annotation,
    )


def parse_eval_command(value: str) -> Optional[int]:
    """Converts an [%eval] value (pawns, or '#n' for mate) to centipawns."""
    try:
        if value.startswith("#"):
            mate_in = int(value[1:])
            sign = -1 if value[1:].startswith("-") else 1
            return sign * (settings.MATE_SCORE_EQUIVALENT_CP - abs(mate_in))
        return round(float(value) * 100)
    except ValueError:
        logger.debug(f"Ignoring unreadable [%eval] value: {value!r}")
        return None


@dataclass
class _MoveDraft:
    """The move entry currently being filled. Never escapes the parser."""
    move_number: int
    printed_number: int
    white_move: Optional[Move] = None
    black_move: Optional[Move] = None
    comments: List[str] = field(default_factory=list)
    evaluation: Optional[int] = None
    clock: Optional[str] = None
    black_to_move: bool = False
    last_side: Optional[str] = None

    def has_moves(self) -> bool:
        return self.white_move is not None or self.black_move is not None

    def freeze(self) -> AnnotatedMove:
        return AnnotatedMove(
            move_number=self.move_number,
            white_move=self.white_move,
            black_move=self.black_move,
            comments=tuple(self.comments),
            evaluation=self.evaluation,
            clock=self.clock,
        )


class _ParseRun:
    """Call-local parsing state, so a MoveParser can be shared freely."""

    def __init__(self, nag_map: dict):
        self.nag_map = nag_map
        self.completed: List[AnnotatedMove] = []
        self.current: Optional[_MoveDraft] = None

    # --- Results ---
    @staticmethod
    def matched(token: str) -> TokenResult:
        return TokenResult(TokenKind.MATCHED, token)

    @staticmethod
    def skipped(token: str, reason: str) -> TokenResult:
        return TokenResult(TokenKind.SKIPPED, token, reason)

    @staticmethod
    def malformed(token: str, reason: str) -> TokenResult:
        return TokenResult(TokenKind.MALFORMED, token, reason)

    # --- Cursor handling ---
    def flush(self) -> Optional[TokenResult]:
        """Appends the current entry to the move list. Reports entries without moves."""
        draft, self.current = self.current, None
        if draft is None:
            return None
        if not draft.has_moves():
            return self.malformed(f"{draft.printed_number}.", "move number has no moves")
        self.completed.append(draft.freeze())
        return None

    def consume(self, token: str) -> List[TokenResult]:
        number_match = _MOVE_NUMBER.match(token)
        if number_match:
            return self._on_move_number(token, int(number_match.group(1)), len(number_match.group(2)))
        if token.startswith("{"):
            return [self._on_comment(token)]
        if token.startswith("("):
            return [self.skipped(token, "variation")]
        if _NAG.match(token):
            glyph = self.nag_map.get(token)
            if glyph is None:
                return [self.skipped(token, "annotation glyph without a move-quality meaning")]
            return [self._on_glyph(token, glyph)]
        if _GLYPH_ONLY.match(token):
            if token not in settings.ANNOTATION_GLYPHS:
                return [self.malformed(token, "unknown annotation glyph")]
            return [self._on_glyph(token, token)]
        if token in settings.RESULT_TOKENS:
            return [self.skipped(token, "result marker inside movetext")]

        move = parse_san(token)
        if move is None:
            return [self.malformed(token, "unrecognized move syntax")]
        return [self._on_move(token, move)]

    def _on_move_number(self, token: str, printed: int, dots: int) -> List[TokenResult]:
        results: List[TokenResult] = []
        if self.current is not None and self.current.printed_number == printed:
            # "3... Nf6" resuming the same move after a comment or variation.
            if dots >= 2:
                self.current.black_to_move = True
            results.append(self.matched(token))
            return results

        empty_entry = self.flush()
        if empty_entry is not None:
            results.append(empty_entry)

        expected = len(self.completed) + 1
        self.current = _MoveDraft(move_number=expected, printed_number=printed, black_to_move=dots >= 2)
        if printed != expected:
            results.append(self.malformed(token, f"move number {printed} out of sequence, expected {expected}"))
        else:
            results.append(self.matched(token))
        return results

    def _on_move(self, token: str, move: Move) -> TokenResult:
        draft = self.current
        if draft is None:
            return self.malformed(token, "move before any move number")

        if draft.white_move is None and not draft.black_to_move:
            draft.white_move = move
            draft.last_side = "white"
        elif draft.black_move is None:
            draft.black_move = move
            draft.last_side = "black"
        else:
            return self.malformed(token, "more than two moves for one move number")
        return self.matched(token)

    def _on_glyph(self, token: str, glyph: str) -> TokenResult:
        draft = self.current
        if draft is None or draft.last_side is None:
            return self.malformed(token, "annotation without a preceding move")
        if draft.last_side == "black":
            draft.black_move = dataclasses.replace(draft.black_move, annotation=glyph)
        else:
            draft.white_move = dataclasses.replace(draft.white_move, annotation=glyph)
        return self.matched(token)

    def _on_comment(self, token: str) -> TokenResult:
        if not token.endswith("}"):
            return self.malformed(token, "unterminated comment")
        draft = self.current
        if draft is None:
            return self.skipped(token, "comment before the first move")

        body = token[1:-1]
        if (eval_match := _EVAL_COMMAND.search(body)):
            score = parse_eval_command(eval_match.group(1))
            if score is not None:
                draft.evaluation = score
        if (clk_match := _CLK_COMMAND.search(body)):
            draft.clock = clk_match.group(1)

        text = " ".join(_ANY_COMMAND.sub("", body).split())
        if text:
            draft.comments.append(text)
        return self.matched(token)


class MoveParser:
    """Turns movetext tokens into numbered AnnotatedMove entries."""

    def __init__(self, strict: bool = False):
        """
        Initializes the MoveParser.

        Args:
            strict: If True, the first malformed token raises MalformedMoveError
                    instead of being recorded and skipped.
        """
        self.strict = strict
        self._nag_map = dict(settings.NAG_TO_GLYPH)
        logger.debug(f"MoveParser initialized (strict={self.strict}).")

    def parse(self, tokens: Iterable[str]) -> ParsedMoves:
        """
        Parses tokens into a move list plus a verdict for every token.

        Raises:
            MalformedMoveError: In strict mode, on the first malformed token.
        """
        run = _ParseRun(self._nag_map)
        results: List[TokenResult] = []

        for token in tokens:
            for result in run.consume(token):
                self._record(result, results)

        trailing = run.flush()
        if trailing is not None:
            self._record(trailing, results)

        logger.debug(f"Parsed {len(run.completed)} move entries from {len(results)} token results.")
        return ParsedMoves(moves=tuple(run.completed), token_results=tuple(results))

    def _record(self, result: TokenResult, results: List[TokenResult]) -> None:
        if result.kind is TokenKind.MALFORMED:
            if self.strict:
                raise MalformedMoveError(result.token, result.reason or "malformed token")
            logger.warning(f"Skipping malformed token '{result.token}': {result.reason}")
        results.append(result)
