# pgn_insight/pgn_insight/types.py
"""
A central module for shared data structures and type definitions.

Every record produced by the analysis engine is a frozen dataclass whose
sequence fields are tuples, so a `GameRecord` cannot change once built.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Tuple


class HighlightType(str, Enum):
    """Category assigned to a tactical highlight."""
    BRILLIANT = "brilliant"
    BLUNDER = "blunder"
    TACTICAL = "tactical"
    POSITIONAL = "positional"
    ENDGAME = "endgame"


class GameQuality(str, Enum):
    """Overall quality bucket for a game."""
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


class TokenKind(str, Enum):
    """How the move parser disposed of a single movetext token."""
    MATCHED = "matched"
    SKIPPED = "skipped"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class TokenResult:
    """The parser's verdict on one token. `reason` is set for anything not matched."""
    kind: TokenKind
    token: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class GameMetadata:
    """Values taken from the recognised `[Key "Value"]` header tags."""
    event: Optional[str] = None
    site: Optional[str] = None
    date: Optional[str] = None
    round: Optional[str] = None
    white: Optional[str] = None
    black: Optional[str] = None
    result: Optional[str] = None
    white_elo: Optional[str] = None
    black_elo: Optional[str] = None
    time_control: Optional[str] = None
    eco: Optional[str] = None


@dataclass(frozen=True)
class Move:
    """A single ply decoded from its SAN text."""
    san: str
    to_square: str = ""
    piece: str = "P"
    capture: bool = False
    check: bool = False
    checkmate: bool = False
    promotion: Optional[str] = None
    castle: Optional[str] = None
    annotation: Optional[str] = None


@dataclass(frozen=True)
class AnnotatedMove:
    """A numbered move: White's ply, Black's ply, or both, plus comments."""
    move_number: int
    white_move: Optional[Move] = None
    black_move: Optional[Move] = None
    comments: Tuple[str, ...] = ()
    evaluation: Optional[int] = None  # centipawns, White's point of view
    clock: Optional[str] = None

    def plies(self) -> List[Move]:
        """Returns the populated sides in playing order."""
        return [m for m in (self.white_move, self.black_move) if m is not None]


@dataclass(frozen=True)
class OpeningInfo:
    name: str = ""
    eco: str = ""
    variation: Optional[str] = None
    moves: Tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class TacticalHighlight:
    move_number: int
    type: HighlightType
    description: str
    evaluation: int
    position: str  # FEN after the ply; the start position when it could not be replayed


@dataclass(frozen=True)
class GameEvaluation:
    final_result: str = ""
    white_advantage: int = 0
    critical_moments: Tuple[int, ...] = ()
    game_quality: GameQuality = GameQuality.POOR


@dataclass(frozen=True)
class GameRecord:
    """The complete, immutable result of analysing one game transcript."""
    title: str
    summary: str
    metadata: GameMetadata = field(default_factory=GameMetadata)
    moves: Tuple[AnnotatedMove, ...] = ()
    opening: OpeningInfo = field(default_factory=OpeningInfo)
    tactical_highlights: Tuple[TacticalHighlight, ...] = ()
    evaluation: GameEvaluation = field(default_factory=GameEvaluation)
    error: bool = False
    error_reason: Optional[str] = None
    diagnostics: Tuple[TokenResult, ...] = ()


@dataclass(frozen=True)
class TokenizedGame:
    """Output of the validator/tokenizer stage."""
    header_lines: Tuple[str, ...]
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class ParsedMoves:
    """Output of the move parser: the move list and the verdict for every token."""
    moves: Tuple[AnnotatedMove, ...]
    token_results: Tuple[TokenResult, ...]

    @property
    def diagnostics(self) -> Tuple[TokenResult, ...]:
        """Only the tokens that were not matched."""
        return tuple(r for r in self.token_results if r.kind is not TokenKind.MATCHED)


class ProgressReporter(Protocol):
    """
    A protocol defining the interface for reporting progress.
    This allows the batch pipeline to report progress without being tied
    to a specific UI implementation like tqdm.
    """
    def reset(self, total: int = 0) -> None:
        """Resets the reporter for a new task with a given total."""
        ...

    def update(self, n: int = 1) -> None:
        """Updates the progress by n steps."""
        ...

    def set_description(self, desc: str) -> None:
        """Sets the description text for the current task."""
        ...

    def close(self) -> None:
        """Closes or finalizes the progress display."""
        ...
