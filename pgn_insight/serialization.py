# pgn_insight/pgn_insight/serialization.py
"""
Converts GameRecords to and from a plain, JSON-compatible structure.

The structured form uses stable camelCase field names. Optional fields that
are None are left out on output and restored as None on input, so
`record_from_dict(record_to_dict(record)) == record` for every record.
"""
import json
from typing import Any, Dict, List, Optional

from pgn_insight.config import settings
from pgn_insight.exceptions import SerializationError
from pgn_insight.types import (
    AnnotatedMove,
    GameEvaluation,
    GameMetadata,
    GameQuality,
    GameRecord,
    HighlightType,
    Move,
    OpeningInfo,
    TacticalHighlight,
    TokenKind,
    TokenResult,
)

_METADATA_KEYS = (
    ("event", "event"),
    ("site", "site"),
    ("date", "date"),
    ("round", "round"),
    ("white", "white"),
    ("black", "black"),
    ("result", "result"),
    ("white_elo", "whiteElo"),
    ("black_elo", "blackElo"),
    ("time_control", "timeControl"),
    ("eco", "eco"),
)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


# --- To plain structures ---

def metadata_to_dict(metadata: GameMetadata) -> Dict[str, Any]:
    return _drop_none({key: getattr(metadata, attr) for attr, key in _METADATA_KEYS})


def move_to_dict(move: Move) -> Dict[str, Any]:
    return _drop_none({
        "san": move.san,
        "to": move.to_square,
        "piece": move.piece,
        "capture": move.capture,
        "check": move.check,
        "checkmate": move.checkmate,
        "promotion": move.promotion,
        "castle": move.castle,
        "annotation": move.annotation,
    })


def annotated_move_to_dict(entry: AnnotatedMove) -> Dict[str, Any]:
    return _drop_none({
        "moveNumber": entry.move_number,
        "whiteMove": move_to_dict(entry.white_move) if entry.white_move else None,
        "blackMove": move_to_dict(entry.black_move) if entry.black_move else None,
        "comments": list(entry.comments),
        "evaluation": entry.evaluation,
        "clock": entry.clock,
    })


def opening_to_dict(opening: OpeningInfo) -> Dict[str, Any]:
    return _drop_none({
        "name": opening.name,
        "eco": opening.eco,
        "variation": opening.variation,
        "moves": list(opening.moves),
        "description": opening.description,
    })


def highlight_to_dict(highlight: TacticalHighlight) -> Dict[str, Any]:
    return {
        "moveNumber": highlight.move_number,
        "type": highlight.type.value,
        "description": highlight.description,
        "evaluation": highlight.evaluation,
        "position": highlight.position,
    }


def evaluation_to_dict(evaluation: GameEvaluation) -> Dict[str, Any]:
    return {
        "finalResult": evaluation.final_result,
        "whiteAdvantage": evaluation.white_advantage,
        "criticalMoments": list(evaluation.critical_moments),
        "gameQuality": evaluation.game_quality.value,
    }


def token_result_to_dict(result: TokenResult) -> Dict[str, Any]:
    return _drop_none({"kind": result.kind.value, "token": result.token, "reason": result.reason})


def record_to_dict(record: GameRecord) -> Dict[str, Any]:
    """Serializes a GameRecord into a plain dict with stable field names."""
    return {
        "title": record.title,
        "summary": record.summary,
        "metadata": metadata_to_dict(record.metadata),
        "moves": [annotated_move_to_dict(m) for m in record.moves],
        "opening": opening_to_dict(record.opening),
        "tacticalHighlights": [highlight_to_dict(h) for h in record.tactical_highlights],
        "evaluation": evaluation_to_dict(record.evaluation),
        "error": record.error,
        "errorReason": record.error_reason,
        "diagnostics": [token_result_to_dict(d) for d in record.diagnostics],
    }


def record_to_json(record: GameRecord, indent: Optional[int] = settings.JSON_OUTPUT_INDENT) -> str:
    return json.dumps(record_to_dict(record), indent=indent, ensure_ascii=False)


# --- From plain structures ---

def metadata_from_dict(data: Dict[str, Any]) -> GameMetadata:
    return GameMetadata(**{attr: data.get(key) for attr, key in _METADATA_KEYS})


def move_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Move]:
    if data is None:
        return None
    return Move(
        san=data["san"],
        to_square=data.get("to", ""),
        piece=data.get("piece", "P"),
        capture=data.get("capture", False),
        check=data.get("check", False),
        checkmate=data.get("checkmate", False),
        promotion=data.get("promotion"),
        castle=data.get("castle"),
        annotation=data.get("annotation"),
    )


def annotated_move_from_dict(data: Dict[str, Any]) -> AnnotatedMove:
    return AnnotatedMove(
        move_number=data["moveNumber"],
        white_move=move_from_dict(data.get("whiteMove")),
        black_move=move_from_dict(data.get("blackMove")),
        comments=tuple(data.get("comments", ())),
        evaluation=data.get("evaluation"),
        clock=data.get("clock"),
    )


def opening_from_dict(data: Dict[str, Any]) -> OpeningInfo:
    return OpeningInfo(
        name=data.get("name", ""),
        eco=data.get("eco", ""),
        variation=data.get("variation"),
        moves=tuple(data.get("moves", ())),
        description=data.get("description", ""),
    )


def highlight_from_dict(data: Dict[str, Any]) -> TacticalHighlight:
    return TacticalHighlight(
        move_number=data["moveNumber"],
        type=HighlightType(data["type"]),
        description=data["description"],
        evaluation=data["evaluation"],
        position=data["position"],
    )


def evaluation_from_dict(data: Dict[str, Any]) -> GameEvaluation:
    return GameEvaluation(
        final_result=data.get("finalResult", ""),
        white_advantage=data.get("whiteAdvantage", 0),
        critical_moments=tuple(data.get("criticalMoments", ())),
        game_quality=GameQuality(data.get("gameQuality", GameQuality.POOR.value)),
    )


def token_result_from_dict(data: Dict[str, Any]) -> TokenResult:
    return TokenResult(kind=TokenKind(data["kind"]), token=data["token"], reason=data.get("reason"))


def record_from_dict(data: Dict[str, Any]) -> GameRecord:
    """
    Rebuilds a GameRecord from its plain structured form.

    Raises:
        SerializationError: If required fields are missing or hold invalid values.
    """
    try:
        return GameRecord(
            title=data["title"],
            summary=data["summary"],
            metadata=metadata_from_dict(data.get("metadata", {})),
            moves=tuple(annotated_move_from_dict(m) for m in data.get("moves", [])),
            opening=opening_from_dict(data.get("opening", {})),
            tactical_highlights=tuple(highlight_from_dict(h) for h in data.get("tacticalHighlights", [])),
            evaluation=evaluation_from_dict(data.get("evaluation", {})),
            error=bool(data.get("error", False)),
            error_reason=data.get("errorReason"),
            diagnostics=tuple(token_result_from_dict(d) for d in data.get("diagnostics", [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"Cannot rebuild GameRecord from structured data: {e!r}") from e


def record_from_json(payload: str) -> GameRecord:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON payload: {e}") from e
    return record_from_dict(data)


def records_to_list(records: List[GameRecord]) -> List[Dict[str, Any]]:
    return [record_to_dict(r) for r in records]
