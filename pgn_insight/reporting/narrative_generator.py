# pgn_insight/pgn_insight/reporting/narrative_generator.py
"""
Generates the human-readable title and summary for an analysed game.

The functions here are pure: they only format fields that earlier stages
already computed and never re-derive anything from the moves.
"""
from typing import Sequence

from pgn_insight.config import settings
from pgn_insight.types import (
    GameEvaluation,
    GameMetadata,
    HighlightType,
    OpeningInfo,
    TacticalHighlight,
)


def _player_names(metadata: GameMetadata) -> tuple:
    return (
        metadata.white or settings.DEFAULT_WHITE_NAME,
        metadata.black or settings.DEFAULT_BLACK_NAME,
    )


def generate_title(metadata: GameMetadata, opening: OpeningInfo, evaluation: GameEvaluation) -> str:
    """Picks the white-win, black-win or draw template based on the final result."""
    white, black = _player_names(metadata)
    if evaluation.final_result == "1-0":
        template = settings.TITLE_WHITE_WIN
    elif evaluation.final_result == "0-1":
        template = settings.TITLE_BLACK_WIN
    else:
        template = settings.TITLE_DRAW
    return template.format(white=white, black=black, opening=opening.name)


def _highlight_sentence(highlights: Sequence[TacticalHighlight]) -> str:
    """Only games with at least one brilliant move mention their highlight counts."""
    brilliant_count = sum(1 for h in highlights if h.type is HighlightType.BRILLIANT)
    if brilliant_count == 0:
        return ""
    tactical_count = sum(1 for h in highlights if h.type is HighlightType.TACTICAL)
    return settings.SUMMARY_HIGHLIGHT_SENTENCE.format(brilliant=brilliant_count, tactical=tactical_count)


def generate_summary(
    metadata: GameMetadata,
    opening: OpeningInfo,
    highlights: Sequence[TacticalHighlight],
    evaluation: GameEvaluation,
) -> str:
    """
    Builds a short multi-sentence summary of the game.

    The summary names the players and the opening, mentions the brilliant
    and tactical counts when there was a brilliant move, and closes with a
    sentence chosen by the game quality.
    """
    white, black = _player_names(metadata)
    sentences = [
        settings.SUMMARY_OPENING_SENTENCE.format(
            white=white,
            black=black,
            event=metadata.event or settings.DEFAULT_EVENT_PHRASE,
            opening=opening.name,
        )
    ]

    if (highlight_sentence := _highlight_sentence(highlights)):
        sentences.append(highlight_sentence)

    closings = dict(settings.CLOSING_SENTENCES)
    sentences.append(closings.get(evaluation.game_quality, settings.DEFAULT_CLOSING_SENTENCE))
    return " ".join(sentences)
