# pgn_insight/pgn_insight/utils/chess_utils.py
"""
Generic chess-related utility functions.

These helpers operate on the parsed move list and are not tied to a
specific pipeline stage. They are pure functions, making them easy to test
and reason about.
"""
import logging
from typing import List, Sequence

import chess

from pgn_insight.config import settings
from pgn_insight.types import AnnotatedMove, Move

logger = logging.getLogger(settings.APP_NAME + ".ChessUtils")


def iter_plies(moves: Sequence[AnnotatedMove]) -> List[Move]:
    """Flattens numbered move entries into plies in playing order."""
    plies: List[Move] = []
    for entry in moves:
        plies.extend(entry.plies())
    return plies


def replay_positions(plies: Sequence[Move]) -> List[str]:
    """
    Replays plies from the standard starting position and returns the FEN
    after each one.

    The SAN text is played through `chess.Board.push_san`. From the first ply
    that cannot be played legally onward, the starting FEN is returned
    instead, since the true position is unknown.

    Args:
        plies: Moves in playing order.

    Returns:
        A list with exactly one FEN string per ply.
    """
    board = chess.Board()
    positions: List[str] = []
    replayable = True

    for index, ply in enumerate(plies):
        if replayable:
            try:
                board.push_san(ply.san)
                positions.append(board.fen())
                continue
            except ValueError as e:
                # IllegalMoveError, InvalidMoveError and AmbiguousMoveError all derive from ValueError.
                logger.debug(f"Position replay stopped at ply {index + 1} ('{ply.san}'): {e}")
                replayable = False
        positions.append(settings.STARTING_POSITION_FEN)

    return positions
