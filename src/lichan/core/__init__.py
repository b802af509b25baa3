"""Core domain layer: chess notation and move rules with zero external dependencies.

Quick start::

    from lichan.core import STARTING_FEN, apply_move, board_from_fen

    board = board_from_fen(STARTING_FEN)
    played = apply_move(board, "Nf3")
    print(played.uci)  # g1f3
"""

from lichan.core.board import Board
from lichan.core.enums import Color, PieceType, Winner
from lichan.core.errors import (
    EmptyMoveText,
    IllegalMove,
    InvalidCapture,
    InvalidFEN,
    InvalidPromotion,
    MalformedInput,
    NotationError,
    TranslationLengthError,
    UnknownSymbol,
    UnknownToken,
)
from lichan.core.move_generator import MoveGenerator, pseudo_legal_destinations
from lichan.core.notation import (
    STARTING_FEN,
    GameRecord,
    MoveIntent,
    board_from_fen,
    board_to_fen,
    move_to_san,
    parse_san,
)
from lichan.core.piece import Piece
from lichan.core.rules import AppliedMove, apply_intent, apply_move
from lichan.core.types import Square, file_of, make_square, rank_of

__all__ = [
    # Enums
    "Color",
    "PieceType",
    "Winner",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "rank_of",
    # Domain objects
    "AppliedMove",
    "Board",
    "GameRecord",
    "MoveGenerator",
    "MoveIntent",
    "Piece",
    # Errors
    "EmptyMoveText",
    "IllegalMove",
    "InvalidCapture",
    "InvalidFEN",
    "InvalidPromotion",
    "MalformedInput",
    "NotationError",
    "TranslationLengthError",
    "UnknownSymbol",
    "UnknownToken",
    # Notation / rules
    "STARTING_FEN",
    "apply_intent",
    "apply_move",
    "board_from_fen",
    "board_to_fen",
    "move_to_san",
    "parse_san",
    "pseudo_legal_destinations",
]
