"""FEN parsing and serialization.

Only the piece placement and the side to move are kept. Castling rights
and en-passant eligibility are inferred from the board during move
generation, so those fields are accepted but not retained.
"""

from __future__ import annotations

from lichan.core.board import Board
from lichan.core.enums import Color
from lichan.core.errors import InvalidFEN
from lichan.core.piece import Piece
from lichan.core.types import RANKS, make_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_FEN_FIELD_COUNT = 6


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`."""
    text = fen.strip()
    if text == STARTING_FEN:
        return Board.initial()
    if not text:
        raise InvalidFEN("Empty FEN string")

    parts = text.split()
    if len(parts) != _FEN_FIELD_COUNT:
        raise InvalidFEN(f"Invalid FEN (need {_FEN_FIELD_COUNT} fields): {fen!r}")

    placement, side_part = parts[:2]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidFEN(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    # 2. Side to move
    if side_part == "w":
        board = Board(Color.WHITE)
    elif side_part == "b":
        board = Board(Color.BLACK)
    else:
        raise InvalidFEN(f"Invalid FEN side-to-move field: {side_part!r}")

    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in RANKS:
                file += int(ch)
                continue
            if file >= 8:
                raise InvalidFEN(f"Invalid FEN rank width: {fen!r}")
            sq = make_square(file, rank)
            try:
                board[sq] = Piece.from_char(ch, sq)
            except ValueError as exc:
                raise InvalidFEN(f"{exc}: {fen!r}") from None
            file += 1
        if file != 8:
            raise InvalidFEN(f"Invalid FEN rank width: {fen!r}")

    return board


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN.

    Castling and en-passant fields are written as ``-`` and the clocks
    as ``0 1`` since the board does not track them.
    """
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if board.turn == Color.WHITE else "b"
    return f"{board_str} {side_str} - - 0 1"
