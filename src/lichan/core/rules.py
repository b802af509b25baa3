"""Move resolution and application.

A SAN move is matched against the side to move, the source square is
resolved from the board, and a successor board is built from a copy.
The board passed in is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass

from lichan.core.board import Board
from lichan.core.enums import Color, PieceType
from lichan.core.errors import (
    IllegalMove,
    InvalidCapture,
    InvalidPromotion,
    TranslationLengthError,
)
from lichan.core.move_generator import EN_PASSANT_RANK, KING_HOME, MoveGenerator
from lichan.core.notation.models import MoveIntent
from lichan.core.notation.san import parse_san
from lichan.core.types import Square, file_of, rank_of

# Rook relocation per castle side: corner file → file next to the king.
_ROOK_SHORT_CASTLE = ("h", "f")
_ROOK_LONG_CASTLE = ("a", "d")


@dataclass(slots=True, frozen=True)
class AppliedMove:
    """Successor board plus the long-algebraic text of the move played."""

    board: Board
    uci: str

    @property
    def from_sq(self) -> Square:
        return self.uci[:2]

    @property
    def to_sq(self) -> Square:
        return self.uci[2:4]


def apply_move(board: Board, san: str) -> AppliedMove:
    """Play *san* for the side to move on *board*.

    Returns the new board and the move in long-algebraic form, e.g.
    ``"Ne7"`` → ``"g8e7"``.
    """
    return apply_intent(board, parse_san(san))


def apply_intent(board: Board, intent: MoveIntent) -> AppliedMove:
    """Apply an already parsed move to a copy of *board*."""
    mover = board.turn
    target = _castle_target(mover, intent) if intent.is_castle else intent.target
    source = resolve_source(board, intent, target)

    successor = board.copy()
    successor.turn = mover.opposite

    piece = successor[source]
    assert piece is not None
    del successor[source]

    promo_char = ""
    if intent.promotion is not None:
        if piece.piece_type != PieceType.PAWN:
            raise InvalidPromotion(f"Only pawns promote, found {piece.piece_type.name}")
        piece = piece.promoted_to(intent.promotion)
        promo_char = str(piece).lower()

    _resolve_capture(board, successor, intent, source, target)
    successor[target] = piece.moved_to(target)

    if intent.is_castle:
        corner_file, rook_file = (
            _ROOK_SHORT_CASTLE if intent.is_castle_short else _ROOK_LONG_CASTLE
        )
        rank = target[1]
        rook = successor[corner_file + rank]
        if rook is None or rook.piece_type != PieceType.ROOK:
            raise IllegalMove(f"No rook on {corner_file + rank} to castle with")
        del successor[corner_file + rank]
        successor[rook_file + rank] = rook

    uci = source + target + promo_char
    if len(uci) not in (4, 5):
        raise TranslationLengthError(f"Long-algebraic move has bad length: {uci!r}")
    return AppliedMove(successor, uci)


def resolve_source(board: Board, intent: MoveIntent, target: Square) -> Square:
    """Find the square of the piece *intent* describes.

    Candidates are scanned in FEN board order (a8..h8 down to a1..h1) and
    the first one able to reach *target* wins.
    """
    mover = board.turn
    disc = intent.discriminator

    if len(disc) == 2:
        piece = board[disc]
        if piece is None or piece.color != mover or piece.piece_type != intent.piece_type:
            raise IllegalMove(
                f"No {mover} {intent.piece_type.name.lower()} on {disc} to reach {target}"
            )
        return disc

    gen = MoveGenerator(board)
    for sq in board.pieces(mover, intent.piece_type):
        if disc and disc not in sq:
            continue
        if gen.can_reach(sq, target):
            return sq

    raise IllegalMove(
        f"No {mover} {intent.piece_type.name.lower()} can reach {target!r}"
        + (f" from {disc!r}" if disc else "")
    )


def _castle_target(mover: Color, intent: MoveIntent) -> Square:
    rank = KING_HOME[mover][1]
    return ("g" if intent.is_castle_short else "c") + rank


def _resolve_capture(
    board: Board,
    successor: Board,
    intent: MoveIntent,
    source: Square,
    target: Square,
) -> None:
    mover = board.turn
    occupant = board[target]
    if occupant is not None:
        if occupant.color == mover:
            raise IllegalMove(f"{target} is occupied by the mover's own piece")
        del successor[target]
        return

    mover_piece = board[source]
    assert mover_piece is not None
    is_diagonal = file_of(source) != file_of(target)

    if mover_piece.piece_type != PieceType.PAWN:
        if intent.is_capture:
            raise InvalidCapture(f"Nothing to capture on {target}")
        return

    if not (intent.is_capture or is_diagonal):
        return

    # En passant: the victim stands beside the source, on the target's file.
    if rank_of(source) != EN_PASSANT_RANK[mover]:
        raise InvalidCapture(
            f"Nothing to capture on {target} and {source} is not an en-passant rank"
        )
    victim_sq = target[0] + source[1]
    victim = board[victim_sq]
    if (
        victim is None
        or victim.color == mover
        or victim.piece_type != PieceType.PAWN
    ):
        raise InvalidCapture(f"No enemy pawn on {victim_sq} to capture en passant")
    del successor[victim_sq]
