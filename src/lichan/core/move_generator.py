"""Pseudo-legal destination generation on a static board.

Check safety is not modeled: a destination is reachable when the piece's
movement rule allows it, even if the mover's own king is left attacked.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from lichan.core.enums import Color, PieceType
from lichan.core.types import FEN_BOARD_ORDER, Square, offset_square, rank_of

if TYPE_CHECKING:
    from lichan.core.board import Board
    from lichan.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

KING_HOME: Mapping[Color, Square] = MappingProxyType(
    {Color.WHITE: "e1", Color.BLACK: "e8"}
)

_CastlePath = tuple[Square, Square, tuple[Square, ...]]

# (corner rook, king destination, squares that must be empty), kingside first
_CASTLE_PATHS: Mapping[Color, tuple[_CastlePath, ...]] = MappingProxyType(
    {
        Color.WHITE: (("h1", "g1", ("f1", "g1")), ("a1", "c1", ("b1", "c1", "d1"))),
        Color.BLACK: (("h8", "g8", ("f8", "g8")), ("a8", "c8", ("b8", "c8", "d8"))),
    }
)

_PAWN_DIRECTION: Mapping[Color, int] = MappingProxyType({Color.WHITE: 1, Color.BLACK: -1})
_PAWN_START_RANK: Mapping[Color, int] = MappingProxyType({Color.WHITE: 1, Color.BLACK: 6})
# Fifth rank relative to the mover: rank 5 for White, rank 4 for Black.
EN_PASSANT_RANK: Mapping[Color, int] = MappingProxyType({Color.WHITE: 4, Color.BLACK: 3})


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> Mapping[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in FEN_BOARD_ORDER:
        moves = (offset_square(sq, df, dr) for df, dr in offsets)
        targets[sq] = tuple(to_sq for to_sq in moves if to_sq is not None)
    return MappingProxyType(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> Mapping[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in FEN_BOARD_ORDER:
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            ray: list[Square] = []
            step = offset_square(sq, df, dr)
            while step is not None:
                ray.append(step)
                step = offset_square(step, df, dr)
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return MappingProxyType(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)


class MoveGenerator:
    """Enumerates destinations reachable by pieces on a :class:`Board`."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def destinations(self, sq: Square) -> list[Square]:
        """Pseudo-legal destinations of the piece standing on *sq*."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.KING:
            self._gen_king(piece, moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(piece, _ROOK_RAYS[sq], moves)
            self._gen_sliding(piece, _BISHOP_RAYS[sq], moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(piece, _ROOK_RAYS[sq], moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(piece, _BISHOP_RAYS[sq], moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_knight(piece, moves)
        elif ptype == PieceType.PAWN:
            self._gen_pawn(piece, moves)
        else:
            raise AssertionError(f"Unhandled piece type: {ptype!r}")
        return moves

    def can_reach(self, sq: Square, target: Square) -> bool:
        return target in self.destinations(sq)

    def attackers_of(
        self, target: Square, color: Color, piece_type: PieceType
    ) -> list[Square]:
        """Squares of *color*'s *piece_type* pieces that can reach *target*."""
        return [
            sq
            for sq in self._board.pieces(color, piece_type)
            if self.can_reach(sq, target)
        ]

    # -- Piece-specific generators (private) -------------------------------

    def _is_open(self, mover: Piece, to_sq: Square) -> bool:
        target = self._board[to_sq]
        return target is None or target.color != mover.color

    def _gen_knight(self, piece: Piece, moves: list[Square]) -> None:
        for to_sq in _KNIGHT_TARGETS[piece.square]:
            if self._is_open(piece, to_sq):
                moves.append(to_sq)

    def _gen_sliding(
        self,
        piece: Piece,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break

    def _gen_king(self, piece: Piece, moves: list[Square]) -> None:
        for to_sq in _KING_TARGETS[piece.square]:
            if self._is_open(piece, to_sq):
                moves.append(to_sq)

        self._gen_castling(piece, moves)

    def _gen_castling(self, king: Piece, moves: list[Square]) -> None:
        # Squares the king crosses are not checked for attacks.
        if king.square != KING_HOME[king.color]:
            return

        board = self._board
        for corner, destination, between in _CASTLE_PATHS[king.color]:
            rook = board[corner]
            if (
                rook is not None
                and rook.color == king.color
                and rook.piece_type == PieceType.ROOK
                and all(board.is_empty(sq) for sq in between)
            ):
                moves.append(destination)

    def _gen_pawn(self, pawn: Piece, moves: list[Square]) -> None:
        board = self._board
        color = pawn.color
        sq = pawn.square
        dr = _PAWN_DIRECTION[color]

        one_step = offset_square(sq, 0, dr)
        if one_step is not None and board.is_empty(one_step):
            moves.append(one_step)
            if rank_of(sq) == _PAWN_START_RANK[color]:
                two_step = offset_square(sq, 0, 2 * dr)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(two_step)

        on_fifth = rank_of(sq) == EN_PASSANT_RANK[color]
        for df in (-1, 1):
            cap_sq = offset_square(sq, df, dr)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(cap_sq)
                continue
            if on_fifth and self._is_en_passant_victim(pawn, offset_square(sq, df, 0)):
                moves.append(cap_sq)

    def _is_en_passant_victim(self, pawn: Piece, sq: Square | None) -> bool:
        # Inferred from occupancy only; the previous move is not known.
        if sq is None:
            return False
        victim = self._board[sq]
        return (
            victim is not None
            and victim.color != pawn.color
            and victim.piece_type == PieceType.PAWN
        )


def pseudo_legal_destinations(board: Board, sq: Square) -> list[Square]:
    """Shortcut for ``MoveGenerator(board).destinations(sq)``."""
    return MoveGenerator(board).destinations(sq)
