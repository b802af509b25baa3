"""Board - side to move plus piece placement keyed by square name."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from lichan.core.enums import Color, PieceType
from lichan.core.piece import Piece
from lichan.core.types import FEN_BOARD_ORDER, FILES, Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable position: whose turn it is and which squares are occupied.

    Unoccupied squares are simply absent from the mapping. Each stored
    piece carries the square it is keyed under. Boards never share their
    mapping; :meth:`copy` hands out an independent one.
    """

    __slots__ = ("turn", "_pieces")

    def __init__(
        self,
        turn: Color = Color.WHITE,
        pieces: Mapping[Square, Piece] | None = None,
    ) -> None:
        self.turn = turn
        self._pieces: dict[Square, Piece] = {}
        if pieces is not None:
            for sq, piece in pieces.items():
                self[sq] = piece

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._pieces.get(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if piece is None:
            self._pieces.pop(sq, None)
            return
        if piece.square != sq:
            piece = piece.moved_to(sq)
        self._pieces[sq] = piece

    def __delitem__(self, sq: Square) -> None:
        del self._pieces[sq]

    def __contains__(self, sq: object) -> bool:
        return sq in self._pieces

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        """Pieces in FEN board order (a8..h8, ..., a1..h1)."""
        for sq in FEN_BOARD_ORDER:
            piece = self._pieces.get(sq)
            if piece is not None:
                yield piece

    def is_empty(self, sq: Square) -> bool:
        return sq not in self._pieces

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, in FEN board order."""
        return [
            p.square for p in self if p.color == color and p.piece_type == piece_type
        ]

    def king_square(self, color: Color) -> Square | None:
        squares = self.pieces(color, PieceType.KING)
        return squares[0] if squares else None

    def as_dict(self) -> dict[Square, Piece]:
        """Snapshot of the placement; changes to it do not reach the board."""
        return dict(self._pieces)

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board(self.turn)
        b._pieces = self._pieces.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, White to move."""
        b = cls(Color.WHITE)
        for f in range(8):
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN, make_square(f, 1))
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN, make_square(f, 6))

        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt, make_square(f, 0))
            b[make_square(f, 7)] = Piece(Color.BLACK, pt, make_square(f, 7))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.turn == other.turn and self._pieces == other._pieces

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append(f"  {' '.join(FILES)}  ({self.turn} to move)")
        return "\n".join(rows)
