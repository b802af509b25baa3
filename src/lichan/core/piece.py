"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from lichan.core.enums import Color, PieceType
from lichan.core.types import Square

# FEN letter (case-insensitive) → PieceType
_FEN_KIND: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}
_FEN_LETTER: dict[PieceType, str] = {v: k for k, v in _FEN_KIND.items()}

SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in SAN_PIECE.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object for a piece standing on a square."""

    color: Color
    piece_type: PieceType
    square: Square

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _FEN_LETTER[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str, square: Square) -> Piece:
        """Create piece from FEN character, e.g. 'N' on 'g1' → white knight."""
        try:
            ptype = _FEN_KIND[char.lower()]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, ptype, square)

    def moved_to(self, square: Square) -> Piece:
        """Same piece relocated to *square*."""
        return replace(self, square=square)

    def promoted_to(self, piece_type: PieceType) -> Piece:
        return replace(self, piece_type=piece_type)
