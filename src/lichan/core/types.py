"""Square type alias and coordinate helpers.

Squares are kept in their canonical text form, file letter followed by
rank digit ("e4"). Index helpers return zero-based file/rank numbers.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = str  # "a1" .. "h8"

FILES = "abcdefgh"
RANKS = "12345678"

# a8..h8, a7..h7, ..., a1..h1
FEN_BOARD_ORDER: tuple[Square, ...] = tuple(
    f + r for r in reversed(RANKS) for f in FILES
)


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return FILES.index(sq[0])


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return RANKS.index(sq[1])


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return FILES[file] + RANKS[rank]


def offset_square(sq: Square, df: int, dr: int) -> Square | None:
    """Square shifted by (*df*, *dr*), or ``None`` when it falls off the board."""
    af = file_of(sq) + df
    ar = rank_of(sq) + dr
    if 0 <= af < 8 and 0 <= ar < 8:
        return make_square(af, ar)
    return None


def is_valid_square(name: str) -> bool:
    """Check whether *name* is a square such as ``"e4"``."""
    return len(name) == 2 and name[0] in FILES and name[1] in RANKS
