"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from lichan.core.enums import PieceType, Winner


@dataclass(slots=True)
class MoveIntent:
    """A single SAN move as written, before it is matched against a board."""

    piece_type: PieceType = PieceType.PAWN
    target: str = ""
    discriminator: str = ""
    is_capture: bool = False
    is_check: bool = False
    is_checkmate: bool = False
    is_castle_long: bool = False
    is_castle_short: bool = False
    promotion: PieceType | None = None

    @property
    def is_castle(self) -> bool:
        return self.is_castle_long or self.is_castle_short


@dataclass(slots=True)
class PlayerInfo:
    name: str = ""
    rating: int = 0


@dataclass(slots=True)
class ClockSetting:
    """Time control in seconds."""

    initial: int = 0
    increment: int = 0


@dataclass(slots=True)
class GameRecord:
    """Metadata and movetext of one downloaded game.

    ``created_at`` is milliseconds since the epoch (UTC). An empty
    ``initial_fen`` means the standard starting position.
    """

    game_id: str = ""
    rated: bool = False
    speed: str = ""
    white: PlayerInfo = field(default_factory=PlayerInfo)
    black: PlayerInfo = field(default_factory=PlayerInfo)
    created_at: int = 0
    winner: Winner = Winner.UNKNOWN
    opening: str = ""
    clock: ClockSetting = field(default_factory=ClockSetting)
    initial_fen: str = ""
    moves: str = ""

    @property
    def sans(self) -> list[str]:
        """Movetext split into individual SAN tokens."""
        return self.moves.split()

