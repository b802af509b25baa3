"""Data models produced by game analysis."""

from __future__ import annotations

from dataclasses import dataclass, field

from lichan.core.enums import Color
from lichan.core.notation.models import GameRecord
from lichan.core.notation.pgn import pgn_result_token


@dataclass(slots=True, frozen=True)
class PlyAnalysis:
    """One played move and the engine's reply to the resulting position."""

    move_number: int
    color: Color
    san: str
    uci: str
    best_move: str | None = None
    continuation: tuple[str, ...] = ()
    score_cp: int | None = None
    mate: int | None = None


@dataclass(slots=True)
class GameAnalysisReport:
    """Per-ply analysis of a game, possibly cut short by an unplayable move."""

    game: GameRecord
    plies: list[PlyAnalysis] = field(default_factory=list)
    error: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.error is None

    def movetext(self) -> str:
        """Numbered movetext with each continuation as a ``{ ... }`` comment."""
        parts: list[str] = []
        after_comment = True
        for ply in self.plies:
            if ply.color == Color.WHITE:
                parts.append(f"{ply.move_number}.")
            elif after_comment:
                parts.append(f"{ply.move_number}...")
            parts.append(ply.san)
            after_comment = False
            if ply.continuation:
                parts.append("{")
                parts.extend(ply.continuation)
                parts.append("}")
                after_comment = True
        parts.append(pgn_result_token(self.game.winner))
        return " ".join(parts)
