"""Shared engine search models and protocol."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

_UCI_MOVE_RE = re.compile(r"^[a-h][1-8][a-h][1-8][qrbn]?$")


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single ``go`` command."""

    depth: int = 245
    movetime_ms: int = 60_000


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Best move plus the last principal variation the engine reported."""

    best_move: str
    pv: tuple[str, ...] = ()
    depth: int = 0
    score_cp: int | None = None
    mate: int | None = None


class IEngine(Protocol):
    """Protocol for engines driven by the analyzer."""

    def set_position(self, start_fen: str, moves: Sequence[str]) -> None: ...

    def search(self, limits: SearchLimits) -> SearchResult: ...


def is_uci_move(token: str) -> bool:
    return _UCI_MOVE_RE.match(token) is not None


def pv_moves(info: Sequence[str]) -> tuple[str, ...]:
    """Long-algebraic moves of the ``pv`` section of an ``info`` line."""
    if "pv" in info:
        start = list(info).index("pv") + 1
    else:
        # Some engines omit the keyword; fall back to the first move token.
        start = next((i for i, token in enumerate(info) if is_uci_move(token)), len(info))
    moves: list[str] = []
    for token in info[start:]:
        if not is_uci_move(token):
            break
        moves.append(token)
    return tuple(moves)


def result_from_info(best_move: str, info: Sequence[str]) -> SearchResult:
    """Combine ``bestmove`` with the latest ``info`` tokens."""
    depth = 0
    score_cp: int | None = None
    mate: int | None = None
    for idx, token in enumerate(info[:-1]):
        nxt = info[idx + 1]
        if token == "depth" and nxt.lstrip("-").isdigit():
            depth = int(nxt)
        elif token == "cp" and nxt.lstrip("-").isdigit():
            score_cp = int(nxt)
        elif token == "mate" and nxt.lstrip("-").isdigit():
            mate = int(nxt)
    return SearchResult(
        best_move=best_move,
        pv=pv_moves(info),
        depth=depth,
        score_cp=score_cp,
        mate=mate,
    )
