"""Translate engine principal variations back into SAN."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lichan.core.board import Board
from lichan.core.enums import Color
from lichan.core.errors import NotationError
from lichan.core.notation.san import move_to_san
from lichan.core.rules import apply_move

_LOGGER = logging.getLogger(__name__)


def variation_to_san(board: Board, ucis: Sequence[str]) -> list[str]:
    """SAN for each long-algebraic move of *ucis*, played from *board*.

    Translation stops at the first move the rule engine cannot replay
    to the same long-algebraic text.
    """
    sans: list[str] = []
    for uci in ucis:
        try:
            san = move_to_san(board, uci)
            played = apply_move(board, san)
        except NotationError as exc:
            _LOGGER.debug("Stopping PV translation at %s: %s", uci, exc)
            break
        if played.uci != uci:
            _LOGGER.debug("PV move %s replays as %s; stopping", uci, played.uci)
            break
        sans.append(san)
        board = played.board
    return sans


def number_variation(sans: Sequence[str], move_number: int, turn: Color) -> list[str]:
    """Insert move numbers: ``["e5", "Nf3"]`` at 1/Black → ``1... e5 2. Nf3``."""
    parts: list[str] = []
    for idx, san in enumerate(sans):
        if turn == Color.WHITE:
            parts.append(f"{move_number}.")
        elif idx == 0:
            parts.append(f"{move_number}...")
        parts.append(san)
        if turn == Color.BLACK:
            move_number += 1
        turn = turn.opposite
    return parts
