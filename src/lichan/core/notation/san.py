"""SAN (Standard Algebraic Notation) tokenizing, parsing and generation."""

from __future__ import annotations

import re

from lichan.core.board import Board
from lichan.core.enums import PieceType
from lichan.core.errors import (
    EmptyMoveText,
    IllegalMove,
    InvalidPromotion,
    UnknownSymbol,
    UnknownToken,
)
from lichan.core.move_generator import MoveGenerator
from lichan.core.notation.models import MoveIntent
from lichan.core.piece import SAN_PIECE, SAN_PIECE_REV
from lichan.core.types import FILES, RANKS, file_of, is_valid_square, rank_of

LONG_CASTLE = "O-O-O"
SHORT_CASTLE = "O-O"
CHECK = "+"
MATE = "#"
CAPTURE = "x"
PROMOTE = "="

_DISCRIMINATOR_RE = re.compile(r"^[a-h]?[1-8]?$")
_UCI_RE = re.compile(r"^([a-h][1-8])([a-h][1-8])([qrbn]?)$")

_PROMOTION_TYPES: frozenset[PieceType] = frozenset(
    {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}
)


# ── Tokenizer ───────────────────────────────────────────────────────────────


def _next_token(text: str) -> str:
    """Longest token at the start of *text*."""
    for castle in (LONG_CASTLE, SHORT_CASTLE):
        if text.startswith(castle):
            return castle

    ch = text[0]
    if ch in SAN_PIECE_REV or ch == PROMOTE:
        return ch

    if len(text) == 1:
        if ch in (CHECK, MATE):
            return ch
        raise UnknownSymbol(f"Unknown symbol {ch!r} at end of move")

    if ch in RANKS:
        return ch
    if ch in FILES:
        if text[1] in RANKS:
            return text[:2]
        return ch
    if ch == CAPTURE:
        return ch
    raise UnknownSymbol(f"Unknown symbol {ch!r} in move")


def tokenize_san(san: str) -> list[str]:
    """Split a single SAN move into its atomic tokens.

    ``"Nge7"`` → ``["N", "g", "e7"]``; ``"e8=Q+"`` → ``["e8", "=", "Q", "+"]``.
    """
    text = san.strip()
    tokens: list[str] = []
    while text:
        token = _next_token(text)
        tokens.append(token)
        text = text[len(token) :]
    return tokens


# ── Parser ──────────────────────────────────────────────────────────────────


def parse_san(san: str) -> MoveIntent:
    """Parse SAN text into a :class:`MoveIntent` without looking at a board."""
    tokens = tokenize_san(san)
    if not tokens:
        raise EmptyMoveText(f"No tokens found in move: {san!r}")

    intent = MoveIntent()
    idx = 0
    if tokens[0] in SAN_PIECE_REV:
        intent.piece_type = SAN_PIECE_REV[tokens[0]]
        idx = 1

    while idx < len(tokens):
        token = tokens[idx]
        idx += 1

        if is_valid_square(token) or _DISCRIMINATOR_RE.match(token):
            if intent.target:
                intent.discriminator = intent.target
            intent.target = token
        elif token == LONG_CASTLE:
            intent.piece_type = PieceType.KING
            intent.target = token
            intent.is_castle_long = True
        elif token == SHORT_CASTLE:
            intent.piece_type = PieceType.KING
            intent.target = token
            intent.is_castle_short = True
        elif token == CAPTURE:
            intent.is_capture = True
        elif token == CHECK:
            intent.is_check = True
        elif token == MATE:
            intent.is_checkmate = True
        elif token == PROMOTE:
            if intent.promotion is not None:
                raise InvalidPromotion(f"Second promotion marker in move: {san!r}")
            if intent.piece_type != PieceType.PAWN:
                raise InvalidPromotion(f"Promotion indicated on non-pawn piece: {san!r}")
            if idx >= len(tokens):
                raise InvalidPromotion(f"Promotion with no piece type provided: {san!r}")
            promoted = SAN_PIECE_REV.get(tokens[idx])
            if promoted not in _PROMOTION_TYPES:
                raise InvalidPromotion(f"Cannot promote to {tokens[idx]!r}: {san!r}")
            intent.promotion = promoted
            idx += 1
        else:
            raise UnknownToken(f"Unknown token {token!r} in move: {san!r}")

    return intent


# ── Generation ──────────────────────────────────────────────────────────────


def move_to_san(board: Board, uci: str) -> str:
    """Convert a long-algebraic move (``"g1f3"``) to SAN on *board*.

    Disambiguation follows the usual file, then rank, then square
    preference. No check or mate suffix is produced.
    """
    match = _UCI_RE.match(uci)
    if match is None:
        raise IllegalMove(f"Invalid long-algebraic move: {uci!r}")
    from_sq, to_sq, promo = match.groups()

    piece = board[from_sq]
    if piece is None or piece.color != board.turn:
        raise IllegalMove(f"No {board.turn} piece on {from_sq}: {uci!r}")

    ptype = piece.piece_type
    if ptype == PieceType.KING and abs(file_of(to_sq) - file_of(from_sq)) == 2:
        return SHORT_CASTLE if file_of(to_sq) > file_of(from_sq) else LONG_CASTLE

    is_capture = board[to_sq] is not None
    san = ""
    if ptype == PieceType.PAWN:
        if file_of(from_sq) != file_of(to_sq):
            is_capture = True
            san += from_sq[0]
    else:
        san += SAN_PIECE[ptype]

        gen = MoveGenerator(board)
        ambiguous = [
            sq for sq in gen.attackers_of(to_sq, piece.color, ptype) if sq != from_sq
        ]
        if ambiguous:
            same_file = any(file_of(sq) == file_of(from_sq) for sq in ambiguous)
            same_rank = any(rank_of(sq) == rank_of(from_sq) for sq in ambiguous)
            if not same_file:
                san += from_sq[0]
            elif not same_rank:
                san += from_sq[1]
            else:
                san += from_sq

    if is_capture:
        san += CAPTURE

    san += to_sq

    if promo:
        san += PROMOTE + promo.upper()

    return san
