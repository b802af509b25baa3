"""Exceptions raised by the notation and rule engine."""

from __future__ import annotations


class NotationError(ValueError):
    """Base class for malformed notation or unplayable moves."""


class MalformedInput(NotationError):
    """PGN text that cannot be tokenized (stray tab, unmatched quote)."""


class UnknownSymbol(NotationError):
    """SAN text containing a character outside the move grammar."""


class UnknownToken(NotationError):
    """A SAN token that is valid alone but not at its position."""


class EmptyMoveText(NotationError):
    """SAN text that produced no tokens."""


class InvalidFEN(NotationError):
    """FEN text with the wrong field or rank layout."""


class InvalidPromotion(NotationError):
    """Missing, duplicated or impossible promotion piece."""


class IllegalMove(NotationError):
    """No piece of the mover can reach the requested square."""


class InvalidCapture(NotationError):
    """Capture claimed onto an empty square without an en-passant victim."""


class TranslationLengthError(RuntimeError):
    """Long-algebraic output had a length other than 4 or 5."""
