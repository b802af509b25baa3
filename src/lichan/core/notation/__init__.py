"""Notation package: FEN / SAN / PGN parsing and serialization."""

from lichan.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen
from lichan.core.notation.models import ClockSetting, GameRecord, MoveIntent, PlayerInfo
from lichan.core.notation.pgn import (
    build_pgn,
    game_file_name,
    parse_pgn_game,
    pgn_movetext_from_sans,
    pgn_result_token,
    strip_move_numbers,
    tokenize_pgn,
    winner_from_pgn,
)
from lichan.core.notation.san import move_to_san, parse_san, tokenize_san

__all__ = [
    "STARTING_FEN",
    "ClockSetting",
    "GameRecord",
    "MoveIntent",
    "PlayerInfo",
    "board_from_fen",
    "board_to_fen",
    "tokenize_san",
    "parse_san",
    "move_to_san",
    "pgn_result_token",
    "winner_from_pgn",
    "tokenize_pgn",
    "strip_move_numbers",
    "pgn_movetext_from_sans",
    "build_pgn",
    "parse_pgn_game",
    "game_file_name",
]
