"""On-disk layout of downloaded and analysed games."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from lichan.core.notation.models import GameRecord
from lichan.core.notation.pgn import build_pgn, game_file_name

_LOGGER = logging.getLogger(__name__)

ANALYSIS_SUFFIX = "_stockfish.pgn"


def analysis_file_name(game_path: Path) -> str:
    """``2024.1.5_AbCd.pgn`` → ``2024.1.5_abcd_stockfish.pgn``."""
    return game_path.stem.lower() + ANALYSIS_SUFFIX


class GameStore:
    """Per-user game and analysis directories."""

    __slots__ = ("_game_directory", "_engine_directory")

    def __init__(self, game_directory: Path, engine_directory: Path) -> None:
        self._game_directory = Path(game_directory)
        self._engine_directory = Path(engine_directory)

    def games_dir(self, username: str) -> Path:
        return self._game_directory / username

    def analysis_dir(self, username: str) -> Path:
        return self._engine_directory / username

    def write_game(self, username: str, game: GameRecord, site_url: str) -> Path:
        """Store *game* as PGN, replacing an earlier copy of the same game."""
        path = self.games_dir(username) / game_file_name(game)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(build_pgn(game, site_url), encoding="utf-8")
        _LOGGER.info("Wrote %s", path)
        return path

    def pending_games(self, username: str) -> Iterator[tuple[Path, Path]]:
        """Yield ``(game, analysis)`` paths for games not yet analysed.

        A game counts as analysed once its analysis file exists.
        """
        games_dir = self.games_dir(username)
        if not games_dir.is_dir():
            _LOGGER.warning("No game directory for %s: %s", username, games_dir)
            return
        for game_path in sorted(games_dir.iterdir()):
            if not game_path.is_file() or game_path.suffix.lower() != ".pgn":
                continue
            output = self.analysis_dir(username) / analysis_file_name(game_path)
            if output.exists():
                continue
            yield game_path, output

    def write_analysis(self, path: Path, pgn_text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(pgn_text, encoding="utf-8")
        _LOGGER.info("Wrote analysis %s", path)
        return path
