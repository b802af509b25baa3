"""User configuration stored as an INI file through QSettings.

Example ``config.ini``::

    username=alice, bob
    game_directory=~/chess/games
    token=lip_xxxxxxxx
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from PyQt6.QtCore import QSettings, QStandardPaths

from lichan.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)

_APP_DIR = "lichan"
_FILE_NAME = "config.ini"


class ConfigError(ValueError):
    """Configuration file missing or lacking required keys."""


def default_config_path() -> Path:
    base = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.GenericConfigLocation
    )
    return Path(base) / _APP_DIR / _FILE_NAME


def expand_path(value: str) -> Path:
    """Expand a leading ``~`` and normalise the path."""
    return Path(value.strip()).expanduser()


@dataclass(slots=True)
class Config:
    usernames: list[str]
    game_directory: Path
    engine_directory: Path
    token: str = ""
    last_run: int = 0
    engine_path: str = "stockfish"
    limits: SearchLimits = field(default_factory=SearchLimits)
    path: Path | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Read the INI file at *path* (default location when omitted)."""
        path = path or default_config_path()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {str(path)!r}")

        settings = QSettings(str(path), QSettings.Format.IniFormat)
        raw_users = settings.value("username", [])
        if isinstance(raw_users, str):
            raw_users = [raw_users]
        usernames = [str(name).strip() for name in raw_users if str(name).strip()]
        if not usernames:
            raise ConfigError("No usernames provided")

        game_dir_text = str(settings.value("game_directory", "") or "")
        if not game_dir_text.strip():
            raise ConfigError("No game directory provided")
        game_directory = expand_path(game_dir_text)

        engine_dir_text = str(settings.value("engine_directory", "") or "")
        engine_directory = (
            expand_path(engine_dir_text) if engine_dir_text.strip() else game_directory / "engine"
        )

        defaults = SearchLimits()
        limits = SearchLimits(
            depth=_int_value(settings, "depth", defaults.depth),
            movetime_ms=_int_value(settings, "movetime_ms", defaults.movetime_ms),
        )
        return cls(
            usernames=usernames,
            game_directory=game_directory,
            engine_directory=engine_directory,
            token=str(settings.value("token", "") or ""),
            last_run=_int_value(settings, "last_run", 0),
            engine_path=str(settings.value("engine_path", "") or "stockfish"),
            limits=limits,
            path=path,
        )

    def save(self) -> None:
        """Persist ``last_run`` back to the file the config came from."""
        if self.path is None:
            raise ConfigError("Config has no file to save to")
        settings = QSettings(str(self.path), QSettings.Format.IniFormat)
        settings.setValue("last_run", self.last_run)
        settings.sync()
        if settings.status() != QSettings.Status.NoError:
            raise ConfigError(f"Unable to write config file: {str(self.path)!r}")

    def create_dirs(self) -> None:
        for user in self.usernames:
            (self.game_directory / user).mkdir(parents=True, exist_ok=True)
            (self.engine_directory / user).mkdir(parents=True, exist_ok=True)


def _int_value(settings: QSettings, key: str, default: int) -> int:
    raw = settings.value(key, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        _LOGGER.warning("Invalid %s in config: %r; using %d", key, raw, default)
        return default
