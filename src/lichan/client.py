"""Download a user's games from the lichess export API."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any
from urllib.error import URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from lichan.core.enums import Winner
from lichan.core.notation.models import GameRecord

_LOGGER = logging.getLogger(__name__)

API_URL = "https://lichess.org"
SITE_URL = "https://lichess.org"

_DRAW_STATUSES = frozenset({"draw", "stalemate"})


class DownloadError(RuntimeError):
    """The game export request failed."""


def record_from_api(data: dict[str, Any]) -> GameRecord:
    """Map one exported game object onto a :class:`GameRecord`."""
    players = data.get("players") or {}
    white = players.get("white") or {}
    black = players.get("black") or {}
    clock = data.get("clock") or {}
    opening = data.get("opening") or {}

    game = GameRecord(
        game_id=str(data.get("id", "")),
        rated=bool(data.get("rated", False)),
        speed=str(data.get("speed", "")),
        created_at=int(data.get("createdAt", 0)),
        opening=str(opening.get("name", "")),
        initial_fen=str(data.get("initialFen", "")),
        moves=str(data.get("moves", "")),
    )
    game.white.name = str((white.get("user") or {}).get("name", ""))
    game.white.rating = int(white.get("rating", 0))
    game.black.name = str((black.get("user") or {}).get("name", ""))
    game.black.rating = int(black.get("rating", 0))
    game.clock.initial = int(clock.get("initial", 0))
    game.clock.increment = int(clock.get("increment", 0))

    winner = data.get("winner", "")
    if winner in (Winner.WHITE, Winner.BLACK):
        game.winner = Winner(winner)
    elif data.get("status") in _DRAW_STATUSES:
        game.winner = Winner.DRAW
    return game


class GameDownloader:
    """Streams a user's games, oldest first, as NDJSON."""

    __slots__ = ("_token", "_api_url", "_timeout")

    def __init__(self, token: str = "", api_url: str = API_URL, timeout: float = 60.0) -> None:
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def games_url(self, username: str, since: int = 0) -> str:
        params: dict[str, object] = {"opening": "true", "sort": "dateAsc"}
        if since > 0:
            params["since"] = since
        return f"{self._api_url}/api/games/user/{quote(username)}?{urlencode(params)}"

    def iter_games(self, username: str, since: int = 0) -> Iterator[GameRecord]:
        """Yield games created at or after *since* (ms since the epoch).

        Lines that are not valid game objects are logged and skipped.
        """
        url = self.games_url(username, since)
        headers = {"Accept": "application/x-ndjson"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        request = Request(url, headers=headers, method="GET")

        _LOGGER.info("Downloading games for %s", username)
        try:
            with urlopen(request, timeout=self._timeout) as response:
                for raw in response:
                    line = raw.decode("utf-8").strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                        if not isinstance(data, dict):
                            raise ValueError(f"expected an object, got {type(data).__name__}")
                        game = record_from_api(data)
                    except (ValueError, TypeError) as exc:
                        _LOGGER.warning("Skipping malformed game line: %s", exc)
                        continue
                    yield game
        except URLError as exc:
            raise DownloadError(f"Unable to download games for {username!r}: {exc}") from exc
        except OSError as exc:
            raise DownloadError(f"Connection error for {username!r}: {exc}") from exc
