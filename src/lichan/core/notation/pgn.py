"""PGN tag/movetext decoding and encoding for downloaded games."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime

from lichan.core.enums import Winner
from lichan.core.errors import MalformedInput
from lichan.core.notation.fen import STARTING_FEN
from lichan.core.notation.models import GameRecord

_LOGGER = logging.getLogger(__name__)

_MOVE_NUMBER_RE = re.compile(r"^\d+\.(?:\.\.)?$")
_MOVES_KEY = "moves"

_RESULT_TOKENS: dict[Winner, str] = {
    Winner.WHITE: "1-0",
    Winner.BLACK: "0-1",
    Winner.DRAW: "1/2-1/2",
    Winner.UNKNOWN: "*",
}
_WINNER_BY_TOKEN: dict[str, Winner] = {v: k for k, v in _RESULT_TOKENS.items()}


def pgn_result_token(winner: Winner) -> str:
    """Convert :class:`Winner` to a PGN result token."""
    return _RESULT_TOKENS[winner]


def winner_from_pgn(token: str) -> Winner:
    """Convert a PGN result token to :class:`Winner`."""
    return _WINNER_BY_TOKEN.get(token.strip(), Winner.UNKNOWN)


# ── Tokenizer ───────────────────────────────────────────────────────────────


def tokenize_pgn(pgn_text: str) -> list[str]:
    """Split PGN text into bracket, key, value and movetext tokens.

    Brackets are tokens of their own and a quote ends the current token
    without being part of it. Newlines never start a new token; inside
    movetext they only keep the moves on either side apart.
    Whitespace-only tokens are discarded, except quoted tag values, which
    are kept even when empty.
    """
    if "\t" in pgn_text:
        raise MalformedInput("PGN text must not contain any tabs")

    tokens: list[str] = []
    current: list[str] = []
    in_tag = False
    open_quote = False

    def flush(keep_empty: bool = False) -> None:
        text = "".join(current).strip()
        current.clear()
        if text or keep_empty:
            tokens.append(text)

    for ch in pgn_text:
        if ch in "[]":
            if ch == "]" and open_quote:
                raise MalformedInput("Malformed PGN: unmatched quotation mark")
            flush()
            tokens.append(ch)
            in_tag = ch == "["
            continue
        if ch == '"':
            if in_tag:
                # A closing quote ends the tag value.
                flush(keep_empty=open_quote)
                open_quote = not open_quote
            else:
                flush()
            continue
        if ch in "\r\n":
            # Wrapped movetext lines must not run two moves together.
            if current and not current[-1].isspace():
                current.append(" ")
            continue
        current.append(ch)

    if open_quote:
        raise MalformedInput("Malformed PGN: unmatched quotation mark")
    flush()
    return tokens


def _pair_tokens(tokens: list[str]) -> dict[str, str]:
    """Pair tokens as (key, value); a trailing key without value is movetext.

    The movetext guess only applies outside a tag: a key left dangling
    after ``[`` is a truncated tag and is dropped with a warning.
    """
    values: dict[str, str] = {}
    previous = "]"
    it = iter(tokens)
    for raw_key in it:
        if raw_key in ("[", "]"):
            previous = raw_key
            continue
        value = next(it, None)
        if value is None:
            if previous == "[":
                _LOGGER.warning("Truncated PGN tag: %s", raw_key)
            else:
                values[_MOVES_KEY] = raw_key
            break
        if value in ("[", "]"):
            _LOGGER.warning("Missing value for PGN key: %s", raw_key.lower())
            previous = value
            continue
        values[raw_key.lower()] = value
        previous = value
    return values


# ── Decoding ────────────────────────────────────────────────────────────────


def parse_pgn_game(pgn_text: str) -> GameRecord:
    """Decode a single stored PGN game into a :class:`GameRecord`.

    Fields whose value has an unexpected shape are logged and left at
    their defaults. Only structural problems raise :class:`MalformedInput`.
    """
    game = GameRecord()
    for key, val in _pair_tokens(tokenize_pgn(pgn_text)).items():
        if key == "event":
            words = val.split(" ")
            if len(words) == 3:
                game.rated = words[0].lower() == "rated"
                game.speed = words[1].lower()
            else:
                _LOGGER.warning("Unexpected PGN event: %r", val)
        elif key == "date":
            created_at = _parse_date(val)
            if created_at is not None:
                game.created_at = created_at
        elif key == "white":
            game.white.name = val.strip()
        elif key == "black":
            game.black.name = val.strip()
        elif key == "result":
            game.winner = winner_from_pgn(val)
        elif key == "gameid":
            game.game_id = val.strip()
        elif key == "opening":
            game.opening = val.strip()
        elif key == "whiteelo":
            rating = _parse_int(val, "rating")
            if rating is not None:
                game.white.rating = rating
        elif key == "blackelo":
            rating = _parse_int(val, "rating")
            if rating is not None:
                game.black.rating = rating
        elif key == "timecontrol":
            _parse_time_control(game, val)
        elif key == "fen":
            game.initial_fen = val.strip()
        elif key == _MOVES_KEY:
            game.moves = strip_move_numbers(val)
    return game


def strip_move_numbers(movetext: str) -> str:
    """Drop ``N.`` move numbers and result tokens from movetext."""
    sans = [
        token
        for token in movetext.split()
        if not _MOVE_NUMBER_RE.match(token) and token not in _WINNER_BY_TOKEN
    ]
    return " ".join(sans)


def _parse_int(value: str, what: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        _LOGGER.warning("Could not parse %s as int: %r", what, value)
        return None


def _parse_date(value: str) -> int | None:
    parts = value.strip().split(".")
    if len(parts) != 3:
        _LOGGER.warning("Unexpected PGN date: %r", value)
        return None
    try:
        year, month, day = (int(part) for part in parts)
        created = datetime(year, month, day, tzinfo=UTC)
    except ValueError:
        _LOGGER.warning("Unable to parse PGN date: %r", value)
        return None
    return int(created.timestamp() * 1000)


def _parse_time_control(game: GameRecord, value: str) -> None:
    parts = value.split("+")
    if len(parts) != 2:
        _LOGGER.warning("Unexpected time control: %r", value)
        return
    initial = _parse_int(parts[0], "time control")
    increment = _parse_int(parts[1], "time control")
    if initial is None or increment is None:
        return
    game.clock.initial = initial
    game.clock.increment = increment


# ── Encoding ────────────────────────────────────────────────────────────────


def pgn_date(created_at: int) -> str:
    """``Y.M.D`` (unpadded, UTC) for a millisecond timestamp."""
    created = datetime.fromtimestamp(created_at / 1000, tz=UTC)
    return f"{created.year}.{created.month}.{created.day}"


def pgn_movetext_from_sans(sans: list[str], result_token: str) -> str:
    """Build numbered movetext (``1. e4 e5 2. Nf3``) ending in the result."""
    parts: list[str] = []
    for ply, san in enumerate(sans):
        if ply % 2 == 0:
            parts.append(f"{(ply // 2) + 1}.")
        parts.append(san)
    parts.append(result_token)
    return " ".join(parts)


def _tag_value(value: object) -> str:
    # The tokenizer has no escape syntax, so quotes cannot appear in values.
    return str(value).replace('"', "'")


def build_pgn(game: GameRecord, site_url: str, movetext: str | None = None) -> str:
    """Encode *game* as a PGN document.

    *movetext* replaces the numbered rendering of ``game.moves`` when
    given, which is how annotated games are written.
    """
    result = pgn_result_token(game.winner)
    rated = "rated" if game.rated else "unrated"
    headers: dict[str, object] = {
        "Event": f"{rated} {game.speed} game",
        "Site": f"{site_url}/{game.game_id}",
        "Date": pgn_date(game.created_at),
        "Round": "-",
        "White": game.white.name,
        "Black": game.black.name,
        "Result": result,
        "GameId": game.game_id,
        "WhiteElo": game.white.rating,
        "BlackElo": game.black.rating,
        "Opening": game.opening,
        "TimeControl": f"{game.clock.initial}+{game.clock.increment}",
        "FEN": game.initial_fen or STARTING_FEN,
    }

    lines = [f'[{key} "{_tag_value(value)}"]' for key, value in headers.items()]
    lines.append("")
    if movetext is None:
        movetext = pgn_movetext_from_sans(game.sans, result)
    lines.append(movetext)
    lines.append("")
    return "\n".join(lines)


def game_file_name(game: GameRecord) -> str:
    """``<year>.<month>.<day>_<id>.pgn`` for a stored game."""
    return f"{pgn_date(game.created_at)}_{game.game_id}.pgn"
