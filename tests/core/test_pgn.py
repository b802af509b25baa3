"""Tests for the PGN tag/movetext codec."""

import logging

import pytest

from lichan.core.enums import Winner
from lichan.core.errors import MalformedInput
from lichan.core.notation import (
    STARTING_FEN,
    GameRecord,
    build_pgn,
    game_file_name,
    parse_pgn_game,
    pgn_movetext_from_sans,
    pgn_result_token,
    strip_move_numbers,
    tokenize_pgn,
    winner_from_pgn,
)

SITE = "https://lichess.org"
JAN_5_2024_MS = 1_704_412_800_000

SAMPLE_PGN = f"""[Event "rated blitz game"]
[Site "https://lichess.org/abcd1234"]
[Date "2024.1.5"]
[Round "-"]
[White "alice"]
[Black "bob"]
[Result "1-0"]
[GameId "abcd1234"]
[WhiteElo "1500"]
[BlackElo "1480"]
[Opening "King's Pawn Game"]
[TimeControl "300+3"]
[FEN "{STARTING_FEN}"]

1. e4 e5 2. Nf3 Nc6 3. Bb5 a6 1-0
"""


class TestPgnTokenizer:
    def test_tags_and_movetext(self) -> None:
        tokens = tokenize_pgn('[Event "rated blitz game"]\n1. e4 *')
        assert tokens == ["[", "Event", "rated blitz game", "]", "1. e4 *"]

    def test_wrapped_movetext_keeps_moves_apart(self) -> None:
        tokens = tokenize_pgn("1. e4 e5\n2. Nf3\r\nNc6 *\n")
        assert tokens == ["1. e4 e5 2. Nf3 Nc6 *"]

    def test_empty_quoted_value_kept(self) -> None:
        assert tokenize_pgn('[Opening ""]') == ["[", "Opening", "", "]"]

    def test_tab_rejected(self) -> None:
        with pytest.raises(MalformedInput, match="tabs"):
            tokenize_pgn('[Event\t"x"]')

    @pytest.mark.parametrize("text", ['[Event "rated]', '[Event "rated'])
    def test_unmatched_quote(self, text: str) -> None:
        with pytest.raises(MalformedInput):
            tokenize_pgn(text)


class TestPgnDecoding:
    def test_tags(self) -> None:
        game = parse_pgn_game(SAMPLE_PGN)
        assert game.rated is True
        assert game.speed == "blitz"
        assert game.created_at == JAN_5_2024_MS
        assert game.white.name == "alice"
        assert game.black.name == "bob"
        assert game.white.rating == 1500
        assert game.black.rating == 1480
        assert game.winner == Winner.WHITE
        assert game.game_id == "abcd1234"
        assert game.opening == "King's Pawn Game"
        assert (game.clock.initial, game.clock.increment) == (300, 3)
        assert game.initial_fen == STARTING_FEN

    def test_movetext_stripped_of_numbers_and_result(self) -> None:
        game = parse_pgn_game(SAMPLE_PGN)
        assert game.sans == ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6"]

    def test_malformed_fields_keep_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        text = '[Event "casual"]\n[WhiteElo "abc"]\n[Date "yesterday"]\n\n1. e4 *'
        with caplog.at_level(logging.WARNING):
            game = parse_pgn_game(text)
        assert game.white.rating == 0
        assert game.created_at == 0
        assert game.speed == ""
        assert game.sans == ["e4"]
        assert len(caplog.records) == 3

    def test_missing_tag_value_does_not_lose_movetext(self) -> None:
        game = parse_pgn_game('[Opening]\n[White "alice"]\n\n1. e4 e5 *')
        assert game.white.name == "alice"
        assert game.opening == ""
        assert game.sans == ["e4", "e5"]

    def test_empty_tag_value(self) -> None:
        game = parse_pgn_game('[Opening ""]\n[White "alice"]\n\n1. d4 *')
        assert game.white.name == "alice"
        assert game.sans == ["d4"]

    def test_truncated_tag_is_not_movetext(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            game = parse_pgn_game('[White "alice"]\n[Opening')
        assert game.moves == ""
        assert "Truncated" in caplog.text

    def test_unknown_tags_ignored(self) -> None:
        game = parse_pgn_game('[Annotator "x"]\n[Round "3"]\n\n1. e4 *')
        assert game.sans == ["e4"]


class TestPgnEncoding:
    def test_round_trip(self) -> None:
        game = parse_pgn_game(SAMPLE_PGN)
        again = parse_pgn_game(build_pgn(game, SITE))
        assert (again.rated, again.speed) == (game.rated, game.speed)
        assert again.created_at == game.created_at
        assert again.winner == game.winner
        assert len(again.sans) == len(game.sans)

    def test_header_layout(self) -> None:
        text = build_pgn(parse_pgn_game(SAMPLE_PGN), SITE)
        lines = text.splitlines()
        assert lines[0] == '[Event "rated blitz game"]'
        assert lines[1] == '[Site "https://lichess.org/abcd1234"]'
        assert lines[2] == '[Date "2024.1.5"]'
        assert lines[3] == '[Round "-"]'
        assert '[TimeControl "300+3"]' in lines
        assert lines[-2] == ""
        assert lines[-1] == "1. e4 e5 2. Nf3 Nc6 3. Bb5 a6 1-0"

    def test_default_fen_written(self) -> None:
        game = GameRecord(game_id="x1", moves="e4")
        assert f'[FEN "{STARTING_FEN}"]' in build_pgn(game, SITE)

    def test_quotes_in_values_replaced(self) -> None:
        game = GameRecord(game_id="x1", opening='The "Fried" Liver')
        again = parse_pgn_game(build_pgn(game, SITE))
        assert again.opening == "The 'Fried' Liver"

    def test_explicit_movetext(self) -> None:
        game = GameRecord(game_id="x1", moves="e4")
        text = build_pgn(game, SITE, movetext="1. e4 { 1... e5 } *")
        assert text.rstrip().endswith("1. e4 { 1... e5 } *")

    def test_file_name(self) -> None:
        game = GameRecord(game_id="abcd1234", created_at=JAN_5_2024_MS)
        assert game_file_name(game) == "2024.1.5_abcd1234.pgn"


class TestPgnHelpers:
    @pytest.mark.parametrize(
        ("token", "winner"),
        [
            ("1-0", Winner.WHITE),
            ("0-1", Winner.BLACK),
            ("1/2-1/2", Winner.DRAW),
            ("*", Winner.UNKNOWN),
        ],
    )
    def test_result_tokens(self, token: str, winner: Winner) -> None:
        assert winner_from_pgn(token) == winner
        assert pgn_result_token(winner) == token

    def test_unknown_result(self) -> None:
        assert winner_from_pgn("2-0") == Winner.UNKNOWN

    def test_strip_move_numbers(self) -> None:
        assert strip_move_numbers("1. e4 e5 2. Nf3 2... Nc6 1/2-1/2") == "e4 e5 Nf3 Nc6"

    def test_movetext_without_moves(self) -> None:
        assert pgn_movetext_from_sans([], "*") == "*"

    def test_movetext_numbering(self) -> None:
        assert pgn_movetext_from_sans(["e4", "e5", "Nf3"], "*") == "1. e4 e5 2. Nf3 *"
