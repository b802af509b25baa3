"""Tests for move resolution and application."""

import pytest

from lichan.core.board import Board
from lichan.core.enums import Color, PieceType
from lichan.core.errors import IllegalMove, InvalidCapture, InvalidPromotion, NotationError
from lichan.core.notation import board_from_fen
from lichan.core.piece import Piece
from lichan.core.rules import apply_move


def _play(board: Board, *sans: str) -> tuple[Board, list[str]]:
    ucis: list[str] = []
    for san in sans:
        played = apply_move(board, san)
        ucis.append(played.uci)
        board = played.board
    return board, ucis


@pytest.fixture
def knight_board() -> Board:
    board = Board(Color.BLACK)
    for color, pt, sq in (
        (Color.BLACK, PieceType.KING, "e8"),
        (Color.BLACK, PieceType.KNIGHT, "g8"),
        (Color.BLACK, PieceType.KNIGHT, "c6"),
        (Color.WHITE, PieceType.BISHOP, "b5"),
        (Color.WHITE, PieceType.KING, "e1"),
    ):
        board[sq] = Piece(color, pt, sq)
    return board


class TestApplyMove:
    def test_knight_resolved_in_board_order(self, knight_board: Board) -> None:
        played = apply_move(knight_board, "Ne7")
        assert played.uci == "g8e7"
        assert played.from_sq == "g8"
        assert played.to_sq == "e7"

        after = played.board
        assert after["g8"] is None
        assert after["e7"] == Piece(Color.BLACK, PieceType.KNIGHT, "e7")
        assert after.turn == Color.WHITE
        for sq in ("e8", "c6", "b5", "e1"):
            assert after[sq] == knight_board[sq]
        assert len(after) == len(knight_board)

    def test_source_board_untouched(self, knight_board: Board) -> None:
        before = knight_board.copy()
        apply_move(knight_board, "Ne7")
        assert knight_board == before

    def test_successor_does_not_alias_source(self, knight_board: Board) -> None:
        before = knight_board.copy()
        after = apply_move(knight_board, "Ne7").board
        del after["e8"]
        after["a1"] = Piece(Color.WHITE, PieceType.QUEEN, "a1")
        after.turn = Color.BLACK
        assert knight_board == before

    def test_opening_sequence(self) -> None:
        board, ucis = _play(Board.initial(), "e4", "e5", "Nf3", "Nc6", "Bb5", "a6")
        assert ucis == ["e2e4", "e7e5", "g1f3", "b8c6", "f1b5", "a7a6"]
        assert board.turn == Color.WHITE
        assert len(board) == 32

    def test_capture_removes_victim(self) -> None:
        board, ucis = _play(Board.initial(), "e4", "d5", "exd5")
        assert ucis[-1] == "e4d5"
        assert board["d5"] == Piece(Color.WHITE, PieceType.PAWN, "d5")
        assert len(board) == 31

    def test_check_flags_do_not_affect_play(self) -> None:
        _, ucis = _play(Board.initial(), "e4", "e5", "Qh5", "Nc6", "Bc4", "Nf6", "Qxf7#")
        assert ucis[-1] == "h5f7"


class TestDisambiguation:
    def test_file_discriminator(self) -> None:
        board, _ = _play(Board.initial(), "d4", "d5", "Nf3", "Nf6")
        assert apply_move(board, "Nbd2").uci == "b1d2"
        assert apply_move(board, "Nfd2").uci == "f3d2"

    def test_rank_discriminator(self) -> None:
        board = board_from_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
        assert apply_move(board, "R1a3").uci == "a1a3"
        assert apply_move(board, "R5a3").uci == "a5a3"
        assert apply_move(board, "Ra3").uci == "a5a3"

    def test_full_square_discriminator(self) -> None:
        board = board_from_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
        assert apply_move(board, "Ra1a3").uci == "a1a3"

    def test_full_square_must_hold_mover_piece(self) -> None:
        board = board_from_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
        with pytest.raises(IllegalMove):
            apply_move(board, "Rb1a3")


class TestIllegalMoves:
    def test_unreachable_target(self) -> None:
        with pytest.raises(IllegalMove, match="h5"):
            apply_move(Board.initial(), "Qh5")

    def test_own_piece_on_target(self) -> None:
        with pytest.raises(IllegalMove):
            apply_move(Board.initial(), "Nb1d2")

    def test_all_rule_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            apply_move(Board.initial(), "Ke2")
        with pytest.raises(NotationError):
            apply_move(Board.initial(), "e5")


class TestCaptures:
    def test_pawn_capture_onto_empty_square_off_fifth_rank(self) -> None:
        with pytest.raises(InvalidCapture):
            apply_move(Board.initial(), "e2xd3")

    def test_pawn_capture_by_file_has_no_reaching_pawn(self) -> None:
        with pytest.raises(IllegalMove):
            apply_move(Board.initial(), "exd3")

    def test_piece_capture_onto_empty_square(self) -> None:
        with pytest.raises(InvalidCapture):
            apply_move(Board.initial(), "Nxf3")

    def test_en_passant_removes_passed_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        played = apply_move(board, "exd6")
        assert played.uci == "e5d6"
        assert played.board["d5"] is None
        assert played.board["d6"] == Piece(Color.WHITE, PieceType.PAWN, "d6")

    def test_black_en_passant(self) -> None:
        board = board_from_fen("4k3/8/8/8/4pP2/8/8/4K3 b - - 0 1")
        played = apply_move(board, "exf3")
        assert played.uci == "e4f3"
        assert played.board["f4"] is None

    def test_en_passant_needs_enemy_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/3nP3/8/8/8/4K3 w - - 0 1")
        with pytest.raises(NotationError):
            apply_move(board, "e5xd6")


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R {side} - - 0 1"

    def test_white_short(self) -> None:
        played = apply_move(board_from_fen(self.FEN.format(side="w")), "O-O")
        assert played.uci == "e1g1"
        assert played.board["g1"] == Piece(Color.WHITE, PieceType.KING, "g1")
        assert played.board["f1"] == Piece(Color.WHITE, PieceType.ROOK, "f1")
        assert played.board["h1"] is None
        assert played.board["e1"] is None

    def test_black_long(self) -> None:
        played = apply_move(board_from_fen(self.FEN.format(side="b")), "O-O-O")
        assert played.uci == "e8c8"
        assert played.board["c8"] == Piece(Color.BLACK, PieceType.KING, "c8")
        assert played.board["d8"] == Piece(Color.BLACK, PieceType.ROOK, "d8")
        assert played.board["a8"] is None

    def test_castle_through_piece(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/R3KB1R w - - 0 1")
        with pytest.raises(IllegalMove):
            apply_move(board, "O-O")


class TestPromotion:
    def test_promote_to_queen(self) -> None:
        played = apply_move(board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1"), "a8=Q")
        assert played.uci == "a7a8q"
        assert played.board["a8"] == Piece(Color.WHITE, PieceType.QUEEN, "a8")

    def test_capture_promotion_to_knight(self) -> None:
        played = apply_move(board_from_fen("1r2k3/P7/8/8/8/8/8/4K3 w - - 0 1"), "axb8=N")
        assert played.uci == "a7b8n"
        assert played.board["b8"] == Piece(Color.WHITE, PieceType.KNIGHT, "b8")
        assert len(played.board) == 3

    def test_missing_piece_letter(self) -> None:
        with pytest.raises(InvalidPromotion):
            apply_move(board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1"), "a8=")
