"""Tests for engine search models and info parsing."""

from lichan.engine.search import SearchLimits, is_uci_move, pv_moves, result_from_info


class TestPvMoves:
    def test_moves_after_pv_keyword(self) -> None:
        info = "info depth 20 seldepth 28 score cp 35 nodes 1000 pv e2e4 e7e5 g1f3".split()
        assert pv_moves(info) == ("e2e4", "e7e5", "g1f3")

    def test_stops_at_first_non_move(self) -> None:
        info = "info depth 5 pv e2e4 e7e5 string done".split()
        assert pv_moves(info) == ("e2e4", "e7e5")

    def test_promotion_moves(self) -> None:
        assert pv_moves("info pv a7a8q b7b8".split()) == ("a7a8q", "b7b8")

    def test_without_keyword_starts_at_first_move(self) -> None:
        assert pv_moves("info depth 3 d2d4 d7d5".split()) == ("d2d4", "d7d5")

    def test_no_moves(self) -> None:
        assert pv_moves("info string hello".split()) == ()
        assert pv_moves([]) == ()


class TestResultFromInfo:
    def test_centipawn_score(self) -> None:
        info = "info depth 18 score cp -42 nodes 5 pv d7d5 c2c4".split()
        result = result_from_info("d7d5", info)
        assert result.best_move == "d7d5"
        assert result.depth == 18
        assert result.score_cp == -42
        assert result.mate is None
        assert result.pv == ("d7d5", "c2c4")

    def test_mate_score(self) -> None:
        result = result_from_info("h5f7", "info depth 3 score mate 1 pv h5f7".split())
        assert result.mate == 1
        assert result.score_cp is None

    def test_empty_info(self) -> None:
        result = result_from_info("(none)", [])
        assert result.pv == ()
        assert result.depth == 0


def test_uci_move_shape() -> None:
    assert is_uci_move("e2e4")
    assert is_uci_move("e7e8n")
    assert not is_uci_move("e2e9")
    assert not is_uci_move("cp")


def test_default_limits() -> None:
    limits = SearchLimits()
    assert (limits.depth, limits.movetime_ms) == (245, 60_000)
