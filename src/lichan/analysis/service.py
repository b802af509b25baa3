"""Game analyzer: replays a stored game and asks the engine about every ply."""

from __future__ import annotations

import logging
from collections.abc import Callable

from lichan.analysis.models import GameAnalysisReport, PlyAnalysis
from lichan.analysis.pv import number_variation, variation_to_san
from lichan.core.enums import Color
from lichan.core.errors import NotationError
from lichan.core.notation.fen import STARTING_FEN, board_from_fen
from lichan.core.notation.models import GameRecord
from lichan.core.rules import apply_move
from lichan.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class GameAnalyzer:
    """Annotates each played move with the engine's continuation."""

    __slots__ = ("_engine", "_limits")

    def __init__(self, engine: IEngine, limits: SearchLimits | None = None) -> None:
        self._engine = engine
        self._limits = limits or SearchLimits()

    def analyze_game(
        self,
        game: GameRecord,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> GameAnalysisReport:
        """Replay *game* and search the position after every move.

        A move that cannot be parsed or played ends the replay; the
        report then carries the plies analysed so far and the error.
        """
        report = GameAnalysisReport(game=game)
        start_fen = game.initial_fen or STARTING_FEN
        try:
            board = board_from_fen(start_fen)
        except NotationError as exc:
            _LOGGER.error("%s | Unable to load starting position: %s", game.game_id, exc)
            report.error = str(exc)
            return report

        sans = game.sans
        played: list[str] = []
        move_number = 1
        for idx, san in enumerate(sans):
            mover = board.turn
            try:
                applied = apply_move(board, san)
            except NotationError as exc:
                _LOGGER.error("%s | Unable to parse move %s: %s", game.game_id, san, exc)
                report.error = f"{san}: {exc}"
                break

            board = applied.board
            played.append(applied.uci)
            self._engine.set_position(start_fen, played)
            result = self._engine.search(self._limits)

            next_number = move_number + 1 if mover == Color.BLACK else move_number
            continuation = number_variation(
                variation_to_san(board, result.pv), next_number, board.turn
            )
            report.plies.append(
                PlyAnalysis(
                    move_number=move_number,
                    color=mover,
                    san=san,
                    uci=applied.uci,
                    best_move=result.best_move if result.best_move != "(none)" else None,
                    continuation=tuple(continuation),
                    score_cp=result.score_cp,
                    mate=result.mate,
                )
            )
            move_number = next_number
            if on_progress is not None:
                on_progress(idx + 1, len(sans))

        return report
