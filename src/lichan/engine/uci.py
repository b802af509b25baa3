"""UCI engine process driven through QProcess.

The engine's stdout is drained as it arrives and turned into discrete
events (ready, best move, latest search info). Callers issue one command
at a time and block until the matching event shows up.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from PyQt6.QtCore import QObject, QProcess, pyqtSignal

from lichan.core.notation.fen import STARTING_FEN
from lichan.engine.search import SearchLimits, SearchResult, result_from_info

_LOGGER = logging.getLogger(__name__)

_IGNORED_HEADS = frozenset({"id", "option", "Stockfish"})


class EngineError(RuntimeError):
    """The engine failed to start, stopped answering or exited."""


class UciEngine(QObject):
    """Single-flight UCI conversation with an external engine."""

    ready = pyqtSignal()
    best_move_found = pyqtSignal(str)
    info_received = pyqtSignal(list)

    def __init__(
        self,
        program: str = "stockfish",
        arguments: Sequence[str] = (),
        *,
        timeout_ms: int = 120_000,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._program = program
        self._arguments = list(arguments)
        self._timeout_ms = timeout_ms

        self._process = QProcess(self)
        self._process.readyReadStandardOutput.connect(self._on_ready_read)

        self._buffer = ""
        self._awaiting: str | None = None
        self._ready_seen = False
        self._best_move: str | None = None
        self._latest_info: list[str] = []

    # -- Lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Launch the engine and complete the ``uci`` handshake."""
        self._process.start(self._program, self._arguments)
        if not self._process.waitForStarted(self._timeout_ms):
            raise EngineError(
                f"Unable to start engine {self._program!r}: "
                f"{self._process.errorString()}"
            )
        _LOGGER.debug("Engine %s started", self._program)
        self._request_ready("uci")

    def quit(self) -> None:
        """Ask the engine to exit and reap the process."""
        if self._process.state() == QProcess.ProcessState.NotRunning:
            return
        self._write("quit")
        if not self._process.waitForFinished(5_000):
            self._process.kill()
            self._process.waitForFinished(1_000)

    def __enter__(self) -> UciEngine:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.quit()

    # -- Commands -----------------------------------------------------------

    def is_ready(self) -> None:
        self._request_ready("isready")

    def set_position(self, start_fen: str, moves: Sequence[str]) -> None:
        """Send ``position`` for *start_fen* followed by *moves*."""
        if start_fen.strip() == STARTING_FEN or not start_fen.strip():
            command = "position startpos"
        else:
            command = f"position fen {start_fen.strip()}"
        if moves:
            command += " moves " + " ".join(moves)
        self.is_ready()
        self._write(command)
        self.is_ready()

    def search(self, limits: SearchLimits) -> SearchResult:
        """Run ``go`` and wait for ``bestmove``."""
        self._begin("bestmove")
        self._best_move = None
        self._latest_info = []
        self._write(f"go depth {limits.depth} movetime {limits.movetime_ms}")
        self._wait_for(lambda: self._best_move is not None)
        assert self._best_move is not None
        return result_from_info(self._best_move, self._latest_info)

    @property
    def latest_info(self) -> list[str]:
        return list(self._latest_info)

    # -- Internals ----------------------------------------------------------

    def _begin(self, event: str) -> None:
        if self._awaiting is not None:
            raise EngineError(f"Engine is still waiting for {self._awaiting!r}")
        self._awaiting = event

    def _request_ready(self, command: str) -> None:
        self._begin("ready")
        self._ready_seen = False
        self._write(command)
        self._wait_for(lambda: self._ready_seen)

    def _write(self, command: str) -> None:
        _LOGGER.debug("engine << %s", command)
        self._process.write((command + "\n").encode("ascii"))

    def _wait_for(self, done: Callable[[], bool]) -> None:
        deadline = time.monotonic() + self._timeout_ms / 1000
        try:
            while not done():
                if self._process.state() == QProcess.ProcessState.NotRunning:
                    self._on_ready_read()
                    if done():
                        break
                    raise EngineError(f"Engine exited while waiting for {self._awaiting}")
                remaining = int((deadline - time.monotonic()) * 1000)
                if remaining <= 0:
                    raise EngineError(f"Timed out waiting for {self._awaiting}")
                self._process.waitForReadyRead(remaining)
        finally:
            self._awaiting = None

    def _on_ready_read(self) -> None:
        data = bytes(self._process.readAllStandardOutput())
        self._buffer += data.decode("utf-8", errors="replace")
        *lines, self._buffer = self._buffer.split("\n")
        for line in lines:
            self._handle_line(line.strip())

    def _handle_line(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        _LOGGER.debug("engine >> %s", line)

        head = tokens[0]
        if head in ("uciok", "readyok"):
            self._ready_seen = True
            self.ready.emit()
        elif head == "bestmove":
            best = tokens[1] if len(tokens) > 1 else "(none)"
            self._best_move = best
            self.best_move_found.emit(best)
        elif head == "info":
            if "currmovenumber" in tokens:
                return
            self._latest_info = tokens
            self.info_received.emit(tokens)
        elif head not in _IGNORED_HEADS:
            _LOGGER.info("Unexpected engine output: %s", line)
