"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PyQt6.QtCore import QCoreApplication

from lichan.analysis import GameAnalyzer
from lichan.client import SITE_URL, DownloadError, GameDownloader
from lichan.config import Config, ConfigError
from lichan.core.errors import MalformedInput
from lichan.core.notation.pgn import build_pgn, parse_pgn_game
from lichan.engine import EngineError, IEngine, UciEngine
from lichan.storage import GameStore

_LOGGER = logging.getLogger(__name__)


def download_games(config: Config, store: GameStore, username: str) -> int:
    """Download new games for *username*; returns how many were stored."""
    downloader = GameDownloader(config.token)
    count = 0
    for game in downloader.iter_games(username, since=config.last_run):
        store.write_game(username, game, SITE_URL)
        config.last_run = max(config.last_run, game.created_at)
        count += 1
    _LOGGER.info("Downloaded %d game(s) for %s", count, username)
    return count


def analyze_games(config: Config, store: GameStore, username: str, engine: IEngine) -> int:
    """Annotate every stored game of *username* that has no analysis yet."""
    _LOGGER.info("Processing games for %s previously downloaded.", username)
    analyzer = GameAnalyzer(engine, config.limits)
    count = 0
    for game_path, output in store.pending_games(username):
        try:
            game = parse_pgn_game(game_path.read_text(encoding="utf-8"))
        except (OSError, MalformedInput) as exc:
            _LOGGER.error("Unable to read %s: %s", game_path, exc)
            continue

        report = analyzer.analyze_game(game)
        if not report.is_complete:
            _LOGGER.warning("Not writing partial analysis of %s", game_path.name)
            continue
        store.write_analysis(output, build_pgn(game, SITE_URL, movetext=report.movetext()))
        count += 1
    _LOGGER.info("Analyzed %d game(s) for %s", count, username)
    return count


def _usernames(config: Config, args: argparse.Namespace) -> list[str]:
    return list(args.usernames) or config.usernames


def cmd_download(config: Config, store: GameStore, args: argparse.Namespace) -> int:
    try:
        for user in _usernames(config, args):
            download_games(config, store, user)
    except DownloadError as exc:
        _LOGGER.error("%s", exc)
        return 1
    finally:
        config.save()
    return 0


def cmd_analyze(config: Config, store: GameStore, args: argparse.Namespace) -> int:
    try:
        with UciEngine(config.engine_path) as engine:
            for user in _usernames(config, args):
                analyze_games(config, store, user, engine)
    except EngineError as exc:
        _LOGGER.error("Engine failure: %s", exc)
        return 1
    return 0


def cmd_run(config: Config, store: GameStore, args: argparse.Namespace) -> int:
    status = cmd_download(config, store, args)
    return cmd_analyze(config, store, args) or status


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="lichan",
        description="Download lichess games and annotate them with a UCI engine.",
    )
    ap.add_argument("--config", type=Path, default=None, help="path to config.ini")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    for name, fn, help_text in (
        ("download", cmd_download, "Download new games"),
        ("analyze", cmd_analyze, "Annotate downloaded games"),
        ("run", cmd_run, "Download, then annotate"),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("usernames", nargs="*", help="override configured users")
        sp.set_defaults(fn=fn)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(args.config)
    except ConfigError as exc:
        _LOGGER.error("Error reading config: %s", exc)
        return 2
    config.create_dirs()

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("lichan")

    store = GameStore(config.game_directory, config.engine_directory)
    return int(args.fn(config, store, args))


if __name__ == "__main__":
    raise SystemExit(main())
