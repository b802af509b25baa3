"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for QProcess/QSettings tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def _quiet_logging(caplog: pytest.LogCaptureFixture) -> Iterator[None]:
    caplog.set_level(logging.WARNING, logger="lichan")
    yield


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A minimal config.ini pointing at a temporary game directory."""
    path = tmp_path / "config.ini"
    path.write_text(
        "[General]\n"
        "username=alice, bob\n"
        f"game_directory={tmp_path / 'games'}\n"
        "token=lip_secret\n"
        "last_run=1700000000000\n",
        encoding="utf-8",
    )
    return path
