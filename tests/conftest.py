"""Shared fixtures for dsr tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from dsr import paths
from dsr.store import open_store


@pytest.fixture(autouse=True)
def isolated_app_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default datastore location at a temporary directory."""
    app_dir = tmp_path / "app"
    monkeypatch.setattr(paths, "app_dir", lambda: app_dir)
    return app_dir


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of a datastore file that does not exist yet."""
    return tmp_path / "t.db"


@pytest.fixture
def store(db_path: Path):
    """An open store on a fresh database file."""
    with open_store(db_path) as s:
        yield s


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
