"""Tests for datastore location resolution."""

import dataclasses
from pathlib import Path

import pytest

from dsr.config import DEFAULT_TABLE, Config, resolve_config
from dsr.paths import DEFAULT_DB_NAME, strip_sqlite_url


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_explicit_path_is_used(self, tmp_path: Path):
        config = resolve_config(str(tmp_path / "mine.db"))

        assert config.datastore == tmp_path / "mine.db"
        assert config.table == DEFAULT_TABLE

    def test_sqlite_url_prefix_is_stripped(self, tmp_path: Path):
        config = resolve_config(f"sqlite://{tmp_path / 'mine.db'}")

        assert config.datastore == tmp_path / "mine.db"

    def test_default_location_when_no_option(self, isolated_app_dir: Path):
        """Without --ds the store goes in the app directory, created only on open."""
        config = resolve_config(None)

        assert config.datastore == isolated_app_dir / DEFAULT_DB_NAME
        assert config.create_dirs is True
        assert not isolated_app_dir.exists(), "Resolving the location must not touch the filesystem"

    def test_explicit_path_does_not_create_dirs(self, tmp_path: Path):
        config = resolve_config(str(tmp_path / "mine.db"))

        assert config.create_dirs is False

    def test_empty_option_falls_back_to_default(self, isolated_app_dir: Path):
        config = resolve_config("")

        assert config.datastore == isolated_app_dir / DEFAULT_DB_NAME

    def test_config_is_immutable(self, tmp_path: Path):
        config = Config(datastore=tmp_path / "a.db")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.datastore = tmp_path / "b.db"


class TestStripSqliteUrl:
    """Tests for strip_sqlite_url."""

    def test_plain_path_unchanged(self):
        assert strip_sqlite_url("/tmp/t.db") == "/tmp/t.db"

    def test_absolute_url(self):
        assert strip_sqlite_url("sqlite:///tmp/t.db") == "/tmp/t.db"

    def test_relative_url(self):
        assert strip_sqlite_url("sqlite://t.db") == "t.db"
