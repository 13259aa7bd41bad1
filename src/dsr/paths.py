"""Default datastore location.

The default store lives in the per-user application directory reported by
click, so it ends up under ~/.config/dsr on Linux and the platform
equivalent elsewhere.
"""

from pathlib import Path

import click

APP_NAME = "dsr"
DEFAULT_DB_NAME = "ds.db"

# URL form accepted for --ds, e.g. sqlite:///tmp/t.db
SQLITE_URL_PREFIX = "sqlite://"


def app_dir() -> Path:
    """Get the per-user application directory."""
    return Path(click.get_app_dir(APP_NAME))


def default_datastore_path() -> Path:
    """Get the default datastore path. The directory is created when the store is opened."""
    return app_dir() / DEFAULT_DB_NAME


def strip_sqlite_url(location: str) -> str:
    """Turn a sqlite:// URL into a plain path; other values pass through."""
    if location.startswith(SQLITE_URL_PREFIX):
        return location[len(SQLITE_URL_PREFIX):]
    return location
