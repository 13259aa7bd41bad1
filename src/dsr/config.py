"""Runtime configuration resolved once per invocation."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .paths import default_datastore_path, strip_sqlite_url

LOG = logging.getLogger(__name__)

DEFAULT_TABLE = "records"


@dataclass(frozen=True)
class Config:
    """Where the store lives and which table holds the records."""

    datastore: Path
    table: str = DEFAULT_TABLE
    # Only the default location gets its directory created on open
    create_dirs: bool = False


def resolve_config(ds: str | None = None) -> Config:
    """Build the configuration from the --ds option, else the default location.

    Args:
        ds: Value of --ds, either a path or a sqlite:// URL.

    Returns:
        The resolved configuration.
    """
    if ds:
        datastore = Path(strip_sqlite_url(ds)).expanduser()
        LOG.debug("Using datastore from --ds: %s", datastore)
    else:
        datastore = default_datastore_path()
        LOG.debug("Using default datastore: %s", datastore)
        return Config(datastore=datastore, create_dirs=True)
    return Config(datastore=datastore)
