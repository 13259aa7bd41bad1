"""
SQLite-backed record store.

This module defines `RecordStore`, a thin wrapper around one SQLite connection
holding a single `(key TEXT PRIMARY KEY, value TEXT)` table. Every operation
maps to exactly one SQL statement, so SQLite's per-statement transaction is the
only atomicity guarantee. Listings are generators over a live cursor.
"""

import logging
import re
import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Iterator, NamedTuple, Type

from .config import DEFAULT_TABLE, Config
from .exceptions import KeyNotFoundError, StoreError

LOG = logging.getLogger(__name__)

# The table name is interpolated into SQL, so only plain identifiers are allowed
_TABLE_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class Record(NamedTuple):
    """A key and its value."""

    key: str
    value: str


def _connect(path: Path, read_only: bool, create: bool) -> sqlite3.Connection:
    if read_only:
        mode = "ro"
    elif create:
        mode = "rwc"
    else:
        mode = "rw"
    uri = f"{path.resolve().as_uri()}?mode={mode}"
    LOG.debug("Connecting to %s", uri)
    return sqlite3.connect(uri, uri=True)


class RecordStore:
    """
    Key-value access to one table of a SQLite database.

    The store owns its connection: use it as a context manager, or call
    `close()` when done. Writes are committed immediately.

    Attributes:
        path: Location of the database file.
        table: Name of the table holding the records.
    """

    def __init__(self, conn: sqlite3.Connection, path: Path, table: str = DEFAULT_TABLE):
        if not _TABLE_NAME_RE.fullmatch(table):
            raise StoreError(f"invalid table name: {table!r}")
        self.conn = conn
        self.path = path
        self.table = table

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(
        self,
        exc_type: Type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ):
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            return self.conn.execute(sql, params)
        except sqlite3.Error as err:
            raise StoreError(str(err)) from err
        except UnicodeEncodeError as err:
            raise StoreError(f"cannot store text that is not valid UTF-8: {err}") from err

    def _fetchone(self, sql: str, params: tuple = ()) -> tuple | None:
        cursor = self._execute(sql, params)
        try:
            return cursor.fetchone()
        except sqlite3.Error as err:
            raise StoreError(str(err)) from err
        finally:
            cursor.close()

    def _commit(self) -> None:
        try:
            self.conn.commit()
        except sqlite3.Error as err:
            raise StoreError(str(err)) from err

    def has_table(self) -> bool:
        """Check whether the records table exists in the database."""
        row = self._fetchone(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
            (self.table,),
        )
        return row is not None

    def create_table(self) -> None:
        """Create the records table."""
        LOG.debug("Creating table %s in %s", self.table, self.path)
        self._execute(f"CREATE TABLE IF NOT EXISTS {self.table} (key TEXT PRIMARY KEY, value TEXT)")
        self._commit()

    def set(self, key: str, value: str) -> None:
        """Insert a record, replacing any existing value for the key."""
        LOG.debug("set %r", key)
        self._execute(f"INSERT OR REPLACE INTO {self.table} (key, value) VALUES (?, ?)", (key, value))
        self._commit()

    def get(self, key: str) -> str:
        """
        Get the value stored under a key.

        Raises:
            KeyNotFoundError: If the key is not in the store.
        """
        LOG.debug("get %r", key)
        row = self._fetchone(f"SELECT value FROM {self.table} WHERE key = ?", (key,))
        if row is None:
            raise KeyNotFoundError(key)
        return row[0]

    def contains(self, key: str) -> bool:
        """Check whether a key is in the store."""
        LOG.debug("contains %r", key)
        row = self._fetchone(f"SELECT 1 FROM {self.table} WHERE key = ?", (key,))
        return row is not None

    def delete(self, key: str) -> None:
        """
        Remove the record for a key.

        Raises:
            KeyNotFoundError: If the key is not in the store.
        """
        LOG.debug("delete %r", key)
        cursor = self._execute(f"DELETE FROM {self.table} WHERE key = ?", (key,))
        self._commit()
        if cursor.rowcount == 0:
            raise KeyNotFoundError(key)

    def _iterate(self, sql: str) -> Iterator[tuple]:
        cursor = self._execute(sql)
        try:
            yield from cursor
        except sqlite3.Error as err:
            raise StoreError(str(err)) from err
        finally:
            cursor.close()

    def keys(self) -> Iterator[str]:
        """Iterate over all keys in storage order."""
        for (key,) in self._iterate(f"SELECT key FROM {self.table}"):
            yield key

    def values(self) -> Iterator[str]:
        """Iterate over all values in storage order."""
        for (value,) in self._iterate(f"SELECT value FROM {self.table}"):
            yield value

    def records(self) -> Iterator[Record]:
        """Iterate over all records in storage order."""
        for key, value in self._iterate(f"SELECT key, value FROM {self.table}"):
            yield Record(key, value)

    def count(self) -> int:
        """Number of records in the store."""
        return self._fetchone(f"SELECT COUNT(*) FROM {self.table}")[0]


def open_store(
    path: Path | str,
    table: str = DEFAULT_TABLE,
    read_only: bool = False,
    create: bool = True,
) -> RecordStore:
    """
    Open the store at `path`, creating the records table if it is missing.

    Args:
        path: Database file location.
        table: Name of the records table.
        read_only: Open without write access. The table must already exist.
        create: Create the database file if it does not exist.

    Returns:
        An open `RecordStore`.

    Raises:
        StoreError: If the database cannot be opened or the table cannot be
            found or created.
    """
    path = Path(path)
    try:
        conn = _connect(path, read_only=read_only, create=create)
    except sqlite3.Error as err:
        raise StoreError(f"unable to open datastore {path}: {err}") from err

    try:
        store = RecordStore(conn, path, table)
        if not store.has_table():
            if read_only:
                raise StoreError(f"no table {table!r} in read-only datastore {path}")
            store.create_table()
    except StoreError:
        conn.close()
        raise
    return store


def open_configured_store(config: Config, **kwargs) -> RecordStore:
    """Open the store described by a `Config`, creating its directory when the config asks for it."""
    if config.create_dirs:
        try:
            config.datastore.parent.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise StoreError(f"unable to create datastore directory {config.datastore.parent}: {err}") from err
    return open_store(config.datastore, table=config.table, **kwargs)
