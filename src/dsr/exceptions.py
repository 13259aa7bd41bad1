"""Exception types raised by dsr."""

__all__ = (
    "DsrError",
    "KeyNotFoundError",
    "StoreError",
)


class DsrError(Exception):
    """Base class for errors reported to the user."""


class KeyNotFoundError(DsrError, KeyError):
    """
    Raised when a key is not present in the store.
    """

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key not found: {self.key}"


class StoreError(DsrError):
    """
    Raised when the backing database cannot be opened, created, read or
    written. The message carries the engine's own error text.
    """
