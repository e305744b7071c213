from pathlib import Path
from typing import Optional


class JsonStoreError(Exception):
    """Base class for every error raised by a JsonStore."""


class ArgumentError(JsonStoreError, ValueError):
    """A None or otherwise unusable item/key was passed to the store."""


class NotFoundError(JsonStoreError, LookupError):
    """The record targeted by a delete is not in the collection."""


class CorruptStoreError(JsonStoreError):
    """The backing file does not hold a JSON array of loadable records."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class InitializationError(JsonStoreError):
    """The store directory or its seed file could not be created."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
