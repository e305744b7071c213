from .errors import (
    ArgumentError,
    CorruptStoreError,
    InitializationError,
    JsonStoreError,
    NotFoundError,
)
from .json_store import JsonStore
from .options import JsonStoreOptions

__all__ = [
    "ArgumentError",
    "CorruptStoreError",
    "InitializationError",
    "JsonStore",
    "JsonStoreError",
    "JsonStoreOptions",
    "NotFoundError",
]
