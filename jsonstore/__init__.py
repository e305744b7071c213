from .extensions import JsonStores
from .storage import (
    ArgumentError,
    CorruptStoreError,
    InitializationError,
    JsonStore,
    JsonStoreError,
    JsonStoreOptions,
    NotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "CorruptStoreError",
    "InitializationError",
    "JsonStore",
    "JsonStoreError",
    "JsonStoreOptions",
    "JsonStores",
    "NotFoundError",
]
