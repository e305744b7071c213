import asyncio
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Dict, Generic, List, Optional, Sequence, TypeVar, Union

from .errors import ArgumentError, CorruptStoreError, InitializationError, NotFoundError
from .options import JsonStoreOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")

# One write lock per resolved file, shared by every store instance on that file.
_registry_lock = threading.Lock()
_path_locks: Dict[Path, threading.Lock] = {}


def _lock_for(path: Path) -> threading.Lock:
    with _registry_lock:
        return _path_locks.setdefault(path, threading.Lock())


class JsonStore(Generic[T, K]):
    """A collection of ``record_type`` records kept as one JSON array on disk.

    Records are identified by ``key_of(record)``. Every call re-reads the file;
    mutations rewrite it whole, under a lock shared by all stores on the same
    path. The ``a``-prefixed coroutines run the same code in a worker thread.
    """

    def __init__(
        self,
        record_type: type,
        key_of: Callable[[T], K],
        options: Optional[JsonStoreOptions] = None,
        content_root: Union[str, Path, None] = None,
        collection: Optional[str] = None,
    ):
        self.record_type = record_type
        self.key_of = key_of
        self.options = options or JsonStoreOptions()

        store_dir = Path(self.options.file_store_path)
        if not store_dir.is_absolute():
            store_dir = Path(content_root or Path.cwd()) / store_dir
        name = collection or record_type.__name__
        self._path = (store_dir / f"{name}.json").resolve()
        self._lock = _lock_for(self._path)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InitializationError(f"cannot create store directory {self._path.parent}: {exc}", self._path) from exc

        with self._lock:
            if self._path.exists():
                return
            try:
                self._save([])
            except OSError as exc:
                raise InitializationError(f"cannot create store file {self._path}: {exc}", self._path) from exc
            logger.debug("Seeded empty store %s", self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.record_type.__name__}, path={str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    def _key(self, item: T) -> K:
        if item is None:
            raise ArgumentError("item must not be None")
        try:
            return self.key_of(item)
        except (AttributeError, KeyError, TypeError) as exc:
            raise ArgumentError(f"cannot extract key from {item!r}: {exc}") from exc

    def _index_of(self, items: List[T], key: K) -> int:
        for i, existing in enumerate(items):
            try:
                existing_key = self.key_of(existing)
            except (AttributeError, KeyError, TypeError) as exc:
                raise CorruptStoreError(f"record #{i} in {self._path} has no key: {exc}", self._path) from exc
            if existing_key == key:
                return i
        return -1

    def _load(self) -> List[T]:
        with self._path.open("r", encoding="utf-8") as f:
            try:
                text = f.read()
            except UnicodeDecodeError as exc:
                raise CorruptStoreError(f"{self._path} is not UTF-8 text", self._path) from exc
        try:
            data = self.options.loads(text)
        except (KeyError, TypeError, ValueError, RecursionError) as exc:
            raise CorruptStoreError(f"{self._path} is not valid JSON: {exc}", self._path) from exc
        if not isinstance(data, list):
            raise CorruptStoreError(f"{self._path} does not hold a JSON array", self._path)
        try:
            return [self.options.from_plain(self.record_type, d) for d in data]
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            raise CorruptStoreError(
                f"{self._path} holds data that is not a {self.record_type.__name__}: {exc}", self._path
            ) from exc

    def _save(self, items: List[T]):
        """Replace the backing file with ``items``. Caller must hold ``self._lock``."""
        text = self.options.dumps(items)
        fd, tmp = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d record(s) to %s", len(items), self._path)

    # Synchronous API

    def list(self) -> List[T]:
        return self._load()

    def get(self, key: K) -> Optional[T]:
        items = self._load()
        i = self._index_of(items, key)
        return items[i] if i >= 0 else None

    def upsert(self, item: T) -> None:
        key = self._key(item)
        with self._lock:
            items = self._load()
            i = self._index_of(items, key)
            if i >= 0:
                items[i] = item
            else:
                items.append(item)
            self._save(items)

    def delete(self, item: T) -> None:
        key = self._key(item)
        with self._lock:
            items = self._load()
            i = self._index_of(items, key)
            if i < 0:
                raise NotFoundError("item does not exist")
            del items[i]
            self._save(items)

    def replace_all(self, items: Sequence[T]) -> None:
        """Overwrite the entire collection with ``items`` (keys must be unique)."""
        if not isinstance(items, (list, tuple)):
            raise ArgumentError("items must be a list or tuple")
        keys = [self._key(item) for item in items]
        try:
            unique = len(set(keys)) == len(keys)
        except TypeError:
            # unhashable keys
            unique = all(k not in keys[:i] for i, k in enumerate(keys))
        if not unique:
            raise ArgumentError("duplicate key in items")
        with self._lock:
            self._save(list(items))

    # Coroutine API

    async def alist(self) -> List[T]:
        return await asyncio.to_thread(self.list)

    async def aget(self, key: K) -> Optional[T]:
        return await asyncio.to_thread(self.get, key)

    async def aupsert(self, item: T) -> None:
        await asyncio.to_thread(self.upsert, item)

    async def adelete(self, item: T) -> None:
        await asyncio.to_thread(self.delete, item)

    async def areplace_all(self, items: Sequence[T]) -> None:
        await asyncio.to_thread(self.replace_all, items)
