# jsonstore/extensions.py
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from flask import Flask

from .storage.json_store import JsonStore
from .storage.options import JsonStoreOptions


class JsonStores:
    """Flask extension handing out one JsonStore per record type.

    Options come from ``app.config`` (``JSON_STORE_*`` keys) and relative
    store paths are resolved against ``app.root_path``. An instance serves one
    app at a time: calling ``init_app`` again rebinds it and drops its stores.
    Stores are cached per ``(record_type, key_of, collection)``, so pass the
    same key function object to get the same store back.
    """

    def __init__(self, app: Optional[Flask] = None):
        self.options: Optional[JsonStoreOptions] = None
        self.content_root: Optional[Path] = None
        self._stores: Dict[Tuple[type, Callable, Optional[str]], JsonStore] = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        self.options = JsonStoreOptions.from_mapping(app.config)
        self.content_root = Path(app.root_path)
        self._stores.clear()
        app.extensions["jsonstore"] = self

    def store(self, record_type: type, key_of: Callable, collection: Optional[str] = None) -> JsonStore:
        if self.options is None:
            raise RuntimeError("JsonStores.init_app() has not been called")
        cache_key = (record_type, key_of, collection)
        if cache_key not in self._stores:
            self._stores[cache_key] = JsonStore(
                record_type,
                key_of,
                options=self.options,
                content_root=self.content_root,
                collection=collection,
            )
        return self._stores[cache_key]
