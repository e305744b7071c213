"""
Shared test fixtures and configuration for jsonstore tests.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytest
from flask import Flask

from jsonstore import JsonStore, JsonStoreOptions, JsonStores
from jsonstore.config import TestConfig


@dataclass
class Widget:
    id: int
    name: str
    color: Optional[str] = None


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for JsonStore tests."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def store_options(temp_data_dir: Path) -> JsonStoreOptions:
    """Options pointing at the temporary data directory."""
    return JsonStoreOptions(file_store_path=str(temp_data_dir))


@pytest.fixture
def widget_store(store_options: JsonStoreOptions) -> JsonStore:
    """Create a Widget store keyed by id."""
    return JsonStore(Widget, lambda w: w.id, options=store_options)


@pytest.fixture
def dict_store(store_options: JsonStoreOptions) -> JsonStore:
    """Create a store of plain dicts keyed by their "id" entry."""
    return JsonStore(dict, lambda d: d["id"], options=store_options, collection="products")


@pytest.fixture
def app(tmp_path: Path) -> Flask:
    """Create a Flask app whose root path is a temporary directory."""
    app = Flask(__name__, root_path=str(tmp_path))
    app.config.from_object(TestConfig)
    yield app


@pytest.fixture
def stores(app: Flask) -> JsonStores:
    """Create a JsonStores extension bound to the test app."""
    return JsonStores(app)


@pytest.fixture
def widget_cls() -> type:
    """The Widget record type used by widget_store."""
    return Widget
