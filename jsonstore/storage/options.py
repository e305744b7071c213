import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


@dataclass
class JsonStoreOptions:
    """Where stores live on disk and how records are (de)serialized.

    ``dump_record`` turns a record into a JSON-ready value and ``load_record``
    turns a parsed JSON value back into a record. When left unset, dataclass
    records go through ``dataclasses.asdict`` / ``record_type(**data)`` and
    anything else is stored as-is.
    """

    file_store_path: str = "data"
    indent: Optional[int] = 2
    ensure_ascii: bool = False
    sort_keys: bool = False
    skip_none: bool = False
    default: Optional[Callable[[Any], Any]] = None
    object_hook: Optional[Callable[[Dict[str, Any]], Any]] = None
    dump_record: Optional[Callable[[Any], Any]] = None
    load_record: Optional[Callable[[Any], Any]] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], prefix: str = "JSON_STORE_") -> "JsonStoreOptions":
        """Build options from a Flask-style config mapping (``JSON_STORE_PATH`` etc.)."""
        kwargs: Dict[str, Any] = {}
        if mapping.get(prefix + "PATH"):
            kwargs["file_store_path"] = str(mapping[prefix + "PATH"])
        if prefix + "INDENT" in mapping:
            indent = mapping[prefix + "INDENT"]
            kwargs["indent"] = None if indent in (None, "", "none", "None") else int(indent)
        for flag in ("ensure_ascii", "sort_keys", "skip_none"):
            key = prefix + flag.upper()
            if key in mapping:
                kwargs[flag] = _as_bool(mapping[key])
        return cls(**kwargs)

    # Per-record conversion

    def to_plain(self, record: Any) -> Any:
        if self.dump_record is not None:
            data = self.dump_record(record)
        elif dataclasses.is_dataclass(record) and not isinstance(record, type):
            data = dataclasses.asdict(record)
        else:
            data = record
        if self.skip_none and isinstance(data, dict):
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def from_plain(self, record_type: type, data: Any) -> Any:
        if self.load_record is not None:
            return self.load_record(data)
        if dataclasses.is_dataclass(record_type):
            if not isinstance(data, dict):
                raise TypeError(f"expected an object for {record_type.__name__}, got {type(data).__name__}")
            return record_type(**data)
        return data

    # Whole-collection encoding

    def dumps(self, records: List[Any]) -> str:
        return json.dumps(
            [self.to_plain(r) for r in records],
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
            sort_keys=self.sort_keys,
            default=self.default,
        )

    def loads(self, text: str) -> Any:
        return json.loads(text, object_hook=self.object_hook)
