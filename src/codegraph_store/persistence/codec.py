"""JSON encoding for persisted blobs and the shared read/write path."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, TypeVar

from codegraph_store.core.exceptions import DeserializationError
from codegraph_store.persistence.protocols import IKeyValueStore

log = logging.getLogger(__name__)

T = TypeVar("T")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads(text: str) -> Any:
    """Strict JSON decoding: ``NaN`` and ``Infinity`` raise ``ValueError``."""
    return json.loads(text, parse_constant=_reject_constant)


def dumps(value: Any) -> str:
    """Compact serialization, byte-for-byte what a browser ``JSON.stringify`` emits.

    Non-finite floats raise ``ValueError`` instead of producing invalid JSON.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def dumps_pretty(value: Any) -> str:
    """Two-space indented serialization for export."""
    return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)


class JsonSlot:
    """One JSON value living under one key of a key-value store.

    ``load`` surfaces malformed data as ``DeserializationError``; ``read``
    applies the package-wide policy of logging it and falling back to a
    default. Every service reads through ``read`` so recovery behaves the
    same everywhere.
    """

    def __init__(self, store: IKeyValueStore, key: str) -> None:
        self._store = store
        self.key = key

    def load(self) -> Optional[Any]:
        """Decode the stored value. None if the key is absent."""
        raw = self._store.get(self.key)
        if raw is None:
            return None
        try:
            return loads(raw)
        except ValueError as exc:
            raise DeserializationError(self.key, str(exc), raw) from exc

    def read(self, default: T, expect: Optional[type] = None) -> T:
        """Decode the stored value, returning ``default`` when absent or unusable.

        ``expect`` names the container type the caller needs (``dict`` or
        ``list``). A value of any other type is treated like malformed JSON.
        """
        try:
            value = self.load()
            if value is None:
                return default
            if expect is not None and not isinstance(value, expect):
                raise DeserializationError(
                    self.key,
                    f"expected a JSON {_json_type_name(expect)}, found {_json_type_name(type(value))}",
                )
        except DeserializationError as exc:
            log.warning("Storage read error, using default: %s", exc)
            return default
        return value

    def write(self, value: Any) -> None:
        self._store.set(self.key, dumps(value))

    def remove(self) -> None:
        self._store.remove(self.key)


def _json_type_name(tp: type) -> str:
    names = {dict: "object", list: "array", str: "string", bool: "boolean", type(None): "null"}
    if tp in names:
        return names[tp]
    if tp in (int, float):
        return "number"
    return tp.__name__
