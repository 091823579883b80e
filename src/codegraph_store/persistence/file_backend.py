"""File-based key-value store — one JSON file per key in a local directory."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from codegraph_store.core.exceptions import PersistenceError, StorageQuotaExceededError
from codegraph_store.persistence.memory_backend import entry_size

log = logging.getLogger(__name__)

_SUFFIX = ".json"
_TMP_PREFIX = ".tmp-"


def _encode_key(key: str) -> str:
    """Percent-encode ``key`` into a file stem that decodes back to it.

    A leading dot is encoded too, so only temp files are hidden and no key
    can name ``.`` or ``..``.
    """
    encoded = quote(key, safe="")
    if encoded.startswith("."):
        encoded = "%2E" + encoded[1:]
    return encoded


def _decode_stem(path: Path) -> Optional[str]:
    if path.name.startswith(_TMP_PREFIX):
        return None
    return unquote(path.name[: -len(_SUFFIX)])


class FileKeyValueStore:
    """Stores each value as a UTF-8 file under ``base_path``.

    Writes go to a temporary file that is renamed over the target, so a
    reader never sees a half-written blob.
    """

    def __init__(self, base_path: Path, quota_bytes: Optional[int] = None) -> None:
        self._base = base_path
        self._base.mkdir(parents=True, exist_ok=True)
        self._quota = quota_bytes or None

    def _key_path(self, key: str) -> Path:
        return self._base / f"{_encode_key(key)}{_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._key_path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._key_path(key)
        if self._quota is not None:
            requested = self._used_bytes(exclude=path) + entry_size(key, value)
            if requested > self._quota:
                raise StorageQuotaExceededError(key, requested, self._quota)

        fd, tmp_name = tempfile.mkstemp(dir=self._base, prefix=_TMP_PREFIX, suffix=_SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Could not write {key!r} to {path}: {exc}") from exc
        log.debug("Saved %s to %s", key, path)

    def remove(self, key: str) -> None:
        self._key_path(key).unlink(missing_ok=True)

    def clear(self) -> None:
        for path in self._base.glob(f"*{_SUFFIX}"):
            if _decode_stem(path) is not None:
                path.unlink()

    def list_keys(self, prefix: str = "") -> list[str]:
        keys = []
        for path in self._base.glob(f"*{_SUFFIX}"):
            key = _decode_stem(path)
            if key is not None and key.startswith(prefix):
                keys.append(key)
        return sorted(keys)

    def _used_bytes(self, exclude: Path) -> int:
        total = 0
        for path in self._base.glob(f"*{_SUFFIX}"):
            key = _decode_stem(path)
            if path == exclude or key is None:
                continue
            total += len(key.encode("utf-8")) + path.stat().st_size
        return total
