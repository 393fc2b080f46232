"""KeyValueFile: a whole-file key-value store, and its factory."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Any, Mapping

from .codecs import get_codec
from .errors import DecodeError, NotFound
from .fs.base import Filesystem
from .fs.local import Local
from .locks import Locks

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_path(path: str | Path, extension: str) -> Path:
    """Append ``extension`` to ``path`` unless it already ends with it."""
    path = Path(path)
    if not path.name:
        raise ValueError("path must name a file")
    if path.suffix == extension:
        return path
    return path.with_name(path.name + extension)


class KeyValueFile:
    """Key-value store persisted as one serialized mapping in one file.

    Every operation re-reads or rewrites the whole file; nothing is
    cached between calls. Keys are normalized with ``str()`` so
    ``store[1]`` and ``store["1"]`` are the same entry.

    Read operations come in two flavors:

    - ``read()``, ``load()``, ``get()``: return ``{}`` / ``default``
      when the file or key is missing.
    - ``read_strict()``, ``load_strict()``, ``store[key]``, ``keys()``:
      raise ``NotFound`` instead.

    Args:
        path: File location. The format's canonical extension is
            appended unless the path already ends with it.
        format: Registered format name (``"json"`` or ``"msgpack"``).
        extension: Override the canonical extension. ``""`` keeps the
            path exactly as given.
        filesystem: Byte storage backend (default ``Local()``).
        locks: Serialize writes across processes (see ``Locks``).
            Caller-supplied locks are left open by ``close()``.
    """

    def __init__(
        self,
        path: str | Path,
        format: str = "json",
        *,
        extension: str | None = None,
        filesystem: Filesystem | None = None,
        locks: Locks | None = None,
    ) -> None:
        self._format = str(format)
        self._codec = get_codec(self._format)
        if extension is None:
            extension = self._codec.extension
        self._path = resolve_path(path, extension)
        self._fs = filesystem if filesystem is not None else Local()
        self._locks = locks
        self._owns_locks = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r}, {self._format!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def format(self) -> str:
        return self._format

    def close(self) -> None:
        """Release the lock database if this store created it."""
        if self._locks is not None and self._owns_locks:
            self._locks.close()

    def __enter__(self) -> KeyValueFile:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- Internals --

    def _decode(self) -> dict[str, Any]:
        raw = self._fs.read_all(self._path)
        try:
            return self._codec.decode(raw)
        except DecodeError as e:
            raise DecodeError(str(e), path=self._path) from e

    def _read(self, strict: bool) -> dict[str, Any]:
        if not self._fs.exists(self._path):
            if strict:
                raise NotFound(self._path)
            return {}
        return self._decode()

    def _load(self, key: Any, strict: bool, default: Any = None) -> Any:
        key = str(key)
        value = self._read(strict).get(key, _MISSING)
        if value is _MISSING:
            if strict:
                raise NotFound(self._path, key)
            return default
        return value

    def _write(self, mapping: dict[str, Any]) -> None:
        self._fs.write_all(self._path, self._codec.encode(mapping))
        logger.debug("Saved %d keys to %s", len(mapping), self._path)

    def _locked(self) -> AbstractContextManager:
        if self._locks is None:
            return nullcontext()
        return self._locks.lock_for(self._path)

    # -- Read operations --

    def read(self) -> dict[str, Any]:
        """Full mapping, or ``{}`` when the file does not exist."""
        return self._read(strict=False)

    def read_strict(self) -> dict[str, Any]:
        """Full mapping. Raises ``NotFound`` when the file does not exist."""
        return self._read(strict=True)

    def load(self, key: Any, default: Any = None) -> Any:
        """Value for key, or ``default`` if the file or key is missing."""
        return self._load(key, strict=False, default=default)

    def load_strict(self, key: Any) -> Any:
        """Value for key. Raises ``NotFound`` if the file or key is missing."""
        return self._load(key, strict=True)

    def get(self, key: Any, default: Any = None) -> Any:
        return self._load(key, strict=False, default=default)

    def __getitem__(self, key: Any) -> Any:
        return self._load(key, strict=True)

    def keys(self) -> list[str]:
        """Sorted key names. Raises ``NotFound`` if the file is missing."""
        return sorted(self._read(strict=True))

    def exists(self, key: Any) -> bool:
        """True if the file exists and holds key."""
        return str(key) in self._read(strict=False)

    def __contains__(self, key: object) -> bool:
        return self.exists(key)

    # -- Write operations --

    def set(self, key: Any, value: Any) -> None:
        """Store value under key, rewriting the whole file."""
        with self._locked():
            mapping = self._read(strict=False)
            mapping[str(key)] = value
            self._write(mapping)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def write(self, entries: Mapping[Any, Any]) -> None:
        """Merge all entries into the stored mapping with one rewrite."""
        with self._locked():
            mapping = self._read(strict=False)
            mapping.update((str(k), v) for k, v in entries.items())
            self._write(mapping)

    def remove(self, key: Any) -> None:
        """Remove key if present. No-op when the file or key is missing."""
        key = str(key)
        with self._locked():
            mapping = self._read(strict=False)
            if key not in mapping:
                return
            del mapping[key]
            self._write(mapping)

    def __delitem__(self, key: Any) -> None:
        key = str(key)
        with self._locked():
            mapping = self._read(strict=True)
            if key not in mapping:
                raise NotFound(self._path, key)
            del mapping[key]
            self._write(mapping)

    def truncate(self) -> None:
        """Delete the store file. Safe to call when it is already gone."""
        with self._locked():
            self._fs.delete(self._path)
        logger.debug("Truncated %s", self._path)


def store(
    path: str | Path,
    format: str = "json",
    *,
    storage: str = "local",
    extension: str | None = None,
    lock_dir: str | Path | None = None,
    lock_expire: float | None = None,
) -> KeyValueFile:
    """Create a KeyValueFile with sensible defaults.

    Args:
        path: Store file location (extension normalized per format).
        format: ``"json"`` (default), ``"msgpack"``, or any name added
            with ``register_codec()``.
        storage: ``"local"`` (default) for real files or ``"memory"``
            for an in-process filesystem.
        extension: Override the format's canonical extension.
        lock_dir: Enable cross-process write locking, with lock state
            kept in this directory.
        lock_expire: Seconds before a held lock is considered stale.
            Only valid with ``lock_dir``.

    Returns:
        A ``KeyValueFile`` instance. Call ``close()`` (or use it as a
        context manager) to release locks opened for ``lock_dir``.
    """
    if storage == "local":
        filesystem: Filesystem = Local()
    elif storage == "memory":
        from .fs.memory import Memory

        filesystem = Memory()
    else:
        raise ValueError(f"Unknown storage: {storage!r}")

    if lock_dir is None:
        if lock_expire is not None:
            raise ValueError("lock_expire requires lock_dir")
        locks = None
    else:
        locks = Locks(lock_dir, expire=lock_expire)

    kvs = KeyValueFile(
        path,
        format,
        extension=extension,
        filesystem=filesystem,
        locks=locks,
    )
    kvs._owns_locks = locks is not None
    return kvs
