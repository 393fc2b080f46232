"""In-memory filesystem."""

import threading
from pathlib import Path

from .base import Filesystem


class Memory(Filesystem):
    """A memory-backed filesystem, keyed by ``str(path)``."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def exists(self, path: Path) -> bool:
        return str(path) in self.files

    def read_all(self, path: Path) -> bytes:
        try:
            return self.files[str(path)]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def write_all(self, path: Path, data: bytes) -> None:
        if not isinstance(data, bytes):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")
        with self._lock:
            self.files[str(path)] = data

    def delete(self, path: Path) -> None:
        with self._lock:
            self.files.pop(str(path), None)
