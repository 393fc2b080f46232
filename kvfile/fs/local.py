"""Filesystem backed by real files."""

import logging
from pathlib import Path

from .base import Filesystem

logger = logging.getLogger(__name__)


class Local(Filesystem):
    """Reads and writes files on the local disk.

    Writes go to a sibling ``.tmp`` file that is then renamed over the
    target, so readers never observe a half-written file.
    """

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_all(self, path: Path) -> bytes:
        data = path.read_bytes()
        logger.debug("Read %s (%d bytes)", path, len(data))
        return data

    def write_all(self, path: Path, data: bytes) -> None:
        if not isinstance(data, bytes):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_bytes(data)
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s (%d bytes)", path, len(data))

    def delete(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            return
        logger.debug("Deleted %s", path)
