"""Abstract filesystem interface."""

from abc import ABC, abstractmethod
from pathlib import Path


class Filesystem(ABC):
    """Whole-file byte storage addressed by path.

    Files are always read and written in full. Encoding is handled at
    higher layers (see ``kvfile.codecs``).
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if a file exists at path."""

    @abstractmethod
    def read_all(self, path: Path) -> bytes:
        """Return the full contents of path.

        Raises ``OSError`` if the file is missing or unreadable.
        """

    @abstractmethod
    def write_all(self, path: Path, data: bytes) -> None:
        """Create or replace path with data."""

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Remove path if present."""
