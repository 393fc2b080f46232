"""kvfile error types."""

from pathlib import Path
from typing import Any


class NotFound(KeyError):
    """Raised when a strict read finds no file, or no such key in it.

    Missing files and missing keys share this one error kind.

    Attributes:
        path: The store file that was read.
        key: The normalized key that was looked up, or ``None`` when
            the file itself does not exist.
    """

    def __init__(self, path: Path, key: str | None = None) -> None:
        self.path = path
        self.key = key
        if key is None:
            message = f"No such file: {path}"
        else:
            message = f"Key {key!r} not found in {path}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would repr() the message.
        return str(self.args[0])


class DecodeError(ValueError):
    """Raised when stored bytes cannot be decoded into a mapping.

    Attributes:
        path: The file being decoded, when known.
    """

    def __init__(self, message: str, path: Any = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
