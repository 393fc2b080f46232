"""Filesystem backends."""

from .base import Filesystem
from .local import Local
from .memory import Memory

__all__ = ["Filesystem", "Local", "Memory"]
