"""kvfile: key-value store persisted as a single file."""

from .codecs import Codec, formats, get_codec, json_codec, msgpack_codec, register_codec
from .errors import DecodeError, NotFound
from .fs.base import Filesystem
from .locks import Locks
from .store import KeyValueFile, resolve_path, store

__all__ = [
    "Codec",
    "DecodeError",
    "Filesystem",
    "KeyValueFile",
    "Locks",
    "NotFound",
    "formats",
    "get_codec",
    "json_codec",
    "msgpack_codec",
    "register_codec",
    "resolve_path",
    "store",
]
