"""Codecs: encode/decode a whole mapping for one file format."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable

import msgpack

from .errors import DecodeError


@dataclass(frozen=True)
class Codec:
    """A file format: encode/decode for a ``dict[str, Any]`` plus the
    canonical file extension for that format.

    ``decode`` must raise ``DecodeError`` on malformed input and must
    return a dict.
    """

    encode: Callable[[dict[str, Any]], bytes]
    decode: Callable[[bytes], dict[str, Any]]
    extension: str = ""

    def __post_init__(self) -> None:
        if self.extension and not self.extension.startswith("."):
            object.__setattr__(self, "extension", "." + self.extension)


def _expect_mapping(value: Any, fmt: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected a {fmt} map, got {type(value).__name__}")
    return value


def json_codec() -> Codec:
    """Compact UTF-8 JSON. Strings are stored as-is, never re-parsed."""

    def encode(mapping: dict[str, Any]) -> bytes:
        return json.dumps(mapping, sort_keys=True, separators=(",", ":")).encode("utf-8")

    def decode(raw: bytes) -> dict[str, Any]:
        try:
            value = json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise DecodeError(f"Invalid JSON: {e}") from e
        return _expect_mapping(value, "JSON")

    return Codec(encode=encode, decode=decode, extension=".json")


def msgpack_codec() -> Codec:
    """msgpack map. Keeps booleans, floats and nested containers intact."""

    def encode(mapping: dict[str, Any]) -> bytes:
        return msgpack.packb(mapping, use_bin_type=True)

    def decode(raw: bytes) -> dict[str, Any]:
        try:
            value = msgpack.unpackb(raw, raw=False, strict_map_key=False)
        except (ValueError, TypeError) as e:
            raise DecodeError(f"Invalid msgpack: {e}") from e
        return _expect_mapping(value, "msgpack")

    return Codec(encode=encode, decode=decode, extension=".msgpack")


_registry: dict[str, Codec] = {
    "json": json_codec(),
    "msgpack": msgpack_codec(),
}


def register_codec(name: str, codec: Codec) -> None:
    """Register (or replace) the codec used for format ``name``."""
    if not isinstance(codec, Codec):
        raise TypeError(f"Expected Codec, got {type(codec).__name__}")
    _registry[str(name)] = codec


def get_codec(name: str) -> Codec:
    """Look up the codec for format ``name``."""
    try:
        return _registry[str(name)]
    except KeyError:
        raise ValueError(f"Unknown format: {name!r}") from None


def formats() -> list[str]:
    """Registered format names, sorted."""
    return sorted(_registry)
