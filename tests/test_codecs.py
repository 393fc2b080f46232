"""Tests for codecs and the format registry."""

import pytest

from kvfile import (
    Codec,
    DecodeError,
    KeyValueFile,
    formats,
    get_codec,
    json_codec,
    msgpack_codec,
    register_codec,
)
from kvfile.fs.memory import Memory


class TestJsonCodec:
    def test_compact_encoding(self):
        assert json_codec().encode({"foo": "[1,2,3]"}) == b'{"foo":"[1,2,3]"}'

    def test_decode_nested(self):
        data = {"key": "value", "num": 42, "nested": [1, 2, {"x": None}]}
        ct = json_codec()
        assert ct.decode(ct.encode(data)) == data

    def test_malformed(self):
        with pytest.raises(DecodeError, match="Invalid JSON"):
            json_codec().decode(b"{")

    def test_invalid_utf8(self):
        with pytest.raises(DecodeError):
            json_codec().decode(b"\xff\xfe")

    def test_non_mapping(self):
        with pytest.raises(DecodeError, match="Expected a JSON map"):
            json_codec().decode(b"[1, 2, 3]")


class TestMsgpackCodec:
    def test_preserves_types(self):
        ct = msgpack_codec()
        data = {"flag": [False, [], True, 1.2], "m": {"a": b"\x00"}}
        assert ct.decode(ct.encode(data)) == data

    def test_non_string_nested_keys(self):
        ct = msgpack_codec()
        data = {"cfg": {1: "a", "n": [True, 1.5]}}
        assert ct.decode(ct.encode(data)) == data

    def test_truncated(self):
        ct = msgpack_codec()
        raw = ct.encode({"foo": "bar"})
        with pytest.raises(DecodeError, match="Invalid msgpack"):
            ct.decode(raw[:-2])

    def test_non_mapping(self):
        import msgpack

        with pytest.raises(DecodeError, match="Expected a msgpack map"):
            msgpack_codec().decode(msgpack.packb([1, 2]))


class TestCodec:
    def test_extension_gets_leading_dot(self):
        ct = Codec(encode=lambda m: b"", decode=lambda b: {}, extension="txt")
        assert ct.extension == ".txt"

    def test_empty_extension(self):
        ct = Codec(encode=lambda m: b"", decode=lambda b: {})
        assert ct.extension == ""

    def test_canonical_extensions(self):
        assert json_codec().extension == ".json"
        assert msgpack_codec().extension == ".msgpack"


class TestRegistry:
    def test_builtin_formats(self):
        assert {"json", "msgpack"} <= set(formats())

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format"):
            get_codec("bogus")

    def test_register_requires_codec(self):
        with pytest.raises(TypeError, match="Expected Codec"):
            register_codec("bad", object())  # type: ignore

    def test_register_custom_format(self):
        lines = Codec(
            encode=lambda m: "\n".join(f"{k}={v}" for k, v in sorted(m.items())).encode(),
            decode=lambda raw: dict(
                line.split("=", 1) for line in raw.decode().splitlines() if line
            ),
            extension=".ini",
        )
        register_codec("lines", lines)
        assert get_codec("lines") is lines

        fs = Memory()
        kvs = KeyValueFile("conf", "lines", filesystem=fs)
        kvs.set("a", "1")
        kvs.set("b", "2")
        assert str(kvs.path) == "conf.ini"
        assert fs.files["conf.ini"] == b"a=1\nb=2"
        assert kvs.load_strict("b") == "2"
