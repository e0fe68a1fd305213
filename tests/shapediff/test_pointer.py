"""Tests for the JSON Pointer codec."""

import pytest
from jsonpointer import JsonPointerException
from shapediff.errors import NonStringKeyError
from shapediff.pointer import (
    decode_pointer,
    encode_pointer,
    escape_segment,
    unescape_segment,
    validate_key,
)
from shapediff.shapes import Symbol


class TestEscaping:
    """Tests for reference token escaping."""

    @pytest.mark.parametrize("segment,escaped", [
        ("a", "a"),
        ("a/b", "a~1b"),
        ("m~n", "m~0n"),
        ("~1", "~01"),
        ("", ""),
    ])
    def test_escape(self, segment, escaped):
        assert escape_segment(segment) == escaped
        assert unescape_segment(escaped) == segment


class TestEncodePointer:
    """Tests for building pointers from segments."""

    def test_whole_document(self):
        assert encode_pointer([]) == ""

    def test_empty_key(self):
        assert encode_pointer([""]) == "/"

    def test_slash_key(self):
        assert encode_pointer(["/"]) == "/~1"

    def test_nested(self):
        assert encode_pointer(["items", "0", "name"]) == "/items/0/name"


class TestDecodePointer:
    """Tests for parsing pointers."""

    def test_whole_document(self):
        assert decode_pointer("") == []

    def test_empty_key(self):
        assert decode_pointer("/") == [""]

    def test_escaped(self):
        assert decode_pointer("/a~1b/m~0n") == ["a/b", "m~n"]

    def test_missing_leading_slash(self):
        with pytest.raises(JsonPointerException):
            decode_pointer("a/b")


class TestValidateKey:
    """Tests for key representability."""

    def test_string_key(self):
        assert validate_key("a", []) == "a"

    @pytest.mark.parametrize("key", [Symbol(description="a"), 1, ("a",)])
    def test_non_string_key(self, key):
        with pytest.raises(NonStringKeyError) as exc_info:
            validate_key(key, ["outer", "a/b"])
        assert exc_info.value.path == "/outer/a~1b"
        assert exc_info.value.key == key
