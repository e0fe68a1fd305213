"""
JSON Pointer (RFC 6901) codec.

Converts between lists of path segments and pointer strings. Because '~'
and '/' have special meanings in a pointer, they are written as '~0' and
'~1' inside a segment.
"""

from typing import Any

from jsonpointer import JsonPointer, escape, unescape

from .errors import NonStringKeyError


def escape_segment(segment: str) -> str:
    """Escape a single reference token ('a/b' -> 'a~1b')."""
    return escape(segment)


def unescape_segment(segment: str) -> str:
    """Reverse of escape_segment ('a~1b' -> 'a/b')."""
    return unescape(segment)


def encode_pointer(segments: list[str]) -> str:
    """
    Encode path segments into a JSON Pointer.

    Args:
        segments: Unescaped segments (e.g., ["items", "0", "a/b"])

    Returns:
        Pointer string (e.g., "/items/0/a~1b"); "" for the whole document
    """
    return JsonPointer.from_parts(segments).path


def decode_pointer(pointer: str) -> list[str]:
    """
    Decode a JSON Pointer into unescaped segments.

    "" addresses the whole document and decodes to []; "/" addresses the
    empty-string key and decodes to [""].

    Raises:
        jsonpointer.JsonPointerException: If the pointer is malformed
    """
    return JsonPointer(pointer).parts


def validate_key(key: Any, path: list[str]) -> str:
    """
    Check that an object key can be used as a pointer segment.

    Args:
        key: The object key
        path: Segments leading to the object holding the key

    Returns:
        The key, unchanged

    Raises:
        NonStringKeyError: If the key is not a string
    """
    if not isinstance(key, str):
        raise NonStringKeyError(encode_pointer(path), key)
    return key
