"""Exceptions raised while lowering operation trees to JSON Patch."""

from typing import Any


class JsonPatchError(ValueError):
    """Base class for values or keys that cannot be placed in a JSON Patch."""

    kind = "json_patch_error"

    def __init__(self, path: str, message: str):
        super().__init__(f"{message} (at {path!r})")
        self.path = path
        self.message = message


class NonJsonValueError(JsonPatchError):
    """A value placed into the patch is not JSON-representable."""

    kind = "non_json_value"


class NonStringKeyError(JsonPatchError):
    """An object key cannot be rendered as a JSON Pointer segment."""

    kind = "non_string_key"

    def __init__(self, path: str, key: Any):
        super().__init__(path, f"Key {key!r} is not a string")
        self.key = key
