"""
JSON-only diffing through an encode/decode codec.

Values are encoded to JSON with a pydantic TypeAdapter, diffed and patched
as plain JSON documents with the jsonpatch library, then decoded back.
Use this when a standard patch document is all that is needed; the
operation-tree differ keeps more information.

Example:
    >>> class Event(BaseModel):
    ...     at: datetime
    >>> differ = JsonDiffer(Event)
    >>> patch = differ.compare(Event(at=t0), Event(at=t1))
    >>> differ.apply(patch, Event(at=t0)) == Event(at=t1)
    True
"""

import copy
from typing import Any, Generic, TypeVar

import jsonpatch
from jsonpointer import resolve_pointer
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

A = TypeVar("A")


class JsonPatch(BaseModel):
    """A JSON Patch together with the patch that undoes it."""

    model_config = ConfigDict(frozen=True)

    patch: list[dict[str, Any]] = Field(description="from -> to")
    inverse: list[dict[str, Any]] = Field(description="to -> from")


def inverse(patch: JsonPatch) -> JsonPatch:
    """Swap the forward and inverse documents."""
    return JsonPatch(patch=patch.inverse, inverse=patch.patch)


def make_document(src: Any, dst: Any) -> list[dict[str, Any]]:
    """
    Compute an add/remove/replace-only JSON Patch from src to dst.

    jsonpatch may pair a removal with an equal addition and emit a move;
    each move is written out as a remove followed by an add of the value
    found at its source when the move runs.
    """
    current = src
    document: list[dict[str, Any]] = []

    for operation in jsonpatch.make_patch(src, dst).patch:
        if operation["op"] == "move":
            value = resolve_pointer(current, operation["from"])
            expanded = [
                {"op": "remove", "path": operation["from"]},
                {"op": "add", "path": operation["path"], "value": copy.deepcopy(value)},
            ]
        else:
            expanded = [operation]

        for entry in expanded:
            current = jsonpatch.apply_patch(current, [entry])
        document.extend(expanded)

    return document


class JsonDiffer(Generic[A]):
    """Diff and patch values of one type through their JSON encoding."""

    def __init__(self, type_: Any):
        self.adapter: TypeAdapter[A] = TypeAdapter(type_)

    def encode(self, value: A) -> Any:
        document = self.adapter.dump_python(value, mode="json")
        if not isinstance(document, (dict, list)):
            raise ValueError(
                f"Encoded value must be a JSON object or array, got {type(document).__name__}"
            )
        return document

    def decode(self, document: Any) -> A:
        return self.adapter.validate_python(document)

    def compare(self, from_: A, to: A) -> JsonPatch:
        """
        Compute the patch between two values and its inverse.

        Raises:
            ValueError: If a value does not encode to an object or array
        """
        encoded_from = self.encode(from_)
        encoded_to = self.encode(to)
        return JsonPatch(
            patch=make_document(encoded_from, encoded_to),
            inverse=make_document(encoded_to, encoded_from),
        )

    def apply(self, patch: JsonPatch, value: A) -> A:
        """
        Apply the forward document of a patch to a value.

        Raises:
            jsonpatch.JsonPatchException: If the document does not fit the value
        """
        document = jsonpatch.apply_patch(self.encode(value), patch.patch)
        return self.decode(document)
