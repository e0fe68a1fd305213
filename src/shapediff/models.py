"""
Pydantic models for operation trees and JSON Patch documents.

An operation tree records how to turn one value into another. Unlike
JSON Patch (RFC 6902), every replace and remove carries the previous
value, so any tree can be reversed without looking at the original data.
"""

from enum import Enum
from typing import Annotated, Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

A = TypeVar("A")

Index = Annotated[int, Field(ge=0)]


class OpTag(str, Enum):
    """Discriminant shared by every operation model."""

    IDENTICAL = "Identical"
    REPLACE = "Replace"
    ADD = "Add"
    REMOVE = "Remove"
    OBJECT_OPS = "ObjectOps"
    ARRAY_OPS = "ArrayOps"


class _Op(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Identical(_Op):
    """No difference."""

    tag: Literal[OpTag.IDENTICAL] = OpTag.IDENTICAL


class Replace(_Op):
    """
    Whole value substituted.

    Examples:
        {"tag": "Replace", "from": "a", "to": "b"}
    """

    tag: Literal[OpTag.REPLACE] = OpTag.REPLACE
    from_: Any = Field(alias="from", description="Previous value")
    to: Any = Field(description="New value")


class Add(_Op):
    """Child key or position that only exists in the target."""

    tag: Literal[OpTag.ADD] = OpTag.ADD
    value: Any


class Remove(_Op):
    """Child key or position that only exists in the source."""

    tag: Literal[OpTag.REMOVE] = OpTag.REMOVE
    value: Any = Field(description="The removed value, kept for reversal")


class ObjectOps(_Op):
    """Per-key operations on a mapping, in discovery order."""

    tag: Literal[OpTag.OBJECT_OPS] = OpTag.OBJECT_OPS
    entries: "list[tuple[Any, NestedOp]]" = Field(
        ...,
        min_length=1,
        description="(key, operation) pairs; keys may be any hashable"
    )


class ArrayOps(_Op):
    """Per-index operations on a sequence."""

    tag: Literal[OpTag.ARRAY_OPS] = OpTag.ARRAY_OPS
    entries: "list[tuple[Index, NestedOp]]" = Field(
        ...,
        min_length=1,
        description="(index, operation) pairs"
    )


NestedOp = Annotated[
    Replace | Add | Remove | ObjectOps | ArrayOps,
    Field(discriminator="tag"),
]

Op = Annotated[
    Identical | Replace | ObjectOps | ArrayOps,
    Field(discriminator="tag"),
]

ObjectOps.model_rebuild()
ArrayOps.model_rebuild()


class Patch(BaseModel, Generic[A]):
    """
    An operation tree tagged with the type of value it transforms.

    The type parameter exists for static checking only.
    """

    model_config = ConfigDict(frozen=True)

    op: Op


# --- Constructors ---

identical = Identical()


def replace(from_: Any, to: Any) -> Replace:
    return Replace(from_=from_, to=to)


def add(value: Any) -> Add:
    return Add(value=value)


def remove(value: Any) -> Remove:
    return Remove(value=value)


def object_ops(entries: list[tuple[Any, NestedOp]]) -> ObjectOps:
    return ObjectOps(entries=entries)


def array_ops(entries: list[tuple[int, NestedOp]]) -> ArrayOps:
    return ArrayOps(entries=entries)


def make_patch(op: Op) -> "Patch[Any]":
    return Patch(op=op)


# --- JSON Patch documents ---

class PatchOperation(str, Enum):
    """Subset of RFC 6902 operations produced by lowering."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"


class JsonPatchOperation(BaseModel):
    """
    A single JSON Patch entry.

    Examples:
        {"op": "replace", "path": "/a", "value": "b"}
        {"op": "remove", "path": "/items/2"}
    """

    op: PatchOperation = Field(
        ...,
        description="The operation to perform"
    )
    path: str = Field(
        ...,
        description="JSON Pointer to the target ('' is the whole document)"
    )
    value: Any = Field(
        default=None,
        description="The new value (add/replace only)"
    )

    def to_dict(self) -> dict[str, Any]:
        """Plain RFC 6902 form; remove entries carry no value."""
        entry: dict[str, Any] = {"op": self.op.value, "path": self.path}
        if self.op != PatchOperation.REMOVE:
            entry["value"] = self.value
        return entry


class LoweringError(BaseModel):
    """Why an operation tree could not be lowered."""

    kind: Literal["non_json_value", "non_string_key"] = Field(
        description="Category of the failure"
    )
    path: str = Field(description="Pointer to the offending location")
    message: str = Field(description="Error message")


class JsonPatchResult(BaseModel):
    """Result of lowering an operation tree. Never partially successful."""

    success: bool = Field(description="Whether the whole tree was lowered")
    operations: list[JsonPatchOperation] = Field(
        default_factory=list,
        description="Patch entries in application order (empty on failure)"
    )
    error: Optional[LoweringError] = Field(
        default=None,
        description="Failure details (if any)"
    )

    def to_document(self) -> list[dict[str, Any]]:
        return [operation.to_dict() for operation in self.operations]
