"""
Structural reversal of operation trees.

Reversal never looks at the values being patched: replace swaps its two
values, add and remove trade places, and containers reverse each child.
"""

from typing import TypeVar

from .models import (
    Add,
    ArrayOps,
    ObjectOps,
    Op,
    OpTag,
    Patch,
    Remove,
    Replace,
    NestedOp,
)

A = TypeVar("A")


def reverse(patch: "Patch[A]") -> "Patch[A]":
    """
    Invert a patch.

    Applying the result to the target of the original patch yields its
    source. reverse(reverse(p)) == p.
    """
    return Patch(op=reverse_op(patch.op))


def reverse_op(op: Op | NestedOp) -> Op | NestedOp:
    if op.tag == OpTag.IDENTICAL:
        return op
    if op.tag == OpTag.REPLACE:
        return Replace(from_=op.to, to=op.from_)
    if op.tag == OpTag.ADD:
        return Remove(value=op.value)
    if op.tag == OpTag.REMOVE:
        return Add(value=op.value)
    if op.tag == OpTag.OBJECT_OPS:
        return ObjectOps(entries=[(key, reverse_op(sub)) for key, sub in op.entries])
    if op.tag == OpTag.ARRAY_OPS:
        return ArrayOps(entries=[(index, reverse_op(sub)) for index, sub in op.entries])
    raise ValueError(f"Unsupported operation: {op.tag}")
