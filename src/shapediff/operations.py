"""
Patch execution.

Each operation kind has a handler that takes the current value and returns
a new one. Containers are shallow-copied; the input is never mutated.

Array entries run in a fixed order (see execution_order) so that inserts
and removals do not shift the positions other entries refer to.
"""

import copy
from typing import Any, Callable, TypeVar

from .models import NestedOp, Op, OpTag, Patch

A = TypeVar("A")

IN_PLACE = {OpTag.REPLACE, OpTag.OBJECT_OPS, OpTag.ARRAY_OPS}


def execution_order(entries: list[tuple[int, NestedOp]]) -> list[tuple[int, NestedOp]]:
    """
    Order array entries for sequential execution.

    1. In-place entries (replace and nested container ops) in list order,
       addressed by their index in the source sequence.
    2. Removals in descending index order, addressed by source index.
    3. Additions in ascending index order, addressed by their index in the
       resulting sequence.

    Args:
        entries: (index, operation) pairs of an ArrayOps

    Returns:
        The same entries, reordered
    """
    in_place = [entry for entry in entries if entry[1].tag in IN_PLACE]
    removals = sorted(
        (entry for entry in entries if entry[1].tag == OpTag.REMOVE),
        key=lambda entry: entry[0],
        reverse=True,
    )
    additions = sorted(
        (entry for entry in entries if entry[1].tag == OpTag.ADD),
        key=lambda entry: entry[0],
    )
    return in_place + removals + additions


# --- Operation Handlers ---

def run_identical(op: Op, value: Any) -> Any:
    """Return the input unchanged (same object)."""
    return value


def run_replace(op: Op, value: Any) -> Any:
    return op.to


def run_object_ops(op: Op, value: Any) -> Any:
    """Apply per-key operations to a shallow copy of a mapping."""
    result = copy.copy(value)

    for key, sub in op.entries:
        if sub.tag in IN_PLACE:
            result[key] = apply_op(sub, value[key])
        elif sub.tag == OpTag.ADD:
            result[key] = sub.value
        else:
            del result[key]

    return result


def run_array_ops(op: Op, value: Any) -> Any:
    """Apply per-index operations to a copy of a sequence."""
    result = list(value)

    for index, sub in execution_order(op.entries):
        if sub.tag in IN_PLACE:
            result[index] = apply_op(sub, value[index])
        elif sub.tag == OpTag.ADD:
            result.insert(index, sub.value)
        else:
            del result[index]

    if isinstance(value, tuple):
        return tuple(result)
    return result


# --- Operation Dispatcher ---

OPERATION_HANDLERS: dict[OpTag, Callable[[Any, Any], Any]] = {
    OpTag.IDENTICAL: run_identical,
    OpTag.REPLACE: run_replace,
    OpTag.OBJECT_OPS: run_object_ops,
    OpTag.ARRAY_OPS: run_array_ops,
}


def apply_op(op: Op, value: Any) -> Any:
    """
    Apply a single operation tree to a value.

    Args:
        op: Root operation (Identical, Replace, ObjectOps or ArrayOps)
        value: Current value

    Returns:
        The new value

    Raises:
        ValueError: If op is an Add or Remove, which only exist below a container
    """
    handler = OPERATION_HANDLERS.get(op.tag)
    if handler is None:
        raise ValueError(f"Unsupported root operation: {op.tag.value}")

    return handler(op, value)


def run_patch(patch: "Patch[A]") -> Callable[[A], A]:
    """
    Turn a patch into a function from source value to target value.

    Example:
        >>> differ = compile_differ(struct({"a": string()}))
        >>> run_patch(differ({"a": "x"}, {"a": "y"}))({"a": "x"})
        {'a': 'y'}
    """
    def run(value: A) -> A:
        return apply_op(patch.op, value)

    return run
