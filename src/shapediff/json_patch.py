"""
Lowering of operation trees to JSON Patch (RFC 6902) documents.

The result is a one-way projection: remove entries lose the removed value
and replace entries lose the previous one. Lowering is all-or-nothing.

Example:
    >>> result = get_json_patch(object_ops([("a", replace("a", "b"))]))
    >>> result.to_document()
    [{'op': 'replace', 'path': '/a', 'value': 'b'}]
"""

import logging
from typing import Any, Optional

from .config import ExcessKeyPolicy, settings
from .errors import JsonPatchError
from .models import (
    JsonPatchOperation,
    JsonPatchResult,
    LoweringError,
    NestedOp,
    Op,
    OpTag,
    PatchOperation,
)
from .operations import execution_order
from .pointer import encode_pointer, validate_key
from .validation import validate_json_value

logger = logging.getLogger(__name__)


class _Lowering:
    """Depth-first walk keeping the current path as a segment stack."""

    def __init__(self, allow_nan: bool, excess_key_policy: ExcessKeyPolicy):
        self.allow_nan = allow_nan
        self.excess_key_policy = excess_key_policy
        self.path: list[str] = []
        self.out: list[JsonPatchOperation] = []

    def emit(self, op: PatchOperation, value: Any = None) -> None:
        if op != PatchOperation.REMOVE:
            value = validate_json_value(
                value, self.path, self.allow_nan, self.excess_key_policy
            )
        self.out.append(JsonPatchOperation(op=op, path=encode_pointer(self.path), value=value))

    def visit(self, op: Op | NestedOp) -> None:
        if op.tag == OpTag.IDENTICAL:
            return
        if op.tag == OpTag.REPLACE:
            self.emit(PatchOperation.REPLACE, op.to)
        elif op.tag == OpTag.ADD:
            self.emit(PatchOperation.ADD, op.value)
        elif op.tag == OpTag.REMOVE:
            self.emit(PatchOperation.REMOVE)
        elif op.tag == OpTag.OBJECT_OPS:
            for key, sub in op.entries:
                self.path.append(validate_key(key, self.path))
                self.visit(sub)
                self.path.pop()
        elif op.tag == OpTag.ARRAY_OPS:
            for index, sub in execution_order(op.entries):
                self.path.append(str(index))
                self.visit(sub)
                self.path.pop()
        else:
            raise ValueError(f"Unsupported operation: {op.tag}")


def get_json_patch(
    op: Op,
    allow_nan: Optional[bool] = None,
    excess_key_policy: Optional[ExcessKeyPolicy] = None
) -> JsonPatchResult:
    """
    Flatten an operation tree into JSON Patch entries.

    Array entries are emitted in the same order the executor applies them,
    so a sequential RFC 6902 applier reproduces the executor's result.

    Args:
        op: Root operation
        allow_nan: Accept non-finite numbers (default: settings.json_allow_nan)
        excess_key_policy: Non-string keys inside values
            (default: settings.excess_key_policy)

    Returns:
        JsonPatchResult with the entries, or the first failure and no entries
    """
    lowering = _Lowering(
        settings.json_allow_nan if allow_nan is None else allow_nan,
        settings.excess_key_policy if excess_key_policy is None else excess_key_policy,
    )

    try:
        lowering.visit(op)
    except JsonPatchError as e:
        logger.debug("JSON Patch lowering failed at %r: %s", e.path, e.message)
        return JsonPatchResult(
            success=False,
            operations=[],
            error=LoweringError(kind=e.kind, path=e.path, message=e.message),
        )
    except RecursionError:
        path = encode_pointer(lowering.path)
        logger.debug("JSON Patch lowering exceeded the nesting limit at %r", path)
        return JsonPatchResult(
            success=False,
            operations=[],
            error=LoweringError(
                kind="non_json_value",
                path=path,
                message="Value is nested too deeply to lower",
            ),
        )

    return JsonPatchResult(success=True, operations=lowering.out, error=None)
