"""
Shape-directed structural diff and patch engine.

Compiles a shape into a differ that produces reversible operation trees,
applies and reverses those trees, and lowers them to JSON Patch (RFC 6902)
documents addressed by JSON Pointers (RFC 6901).
"""

__version__ = "0.1.0"

from .differ import Differ, compile_differ, same_value
from .errors import JsonPatchError, NonJsonValueError, NonStringKeyError
from .json_differ import JsonDiffer, JsonPatch, inverse
from .json_patch import get_json_patch
from .models import (
    Add,
    ArrayOps,
    Identical,
    JsonPatchOperation,
    JsonPatchResult,
    LoweringError,
    ObjectOps,
    Patch,
    PatchOperation,
    Remove,
    Replace,
    add,
    array_ops,
    identical,
    make_patch,
    object_ops,
    remove,
    replace,
)
from .operations import apply_op, run_patch
from .pointer import decode_pointer, encode_pointer
from .reversal import reverse

__all__ = [
    "__version__",
    "Differ",
    "compile_differ",
    "same_value",
    "JsonPatchError",
    "NonJsonValueError",
    "NonStringKeyError",
    "JsonDiffer",
    "JsonPatch",
    "inverse",
    "get_json_patch",
    "Add",
    "ArrayOps",
    "Identical",
    "JsonPatchOperation",
    "JsonPatchResult",
    "LoweringError",
    "ObjectOps",
    "Patch",
    "PatchOperation",
    "Remove",
    "Replace",
    "add",
    "array_ops",
    "identical",
    "make_patch",
    "object_ops",
    "remove",
    "replace",
    "apply_op",
    "run_patch",
    "decode_pointer",
    "encode_pointer",
    "reverse",
]
