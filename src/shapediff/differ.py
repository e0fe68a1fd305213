"""
Differ compiler.

Walks a shape once and builds a comparison function specialized for it.
The resulting Differ is immutable and can be shared freely.

Example:
    >>> differ = compile_differ(struct({"a": string(), "b": number()}))
    >>> patch = differ({"a": "a", "b": 1}, {"a": "b", "b": 1})
    >>> # patch.op == object_ops([("a", replace("a", "b"))])
"""

import logging
import math
from typing import Any, Callable, Generic, TypeVar

from .models import (
    Add,
    ArrayOps,
    NestedOp,
    ObjectOps,
    Op,
    OpTag,
    Patch,
    Remove,
    Replace,
    identical,
)
from .shapes import IndexSignature, Lazy, Shape, ShapeKind, Struct, Tuple

logger = logging.getLogger(__name__)

A = TypeVar("A")

DiffFn = Callable[[Any, Any], Op]


def same_value(a: Any, b: Any) -> bool:
    """
    Identity-style equality used for leaves.

    NaN equals NaN, 0.0 and -0.0 differ, and values of different types
    (1, 1.0, True) are never equal. Lists, tuples and dicts compare
    element by element under the same rules, so [0.0] and [-0.0] differ
    while two lists holding distinct NaNs are equal.
    """
    if a is b:
        return True
    if isinstance(a, float) and isinstance(b, float):
        if math.isnan(a) and math.isnan(b):
            return True
        return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(same_value(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(same_value(v, b[k]) for k, v in a.items())
    return a == b


def diff_leaf(from_: Any, to: Any) -> Op:
    return identical if same_value(from_, to) else Replace(from_=from_, to=to)


class Differ(Generic[A]):
    """A compiled, shape-specialized comparison: (from, to) -> Patch."""

    def __init__(self, shape: Shape, fn: DiffFn):
        self.shape = shape
        self._fn = fn

    def __call__(self, from_: A, to: A) -> "Patch[A]":
        return Patch(op=self._fn(from_, to))

    def __repr__(self) -> str:
        return f"Differ({self.shape.kind.value})"


def _diff_entry(
    entries: list,
    key: Any,
    from_: Any,
    to: Any,
    differ: DiffFn,
    in_from: bool,
    in_to: bool
) -> None:
    """Append the entry for one key or position, if anything changed."""
    if in_from and in_to:
        op = differ(from_[key], to[key])
        if op.tag != OpTag.IDENTICAL:
            entries.append((key, op))
    elif in_from:
        entries.append((key, Remove(value=from_[key])))
    elif in_to:
        entries.append((key, Add(value=to[key])))


def _index_keys(signature: IndexSignature, from_: Any, to: Any) -> list[Any]:
    """Keys covered by an index signature: source keys, then target-only keys."""
    keys = [key for key in from_ if signature.parameter.accepts(key)]
    keys.extend(
        key for key in to
        if signature.parameter.accepts(key) and key not in from_
    )
    return keys


class _Compiler:
    """
    Compiles shapes, memoizing by node identity.

    The registry keeps a reference to every node it has seen so that ids
    stay unique for the lifetime of the compilation.
    """

    def __init__(self):
        self._registry: dict[int, tuple[Shape, DiffFn]] = {}
        self._handlers: dict[ShapeKind, Callable[[Any], DiffFn]] = {
            ShapeKind.LEAF: self._compile_leaf,
            ShapeKind.UNION: self._compile_leaf,
            ShapeKind.TRANSFORM: self._compile_leaf,
            ShapeKind.REFINEMENT: self._compile_refinement,
            ShapeKind.LAZY: self._compile_lazy,
            ShapeKind.STRUCT: self._compile_struct,
            ShapeKind.TUPLE: self._compile_tuple,
        }

    def compile(self, shape: Shape) -> DiffFn:
        cached = self._registry.get(id(shape))
        if cached is not None:
            return cached[1]

        handler = self._handlers.get(getattr(shape, "kind", None))
        if handler is None:
            raise ValueError(f"Unsupported shape: {shape!r}")

        logger.debug("Compiling differ for %s shape", shape.kind.value)
        fn = handler(shape)
        self._registry[id(shape)] = (shape, fn)
        return fn

    def _compile_leaf(self, shape: Shape) -> DiffFn:
        return diff_leaf

    def _compile_refinement(self, shape: Shape) -> DiffFn:
        # Both values are assumed to satisfy the predicate already
        return self.compile(shape.base)

    def _compile_lazy(self, shape: Lazy) -> DiffFn:
        resolved: list[DiffFn] = []

        def forward(from_: Any, to: Any) -> Op:
            return resolved[0](from_, to)

        # Registered before resolving so that a cycle back to this node
        # picks up the forward reference instead of recompiling
        self._registry[id(shape)] = (shape, forward)
        target = self.compile(shape.resolve())
        resolved.append(target)
        logger.debug("Resolved recursive shape reference")
        return target

    def _compile_struct(self, shape: Struct) -> DiffFn:
        properties = [(ps.name, self.compile(ps.shape)) for ps in shape.properties]
        signatures = [(sig, self.compile(sig.value)) for sig in shape.index_signatures]
        declared = {name for name, _ in properties}

        def diff_struct(from_: Any, to: Any) -> Op:
            entries: list[tuple[Any, NestedOp]] = []

            # Declared properties
            for name, differ in properties:
                _diff_entry(entries, name, from_, to, differ, name in from_, name in to)

            # Index signatures
            seen = set(declared)
            for signature, differ in signatures:
                for key in _index_keys(signature, from_, to):
                    if key in seen:
                        continue
                    seen.add(key)
                    _diff_entry(entries, key, from_, to, differ, key in from_, key in to)

            return ObjectOps(entries=entries) if entries else identical

        return diff_struct

    def _compile_tuple(self, shape: Tuple) -> DiffFn:
        elements = [self.compile(element.shape) for element in shape.elements]
        rest = self.compile(shape.rest) if shape.rest is not None else None

        def diff_tuple(from_: Any, to: Any) -> Op:
            entries: list[tuple[int, NestedOp]] = []
            length = max(len(from_), len(to))
            if rest is None:
                length = min(length, len(elements))

            for i in range(length):
                differ = elements[i] if i < len(elements) else rest
                _diff_entry(entries, i, from_, to, differ, i < len(from_), i < len(to))

            return ArrayOps(entries=entries) if entries else identical

        return diff_tuple


def compile_differ(shape: Shape) -> "Differ[Any]":
    """
    Compile a shape into a Differ.

    Args:
        shape: The shape both compared values conform to

    Returns:
        Differ producing a Patch for any two values of the shape

    Raises:
        ValueError: If the shape contains a node of unknown kind
    """
    return Differ(shape, _Compiler().compile(shape))
