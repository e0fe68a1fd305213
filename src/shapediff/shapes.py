"""
Shape descriptors.

A shape is a frozen tree describing the structure of a value. The differ
compiler walks it once and produces a comparison function specialized for
that structure.

Examples:
    Struct with an optional field:
        struct({"a": string(), "b": optional(number())})

    String-keyed record:
        record(KeyKind.STRING, string())

    Self-referential shape:
        category = lazy(lambda: struct({"name": string(), "children": array(category)}))
"""

from enum import Enum
from typing import Annotated, Any, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ShapeKind(str, Enum):
    """Closed set of node kinds understood by the differ compiler."""

    LEAF = "leaf"
    UNION = "union"
    REFINEMENT = "refinement"
    TRANSFORM = "transform"
    LAZY = "lazy"
    STRUCT = "struct"
    TUPLE = "tuple"


class LeafKind(str, Enum):
    """Primitive types that are never decomposed when diffing."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    BIGINT = "bigint"
    SYMBOL = "symbol"
    LITERAL = "literal"
    UNKNOWN = "unknown"
    ANY = "any"
    OBJECT = "object"
    ENUMS = "enums"
    DECLARATION = "declaration"
    TEMPLATE_LITERAL = "template_literal"
    UNDEFINED = "undefined"
    VOID = "void"
    NEVER = "never"


class KeyKind(str, Enum):
    """Which keys of a mapping an index signature covers."""

    STRING = "string"
    SYMBOL = "symbol"

    def accepts(self, key: Any) -> bool:
        if self is KeyKind.STRING:
            return isinstance(key, str)
        return not isinstance(key, str)


class Symbol(BaseModel):
    """
    A hashable key that has no JSON representation.

    Two symbols with the same description are the same key.
    """

    model_config = ConfigDict(frozen=True)

    description: str

    def __repr__(self) -> str:
        return f"Symbol({self.description!r})"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Leaf(_Node):
    """A primitive value, compared as a whole."""

    kind: Literal[ShapeKind.LEAF] = ShapeKind.LEAF
    type: LeafKind = LeafKind.UNKNOWN
    values: tuple[Any, ...] = Field(
        default=(),
        description="Allowed values for literal and enum leaves"
    )


class Union(_Node):
    """One of several member shapes. Diffed as a leaf."""

    kind: Literal[ShapeKind.UNION] = ShapeKind.UNION
    members: "tuple[Shape, ...]"


class Refinement(_Node):
    """A base shape narrowed by a predicate."""

    kind: Literal[ShapeKind.REFINEMENT] = ShapeKind.REFINEMENT
    base: "Shape"
    predicate: Callable[[Any], bool]
    name: Optional[str] = None


class Transform(_Node):
    """A shape defined by a decode/encode pair over a base shape."""

    kind: Literal[ShapeKind.TRANSFORM] = ShapeKind.TRANSFORM
    base: "Shape"
    decode: Callable[[Any], Any]
    encode: Callable[[Any], Any]


class Lazy(_Node):
    """A deferred reference, used to describe self-referential shapes."""

    kind: Literal[ShapeKind.LAZY] = ShapeKind.LAZY
    resolver: Callable[[], "Shape"]

    def resolve(self) -> "Shape":
        return self.resolver()


class PropertySignature(_Node):
    name: Any = Field(description="str for JSON keys, any other hashable otherwise")
    shape: "Shape"
    optional: bool = False


class IndexSignature(_Node):
    parameter: KeyKind
    value: "Shape"


class Struct(_Node):
    """
    A mapping with declared properties and optional catch-all index signatures.

    Properties are diffed in declaration order, then the remaining keys
    covered by each index signature.
    """

    kind: Literal[ShapeKind.STRUCT] = ShapeKind.STRUCT
    properties: tuple[PropertySignature, ...] = ()
    index_signatures: tuple[IndexSignature, ...] = ()


class TupleElement(_Node):
    shape: "Shape"
    optional: bool = False


class Tuple(_Node):
    """
    A positional sequence.

    Without ``rest`` the sequence has fixed arity; with ``rest`` every
    position past the declared elements uses the rest shape.
    """

    kind: Literal[ShapeKind.TUPLE] = ShapeKind.TUPLE
    elements: tuple[TupleElement, ...] = ()
    rest: Optional["Shape"] = None


Shape = Annotated[
    Leaf | Union | Refinement | Transform | Lazy | Struct | Tuple,
    Field(discriminator="kind"),
]

for _model in (
    Union, Refinement, Transform, Lazy, PropertySignature,
    IndexSignature, Struct, TupleElement, Tuple,
):
    _model.model_rebuild()


# --- Builders ---

def number() -> Leaf:
    return Leaf(type=LeafKind.NUMBER)


def string() -> Leaf:
    return Leaf(type=LeafKind.STRING)


def boolean() -> Leaf:
    return Leaf(type=LeafKind.BOOLEAN)


def unknown() -> Leaf:
    return Leaf(type=LeafKind.UNKNOWN)


def literal(*values: Any) -> Leaf:
    return Leaf(type=LeafKind.LITERAL, values=values)


def union(*members: Shape) -> Union:
    return Union(members=members)


def refine(base: Shape, predicate: Callable[[Any], bool], name: str | None = None) -> Refinement:
    return Refinement(base=base, predicate=predicate, name=name)


def transform(
    base: Shape,
    decode: Callable[[Any], Any],
    encode: Callable[[Any], Any]
) -> Transform:
    return Transform(base=base, decode=decode, encode=encode)


def lazy(resolver: Callable[[], Shape]) -> Lazy:
    return Lazy(resolver=resolver)


class _Optional:
    """Marker wrapping a shape whose property may be absent."""

    def __init__(self, shape: Shape):
        self.shape = shape


def optional(shape: Shape) -> _Optional:
    """Mark a struct property or tuple element as optional."""
    return _Optional(shape)


def struct(fields: dict[Any, Shape | _Optional]) -> Struct:
    """
    Build a struct from a mapping of property name to shape.

    Example:
        >>> struct({"a": string(), "b": optional(number())})
    """
    properties = []
    for name, shape in fields.items():
        if isinstance(shape, _Optional):
            properties.append(PropertySignature(name=name, shape=shape.shape, optional=True))
        else:
            properties.append(PropertySignature(name=name, shape=shape))
    return Struct(properties=tuple(properties))


def record(parameter: KeyKind, value: Shape) -> Struct:
    """A mapping whose keys of the given kind all share one value shape."""
    return Struct(index_signatures=(IndexSignature(parameter=parameter, value=value),))


def extend(first: Struct, second: Struct) -> Struct:
    """Combine the properties and index signatures of two structs."""
    names = {ps.name for ps in first.properties}
    duplicates = [ps.name for ps in second.properties if ps.name in names]
    if duplicates:
        raise ValueError(f"Duplicate property signatures: {duplicates}")
    return Struct(
        properties=first.properties + second.properties,
        index_signatures=first.index_signatures + second.index_signatures,
    )


def tuple_(*elements: Shape | _Optional, rest: Shape | None = None) -> Tuple:
    items = []
    for element in elements:
        if isinstance(element, _Optional):
            items.append(TupleElement(shape=element.shape, optional=True))
        else:
            items.append(TupleElement(shape=element))
    return Tuple(elements=tuple(items), rest=rest)


def array(item: Shape) -> Tuple:
    """A variable-length sequence of a single item shape."""
    return Tuple(rest=item)
