"""Type policy: which field annotations can be populated from query parameters.

A field shape is a primitive kind (text, integer, real, boolean) wrapped in one of
three containers: a bare scalar, an optional value, or a homogeneous list.
Everything else (bytes, dicts, nested records, Optional[List[...]], ...) is rejected.
"""

import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union, get_args, get_origin


class FieldKind(str, Enum):
    """Primitive kinds a query value can be coerced into."""
    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"


class Container(str, Enum):
    """How the primitive kind is wrapped on the record."""
    SCALAR = "scalar"
    OPTIONAL = "optional"
    COLLECTION = "collection"


# Exact type identity: bool must not match int, str subclasses must not match str
_KINDS = {
    str: FieldKind.TEXT,
    int: FieldKind.INTEGER,
    float: FieldKind.REAL,
    bool: FieldKind.BOOLEAN,
}

_ZERO_VALUES = {
    FieldKind.TEXT: "",
    FieldKind.INTEGER: 0,
    FieldKind.REAL: 0.0,
    FieldKind.BOOLEAN: False,
}

_UNION_ORIGINS = (Union, types.UnionType)


@dataclass(frozen=True)
class FieldShape:
    """Resolved shape of a record field."""
    container: Container
    kind: FieldKind

    @property
    def is_collection(self) -> bool:
        return self.container is Container.COLLECTION

    @property
    def is_optional(self) -> bool:
        return self.container is Container.OPTIONAL

    def zero_value(self) -> Any:
        """Value a field takes when nothing valid could be assigned."""
        if self.container is Container.COLLECTION:
            return []
        if self.container is Container.OPTIONAL:
            return None
        return _ZERO_VALUES[self.kind]

    def element_zero(self) -> Any:
        """Zero value of the primitive kind (used for failed collection elements)."""
        return _ZERO_VALUES[self.kind]


def _primitive_kind(annotation: Any) -> Optional[FieldKind]:
    if not isinstance(annotation, type) or get_origin(annotation) is not None:
        return None
    return _KINDS.get(annotation)


def resolve_shape(annotation: Any) -> Optional[FieldShape]:
    """Resolve an annotation to a FieldShape, or None if the annotation is not allowed."""
    kind = _primitive_kind(annotation)
    if kind is not None:
        return FieldShape(Container.SCALAR, kind)

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is list:
        if len(args) != 1:
            return None
        kind = _primitive_kind(args[0])
        return FieldShape(Container.COLLECTION, kind) if kind is not None else None

    if origin in _UNION_ORIGINS:
        non_none = [a for a in args if a is not type(None)]
        if len(args) != 2 or len(non_none) != 1:
            return None
        kind = _primitive_kind(non_none[0])
        return FieldShape(Container.OPTIONAL, kind) if kind is not None else None

    return None


def is_allowed(annotation: Any) -> bool:
    """Return True if a field with this annotation can be populated from a query."""
    return resolve_shape(annotation) is not None


def type_name(annotation: Any) -> str:
    """Human readable rendering of an annotation for error messages."""
    if isinstance(annotation, type) and get_origin(annotation) is None:
        return annotation.__name__
    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin in _UNION_ORIGINS:
        non_none = [a for a in args if a is not type(None)]
        if len(args) == 2 and len(non_none) == 1:
            return f"Optional[{type_name(non_none[0])}]"
        return f"Union[{', '.join(type_name(a) for a in args)}]"
    if origin is not None and args:
        base = "List" if origin is list else getattr(origin, "__name__", str(origin))
        return f"{base}[{', '.join(type_name(a) for a in args)}]"
    return str(annotation).replace("typing.", "")
