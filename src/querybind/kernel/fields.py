"""Field descriptors: the per-field schema derived from a record declaration.

Records bind fields to query parameters with ``typing.Annotated``::

    @dataclass
    class Listing:
        status: Annotated[str, Query("status")] = ""
        page: Annotated[int, Query("page", default="1")] = 0
        tags: Annotated[List[str], Query("tags[]")] = field(default_factory=list)

Dataclasses, pydantic models and plain annotated classes are supported.
"""

import dataclasses
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, List, Optional, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .shapes import FieldShape, resolve_shape


@dataclass(frozen=True)
class Query:
    """Binds a record field to a query parameter.

    Attributes:
        key: Name of the query parameter (external key)
        default: Raw default literal used when the parameter is absent.
                 For list fields it is split on "," (no trimming).
    """
    key: str
    default: Optional[str] = None


class Presence(str, Enum):
    """What happens when a field's key is missing from the query."""
    REQUIRED = "required"
    HAS_DEFAULT = "has-default"
    OPTIONAL = "optional"
    COLLECTION_DEFAULTS_EMPTY = "collection-defaults-empty"


@dataclass
class FieldDescriptor:
    """Schema of one record field."""
    name: str
    annotation: Any
    key: Optional[str]  # None when the field has no Query marker
    default: Optional[str] = None
    shape: Optional[FieldShape] = None  # None when the annotation is not allowed

    @property
    def presence(self) -> Optional[Presence]:
        if self.shape is None:
            return None
        if self.default is not None:
            return Presence.HAS_DEFAULT
        if self.shape.is_collection:
            return Presence.COLLECTION_DEFAULTS_EMPTY
        if self.shape.is_optional:
            return Presence.OPTIONAL
        return Presence.REQUIRED


def _find_marker(metadata) -> Optional[Query]:
    for item in metadata:
        if isinstance(item, Query):
            return item
    return None


def _descriptor(name: str, annotation: Any, marker: Optional[Query]) -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        annotation=annotation,
        key=marker.key if marker is not None else None,
        default=marker.default if marker is not None else None,
        shape=resolve_shape(annotation),
    )


def _split_annotated(hint: Any) -> tuple[Any, Optional[Query]]:
    """Separate an Annotated[...] hint into the bare type and its Query marker."""
    if get_origin(hint) is Annotated:
        bare, *metadata = get_args(hint)
        return bare, _find_marker(metadata)
    return hint, None


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _describe_pydantic(record_type: type[BaseModel]) -> List[FieldDescriptor]:
    descriptors = []
    for name, info in record_type.model_fields.items():
        descriptors.append(_descriptor(name, info.annotation, _find_marker(info.metadata)))
    return descriptors


def _describe_annotated(record_type: type) -> List[FieldDescriptor]:
    hints = get_type_hints(record_type, include_extras=True)
    if dataclasses.is_dataclass(record_type):
        names = [f.name for f in dataclasses.fields(record_type)]
    else:
        names = [n for n, h in hints.items() if not n.startswith("_") and not _is_class_var(h)]

    descriptors = []
    for name in names:
        bare, marker = _split_annotated(hints[name])
        descriptors.append(_descriptor(name, bare, marker))
    return descriptors


def describe_fields(record_type: type) -> List[FieldDescriptor]:
    """
    Build field descriptors for a record class, in declaration order.

    Base class fields come first. ClassVar annotations and underscore-prefixed
    names are not fields. Nothing is cached: descriptors are rebuilt per call.

    Args:
        record_type: A dataclass, pydantic model or annotated class

    Returns:
        List of FieldDescriptor, one per declared field
    """
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return _describe_pydantic(record_type)
    return _describe_annotated(record_type)


def _is_record_type(cls: type) -> bool:
    if issubclass(cls, BaseModel) or dataclasses.is_dataclass(cls):
        return True
    # Plain classes count as records only if they (or a user-defined base) declare annotations
    return any(inspect.get_annotations(base) for base in cls.__mro__ if base is not object)


def is_record_instance(obj: Any) -> bool:
    """
    Check that obj is a writable record instance.

    Classes, None, builtins and frozen dataclasses/models are rejected.
    """
    if obj is None or isinstance(obj, type):
        return False
    cls = type(obj)
    if cls.__module__ == "builtins":
        return False
    if not _is_record_type(cls):
        return False
    if isinstance(obj, BaseModel):
        return not cls.model_config.get("frozen", False)
    if dataclasses.is_dataclass(cls):
        return not cls.__dataclass_params__.frozen
    return True
