"""Field populator: resolves, coerces and assigns one record field at a time.

Per-value problems never raise here. They are recorded on the accumulator
and processing continues, so one pass reports every bad value.
Only configuration problems (no query key, disallowed type) raise.
"""

from typing import Any, List, Mapping, Optional, Sequence

from querybind.errors import InvalidQueryFieldTypeError, QueryKeyNotFoundError

from .accumulator import ValidationAccumulator
from .coerce import coerce, failure_message
from .fields import FieldDescriptor
from .shapes import FieldShape

REQUIRED_MESSAGE = "field is required"


def check_field_type(descriptor: FieldDescriptor) -> FieldShape:
    """Type policy gate: return the field's shape or raise for a disallowed annotation."""
    if descriptor.shape is None:
        raise InvalidQueryFieldTypeError(descriptor.name, descriptor.annotation)
    return descriptor.shape


def resolve_values(
    descriptor: FieldDescriptor,
    query_params: Mapping[str, Sequence[str]],
) -> Optional[List[str]]:
    """
    Find the raw strings for a field.

    Returns:
        The query values in order, the values synthesized from the default
        literal, or None when the key is absent and there is no default.
    """
    values = query_params.get(descriptor.key)
    if values:
        return list(values)

    if descriptor.default is None:
        return None
    if descriptor.shape.is_collection:
        return descriptor.default.split(",")
    return [descriptor.default]


def _coerce_collection(shape: FieldShape, key: str, values: List[str], errors: ValidationAccumulator) -> List[Any]:
    result = []
    for index, text in enumerate(values):
        try:
            result.append(coerce(shape.kind, text))
        except ValueError:
            errors.record_field_error(key, failure_message(shape.kind, index))
            result.append(shape.element_zero())
    return result


def populate_field(
    target: Any,
    descriptor: FieldDescriptor,
    query_params: Mapping[str, Sequence[str]],
    errors: ValidationAccumulator,
) -> None:
    """
    Set one field on target from the query, recording validation messages on errors.

    Raises:
        QueryKeyNotFoundError: If the field has no Query marker
        InvalidQueryFieldTypeError: If the field's annotation is not allowed
    """
    shape = check_field_type(descriptor)
    if descriptor.key is None:
        raise QueryKeyNotFoundError(descriptor.name)
    key = descriptor.key

    values = resolve_values(descriptor, query_params)
    if values is None:
        if not shape.is_collection and not shape.is_optional:
            errors.record_field_error(key, REQUIRED_MESSAGE)
        setattr(target, descriptor.name, shape.zero_value())
        return

    if shape.is_collection:
        setattr(target, descriptor.name, _coerce_collection(shape, key, values, errors))
        return

    # Scalars and optionals only look at the first value
    try:
        value = coerce(shape.kind, values[0])
    except ValueError:
        errors.record_field_error(key, failure_message(shape.kind))
        value = shape.zero_value()
    setattr(target, descriptor.name, value)
