"""Public API for querybind package.

parse_query() fills a caller-owned record from a parsed query string,
e.g. the output of ``urllib.parse.parse_qs`` or a web framework's
multi-value query mapping.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

import structlog
from pydantic import BaseModel, ConfigDict

from querybind.errors import InvalidQueryTargetError, QueryConfigError, QueryValidationError
from querybind.kernel.accumulator import ValidationAccumulator
from querybind.kernel.fields import FieldDescriptor, describe_fields, is_record_instance
from querybind.kernel.populate import populate_field

# Events go through stdlib logging and stay silent until the application configures it
logger = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


class ParseQueryOptions(BaseModel):
    """Options for parse_query().

    No options exist yet; the model is the extension point for custom
    per-field validators.
    """
    model_config = ConfigDict(extra="forbid")


def describe(record_type: type) -> List[FieldDescriptor]:
    """Field descriptors for a record class (see kernel.fields.describe_fields)."""
    return describe_fields(record_type)


def parse_query(
    query_params: Mapping[str, Sequence[str]],
    target: Any,
    options: Optional[ParseQueryOptions] = None,
) -> None:
    """
    Populate target's fields from multi-valued query parameters.

    Fields are processed in declaration order. A key mapped to an empty
    sequence counts as absent.

    Args:
        query_params: Query key -> values in the order they appeared
        target: Mutable record instance (dataclass, pydantic model or annotated class)
        options: Reserved; defaults to ParseQueryOptions()

    Raises:
        InvalidQueryTargetError: If target is not a mutable record instance
        InvalidQueryFieldTypeError: If a field's type cannot be populated from a query
        QueryKeyNotFoundError: If a field has no Query(...) marker
        QueryValidationError: If any value was missing or could not be converted
    """
    if options is None:
        options = ParseQueryOptions()

    if not is_record_instance(target):
        logger.debug("query_config_error", code=InvalidQueryTargetError.code.value, target_type=type(target).__name__)
        raise InvalidQueryTargetError(target)

    descriptors = describe_fields(type(target))
    errors = ValidationAccumulator()

    for descriptor in descriptors:
        try:
            populate_field(target, descriptor, query_params, errors)
        except QueryConfigError as e:
            logger.debug("query_config_error", code=e.code.value, field=descriptor.name)
            raise

    if errors.has_errors():
        logger.debug(
            "query_validation_failed",
            field_count=len(errors.field_errors),
            error_count=errors.error_count(),
        )
        raise QueryValidationError(errors.to_report(), errors.render())

    logger.debug("query_parsed", field_count=len(descriptors))


# Shorter alias
populate = parse_query
