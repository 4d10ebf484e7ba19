"""Exceptions raised by querybind.api.parse_query().

Two severities:
- QueryConfigError: the record declaration or the call itself is wrong.
  Raised on the first problem found; remaining fields are not inspected.
- QueryValidationError: the query values are wrong. Raised once, after every
  field has been processed, carrying all messages.
"""

from typing import Any, Dict, List

from querybind.codes import ErrorCode
from querybind.contracts import ValidationReport
from querybind.kernel.shapes import type_name


class QueryParseError(Exception):
    """Base class for every error raised by parse_query()."""
    code: ErrorCode


class QueryConfigError(QueryParseError):
    """Programmer error in the record declaration or the call."""


class InvalidQueryTargetError(QueryConfigError):
    code = ErrorCode.INVALID_QUERY_TARGET
    message = "target argument must be a mutable record instance"

    def __init__(self, target: Any = None):
        self.target = target
        super().__init__(self.message)


class InvalidQueryFieldTypeError(QueryConfigError):
    code = ErrorCode.INVALID_QUERY_FIELD_TYPE
    message = "field type is not allowed for query parsing"

    def __init__(self, field_name: str, annotation: Any):
        self.field_name = field_name
        self.annotation = annotation
        super().__init__(f"{self.message}: {field_name} ({type_name(annotation)})")


class QueryKeyNotFoundError(QueryConfigError):
    code = ErrorCode.QUERY_KEY_NOT_FOUND
    message = "query key not declared for record field"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"{self.message}: {field_name}")


class QueryValidationError(QueryParseError):
    """The query did not satisfy the record's field rules.

    Attributes:
        field_errors: query key -> messages for that key
        struct_errors: record-level messages (always empty for now)
        report: ValidationReport snapshot of the accumulated messages
    """
    code = ErrorCode.QUERY_VALIDATION_FAILED

    def __init__(self, report: ValidationReport, rendered: str):
        self.report = report
        self.rendered = rendered
        super().__init__(rendered)

    @property
    def field_errors(self) -> Dict[str, List[str]]:
        return self.report.field_errors

    @property
    def struct_errors(self) -> List[str]:
        return self.report.struct_errors

    def __str__(self) -> str:
        return self.rendered
