"""Error code constants for querybind.api.parse_query().

These constants let callers branch on error kind without matching
exception messages.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by QueryParseError subclasses."""

    # Configuration errors (schema or call site is wrong, fatal)
    INVALID_QUERY_TARGET = "INVALID_QUERY_TARGET"
    INVALID_QUERY_FIELD_TYPE = "INVALID_QUERY_FIELD_TYPE"
    QUERY_KEY_NOT_FOUND = "QUERY_KEY_NOT_FOUND"

    # Validation failure (query input is wrong, accumulated)
    QUERY_VALIDATION_FAILED = "QUERY_VALIDATION_FAILED"
