"""querybind: populate typed records from multi-valued query parameters."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("querybind")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from querybind.api import parse_query, populate, describe, ParseQueryOptions
from querybind.kernel.fields import Query
from querybind.contracts import ValidationReport
from querybind.codes import ErrorCode
from querybind.errors import (
    QueryParseError,
    QueryConfigError,
    InvalidQueryTargetError,
    InvalidQueryFieldTypeError,
    QueryKeyNotFoundError,
    QueryValidationError,
)

__all__ = [
    "__version__",
    "parse_query",
    "populate",
    "describe",
    "ParseQueryOptions",
    "Query",
    "ValidationReport",
    "ErrorCode",
    "QueryParseError",
    "QueryConfigError",
    "InvalidQueryTargetError",
    "InvalidQueryFieldTypeError",
    "QueryKeyNotFoundError",
    "QueryValidationError",
]
