"""Tests for the field populator (kernel/populate.py)."""

from dataclasses import dataclass, field
from typing import Annotated, List, Optional

import pytest
from structlog.testing import capture_logs

from querybind.api import parse_query
from querybind.errors import InvalidQueryFieldTypeError, QueryKeyNotFoundError, QueryValidationError
from querybind.kernel.accumulator import ValidationAccumulator
from querybind.kernel.fields import describe_fields, Query
from querybind.kernel.populate import REQUIRED_MESSAGE, populate_field, resolve_values


@dataclass
class Record:
    name: Annotated[str, Query("name")] = ""
    tags: Annotated[List[str], Query("tags", default="a,b")] = field(default_factory=list)
    limit: Annotated[Optional[int], Query("limit", default="10")] = None
    ids: Annotated[List[int], Query("ids")] = field(default_factory=list)


def _descriptor(name):
    return next(d for d in describe_fields(Record) if d.name == name)


class TestResolveValues:
    """Tests for resolve_values."""

    def test_present_values_used_in_order(self):
        assert resolve_values(_descriptor("ids"), {"ids": ["3", "1", "2"]}) == ["3", "1", "2"]

    def test_collection_default_split(self):
        assert resolve_values(_descriptor("tags"), {}) == ["a", "b"]

    def test_scalar_default_single_value(self):
        assert resolve_values(_descriptor("limit"), {}) == ["10"]

    def test_absent_without_default(self):
        assert resolve_values(_descriptor("name"), {}) is None
        assert resolve_values(_descriptor("ids"), {"other": ["1"]}) is None


def test_required_field_gets_single_message_and_no_coercion():
    errors = ValidationAccumulator()
    record = Record(name="stale")
    populate_field(record, _descriptor("name"), {}, errors)

    assert errors.field_errors == {"name": [REQUIRED_MESSAGE]}
    assert record.name == ""


def test_collection_absent_is_empty_not_error():
    errors = ValidationAccumulator()
    record = Record(ids=[9])
    populate_field(record, _descriptor("ids"), {}, errors)

    assert not errors.has_errors()
    assert record.ids == []


def test_per_element_failures_accumulate():
    errors = ValidationAccumulator()
    record = Record()
    populate_field(record, _descriptor("ids"), {"ids": ["x", "1", "y"]}, errors)

    assert errors.field_errors == {
        "ids": ["(Index: 0) must be a valid integer", "(Index: 2) must be a valid integer"],
    }
    assert record.ids == [0, 1, 0]


def test_type_check_runs_before_key_check():
    """A field with neither a valid type nor a key reports the type problem."""
    @dataclass
    class Broken:
        blob: bytes = b""

    descriptor = describe_fields(Broken)[0]
    with pytest.raises(InvalidQueryFieldTypeError):
        populate_field(Broken(), descriptor, {}, ValidationAccumulator())


def test_missing_key_raises():
    @dataclass
    class Broken:
        count: int = 0

    descriptor = describe_fields(Broken)[0]
    with pytest.raises(QueryKeyNotFoundError):
        populate_field(Broken(), descriptor, {"count": ["1"]}, ValidationAccumulator())


class TestLogging:
    """parse_query emits structlog debug events."""

    def test_success_event(self):
        with capture_logs() as logs:
            parse_query({"name": ["n"]}, Record())

        assert logs[-1]["event"] == "query_parsed"
        assert logs[-1]["field_count"] == 4
        assert logs[-1]["log_level"] == "debug"

    def test_validation_failure_event(self):
        with capture_logs() as logs:
            with pytest.raises(QueryValidationError):
                parse_query({"ids": ["x", "y"]}, Record())

        event = logs[-1]
        assert event["event"] == "query_validation_failed"
        assert event["field_count"] == 2
        assert event["error_count"] == 3

    def test_config_error_event(self):
        @dataclass
        class Broken:
            count: int = 0

        with capture_logs() as logs:
            with pytest.raises(QueryKeyNotFoundError):
                parse_query({}, Broken())

        assert logs[-1]["event"] == "query_config_error"
        assert logs[-1]["code"] == "QUERY_KEY_NOT_FOUND"
        assert logs[-1]["field"] == "count"

    def test_nothing_written_to_stdout(self, capsys):
        """Unconfigured logging stays silent on stdout and stderr."""
        parse_query({"name": ["n"], "ids": ["1", "2"]}, Record())
        with pytest.raises(QueryValidationError):
            parse_query({"ids": ["x"]}, Record())

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


def test_signed_nan_is_a_validation_error():
    @dataclass
    class Location:
        loc: Annotated[Optional[float], Query("loc")] = None

    record = Location()
    with pytest.raises(QueryValidationError) as exc_info:
        parse_query({"loc": ["+nan"]}, record)

    assert exc_info.value.field_errors == {"loc": ["must be a valid float"]}
    assert record.loc is None
