"""Collects validation messages while a record is being populated."""

from typing import Dict, List

from querybind.contracts import ValidationReport


class ValidationAccumulator:
    """Validation messages grouped by query key, plus record-level messages.

    Messages for one key keep their insertion order. Record-level messages
    are reserved for cross-field rules; the populator never adds any.
    """

    def __init__(self) -> None:
        self.field_errors: Dict[str, List[str]] = {}
        self.struct_errors: List[str] = []

    def record_field_error(self, key: str, message: str) -> None:
        self.field_errors.setdefault(key, []).append(message)

    def record_struct_error(self, message: str) -> None:
        self.struct_errors.append(message)

    def has_errors(self) -> bool:
        return bool(self.field_errors) or bool(self.struct_errors)

    def error_count(self) -> int:
        return len(self.struct_errors) + sum(len(msgs) for msgs in self.field_errors.values())

    def render(self) -> str:
        """Multi-line human readable report of every message."""
        lines = ["Parsing query parameters failed.", "Struct Errors:"]
        lines.extend(f"\t{message}" for message in self.struct_errors)
        lines.append("Field Errors:")
        for key, messages in self.field_errors.items():
            lines.append(f"\t{key}:")
            lines.extend(f"\t\t{message}" for message in messages)
        return "\n".join(lines) + "\n"

    def to_report(self) -> ValidationReport:
        return ValidationReport(
            field_errors={key: list(messages) for key, messages in self.field_errors.items()},
            struct_errors=list(self.struct_errors),
        )
