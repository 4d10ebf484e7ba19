"""Public result models for querybind package."""

from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class ValidationReport(BaseModel):
    """Structured form of a failed query validation."""
    field_errors: Dict[str, List[str]] = Field(default_factory=dict)  # query key -> messages, in processing order
    struct_errors: List[str] = Field(default_factory=list)  # record-level messages (reserved, always empty today)

    model_config = ConfigDict(extra="forbid")

    @property
    def ok(self) -> bool:
        return not self.field_errors and not self.struct_errors
