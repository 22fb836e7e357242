"""
Launch Checklist Models

Value types produced by check providers and the readiness evaluator.
JSON field names are camelCase; this JSON is the interchange format
for reports and embedded workflow results.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class CheckStatus(str, Enum):
    """Outcome of a single checklist item."""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"
    SKIP = "skip"


class ChecklistModel(BaseModel):
    """Immutable base with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class ChecklistItem(ChecklistModel):
    """Result of one atomic check."""

    id: str = Field(..., description="Stable identifier")
    name: str = Field(..., description="Human readable label")
    status: CheckStatus
    required: bool = Field(default=False, description="Failure blocks launch")
    message: Optional[str] = None
    fix: Optional[str] = Field(None, description="Remediation hint")
    automated: bool = Field(default=False, description="Can be fixed automatically")

    @property
    def is_critical(self) -> bool:
        return self.status == CheckStatus.FAIL and self.required


class ChecklistSection(ChecklistModel):
    """
    Named group of checklist items.

    The score is always derived from the items; a score found in loaded
    JSON is ignored.
    """

    name: str
    items: List[ChecklistItem] = Field(default_factory=list)
    required: bool = True

    @computed_field
    @property
    def score(self) -> int:
        from .scoring import calculate_section_score
        return calculate_section_score(self.items)


class LaunchChecklist(ChecklistModel):
    """Snapshot produced by one readiness evaluation."""

    sections: List[ChecklistSection] = Field(default_factory=list)
    overall_score: int = Field(..., ge=0, le=100)
    ready_to_launch: bool
    critical_issues: List[ChecklistItem] = Field(default_factory=list)
    warnings: List[ChecklistItem] = Field(default_factory=list)
    timestamp: datetime

    @classmethod
    def from_json(cls, data: str) -> "LaunchChecklist":
        return cls.model_validate_json(data)
