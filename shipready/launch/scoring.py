"""
Section Scoring

Turns the statuses of a section's items into a 0-100 score.

Points per status:
    pass    100
    skip     75  (manual item, unverified rather than broken)
    warning  50
    fail      0

The section score is the mean of the item points, rounded half up.
A section without items scores 100.
"""

import math
from typing import Dict, Iterable, List, Mapping, Optional

from ..errors import ScoringError
from .models import ChecklistItem, ChecklistSection, CheckStatus


STATUS_POINTS: Dict[CheckStatus, int] = {
    CheckStatus.PASS: 100,
    CheckStatus.WARNING: 50,
    CheckStatus.SKIP: 75,
    CheckStatus.FAIL: 0,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (56.5 -> 57, 56.25 -> 56)."""
    return int(math.floor(value + 0.5))


def validate_points(points: Mapping[CheckStatus, int]) -> None:
    """
    Check a point table.

    Raises:
        ScoringError: If a status is missing or a value is outside 0-100
    """
    missing = [s.value for s in CheckStatus if s not in points]
    if missing:
        raise ScoringError(f"Point table missing statuses: {', '.join(missing)}")

    for status, value in points.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ScoringError(f"Points for '{status}' must be a number, got {value!r}")
        if math.isnan(value) or value < 0 or value > 100:
            raise ScoringError(f"Points for '{status}' must be between 0 and 100, got {value}")


def calculate_section_score(
    items: Iterable[ChecklistItem],
    points: Optional[Mapping[CheckStatus, int]] = None,
) -> int:
    """
    Calculate a section score from its items.

    Args:
        items: Checklist items in the section
        points: Optional replacement for STATUS_POINTS

    Returns:
        Integer score between 0 and 100
    """
    if points is None:
        points = STATUS_POINTS
    else:
        validate_points(points)

    items = list(items)
    if not items:
        return 100

    total = sum(points[CheckStatus(item.status)] for item in items)
    return round_half_up(total / len(items))


def build_section(name: str, items: List[ChecklistItem], required: bool = True) -> ChecklistSection:
    """Create a section; its score follows from the items under STATUS_POINTS."""
    return ChecklistSection(name=name, items=list(items), required=required)
