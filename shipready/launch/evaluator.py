"""
Readiness Evaluator

Runs check providers, aggregates their sections into a LaunchChecklist
and decides whether the project is ready to launch.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from ..errors import ScoringError
from .models import ChecklistItem, ChecklistSection, CheckStatus, LaunchChecklist
from .scoring import build_section, round_half_up

logger = logging.getLogger(__name__)

CheckProvider = Callable[[Path], Awaitable[ChecklistSection]]

READY_THRESHOLD = 70


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def provider_label(provider: Callable[..., Any]) -> str:
    """Section name used for a provider, also when it blows up."""
    name = getattr(provider, "section_name", None)
    if name:
        return name
    raw = getattr(provider, "__name__", provider.__class__.__name__)
    raw = re.sub(r"^check_", "", raw)
    return raw.replace("_", " ").title()


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "provider"


def provider_error_section(provider: Callable[..., Any], error: BaseException) -> ChecklistSection:
    """Section standing in for a provider that raised or returned garbage."""
    name = provider_label(provider)
    item = ChecklistItem(
        id=f"{_slug(name)}-error",
        name=f"{name} checks",
        status=CheckStatus.FAIL,
        required=False,
        message=str(error) or error.__class__.__name__,
        automated=False,
    )
    return build_section(name, [item], required=getattr(provider, "section_required", True))


class ReadinessEvaluator:
    """
    Aggregates checklist sections into a launch verdict.

    A project is ready when no required item failed and the overall
    score reaches the threshold. The overall score is the plain mean of
    the section scores; every section weighs the same no matter how many
    items it has or whether it is marked required.
    """

    def __init__(
        self,
        ready_threshold: int = READY_THRESHOLD,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the evaluator.

        Args:
            ready_threshold: Minimum overall score for launch (0-100)
            clock: Returns the checklist timestamp. Defaults to UTC now.

        Raises:
            ScoringError: If the threshold is outside 0-100
        """
        if isinstance(ready_threshold, bool) or not isinstance(ready_threshold, int):
            raise ScoringError(f"Readiness threshold must be an integer, got {ready_threshold!r}")
        if not 0 <= ready_threshold <= 100:
            raise ScoringError(f"Readiness threshold must be between 0 and 100, got {ready_threshold}")

        self.ready_threshold = ready_threshold
        self.clock = clock or _utcnow

    def evaluate(self, sections: Sequence[ChecklistSection]) -> LaunchChecklist:
        """
        Build the launch checklist for a set of sections.

        Args:
            sections: Sections in display order

        Returns:
            A new LaunchChecklist
        """
        sections = list(sections)

        if sections:
            overall_score = round_half_up(sum(s.score for s in sections) / len(sections))
        else:
            overall_score = 100

        critical_issues: List[ChecklistItem] = []
        warnings: List[ChecklistItem] = []

        for section in sections:
            for item in section.items:
                if item.is_critical:
                    critical_issues.append(item)
                elif item.status == CheckStatus.WARNING:
                    warnings.append(item)

        ready = not critical_issues and overall_score >= self.ready_threshold

        return LaunchChecklist(
            sections=sections,
            overall_score=overall_score,
            ready_to_launch=ready,
            critical_issues=critical_issues,
            warnings=warnings,
            timestamp=self.clock(),
        )

    async def run_providers(
        self,
        project_root: Union[str, Path],
        providers: Sequence[CheckProvider],
    ) -> List[ChecklistSection]:
        """
        Run check providers one after another.

        A provider that raises, or returns something other than a
        ChecklistSection, is replaced by a section holding a single
        failed, non-required item carrying the error text.
        """
        project_root = Path(project_root)
        sections: List[ChecklistSection] = []

        for provider in providers:
            try:
                section = await provider(project_root)
                if not isinstance(section, ChecklistSection):
                    raise TypeError(
                        f"provider returned {type(section).__name__}, expected ChecklistSection"
                    )
            except Exception as e:
                logger.warning("Check provider %s failed: %s", provider_label(provider), e)
                section = provider_error_section(provider, e)
            sections.append(section)

        return sections

    async def run(
        self,
        project_root: Union[str, Path],
        providers: Sequence[CheckProvider],
    ) -> LaunchChecklist:
        """Run providers and evaluate their sections."""
        sections = await self.run_providers(project_root, providers)
        checklist = self.evaluate(sections)

        if checklist.ready_to_launch:
            logger.info("Ready to launch, score %d/100", checklist.overall_score)
        else:
            logger.info(
                "Not ready to launch, score %d/100, %d critical issue(s)",
                checklist.overall_score,
                len(checklist.critical_issues),
            )
        return checklist


async def run_launch_checklist(
    project_root: Union[str, Path],
    providers: Optional[Sequence[CheckProvider]] = None,
    evaluator: Optional[ReadinessEvaluator] = None,
) -> LaunchChecklist:
    """
    Run the launch checklist for a project.

    Args:
        project_root: Project directory
        providers: Check providers. Defaults to the built-in checks.
        evaluator: Evaluator to use. Defaults to a 70 point threshold.

    Returns:
        LaunchChecklist for the project
    """
    if providers is None:
        from .checks import DEFAULT_PROVIDERS
        providers = DEFAULT_PROVIDERS

    evaluator = evaluator or ReadinessEvaluator()
    return await evaluator.run(project_root, providers)


async def get_quick_status(
    project_root: Union[str, Path],
    providers: Optional[Sequence[CheckProvider]] = None,
) -> Dict[str, Any]:
    """Short readiness summary: ready flag, score and names of critical issues."""
    checklist = await run_launch_checklist(project_root, providers)
    return {
        "ready": checklist.ready_to_launch,
        "score": checklist.overall_score,
        "missing": [item.name for item in checklist.critical_issues],
    }
