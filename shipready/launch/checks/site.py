"""
Functionality and Documentation Checks
"""

from pathlib import Path

from ...utils.framework import Framework, detect_framework
from ..models import ChecklistItem, ChecklistSection, CheckStatus
from ..scoring import build_section
from .base import any_exists, check_provider, manual_item

FUNCTIONALITY_SECTION = "Functionality"
DOCUMENTATION_SECTION = "Documentation"


def has_not_found_page(project_root: Path, framework: Framework) -> bool:
    if framework == Framework.NEXT_APP:
        return any_exists(project_root, "app/not-found.tsx", "app/not-found.jsx")
    if framework == Framework.NEXT_PAGES:
        return any_exists(project_root, "pages/404.tsx", "pages/404.jsx")
    return any_exists(project_root, "404.html", "public/404.html")


@check_provider(FUNCTIONALITY_SECTION, required=False)
async def check_functionality(project_root: Path) -> ChecklistSection:
    items = []

    framework = detect_framework(project_root).framework
    has_404 = has_not_found_page(project_root, framework)
    items.append(ChecklistItem(
        id="404-page",
        name="404 page exists",
        status=CheckStatus.PASS if has_404 else CheckStatus.WARNING,
        required=False,
        message="404 page found" if has_404 else "No custom 404 page",
        automated=False,
    ))

    items.append(manual_item("error-handling", "Error handling in place", "Manual verification needed"))
    items.append(manual_item("forms", "Forms working correctly", "Manual testing required"))
    items.append(manual_item("links", "Links not broken", "Manual verification needed"))
    items.append(manual_item("mobile-responsive", "Mobile responsive", "Manual testing required"))

    return build_section(FUNCTIONALITY_SECTION, items, required=False)


@check_provider(DOCUMENTATION_SECTION, required=False)
async def check_documentation(project_root: Path) -> ChecklistSection:
    items = []

    readme = (project_root / "README.md").exists()
    items.append(ChecklistItem(
        id="readme",
        name="README.md complete",
        status=CheckStatus.PASS if readme else CheckStatus.WARNING,
        required=False,
        message="README.md found" if readme else "No README.md",
        automated=False,
    ))

    # A missing changelog is not a problem, just unverified.
    changelog = (project_root / "CHANGELOG.md").exists()
    items.append(ChecklistItem(
        id="changelog",
        name="Changelog started",
        status=CheckStatus.PASS if changelog else CheckStatus.SKIP,
        required=False,
        message="CHANGELOG.md found" if changelog else "No CHANGELOG.md",
        automated=False,
    ))

    items.append(manual_item("api-docs", "API docs (if applicable)", "Only if you have an API"))

    return build_section(DOCUMENTATION_SECTION, items, required=False)
