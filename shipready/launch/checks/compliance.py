"""
Analytics and Legal Checks

Nothing here can be read from the project files, so every item is a
manual reminder.
"""

from pathlib import Path

from ..models import ChecklistSection
from ..scoring import build_section
from .base import check_provider, manual_item

ANALYTICS_SECTION = "Analytics & Monitoring"
LEGAL_SECTION = "Legal & Compliance"


@check_provider(ANALYTICS_SECTION, required=False)
async def check_analytics(project_root: Path) -> ChecklistSection:
    items = [
        manual_item("analytics", "Analytics installed", "Manual setup (Google Analytics, Vercel Analytics, etc.)"),
        manual_item("error-tracking", "Error tracking setup", "Manual setup (Sentry, LogRocket, etc.)"),
        manual_item("performance-monitoring", "Performance monitoring", "Manual setup"),
    ]
    return build_section(ANALYTICS_SECTION, items, required=False)


@check_provider(LEGAL_SECTION, required=False)
async def check_legal(project_root: Path) -> ChecklistSection:
    items = [
        manual_item("privacy-policy", "Privacy policy (if needed)", "Required if collecting user data"),
        manual_item("terms", "Terms of service (if needed)", "Required for commercial apps"),
        manual_item("cookies", "Cookie consent (if needed)", "Required for GDPR compliance"),
    ]
    return build_section(LEGAL_SECTION, items, required=False)
