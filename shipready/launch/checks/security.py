"""
Security Checks

Secrets kept out of git and security headers. Secret scanning, dependency
audits and HTTPS are verified by hand.
"""

from pathlib import Path

from ...utils.framework import detect_framework
from ..models import ChecklistItem, ChecklistSection, CheckStatus
from ..scoring import build_section
from .base import check_provider, manual_item, read_text

SECTION_NAME = "Security"


@check_provider(SECTION_NAME)
async def check_security(project_root: Path) -> ChecklistSection:
    """Check basic security hygiene."""
    items = []

    gitignore = read_text(project_root / ".gitignore") or ""
    env_ignored = ".env" in gitignore
    items.append(ChecklistItem(
        id="env-gitignore",
        name="Environment variables not exposed",
        status=CheckStatus.PASS if env_ignored else CheckStatus.WARNING,
        required=True,
        message=".env is gitignored" if env_ignored else ".env may not be gitignored",
        fix=None if env_ignored else "Add .env to .gitignore",
        automated=False,
    ))

    info = detect_framework(project_root)
    headers = False
    if info.is_next:
        content = read_text(project_root / (info.config_file or "next.config.js")) or ""
        headers = "headers()" in content
    items.append(ChecklistItem(
        id="security-headers",
        name="Security headers set",
        status=CheckStatus.PASS if headers else CheckStatus.WARNING,
        required=False,
        message="Headers configured" if headers else "No security headers",
        automated=True,
    ))

    items.append(manual_item("dependencies", "Dependencies up to date", "Run: npm audit"))
    items.append(manual_item(
        "no-secrets", "No API keys in client code", "Manual verification needed", required=True,
    ))
    items.append(manual_item("https", "HTTPS enabled", "Verify after deployment", required=True))

    return build_section(SECTION_NAME, items, required=True)
