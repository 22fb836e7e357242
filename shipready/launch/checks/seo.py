"""
SEO Checks

Sitemap, robots.txt and page metadata.
"""

from pathlib import Path

from ...utils.framework import Framework, detect_framework
from ..models import ChecklistItem, ChecklistSection, CheckStatus
from ..scoring import build_section
from .base import any_exists, check_provider, manual_item, read_text

SECTION_NAME = "SEO Optimization"


def sitemap_exists(project_root: Path, framework: Framework) -> bool:
    if framework == Framework.NEXT_APP:
        return any_exists(project_root, "app/sitemap.ts", "app/sitemap.js")
    return (project_root / "public" / "sitemap.xml").exists()


def has_meta_tags(project_root: Path, framework: Framework) -> bool:
    """Rough check: the root layout declares metadata with a description."""
    if framework == Framework.NEXT_APP:
        content = read_text(project_root / "app" / "layout.tsx") or ""
        return "metadata" in content and "description" in content

    content = read_text(project_root / "index.html")
    if content is None:
        content = read_text(project_root / "public" / "index.html") or ""
    return '<meta name="description"' in content


@check_provider(SECTION_NAME)
async def check_seo(project_root: Path) -> ChecklistSection:
    """Check search engine basics."""
    items = []
    framework = detect_framework(project_root).framework

    sitemap = sitemap_exists(project_root, framework)
    items.append(ChecklistItem(
        id="sitemap",
        name="Sitemap generated",
        status=CheckStatus.PASS if sitemap else CheckStatus.FAIL,
        required=True,
        message="Sitemap found" if sitemap else "No sitemap",
        fix=None if sitemap else "Add a sitemap (public/sitemap.xml or app/sitemap.ts)",
        automated=True,
    ))

    robots = (project_root / "public" / "robots.txt").exists()
    items.append(ChecklistItem(
        id="robots",
        name="Robots.txt created",
        status=CheckStatus.PASS if robots else CheckStatus.FAIL,
        required=True,
        message="robots.txt found" if robots else "No robots.txt",
        fix=None if robots else "Add public/robots.txt",
        automated=True,
    ))

    meta = has_meta_tags(project_root, framework)
    items.append(ChecklistItem(
        id="meta-tags",
        name="Meta tags complete",
        status=CheckStatus.PASS if meta else CheckStatus.WARNING,
        required=True,
        message="Meta tags configured" if meta else "Meta tags may be incomplete",
        fix=None if meta else "Add title and description metadata to the root layout",
        automated=True,
    ))

    items.append(manual_item("structured-data", "Structured data added", "Manual verification needed"))
    items.append(manual_item("search-console", "Google Search Console setup", "Manual setup required"))

    return build_section(SECTION_NAME, items, required=True)
