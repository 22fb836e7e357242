"""
Performance Checks

Build output, optimized images and framework config. Lighthouse and
Core Web Vitals need a browser run and are left as manual items.
"""

from pathlib import Path

from ...utils.framework import detect_framework
from ..models import ChecklistItem, ChecklistSection, CheckStatus
from ..scoring import build_section
from .base import check_provider, find_files, manual_item, read_text

SECTION_NAME = "Performance"

BUILD_DIRS = (".next", "dist", "build", "out")


def build_output_exists(project_root: Path) -> bool:
    return any((project_root / name).is_dir() for name in BUILD_DIRS)


@check_provider(SECTION_NAME)
async def check_performance(project_root: Path) -> ChecklistSection:
    """Check production build and asset optimization."""
    items = []

    build = build_output_exists(project_root)
    items.append(ChecklistItem(
        id="build-output",
        name="Production build exists",
        status=CheckStatus.PASS if build else CheckStatus.WARNING,
        required=True,
        message="Build output found" if build else "No build output",
        fix=None if build else "Run: npm run build",
        automated=False,
    ))

    webp = find_files(project_root, "public/**/*.webp")
    items.append(ChecklistItem(
        id="optimized-images",
        name="Images optimized",
        status=CheckStatus.PASS if webp else CheckStatus.WARNING,
        required=False,
        message=f"{len(webp)} WebP images found" if webp else "No optimized images",
        fix=None if webp else "Convert images in public/ to WebP",
        automated=True,
    ))

    info = detect_framework(project_root)
    if info.is_next:
        config_path = project_root / (info.config_file or "next.config.js")
        content = read_text(config_path) or ""
        optimized = "swcMinify" in content and "compress" in content
        items.append(ChecklistItem(
            id="config-optimized",
            name="Framework config optimized",
            status=CheckStatus.PASS if optimized else CheckStatus.WARNING,
            required=False,
            message="Config optimized" if optimized else "Config not optimized",
            fix=None if optimized else f"Enable swcMinify and compress in {config_path.name}",
            automated=True,
        ))

    items.append(manual_item(
        "lighthouse-score", "Lighthouse score > 90", "Run a Lighthouse audit to check", automated=True,
    ))
    items.append(manual_item(
        "core-web-vitals", "Core Web Vitals good", "Run a Lighthouse audit to check", automated=True,
    ))

    return build_section(SECTION_NAME, items, required=True)
