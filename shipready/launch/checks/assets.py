"""
Assets & Branding Checks

Favicons, social images, PWA icons and the web manifest.
"""

from pathlib import Path

from ..models import ChecklistItem, ChecklistSection, CheckStatus
from ..scoring import build_section
from .base import check_provider, find_files

SECTION_NAME = "Assets & Branding"
ASSETS_FIX = "Add favicon.ico and og-image files to public/"


@check_provider(SECTION_NAME)
async def check_assets(project_root: Path) -> ChecklistSection:
    """Check generated brand assets under public/."""
    items = []

    favicon = (project_root / "public" / "favicon.ico").exists()
    items.append(ChecklistItem(
        id="favicon",
        name="Favicon generated",
        status=CheckStatus.PASS if favicon else CheckStatus.FAIL,
        required=True,
        message="favicon.ico found" if favicon else "No favicon.ico",
        fix=None if favicon else ASSETS_FIX,
        automated=True,
    ))

    og_images = find_files(project_root, "public/*og-image*.png", "public/*og-image*.jpg")
    items.append(ChecklistItem(
        id="og-images",
        name="Open Graph images created",
        status=CheckStatus.PASS if og_images else CheckStatus.FAIL,
        required=True,
        message=f"{len(og_images)} OG images found" if og_images else "No OG images",
        fix=None if og_images else ASSETS_FIX,
        automated=True,
    ))

    twitter = find_files(project_root, "public/*twitter*.png", "public/*twitter*.jpg")
    items.append(ChecklistItem(
        id="twitter-cards",
        name="Twitter cards configured",
        status=CheckStatus.PASS if twitter else CheckStatus.WARNING,
        required=False,
        message="Twitter images found" if twitter else "No Twitter card images",
        automated=True,
    ))

    pwa_icons = find_files(project_root, "public/android-chrome-*.png")
    items.append(ChecklistItem(
        id="pwa-icons",
        name="PWA icons ready",
        status=CheckStatus.PASS if len(pwa_icons) >= 2 else CheckStatus.WARNING,
        required=False,
        message=f"{len(pwa_icons)} PWA icons found" if len(pwa_icons) >= 2 else "Missing PWA icons",
        automated=True,
    ))

    manifest = (project_root / "public" / "manifest.json").exists()
    items.append(ChecklistItem(
        id="manifest",
        name="Manifest.json exists",
        status=CheckStatus.PASS if manifest else CheckStatus.WARNING,
        required=False,
        message="manifest.json found" if manifest else "No manifest.json",
        automated=True,
    ))

    return build_section(SECTION_NAME, items, required=True)
