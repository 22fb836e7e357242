"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from shipready.launch.models import ChecklistItem, CheckStatus

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock that moves forward a fixed step per call."""

    def __init__(self, start: datetime = FIXED_NOW, step: timedelta = timedelta(milliseconds=250)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_item():
    """Factory for checklist items."""
    counter = {"n": 0}

    def _make(status=CheckStatus.PASS, required=False, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("id", f"item-{counter['n']}")
        kwargs.setdefault("name", f"Item {counter['n']}")
        return ChecklistItem(status=status, required=required, **kwargs)

    return _make


def _write(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def empty_project(tmp_path):
    """A directory with nothing in it."""
    project = tmp_path / "empty"
    project.mkdir()
    return project


@pytest.fixture
def ready_project(tmp_path):
    """A static site with everything the automated checks look for."""
    project = tmp_path / "site"
    public = project / "public"

    for name in (
        "favicon.ico",
        "og-image.png",
        "twitter-image.png",
        "android-chrome-192x192.png",
        "android-chrome-512x512.png",
        "hero.webp",
    ):
        _write(public / name, "x")

    _write(public / "manifest.json", '{"name": "Site"}')
    _write(public / "sitemap.xml", "<urlset></urlset>")
    _write(public / "robots.txt", "User-agent: *\n")
    _write(
        project / "index.html",
        '<html><head><meta name="description" content="A site"></head></html>',
    )
    _write(project / "404.html", "<h1>Not found</h1>")
    _write(project / ".gitignore", "node_modules\n.env\n")
    _write(project / "README.md", "# Site\n")
    _write(project / "CHANGELOG.md", "# Changelog\n")
    (project / "dist").mkdir()

    return project


@pytest.fixture
def fixed_now():
    return FIXED_NOW
