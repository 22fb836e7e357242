"""
Framework Detection

Works out which web framework a project uses from package.json and the
directory layout.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class Framework(str, Enum):
    """Supported project frameworks."""
    NEXT_APP = "next-app"
    NEXT_PAGES = "next-pages"
    REACT_VITE = "react-vite"
    REACT_CRA = "react-cra"
    VUE = "vue"
    SVELTE = "svelte"
    ASTRO = "astro"
    STATIC_HTML = "static-html"


@dataclass
class FrameworkInfo:
    """Result of framework detection."""
    framework: Framework
    version: Optional[str] = None
    has_app_dir: bool = False
    has_pages_dir: bool = False
    public_dir: str = "public"
    output_dir: str = "public"
    config_file: Optional[str] = None
    typescript: bool = False
    confidence: float = 0.5

    @property
    def is_next(self) -> bool:
        return self.framework in (Framework.NEXT_APP, Framework.NEXT_PAGES)


def _first_existing(root: Path, names) -> Optional[str]:
    for name in names:
        if (root / name).exists():
            return name
    return None


def _read_package_json(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to parse %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def detect_framework(project_root: Union[str, Path]) -> FrameworkInfo:
    """
    Detect the framework used by a project.

    Args:
        project_root: Project directory

    Returns:
        FrameworkInfo; static-html when nothing more specific is found
    """
    root = Path(project_root)
    typescript = (root / "tsconfig.json").exists()

    info = FrameworkInfo(framework=Framework.STATIC_HTML, typescript=typescript)

    package_json = root / "package.json"
    if not package_json.exists():
        if (root / "index.html").exists():
            info.confidence = 0.7
        return info

    package = _read_package_json(package_json)
    if package is None:
        info.confidence = 0.3
        return info

    deps: Dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        section = package.get(key)
        if isinstance(section, dict):
            deps.update(section)

    if "next" in deps:
        has_app = (root / "app").is_dir()
        has_pages = (root / "pages").is_dir()
        return FrameworkInfo(
            framework=Framework.NEXT_APP if has_app else Framework.NEXT_PAGES,
            version=deps["next"],
            has_app_dir=has_app,
            has_pages_dir=has_pages,
            output_dir=".next",
            config_file=_first_existing(
                root, ["next.config.js", "next.config.mjs", "next.config.ts"]
            ) or "next.config.js",
            typescript=typescript,
            confidence=0.9 if (has_app or has_pages) else 0.6,
        )

    if "vite" in deps and "react" in deps:
        config_file = _first_existing(root, ["vite.config.ts", "vite.config.js", "vite.config.mjs"])
        return FrameworkInfo(
            framework=Framework.REACT_VITE,
            version=deps["vite"],
            output_dir="dist",
            config_file=config_file or "vite.config.ts",
            typescript=typescript,
            confidence=0.95 if config_file else 0.85,
        )

    if "react-scripts" in deps:
        return FrameworkInfo(
            framework=Framework.REACT_CRA,
            version=deps["react-scripts"],
            output_dir="build",
            typescript=typescript,
            confidence=0.9,
        )

    if "@sveltejs/kit" in deps:
        return FrameworkInfo(
            framework=Framework.SVELTE,
            version=deps["@sveltejs/kit"],
            public_dir="static",
            output_dir="build",
            config_file="svelte.config.js",
            typescript=typescript,
            confidence=0.9,
        )

    if "astro" in deps:
        return FrameworkInfo(
            framework=Framework.ASTRO,
            version=deps["astro"],
            output_dir="dist",
            config_file=_first_existing(root, ["astro.config.mjs", "astro.config.ts"]),
            typescript=typescript,
            confidence=0.9,
        )

    if "vue" in deps:
        return FrameworkInfo(
            framework=Framework.VUE,
            version=deps["vue"],
            output_dir="dist",
            typescript=typescript,
            confidence=0.85,
        )

    return info
