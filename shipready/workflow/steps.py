"""
Ship Workflow Steps

The built-in steps of `shipready complete`: asset inventory, SEO files,
performance analysis, the launch checklist and deployment.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import ConfigLoader
from ..launch.checks.base import find_files
from ..launch.checks.performance import build_output_exists
from ..launch.checks.seo import has_meta_tags, sitemap_exists
from ..launch.evaluator import run_launch_checklist
from ..launch.reporter import automated_fixes
from ..utils.framework import detect_framework
from .models import (
    AssetsResult,
    ChecklistResult,
    DeploymentResult,
    PerformanceResult,
    SeoResult,
    WorkflowConfig,
    WorkflowStep,
)
from .runner import StepDefinition

logger = logging.getLogger(__name__)

IMAGE_PATTERNS = (
    "public/**/*.png",
    "public/**/*.jpg",
    "public/**/*.jpeg",
    "public/**/*.webp",
    "public/**/*.avif",
    "public/**/*.svg",
    "public/**/*.ico",
)

DEPLOY_MARKERS = {
    "vercel": ("vercel.json", ".vercel"),
    "netlify": ("netlify.toml", ".netlify"),
    "railway": ("railway.json", "railway.toml"),
    "render": ("render.yaml",),
}

DEPLOY_COMMANDS = {
    "vercel": ("vercel", "vercel --prod"),
    "netlify": ("netlify deploy", "netlify deploy --prod"),
    "railway": ("railway up", "railway up"),
    "render": ("render deploy", "render deploy"),
}


def find_images(project_root: Path) -> List[Path]:
    return find_files(project_root, *IMAGE_PATTERNS)


# ============================================================
# Step functions
# ============================================================

async def run_asset_inventory(project_root: Path, config: WorkflowConfig) -> AssetsResult:
    """Count the image assets under public/. Skipped when there are none."""
    images = find_images(project_root)
    if not images:
        logger.info("No assets found in %s", project_root / "public")
        return AssetsResult(skipped=True)

    return AssetsResult(
        assets_generated=len(images),
        total_bytes=sum(p.stat().st_size for p in images),
    )


async def run_seo_check(project_root: Path, config: WorkflowConfig) -> SeoResult:
    """Score the SEO files: 25 points each for sitemap, robots.txt, manifest and metadata."""
    framework = detect_framework(project_root).framework

    found = [
        sitemap_exists(project_root, framework),
        (project_root / "public" / "robots.txt").exists(),
        (project_root / "public" / "manifest.json").exists(),
        has_meta_tags(project_root, framework),
    ]
    items_found = sum(1 for f in found if f)

    return SeoResult(seo_score=items_found * 25, items_found=items_found, items_total=len(found))


async def run_performance_analysis(project_root: Path, config: WorkflowConfig) -> PerformanceResult:
    """
    Estimate a performance score from the project files.

    Base 70, +10 when optimized (WebP/AVIF) images exist, +10 when no
    image exceeds the image budget, +10 when a production build exists.
    """
    budgets = ConfigLoader(project_root).load().performance.budgets

    images = find_images(project_root)
    optimized = [p for p in images if p.suffix.lower() in (".webp", ".avif")]
    oversized = [p for p in images if p.stat().st_size > budgets.max_image_size]

    score = 70
    if optimized:
        score += 10
    if not oversized:
        score += 10
    if build_output_exists(project_root):
        score += 10
    score = min(score, 100)

    return PerformanceResult(
        performance_score=score,
        images_optimized=len(optimized),
        oversized_images=len(oversized),
        meets_target=score >= config.target_score,
    )


async def run_checklist_validation(project_root: Path, config: WorkflowConfig) -> ChecklistResult:
    """
    Run the launch checklist and embed it in the step result.

    With auto_fix on, the fix commands of automatable critical issues
    are collected into the result.
    """
    checklist = await run_launch_checklist(project_root)
    fixes = automated_fixes(checklist) if config.auto_fix else []
    return ChecklistResult(checklist=checklist, fixes=fixes)


def detect_platform(project_root: Path) -> Optional[str]:
    """Deploy platform from the project's config, or from its marker files."""
    configured = ConfigLoader(project_root).load().deploy.platform
    if configured:
        return configured

    for platform, markers in DEPLOY_MARKERS.items():
        if any((project_root / marker).exists() for marker in markers):
            return platform
    return None


async def run_deployment(project_root: Path, config: WorkflowConfig) -> DeploymentResult:
    """
    Prepare deployment.

    Deploy CLIs are run by hand; the step reports the platform and the
    command to use, and records itself as skipped.
    """
    platform = detect_platform(project_root)
    if platform is None:
        message = "No deploy platform detected (add vercel.json or netlify.toml)"
    else:
        preview, production = DEPLOY_COMMANDS[platform]
        message = f"Deploy with: {production if config.production else preview}"

    return DeploymentResult(
        skipped=True,
        platform=platform,
        production=config.production,
        message=message,
    )


def launch_ready(steps: Sequence[WorkflowStep], config: WorkflowConfig) -> bool:
    """Deployment condition: the launch checklist step said ready."""
    for step in steps:
        if isinstance(step.result, ChecklistResult):
            return step.result.checklist.ready_to_launch
    return False


# ============================================================
# Step list
# ============================================================

ASSETS_STEP = StepDefinition(
    id="assets",
    name="Asset Generation",
    description="Check favicons, OG images, and PWA icons",
    run=run_asset_inventory,
)

SEO_STEP = StepDefinition(
    id="seo",
    name="SEO Optimization",
    description="Check meta tags, sitemap, and robots.txt",
    run=run_seo_check,
)

PERFORMANCE_STEP = StepDefinition(
    id="performance",
    name="Performance Optimization",
    description="Analyze images, budgets, and build output",
    run=run_performance_analysis,
)

CHECKLIST_STEP = StepDefinition(
    id="launch-checklist",
    name="Launch Checklist",
    description="Validate project readiness for launch",
    run=run_checklist_validation,
)


def deployment_step(production: bool) -> StepDefinition:
    return StepDefinition(
        id="deployment",
        name="Deployment",
        description="Deploy to production" if production else "Deploy to preview",
        run=run_deployment,
        condition=launch_ready,
    )


def build_default_steps(config: WorkflowConfig) -> List[StepDefinition]:
    """
    Steps for a run with the given config.

    The skip flags leave steps out entirely. Deployment is only part of
    the run when not skipped, and then only executes if the checklist
    says the project is ready.
    """
    steps = []
    if not config.skip_assets:
        steps.append(ASSETS_STEP)
    if not config.skip_seo:
        steps.append(SEO_STEP)
    if not config.skip_perf:
        steps.append(PERFORMANCE_STEP)
    steps.append(CHECKLIST_STEP)
    if not config.skip_deploy:
        steps.append(deployment_step(config.production))
    return steps
