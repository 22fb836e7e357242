"""
Pydantic models for project configuration.

These models define the schema of .ship-toolkit/config.yaml. Keys may be
written in snake_case or camelCase.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssetsConfig(_ConfigModel):
    """Brand asset generation settings."""

    output_dir: str = Field(default="public", description="Where generated assets live")
    favicon_sizes: List[int] = Field(default_factory=lambda: [16, 32, 48, 64, 128, 256])
    generate_pwa: bool = True
    image_format: Literal["png", "webp", "avif"] = "png"
    quality: int = Field(default=90, ge=1, le=100)
    style: Literal["gradient", "solid", "pattern", "minimal"] = "gradient"

    @field_validator("favicon_sizes")
    @classmethod
    def validate_sizes(cls, v: List[int]) -> List[int]:
        """Favicon sizes must be positive pixel dimensions."""
        bad = [s for s in v if s <= 0 or s > 1024]
        if bad:
            raise ValueError(f"Invalid favicon sizes: {bad}")
        return v


class SeoConfig(_ConfigModel):
    """Search engine settings."""

    base_url: Optional[str] = Field(None, description="Canonical site URL")
    site_name: Optional[str] = None
    twitter_handle: Optional[str] = None
    default_og_image: Optional[str] = None
    enable_schema_org: bool = True
    enable_sitemap: bool = True
    sitemap_changefreq: Literal[
        "always", "hourly", "daily", "weekly", "monthly", "yearly", "never"
    ] = "daily"
    sitemap_priority: float = Field(default=0.7, ge=0.0, le=1.0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> Optional[str]:
        """Require an http(s) URL and drop a trailing slash."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v.rstrip("/")


class BudgetsConfig(_ConfigModel):
    """Performance budgets, bytes and milliseconds."""

    max_bundle_size: int = Field(default=200_000, gt=0)
    max_image_size: int = Field(default=100_000, gt=0)
    max_lcp: int = Field(default=2000, gt=0)


class PerformanceConfig(_ConfigModel):
    """Performance targets."""

    target_score: int = Field(default=90, ge=0, le=100)
    image_quality: int = Field(default=85, ge=1, le=100)
    enable_webp: bool = True
    enable_avif: bool = False
    enable_lazy_loading: bool = True
    enable_compression: bool = True
    budgets: BudgetsConfig = Field(default_factory=BudgetsConfig)


class DeployConfig(_ConfigModel):
    """Deployment settings."""

    platform: Optional[Literal["vercel", "netlify", "railway", "render"]] = None
    auto_confirm: bool = False


class ShipConfig(_ConfigModel):
    """Complete project configuration."""

    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    seo: SeoConfig = Field(default_factory=SeoConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
