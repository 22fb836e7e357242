"""
Default configuration values.

Written by `shipready config init` as the starting config.yaml.
"""

from typing import Any, Dict

TOOL_DIR = ".ship-toolkit"


def get_default_config() -> Dict[str, Any]:
    """Get the default project configuration template."""
    return {
        "assets": {
            "output_dir": "public",
            "favicon_sizes": [16, 32, 48, 64, 128, 256],
            "generate_pwa": True,
            "image_format": "png",
            "quality": 90,
            "style": "gradient",
        },
        "seo": {
            "enable_schema_org": True,
            "enable_sitemap": True,
            "sitemap_changefreq": "daily",
            "sitemap_priority": 0.7,
        },
        "performance": {
            "target_score": 90,
            "image_quality": 85,
            "enable_webp": True,
            "enable_avif": False,
            "enable_lazy_loading": True,
            "enable_compression": True,
            "budgets": {
                "max_bundle_size": 200000,
                "max_image_size": 100000,
                "max_lcp": 2000,
            },
        },
        "deploy": {
            "auto_confirm": False,
        },
    }
