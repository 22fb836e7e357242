"""Project configuration handling."""

from ..errors import ConfigError
from .defaults import TOOL_DIR, get_default_config
from .loader import ConfigLoader
from .models import (
    AssetsConfig,
    BudgetsConfig,
    DeployConfig,
    PerformanceConfig,
    SeoConfig,
    ShipConfig,
)

__all__ = [
    "AssetsConfig",
    "BudgetsConfig",
    "ConfigError",
    "ConfigLoader",
    "DeployConfig",
    "PerformanceConfig",
    "SeoConfig",
    "ShipConfig",
    "TOOL_DIR",
    "get_default_config",
]
