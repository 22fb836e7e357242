"""Built-in launch check providers."""

from .assets import check_assets
from .compliance import check_analytics, check_legal
from .performance import check_performance
from .security import check_security
from .seo import check_seo
from .site import check_documentation, check_functionality

# Display order of the launch checklist.
DEFAULT_PROVIDERS = [
    check_assets,
    check_seo,
    check_performance,
    check_security,
    check_functionality,
    check_analytics,
    check_documentation,
    check_legal,
]

__all__ = [
    "DEFAULT_PROVIDERS",
    "check_assets",
    "check_seo",
    "check_performance",
    "check_security",
    "check_functionality",
    "check_analytics",
    "check_documentation",
    "check_legal",
]
