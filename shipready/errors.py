"""
Exception types for shipready.

Runtime project conditions (a failing check, a broken step, a corrupt
state file) are reported through results, never through these. These
are raised for miswired setups that should stop the program.
"""


class ShipReadyError(Exception):
    """Base class for shipready errors."""
    pass


class ConfigError(ShipReadyError):
    """Configuration loading or validation error."""
    pass


class ScoringError(ShipReadyError, ValueError):
    """Invalid point table or readiness threshold."""
    pass


class WorkflowDefinitionError(ShipReadyError, ValueError):
    """Workflow steps or state were wired up incorrectly."""
    pass
