"""
shipready - launch readiness checks and ship workflow for web projects.
"""

__version__ = "1.0.0"
