"""Shared helpers."""

from .framework import Framework, FrameworkInfo, detect_framework

__all__ = [
    "Framework",
    "FrameworkInfo",
    "detect_framework",
]
