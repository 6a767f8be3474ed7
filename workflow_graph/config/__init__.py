"""Configuration management."""

from workflow_graph.config.settings import (
    Environment,
    LayoutSettings,
    PresentationSettings,
    Settings,
    Theme,
    get_settings,
)

__all__ = [
    "Environment",
    "LayoutSettings",
    "PresentationSettings",
    "Settings",
    "Theme",
    "get_settings",
]
