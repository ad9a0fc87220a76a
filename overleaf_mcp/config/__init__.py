"""Configuration management for the Overleaf MCP system."""

from .projects import ProjectConfig
from .projects import ProjectRegistry
from .projects import ResolvedProject
from .projects import load_project_registry
from .projects import resolve_project
from .settings import Settings
from .settings import get_settings
from .settings import reset_settings

__all__ = [
    "ProjectConfig",
    "ProjectRegistry",
    "ResolvedProject",
    "Settings",
    "get_settings",
    "load_project_registry",
    "reset_settings",
    "resolve_project",
]
