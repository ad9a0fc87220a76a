"""Centralized configuration management for the Overleaf MCP system.

This module provides a single source of truth for all configuration
including environment variables, mirror paths, git timeouts, boundary limits
and server settings.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

from ..mirror import DEFAULT_COMMIT_TIMEOUT
from ..mirror import DEFAULT_GIT_HOST
from ..mirror import DEFAULT_PUSH_TIMEOUT
from ..mirror import DEFAULT_SYNC_TIMEOUT
from ..mirror import default_base_dir
from ..utils.validation import MAX_COMMIT_MESSAGE_LENGTH
from ..utils.validation import MAX_CONTENT_LENGTH


class Settings(BaseSettings):
    """Centralized settings for the Overleaf MCP system."""

    # === Mirror Configuration ===
    overleaf_temp_dir: str | None = Field(
        default=None, description="Directory holding project mirrors (default: <system temp>/overleaf-mcp)"
    )
    overleaf_git_host: str = Field(default=DEFAULT_GIT_HOST, description="Host serving Overleaf git remotes")
    overleaf_remote_url: str | None = Field(
        default=None, description="Remote URL template overriding the host form; {project_id} is substituted"
    )

    # === Project Configuration ===
    overleaf_projects_file: str = Field(
        default="projects.json", description="JSON or YAML file listing named projects"
    )
    overleaf_git_token: str | None = Field(default=None, description="Default git token")
    overleaf_project_id: str | None = Field(default=None, description="Default project id")
    overleaf_project_name: str | None = Field(default=None, description="Display name of the default project")

    # === Git Configuration ===
    commit_timeout: float = Field(default=DEFAULT_COMMIT_TIMEOUT, description="Seconds allowed for a commit")
    push_timeout: float = Field(default=DEFAULT_PUSH_TIMEOUT, description="Seconds allowed for a push")
    sync_timeout: float = Field(default=DEFAULT_SYNC_TIMEOUT, description="Seconds allowed for clone/pull/status")
    git_author_name: str | None = Field(default=None, description="Commit author name")
    git_author_email: str | None = Field(default=None, description="Commit author email")

    # === Boundary Limits ===
    max_content_length: int = Field(default=MAX_CONTENT_LENGTH, description="Maximum file content size (characters)")
    max_commit_message_length: int = Field(
        default=MAX_COMMIT_MESSAGE_LENGTH, description="Maximum commit message length"
    )

    # === HTTP SSE Server Configuration ===
    sse_host: str = Field(default="localhost", description="SSE server host")
    sse_port: int = Field(default=3001, description="SSE server port")

    # === Logging Configuration ===
    log_level: str = Field(default="INFO", description="Logging level")
    structured_logging: bool = Field(default=True, description="Enable structured JSON error logging")

    # === Metrics Configuration ===
    enable_metrics: bool = Field(default=True, description="Enable metrics collection")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @model_validator(mode="after")
    def validate_configuration(self):
        """Validate configuration consistency."""
        for name in ("commit_timeout", "push_timeout", "sync_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        return self

    @property
    def is_test_environment(self) -> bool:
        """Check if running in test environment."""
        return "PYTEST_CURRENT_TEST" in os.environ

    @property
    def mirror_root_path(self) -> Path:
        """Get the mirror base directory as a Path object."""
        if self.overleaf_temp_dir:
            return Path(self.overleaf_temp_dir).resolve()
        return default_base_dir()

    @property
    def projects_file_path(self) -> Path:
        return Path(self.overleaf_projects_file).expanduser().resolve()

    def remote_url_for(self, project_id: str) -> str | None:
        if not self.overleaf_remote_url:
            return None
        return self.overleaf_remote_url.replace("{project_id}", project_id)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        load_dotenv()  # Load .env file
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (primarily for testing)."""
    global _settings
    _settings = None
