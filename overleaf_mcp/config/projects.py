"""Project registry and resolution.

Named projects are read from a projects file (JSON or YAML)::

    {
      "projects": {
        "default": {"name": "My Thesis", "projectId": "64f0...", "gitToken": "olp_..."},
        "paper":   {"name": "Conference Paper", "projectId": "6512...", "gitToken": "olp_..."}
      }
    }

The registry is an explicit object handed to :func:`resolve_project`; nothing
here is module-level state.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ProjectConfigurationError
from .settings import Settings

DEFAULT_PROJECT_KEY = "default"


class ProjectConfig(BaseModel):
    """One configured Overleaf project."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    project_id: str | None = Field(default=None, alias="projectId")
    git_token: str | None = Field(default=None, alias="gitToken")


class ProjectRegistry(BaseModel):
    """All configured projects, keyed by short name."""

    projects: dict[str, ProjectConfig] = Field(default_factory=dict)

    def get(self, key: str) -> ProjectConfig | None:
        return self.projects.get(key)

    def keys(self) -> list[str]:
        return list(self.projects)


class ResolvedProject(BaseModel):
    """Credentials and identity of the project a tool call targets."""

    key: str | None
    name: str
    project_id: str
    git_token: str


def load_project_registry(path: str | Path) -> ProjectRegistry:
    """Load the projects file; a missing file yields an empty registry."""
    path = Path(path)
    if not path.is_file():
        return ProjectRegistry()

    try:
        raw = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(raw) or {}
        else:
            data = json.loads(raw) if raw.strip() else {}
        return ProjectRegistry.model_validate(data)
    except (OSError, json.JSONDecodeError, yaml.YAMLError, PydanticValidationError) as e:
        raise ProjectConfigurationError(
            f"Could not load projects file {path}: {e}",
            details={"projects_file": str(path)},
        ) from e


def resolve_project(
    registry: ProjectRegistry,
    settings: Settings,
    project_name: str | None = None,
    git_token: str | None = None,
    project_id: str | None = None,
) -> ResolvedProject:
    """Pick the target project and apply per-call overrides.

    Order: the named project, else the ``default`` project, else the token and
    id from settings/environment. Explicit ``git_token``/``project_id``
    arguments always win.
    """
    key: str | None = None
    config = ProjectConfig()

    if project_name:
        config = registry.get(project_name)
        if config is None:
            available = ", ".join(registry.keys()) or "none"
            raise ProjectConfigurationError(
                f"Unknown project '{project_name}'. Configured projects: {available}",
                details={"project_name": project_name},
            )
        key = project_name
    elif registry.get(DEFAULT_PROJECT_KEY) is not None:
        key = DEFAULT_PROJECT_KEY
        config = registry.get(DEFAULT_PROJECT_KEY)
    else:
        config = ProjectConfig(
            name=settings.overleaf_project_name,
            project_id=settings.overleaf_project_id,
            git_token=settings.overleaf_git_token,
        )

    token = git_token or config.git_token
    pid = project_id or config.project_id
    if not token or not pid:
        raise ProjectConfigurationError(
            "Git token and project ID are required. Set them in the projects file "
            "or the OVERLEAF_GIT_TOKEN / OVERLEAF_PROJECT_ID environment variables."
        )
    return ResolvedProject(key=key, name=config.name or "Unknown Project", project_id=pid, git_token=token)
