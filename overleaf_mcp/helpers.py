"""Shared helper functions for the Overleaf MCP tool modules.

Resolves which project a tool call targets and builds the mirror for it from
the current settings.
"""

from __future__ import annotations

from .config import ResolvedProject
from .config import get_settings
from .config import load_project_registry
from .config import resolve_project
from .exceptions import OverleafMCPError
from .exceptions import ValidationError
from .logger_config import ErrorCategory
from .logger_config import log_structured_error
from .mirror import RepositoryMirror
from .models import OperationStatus

MAIN_FILE_HINT = "main"


def _resolve(
    project_name: str | None = None,
    git_token: str | None = None,
    project_id: str | None = None,
) -> ResolvedProject:
    """Resolve a tool call's project arguments to credentials."""
    settings = get_settings()
    registry = load_project_registry(settings.projects_file_path)
    return resolve_project(registry, settings, project_name, git_token, project_id)


def _build_mirror(project: ResolvedProject) -> RepositoryMirror:
    settings = get_settings()
    return RepositoryMirror(
        project.git_token,
        project.project_id,
        base_dir=settings.mirror_root_path,
        git_host=settings.overleaf_git_host,
        remote_url=settings.remote_url_for(project.project_id),
        commit_timeout=settings.commit_timeout,
        push_timeout=settings.push_timeout,
        sync_timeout=settings.sync_timeout,
        author_name=settings.git_author_name,
        author_email=settings.git_author_email,
    )


def _get_mirror(
    project_name: str | None = None,
    git_token: str | None = None,
    project_id: str | None = None,
) -> RepositoryMirror:
    """Return the mirror for the project a tool call targets."""
    return _build_mirror(_resolve(project_name, git_token, project_id))


def _require(check: tuple[bool, str], field: str) -> None:
    """Raise ValidationError for a failed ``(is_valid, error)`` check."""
    is_valid, error = check
    if not is_valid:
        raise ValidationError(error, field=field)


def _failure_status(operation: str, error: OverleafMCPError, **context) -> OperationStatus:
    """Log a failed mutating operation and turn it into an OperationStatus."""
    log_structured_error(
        category=ErrorCategory.WARNING if isinstance(error, ValidationError) else ErrorCategory.ERROR,
        message=f"{operation} failed: {error.message}",
        exception=error,
        context=context,
        operation=operation,
    )
    return OperationStatus(success=False, message=error.user_message, details=error.to_dict())


def _pick_main_file(files: list[str]) -> str | None:
    """Return the first file whose path mentions ``main``, else the first file."""
    for file_path in files:
        if MAIN_FILE_HINT in file_path:
            return file_path
    return files[0] if files else None
