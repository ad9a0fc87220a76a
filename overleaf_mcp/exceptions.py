"""Custom exception hierarchy for the Overleaf MCP system.

Every error raised by the mirror, the resolver or the validation layer derives
from ``OverleafMCPError`` so tools can convert failures into a single
caller-visible message format.
"""

from __future__ import annotations

from typing import Any


class OverleafMCPError(Exception):
    """Base exception for all Overleaf MCP errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = details or {}
        self.user_message = user_message or message

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for structured responses."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
        }


class ValidationError(OverleafMCPError):
    """Raised when a path, content payload or commit message is rejected."""

    def __init__(self, message: str, field: str | None = None, value: Any = None, **kwargs):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = value
        super().__init__(message, error_code="VALIDATION_ERROR", details=details, **kwargs)


class FileNotFoundInProjectError(OverleafMCPError):
    """Raised when a file does not exist in the mirrored project."""

    def __init__(self, project_id: str, file_path: str, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"project_id": project_id, "file_path": file_path})
        super().__init__(
            f"File '{file_path}' not found in project '{project_id}'",
            error_code="FILE_NOT_FOUND",
            details=details,
            user_message=f"The file '{file_path}' does not exist in this project.",
            **kwargs,
        )


class SectionNotFoundError(OverleafMCPError):
    """Raised when no section carries the requested title."""

    def __init__(self, file_path: str, section_title: str, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"file_path": file_path, "section_title": section_title})
        super().__init__(
            f'Section "{section_title}" not found in {file_path}',
            error_code="SECTION_NOT_FOUND",
            details=details,
            user_message=f'Section "{section_title}" not found',
            **kwargs,
        )


class AuthenticationError(OverleafMCPError):
    """Raised when the remote rejects the git token."""

    def __init__(self, operation: str, reason: str, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"operation": operation, "failure_reason": reason})
        super().__init__(
            f"{operation} failed: authentication error: {reason}",
            error_code="AUTHENTICATION_ERROR",
            details=details,
            user_message=f"{operation.capitalize()} failed: Authentication error - check git token",
            **kwargs,
        )


class GitTimeoutError(OverleafMCPError):
    """Raised when a git subprocess exceeds its time bound."""

    def __init__(self, operation: str, timeout: float, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"operation": operation, "timeout_seconds": timeout})
        user_message = f"{operation.capitalize()} operation timed out"
        if operation in ("push", "clone", "pull"):
            user_message += " - check network connection"
        super().__init__(
            f"git {operation} exceeded {timeout:g}s",
            error_code="GIT_TIMEOUT",
            details=details,
            user_message=user_message,
            **kwargs,
        )

    @property
    def operation(self) -> str:
        return self.details["operation"]


class SyncError(OverleafMCPError):
    """Raised when clone or pull fails for a reason other than auth or timeout."""

    def __init__(self, operation: str, reason: str, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"operation": operation, "failure_reason": reason})
        super().__init__(
            f"git {operation} failed: {reason}",
            error_code="SYNC_ERROR",
            details=details,
            user_message=f"Could not synchronize with Overleaf ({operation}): {reason}",
            **kwargs,
        )


class GitOperationError(OverleafMCPError):
    """Fallback for unrecognized git failures; keeps the original output."""

    def __init__(self, operation: str, reason: str, **kwargs):
        details = kwargs.pop("details", {})
        details.update({"operation": operation, "failure_reason": reason})
        super().__init__(
            f"{operation.capitalize()} failed: {reason}",
            error_code="GIT_OPERATION_ERROR",
            details=details,
            **kwargs,
        )

    @property
    def operation(self) -> str:
        return self.details["operation"]


class ProjectConfigurationError(OverleafMCPError):
    """Raised when a project cannot be resolved to a token and project id."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="PROJECT_CONFIGURATION_ERROR", **kwargs)
