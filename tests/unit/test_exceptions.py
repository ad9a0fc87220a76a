"""Unit tests for the custom exception hierarchy."""

from __future__ import annotations

import pytest

from overleaf_mcp.exceptions import AuthenticationError
from overleaf_mcp.exceptions import FileNotFoundInProjectError
from overleaf_mcp.exceptions import GitOperationError
from overleaf_mcp.exceptions import GitTimeoutError
from overleaf_mcp.exceptions import OverleafMCPError
from overleaf_mcp.exceptions import ProjectConfigurationError
from overleaf_mcp.exceptions import SectionNotFoundError
from overleaf_mcp.exceptions import SyncError
from overleaf_mcp.exceptions import ValidationError


class TestOverleafMCPError:
    """Tests for the base OverleafMCPError class."""

    def test_basic_initialization(self):
        """Test basic exception creation."""
        error = OverleafMCPError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.error_code == "UNKNOWN_ERROR"
        assert error.details == {}
        assert error.user_message == "Something went wrong"

    def test_to_dict(self):
        """Test conversion to dictionary."""
        error = OverleafMCPError(
            message="Test error",
            error_code="TEST_ERROR",
            details={"info": "data"},
            user_message="Test message",
        )

        result = error.to_dict()

        assert result == {
            "error_type": "OverleafMCPError",
            "error_code": "TEST_ERROR",
            "message": "Test error",
            "user_message": "Test message",
            "details": {"info": "data"},
        }

    def test_to_dict_preserves_subclass_name(self):
        assert ValidationError("Invalid input").to_dict()["error_type"] == "ValidationError"

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            FileNotFoundInProjectError("p", "a.tex"),
            SectionNotFoundError("a.tex", "Intro"),
            AuthenticationError("push", "403"),
            GitTimeoutError("commit", 30),
            SyncError("pull", "diverged"),
            GitOperationError("commit", "index.lock exists"),
            ProjectConfigurationError("no token"),
        ],
    )
    def test_all_errors_share_base(self, error):
        assert isinstance(error, OverleafMCPError)


class TestValidationError:
    """Tests for ValidationError."""

    def test_field_and_value_in_details(self):
        error = ValidationError("Invalid file path", field="file_path", value="../x")

        assert error.error_code == "VALIDATION_ERROR"
        assert error.details == {"field": "file_path", "invalid_value": "../x"}

    def test_without_field(self):
        assert ValidationError("Invalid").details == {}


class TestNotFoundErrors:
    """Tests for missing files and sections."""

    def test_file_not_found(self):
        error = FileNotFoundInProjectError("proj123", "chapters/a.tex")

        assert error.error_code == "FILE_NOT_FOUND"
        assert error.details == {"project_id": "proj123", "file_path": "chapters/a.tex"}
        assert "chapters/a.tex" in error.user_message

    def test_section_not_found(self):
        error = SectionNotFoundError("main.tex", "Results")

        assert error.error_code == "SECTION_NOT_FOUND"
        assert error.user_message == 'Section "Results" not found'


class TestGitErrors:
    """Tests for git failure errors."""

    def test_authentication_error_message(self):
        error = AuthenticationError("push", "The requested URL returned error: 403")

        assert error.error_code == "AUTHENTICATION_ERROR"
        assert error.user_message == "Push failed: Authentication error - check git token"
        assert error.details["operation"] == "push"

    def test_commit_timeout(self):
        error = GitTimeoutError("commit", 30.0)

        assert error.error_code == "GIT_TIMEOUT"
        assert error.operation == "commit"
        assert error.details["timeout_seconds"] == 30.0
        assert error.user_message == "Commit operation timed out"
        assert error.message == "git commit exceeded 30s"

    def test_push_timeout_mentions_network(self):
        error = GitTimeoutError("push", 60)

        assert error.user_message == "Push operation timed out - check network connection"

    def test_timeout_is_not_builtin_timeout(self):
        assert not isinstance(GitTimeoutError("push", 60), TimeoutError)

    def test_sync_error(self):
        error = SyncError("pull", "fatal: refusing to merge unrelated histories")

        assert error.error_code == "SYNC_ERROR"
        assert "pull" in error.user_message

    def test_git_operation_error_keeps_output(self):
        error = GitOperationError("commit", "fatal: Unable to create index.lock")

        assert error.message == "Commit failed: fatal: Unable to create index.lock"
        assert error.operation == "commit"
        assert error.details["failure_reason"] == "fatal: Unable to create index.lock"

    def test_project_configuration_error(self):
        error = ProjectConfigurationError("Unknown project 'x'", details={"project_name": "x"})

        assert error.error_code == "PROJECT_CONFIGURATION_ERROR"
        assert error.details == {"project_name": "x"}
