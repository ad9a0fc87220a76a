"""Unit tests for input validation and commit message sanitizing."""

from __future__ import annotations

import pytest

from overleaf_mcp.exceptions import ValidationError
from overleaf_mcp.utils.validation import MAX_COMMIT_MESSAGE_LENGTH
from overleaf_mcp.utils.validation import MAX_CONTENT_LENGTH
from overleaf_mcp.utils.validation import require_safe_path
from overleaf_mcp.utils.validation import sanitize_commit_message
from overleaf_mcp.utils.validation import validate_commit_message
from overleaf_mcp.utils.validation import validate_content
from overleaf_mcp.utils.validation import validate_file_path
from overleaf_mcp.utils.validation import validate_section_kind


class TestValidateFilePath:
    """Tests for the project path guard."""

    @pytest.mark.parametrize(
        "path",
        ["main.tex", "chapters/intro.tex", "figures/plot.v2.pdf", "a..b.tex", "  main.tex  "],
    )
    def test_accepts_relative_paths(self, path):
        assert validate_file_path(path) == (True, "")

    @pytest.mark.parametrize("path", ["", "   ", "\t\n"])
    def test_rejects_empty(self, path):
        is_valid, error = validate_file_path(path)

        assert not is_valid
        assert error == "File path cannot be empty"

    @pytest.mark.parametrize("path", [None, 42, ["main.tex"]])
    def test_rejects_non_strings(self, path):
        is_valid, error = validate_file_path(path)

        assert not is_valid
        assert error == "File path must be a string"

    @pytest.mark.parametrize("path", ["../secret", "chapters/../../etc/passwd", "..", "a\\..\\b"])
    def test_rejects_parent_segments(self, path):
        is_valid, error = validate_file_path(path)

        assert not is_valid
        assert "'..'" in error

    @pytest.mark.parametrize("path", ["/etc/passwd", "C:\\Windows\\win.ini", "c:/x", "\\\\server\\share"])
    def test_rejects_absolute_paths(self, path):
        is_valid, error = validate_file_path(path)

        assert not is_valid
        assert error == "Absolute paths are not allowed"

    def test_rejects_nul_bytes(self):
        is_valid, _ = validate_file_path("main\x00.tex")

        assert not is_valid


class TestRequireSafePath:
    """Tests for the raising path guard."""

    def test_returns_trimmed_path(self):
        assert require_safe_path("  sections/a.tex \n") == "sections/a.tex"

    def test_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            require_safe_path("../outside.tex")

        assert exc_info.value.details["field"] == "file_path"
        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert "Invalid file path" in exc_info.value.message


class TestValidateContent:
    """Tests for file content limits."""

    def test_accepts_content_at_limit(self):
        assert validate_content("x" * MAX_CONTENT_LENGTH) == (True, "")

    def test_rejects_content_over_limit(self):
        is_valid, error = validate_content("x" * (MAX_CONTENT_LENGTH + 1))

        assert not is_valid
        assert "too long" in error

    def test_custom_limit(self):
        assert not validate_content("abcdef", max_length=5)[0]

    def test_empty_content_is_allowed(self):
        assert validate_content("") == (True, "")

    def test_rejects_non_string(self):
        assert not validate_content(b"bytes")[0]


class TestValidateCommitMessage:
    """Tests for commit message limits."""

    def test_accepts_message_at_limit(self):
        assert validate_commit_message("m" * MAX_COMMIT_MESSAGE_LENGTH) == (True, "")

    def test_rejects_message_over_limit(self):
        is_valid, error = validate_commit_message("m" * (MAX_COMMIT_MESSAGE_LENGTH + 1))

        assert not is_valid
        assert "too long" in error

    @pytest.mark.parametrize("message", ["", "   ", "\n"])
    def test_rejects_blank_messages(self, message):
        assert not validate_commit_message(message)[0]

    def test_rejects_non_string(self):
        assert not validate_commit_message(None)[0]


class TestValidateSectionKind:
    """Tests for section type names."""

    @pytest.mark.parametrize("kind", ["part", "chapter", "section", "subparagraph"])
    def test_accepts_known_kinds(self, kind):
        assert validate_section_kind(kind) == (True, "")

    @pytest.mark.parametrize("kind", ["Section", "heading", "", None])
    def test_rejects_unknown_kinds(self, kind):
        is_valid, error = validate_section_kind(kind)

        assert not is_valid
        assert "Must be one of" in error


class TestSanitizeCommitMessage:
    """Tests for commit message sanitizing."""

    def test_plain_message_unchanged(self):
        assert sanitize_commit_message("Update introduction") == "Update introduction"

    def test_escapes_double_quotes(self):
        assert sanitize_commit_message('Fix "typo"') == 'Fix \\"typo\\"'

    def test_escapes_dollar_and_backtick(self):
        assert sanitize_commit_message("cost $5 `now`") == "cost \\$5 \\`now\\`"

    def test_backslash_escaped_before_other_characters(self):
        # \" must become \\\" rather than \\"
        assert sanitize_commit_message('\\"') == '\\\\\\"'

    def test_newlines_become_spaces(self):
        assert sanitize_commit_message("line one\nline two") == "line one line two"

    def test_carriage_returns_dropped(self):
        assert sanitize_commit_message("line one\r\nline two\r") == "line one line two"

    def test_trims_result(self):
        assert sanitize_commit_message("\n  padded  \n") == "padded"

    def test_without_shell_escaping(self):
        message = 'Use "$HOME" and `pwd` \\ here\nnext'

        assert sanitize_commit_message(message, for_shell=False) == 'Use "$HOME" and `pwd` \\ here next'
