"""Input validation helpers for the Overleaf MCP system.

Validators return ``(is_valid, error_message)`` tuples so tools can report
problems without raising; ``require_safe_path`` is the raising variant used
inside the mirror.
"""

from __future__ import annotations

import re
from typing import Any

from ..exceptions import ValidationError
from ..models import SectionKind

# Boundary limits
MAX_CONTENT_LENGTH = 1_000_000
MAX_COMMIT_MESSAGE_LENGTH = 500

_WINDOWS_ABSOLUTE = re.compile(r"^(?:[A-Za-z]:[\\/]|\\\\)")


def validate_file_path(file_path: Any) -> tuple[bool, str]:
    """Check that a caller-supplied path is relative and stays inside the project."""
    if not isinstance(file_path, str):
        return False, "File path must be a string"
    if not file_path.strip():
        return False, "File path cannot be empty"
    if "\x00" in file_path:
        return False, "File path cannot contain NUL bytes"
    path = file_path.strip()
    if path.startswith("/") or _WINDOWS_ABSOLUTE.match(path):
        return False, "Absolute paths are not allowed"
    if ".." in re.split(r"[\\/]", path):
        return False, "File path cannot contain '..' segments"
    return True, ""


def require_safe_path(file_path: Any) -> str:
    """Return the trimmed path, or raise ``ValidationError`` if it is unsafe."""
    is_valid, error = validate_file_path(file_path)
    if not is_valid:
        raise ValidationError(f"Invalid file path: {error}", field="file_path", value=file_path)
    return file_path.strip()


def validate_content(content: Any, max_length: int = MAX_CONTENT_LENGTH) -> tuple[bool, str]:
    """Validate file content: must be text and within the size cap."""
    if not isinstance(content, str):
        return False, "Content must be a string"
    if len(content) > max_length:
        return False, f"Content too long: {len(content)} characters (maximum {max_length})"
    return True, ""


def validate_commit_message(message: Any, max_length: int = MAX_COMMIT_MESSAGE_LENGTH) -> tuple[bool, str]:
    """Validate a commit message before it reaches git."""
    if not isinstance(message, str):
        return False, "Commit message must be a string"
    if not message.strip():
        return False, "Commit message cannot be empty"
    if len(message) > max_length:
        return False, f"Commit message too long: {len(message)} characters (maximum {max_length})"
    return True, ""


def validate_section_kind(kind: Any) -> tuple[bool, str]:
    """Validate a section type name such as ``subsection``."""
    valid = [k.value for k in SectionKind]
    if kind not in valid:
        return False, f"Invalid section type '{kind}'. Must be one of: {', '.join(valid)}"
    return True, ""


def sanitize_commit_message(message: str, for_shell: bool = True) -> str:
    """Make a commit message safe to place inside a double-quoted shell argument.

    Backslashes are escaped first so the later escapes are not doubled.
    Newlines become spaces and carriage returns are dropped. With
    ``for_shell=False`` only the whitespace normalization is applied, which
    is what argv-based invocations need.
    """
    if for_shell:
        message = (
            message.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("$", "\\$")
            .replace("`", "\\`")
        )
    return message.replace("\n", " ").replace("\r", "").strip()
