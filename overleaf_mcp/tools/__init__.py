"""Tool category modules for the Overleaf MCP system.

This package contains MCP tools organized by functional categories:
- file_tools: list_files, read_file, write_file, delete_file
- section_tools: get_sections, get_section_content, get_sections_by_type
- git_tools: commit_changes, push_changes, git_status
- project_tools: list_projects, status_summary
"""

from .file_tools import register_file_tools
from .git_tools import register_git_tools
from .project_tools import register_project_tools
from .section_tools import register_section_tools

__all__ = [
    "register_file_tools",
    "register_section_tools",
    "register_git_tools",
    "register_project_tools",
]
