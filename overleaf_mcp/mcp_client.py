"""Clean client interface for Overleaf MCP tools.

This module provides a Python interface to all registered MCP tools, allowing
tests and agents to call them without going through an MCP transport.

All functions in this module correspond directly to registered MCP tools.
Project-bound functions are coroutines, like the tools they wrap.
"""

from __future__ import annotations

# Import the MCP server to access registered tools
from .overleaf_tool_server import mcp_server


def _get_mcp_tool(tool_name: str):
    """Get a registered MCP tool function by name."""
    if (
        hasattr(mcp_server, "_tool_manager")
        and hasattr(mcp_server._tool_manager, "_tools")
        and tool_name in mcp_server._tool_manager._tools
    ):
        tool = mcp_server._tool_manager._tools[tool_name]
        if hasattr(tool, "fn"):
            return tool.fn
    raise RuntimeError(f"MCP tool '{tool_name}' not found or not properly registered")


# File tools
def list_files(extension: str = ".tex", project_name=None, git_token=None, project_id=None):
    """List project files, filtered by extension."""
    return _get_mcp_tool("list_files")(extension, project_name, git_token, project_id)


def read_file(file_path: str, project_name=None, git_token=None, project_id=None):
    """Read a project file."""
    return _get_mcp_tool("read_file")(file_path, project_name, git_token, project_id)


def write_file(file_path: str, content: str, project_name=None, git_token=None, project_id=None):
    """Create or overwrite a project file."""
    return _get_mcp_tool("write_file")(file_path, content, project_name, git_token, project_id)


def delete_file(file_path: str, project_name=None, git_token=None, project_id=None):
    """Delete a project file."""
    return _get_mcp_tool("delete_file")(file_path, project_name, git_token, project_id)


# Section tools
def get_sections(file_path: str, project_name=None, git_token=None, project_id=None):
    """List all sections of a LaTeX file."""
    return _get_mcp_tool("get_sections")(file_path, project_name, git_token, project_id)


def get_section_content(file_path: str, section_title: str, project_name=None, git_token=None, project_id=None):
    """Read one section by exact title."""
    return _get_mcp_tool("get_section_content")(file_path, section_title, project_name, git_token, project_id)


def get_sections_by_type(file_path: str, section_type: str, project_name=None, git_token=None, project_id=None):
    """List the sections of one kind."""
    return _get_mcp_tool("get_sections_by_type")(file_path, section_type, project_name, git_token, project_id)


# Version control tools
def commit_changes(message: str, project_name=None, git_token=None, project_id=None):
    """Commit every change in the mirror."""
    return _get_mcp_tool("commit_changes")(message, project_name, git_token, project_id)


def push_changes(project_name=None, git_token=None, project_id=None):
    """Push committed changes to Overleaf."""
    return _get_mcp_tool("push_changes")(project_name, git_token, project_id)


def git_status(project_name=None, git_token=None, project_id=None):
    """Report the working-copy status."""
    return _get_mcp_tool("git_status")(project_name, git_token, project_id)


# Project tools
def list_projects():
    """List configured projects."""
    return _get_mcp_tool("list_projects")()


def status_summary(project_name=None):
    """Summarize a project."""
    return _get_mcp_tool("status_summary")(project_name)


__all__ = [
    "list_files",
    "read_file",
    "write_file",
    "delete_file",
    "get_sections",
    "get_section_content",
    "get_sections_by_type",
    "commit_changes",
    "push_changes",
    "git_status",
    "list_projects",
    "status_summary",
]
