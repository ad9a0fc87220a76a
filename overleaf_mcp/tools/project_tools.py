"""Project Overview Tools.

This module contains MCP tools that aggregate over the other operations:
- list_projects: List the configured projects
- status_summary: Summarize a project's LaTeX files and main-file outline
"""

from mcp.server import FastMCP

from ..config import get_settings
from ..config import load_project_registry
from ..helpers import _build_mirror
from ..helpers import _pick_main_file
from ..helpers import _resolve
from ..logger_config import log_mcp_call
from ..models import ProjectInfo
from ..models import ProjectSummary
from ..models import SectionOutline

OUTLINE_LIMIT = 10


def register_project_tools(mcp_server: FastMCP) -> None:
    """Register all project overview tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    def list_projects() -> list[ProjectInfo]:
        """List all projects configured in the projects file.

        Tokens are never included in the response.

        Parameters:
            None

        Returns:
            List[ProjectInfo]: key, display name and project id of each project.
            Returns an empty list when no projects file is configured.
        """
        registry = load_project_registry(get_settings().projects_file_path)
        return [
            ProjectInfo(key=key, name=config.name or key, project_id=config.project_id or "")
            for key, config in registry.projects.items()
        ]

    @mcp_server.tool()
    @log_mcp_call
    async def status_summary(project_name: str | None = None) -> ProjectSummary:
        """Get a summary of a project using its configured credentials.

        Lists the project's .tex files, picks the main file (the first path
        containing "main", else the first file) and outlines its first ten
        sections.

        Parameters:
            project_name (Optional[str]): Configured project key (default project if omitted)

        Returns:
            ProjectSummary: name, project_id, total_tex_files, files, main_file,
            total_sections, outline and remaining_sections.

        Example Usage:
            ```json
            {
                "name": "status_summary",
                "arguments": {"project_name": "paper"}
            }
            ```
        """
        project = _resolve(project_name)
        mirror = _build_mirror(project)
        files = await mirror.list_files(".tex")
        summary = ProjectSummary(
            name=project.name,
            project_id=project.project_id,
            total_tex_files=len(files),
            files=files,
        )

        main_file = _pick_main_file(files)
        if main_file is None:
            return summary

        sections = await mirror.get_sections(main_file)
        summary.main_file = main_file
        summary.total_sections = len(sections)
        summary.outline = [SectionOutline.from_section(s) for s in sections[:OUTLINE_LIMIT]]
        summary.remaining_sections = max(len(sections) - OUTLINE_LIMIT, 0)
        return summary
