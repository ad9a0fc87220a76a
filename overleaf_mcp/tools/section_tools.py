"""Section Tools.

This module contains MCP tools exposing the sectioning structure of LaTeX files:
- get_sections: List every section of a file in document order
- get_section_content: Read the full content of one section by title
- get_sections_by_type: List the sections of a given kind (e.g. only subsections)
"""

from mcp.server import FastMCP

from ..exceptions import SectionNotFoundError
from ..helpers import _get_mirror
from ..helpers import _require
from ..logger_config import log_mcp_call
from ..models import SectionContent
from ..models import SectionsList
from ..utils.validation import validate_file_path
from ..utils.validation import validate_section_kind


def register_section_tools(mcp_server: FastMCP) -> None:
    """Register all section tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    async def get_sections(
        file_path: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> SectionsList:
        """Get all sections from a LaTeX file.

        Recognizes \\part, \\chapter, \\section, \\subsection, \\subsubsection,
        \\paragraph and \\subparagraph, starred or not. Sections are returned flat,
        in document order; a subsection is not nested under its section. Text
        before the first heading is not part of any section.

        Parameters:
            file_path (str): Path of the LaTeX file relative to the project root
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            SectionsList: file_path, total_sections and the sections, each with kind,
            title, start_offset, content and starred.

        Example Usage:
            ```json
            {
                "name": "get_sections",
                "arguments": {"file_path": "main.tex"}
            }
            ```
        """
        _require(validate_file_path(file_path), "file_path")
        mirror = _get_mirror(project_name, git_token, project_id)
        sections = await mirror.get_sections(file_path)
        return SectionsList(file_path=file_path.strip(), total_sections=len(sections), sections=sections)

    @mcp_server.tool()
    @log_mcp_call
    async def get_section_content(
        file_path: str,
        section_title: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> SectionContent:
        """Get the content of a specific section.

        The title must match exactly (case and spacing included). When several
        sections share a title, the first one in the document is returned.

        Parameters:
            file_path (str): Path of the LaTeX file relative to the project root
            section_title (str): Exact title of the section
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            SectionContent: title, kind, content and content_length.

        Example Usage:
            ```json
            {
                "name": "get_section_content",
                "arguments": {"file_path": "main.tex", "section_title": "Introduction"}
            }
            ```
        """
        _require(validate_file_path(file_path), "file_path")
        mirror = _get_mirror(project_name, git_token, project_id)
        section = await mirror.get_section(file_path, section_title)
        if section is None:
            raise SectionNotFoundError(file_path.strip(), section_title)
        return SectionContent(
            file_path=file_path.strip(),
            title=section.title,
            kind=section.kind,
            content=section.content,
            content_length=len(section.content),
        )

    @mcp_server.tool()
    @log_mcp_call
    async def get_sections_by_type(
        file_path: str,
        section_type: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> SectionsList:
        """Get the sections of one kind from a LaTeX file.

        Parameters:
            file_path (str): Path of the LaTeX file relative to the project root
            section_type (str): One of part, chapter, section, subsection,
                subsubsection, paragraph, subparagraph
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            SectionsList: the matching sections in document order.
        """
        _require(validate_file_path(file_path), "file_path")
        _require(validate_section_kind(section_type), "section_type")
        mirror = _get_mirror(project_name, git_token, project_id)
        sections = await mirror.get_sections_by_type(file_path, section_type)
        return SectionsList(file_path=file_path.strip(), total_sections=len(sections), sections=sections)
