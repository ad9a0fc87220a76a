"""File Management Tools.

This module contains MCP tools for the files of a mirrored Overleaf project:
- list_files: List project files, filtered by extension
- read_file: Read a file's full text
- write_file: Create or overwrite a file
- delete_file: Remove a file
"""

from mcp.server import FastMCP

from ..config import get_settings
from ..exceptions import OverleafMCPError
from ..helpers import _failure_status
from ..helpers import _get_mirror
from ..helpers import _require
from ..logger_config import log_mcp_call
from ..models import FileContent
from ..models import FileListing
from ..models import OperationStatus
from ..utils.validation import validate_content
from ..utils.validation import validate_file_path


def register_file_tools(mcp_server: FastMCP) -> None:
    """Register all file management tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    async def list_files(
        extension: str | None = ".tex",
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> FileListing:
        """List all files in an Overleaf project.

        The project is cloned on first use and pulled on every later call, so the
        listing reflects the latest state on Overleaf. Git metadata is never listed.

        Parameters:
            extension (Optional[str]): Suffix filter such as ".tex" or ".bib" (default: ".tex").
                Pass an empty string to list every file.
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            FileListing: project_id, extension, total_files and the sorted list of
            project-relative paths.

        Example Usage:
            ```json
            {
                "name": "list_files",
                "arguments": {"extension": ".bib"}
            }
            ```
        """
        mirror = _get_mirror(project_name, git_token, project_id)
        files = await mirror.list_files(extension or None)
        return FileListing(
            project_id=mirror.project_id,
            extension=extension or None,
            total_files=len(files),
            files=files,
        )

    @mcp_server.tool()
    @log_mcp_call
    async def read_file(
        file_path: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> FileContent:
        """Read a file from an Overleaf project.

        Parameters:
            file_path (str): Path relative to the project root, e.g. "chapters/intro.tex"
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            FileContent: the file path, its size in characters and its full text.

        Example Usage:
            ```json
            {
                "name": "read_file",
                "arguments": {"file_path": "main.tex"}
            }
            ```
        """
        _require(validate_file_path(file_path), "file_path")
        mirror = _get_mirror(project_name, git_token, project_id)
        content = await mirror.read_file(file_path)
        return FileContent(
            project_id=mirror.project_id,
            file_path=file_path.strip(),
            size=len(content),
            content=content,
        )

    @mcp_server.tool()
    @log_mcp_call
    async def write_file(
        file_path: str,
        content: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> OperationStatus:
        """Create or overwrite a file in the local mirror of an Overleaf project.

        Missing directories are created. The change stays local until it is
        committed with commit_changes and sent with push_changes.

        Parameters:
            file_path (str): Path relative to the project root
            content (str): Full new content of the file (at most 1,000,000 characters)
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            OperationStatus: success flag, message and the local path written.

        Example Usage:
            ```json
            {
                "name": "write_file",
                "arguments": {
                    "file_path": "sections/results.tex",
                    "content": "\\\\section{Results}\\nWe observe..."
                }
            }
            ```
        """
        try:
            _require(validate_file_path(file_path), "file_path")
            _require(validate_content(content, get_settings().max_content_length), "content")
            mirror = _get_mirror(project_name, git_token, project_id)
            local_path = await mirror.write_file(file_path, content)
        except OverleafMCPError as e:
            return _failure_status("write_file", e, file_path=str(file_path))
        return OperationStatus(
            success=True,
            message=f"File '{file_path.strip()}' written ({len(content)} characters)",
            details={"file_path": file_path.strip(), "local_path": local_path},
        )

    @mcp_server.tool()
    @log_mcp_call
    async def delete_file(
        file_path: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> OperationStatus:
        """Delete a file from the local mirror of an Overleaf project.

        Parameters:
            file_path (str): Path relative to the project root
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            OperationStatus: success flag and message. Deleting a missing file fails
            with a FILE_NOT_FOUND error code in details.
        """
        try:
            _require(validate_file_path(file_path), "file_path")
            mirror = _get_mirror(project_name, git_token, project_id)
            local_path = await mirror.delete_file(file_path)
        except OverleafMCPError as e:
            return _failure_status("delete_file", e, file_path=str(file_path))
        return OperationStatus(
            success=True,
            message=f"File '{file_path.strip()}' deleted",
            details={"file_path": file_path.strip(), "local_path": local_path},
        )
