"""Version Control Tools.

This module contains MCP tools that move local edits back to Overleaf:
- commit_changes: Stage and commit every change in the mirror
- push_changes: Push committed changes to Overleaf
- git_status: Report the working-copy status
"""

from mcp.server import FastMCP

from ..config import get_settings
from ..exceptions import OverleafMCPError
from ..helpers import _failure_status
from ..helpers import _get_mirror
from ..helpers import _require
from ..logger_config import log_mcp_call
from ..models import OperationStatus
from ..models import StatusReport
from ..utils.validation import validate_commit_message


def register_git_tools(mcp_server: FastMCP) -> None:
    """Register all version control tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    async def commit_changes(
        message: str,
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> OperationStatus:
        """Commit all changes in the local mirror of an Overleaf project.

        Every added, modified and deleted file is staged. A clean working copy is
        reported as success with details.status == "noop". Commits are not sent
        to Overleaf until push_changes is called.

        Parameters:
            message (str): Commit message (at most 500 characters; newlines become spaces)
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            OperationStatus: success flag, git's message and details.status
            ("success" or "noop"). Timeouts fail with error code GIT_TIMEOUT.

        Example Usage:
            ```json
            {
                "name": "commit_changes",
                "arguments": {"message": "Revise introduction"}
            }
            ```
        """
        try:
            _require(validate_commit_message(message, get_settings().max_commit_message_length), "message")
            mirror = _get_mirror(project_name, git_token, project_id)
            result = await mirror.commit(message)
        except OverleafMCPError as e:
            return _failure_status("commit_changes", e)
        return OperationStatus(success=True, message=result.message, details={"status": result.status})

    @mcp_server.tool()
    @log_mcp_call
    async def push_changes(
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> OperationStatus:
        """Push committed changes to Overleaf.

        Parameters:
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            OperationStatus: success flag and git's output. A rejected token fails
            with error code AUTHENTICATION_ERROR; a push slower than the push
            timeout fails with GIT_TIMEOUT.
        """
        try:
            mirror = _get_mirror(project_name, git_token, project_id)
            result = await mirror.push()
        except OverleafMCPError as e:
            return _failure_status("push_changes", e)
        return OperationStatus(success=True, message=result.message)

    @mcp_server.tool()
    @log_mcp_call
    async def git_status(
        project_name: str | None = None,
        git_token: str | None = None,
        project_id: str | None = None,
    ) -> StatusReport:
        """Get the git status of the local mirror after pulling from Overleaf.

        Parameters:
            project_name (Optional[str]): Configured project key (default project if omitted)
            git_token (Optional[str]): Git token overriding the configured one
            project_id (Optional[str]): Project id overriding the configured one

        Returns:
            StatusReport: project_id and the text printed by ``git status``.
        """
        mirror = _get_mirror(project_name, git_token, project_id)
        return StatusReport(project_id=mirror.project_id, status=await mirror.status())
