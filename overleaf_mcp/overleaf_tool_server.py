"""MCP Server for Overleaf Projects.

This module provides a FastMCP-based MCP server giving access to Overleaf
projects through local git mirrors. It exposes tools for listing, reading,
writing and deleting project files, inspecting the section structure of LaTeX
documents, and committing and pushing changes back to Overleaf.
"""

import argparse
import atexit
import json
import sys

from dotenv import load_dotenv
from mcp.server import FastMCP
from starlette.requests import Request
from starlette.responses import Response

from .config import get_settings
from .logger_config import configure_logging
from .metrics_config import METRICS_ENABLED
from .metrics_config import ensure_metrics_initialized
from .metrics_config import get_metrics_export
from .metrics_config import get_metrics_summary
from .metrics_config import is_metrics_enabled
from .metrics_config import shutdown_metrics
from .models import CommitResult
from .models import FileContent
from .models import FileListing
from .models import OperationStatus
from .models import ProjectInfo
from .models import ProjectSummary
from .models import Section
from .models import SectionContent
from .models import SectionsList
from .models import StatusReport

# Import tool registration functions from modular architecture
from .tools import register_file_tools
from .tools import register_git_tools
from .tools import register_project_tools
from .tools import register_section_tools

# Load environment variables from .env file
load_dotenv()

mcp_server = FastMCP(name="OverleafTools")

register_file_tools(mcp_server)
register_section_tools(mcp_server)
register_git_tools(mcp_server)
register_project_tools(mcp_server)


@mcp_server.custom_route("/metrics", methods=["GET"], name="metrics")
async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics endpoint for monitoring MCP tool usage."""
    if not is_metrics_enabled():
        return Response(content="# Metrics disabled\n", status_code=503, media_type="text/plain")
    metrics_data, content_type = get_metrics_export()
    return Response(content=metrics_data, status_code=200, media_type=content_type)


@mcp_server.custom_route("/metrics/summary", methods=["GET"], name="metrics_summary")
async def metrics_summary_endpoint(request: Request) -> Response:
    """JSON summary of the metrics configuration."""
    return Response(content=json.dumps(get_metrics_summary(), indent=2), media_type="application/json")


@mcp_server.custom_route("/health", methods=["GET"], name="health")
async def health_endpoint(request: Request) -> Response:
    return Response(content=json.dumps({"status": "ok", "server": mcp_server.name}), media_type="application/json")


__all__ = [
    # Models and types
    "CommitResult",
    "FileContent",
    "FileListing",
    "OperationStatus",
    "ProjectInfo",
    "ProjectSummary",
    "Section",
    "SectionContent",
    "SectionsList",
    "StatusReport",
    # MCP Server (primary export)
    "mcp_server",
]


def _note(message: str) -> None:
    # stdout belongs to the stdio transport
    print(message, file=sys.stderr)


# --- Main Server Execution ---
def main():
    """Run the main entry point for the server with argument parsing."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Overleaf MCP Server")
    parser.add_argument(
        "transport",
        choices=["sse", "stdio"],
        default="stdio",
        nargs="?",
        help="Transport: 'sse' for HTTP SSE or 'stdio' for standard I/O (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default=settings.sse_host,
        help=f"Host to bind to for SSE transport (default: {settings.sse_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.sse_port,
        help=f"Port to bind to for SSE transport (default: {settings.sse_port})",
    )

    args = parser.parse_args()

    configure_logging(settings.log_level)
    if settings.enable_metrics:
        ensure_metrics_initialized()
        atexit.register(shutdown_metrics)

    _note(f"Overleaf tool server starting. Tools exposed by '{mcp_server.name}'")
    _note(f"Mirrors stored under: {settings.mirror_root_path}")
    _note(f"Projects file: {settings.projects_file_path}")
    _note(f"Metrics: {'enabled' if METRICS_ENABLED and settings.enable_metrics else 'disabled'}")

    if args.transport == "stdio":
        _note("MCP server running with stdio transport. Waiting for client connection...")
        mcp_server.run(transport="stdio")
    else:
        _note(f"MCP server running with HTTP SSE transport on {args.host}:{args.port}")
        _note(f"SSE endpoint: http://{args.host}:{args.port}/sse")
        _note(f"Health endpoint: http://{args.host}:{args.port}/health")
        _note(f"Metrics endpoint: http://{args.host}:{args.port}/metrics")
        mcp_server.settings.host = args.host
        mcp_server.settings.port = args.port
        mcp_server.run(transport="sse")


if __name__ == "__main__":
    main()
