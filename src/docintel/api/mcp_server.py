"""Azure Document Intelligence MCP Server.

Provides tools for document understanding:
- analyze_document: Run a Document Intelligence model (prebuilt-read,
  prebuilt-layout, ...) on a document URL or base64 content and return the
  full analyze result
"""

import json
import time
from typing import Any, Sequence

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from docintel.application.analysis_service import AnalysisService
from docintel.core.domain.settings import ServerSettings
from docintel.core.interfaces.tools import ToolProtocol
from docintel.infrastructure.analysis.client import DocumentIntelligenceClient
from docintel.infrastructure.tools.analyze_document_tool import AnalyzeDocumentTool
from docintel.infrastructure.transport.aiohttp_transport import AiohttpTransport

logger = structlog.get_logger(__name__)

SERVER_NAME = "azure-document-intelligence-mcp"


def tool_definitions(tools: Sequence[ToolProtocol]) -> list[Tool]:
    """Convert tool metadata into MCP tool definitions."""
    return [
        Tool(
            name=tool.name,
            description=tool.description,
            inputSchema=tool.parameters_schema,
        )
        for tool in tools
    ]


def _text_result(payload: dict[str, Any], *, is_error: bool) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(payload, indent=2))],
        isError=is_error,
    )


async def dispatch_tool_call(
    tools: Sequence[ToolProtocol],
    name: str,
    arguments: dict[str, Any] | None,
) -> CallToolResult:
    """Execute a tool by name and wrap its result for MCP."""
    tool = next((candidate for candidate in tools if candidate.name == name), None)
    if tool is None:
        logger.warning("tool_unknown", tool=name)
        return _text_result(
            {"success": False, "error": f"Unknown tool: {name}"}, is_error=True
        )

    start_time = time.time()
    logger.info("tool_started", tool=name, arguments=sorted((arguments or {}).keys()))
    result = await tool.execute(**(arguments or {}))
    success = bool(result.get("success"))
    logger.info(
        "tool_finished",
        tool=name,
        duration_seconds=round(time.time() - start_time, 3),
        success=success,
    )

    if success:
        return _text_result(result.get("result", {}), is_error=False)
    return _text_result(result, is_error=True)


def create_server(tools: Sequence[ToolProtocol]) -> Server:
    """Create an MCP server exposing ``tools``."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """Return list of available tools."""
        return tool_definitions(tools)

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Execute a tool and return results."""
        return await dispatch_tool_call(tools, name, arguments)

    return server


def build_service(
    settings: ServerSettings, transport: AiohttpTransport
) -> AnalysisService:
    """Wire settings and transport into the analysis service."""
    client = DocumentIntelligenceClient(
        settings.endpoint,
        settings.api_key.get_secret_value(),
        transport,
        api_version=settings.api_version,
        polling=settings.polling_policy(),
    )
    return AnalysisService(client, allowed_models=settings.allowed_models)


async def run_server(settings: ServerSettings) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    async with AiohttpTransport(timeout=settings.http_timeout) as transport:
        tools = [AnalyzeDocumentTool(build_service(settings, transport))]
        server = create_server(tools)
        logger.info(
            "starting_mcp_server",
            server=SERVER_NAME,
            endpoint=settings.endpoint,
            api_version=settings.api_version,
        )
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )

