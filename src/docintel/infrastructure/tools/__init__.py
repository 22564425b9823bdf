"""Tools exposed by the MCP server."""

from docintel.infrastructure.tools.analyze_document_tool import AnalyzeDocumentTool
from docintel.infrastructure.tools.base_tool import BaseTool

__all__ = ["AnalyzeDocumentTool", "BaseTool"]
