"""
Analyze Document Tool

Exposes ``AnalysisService`` as the ``analyze_document`` tool. Tool arguments
use the camelCase names of the MCP interface (``modelId``, ``documentUrl``,
``documentContent``, ``contentType``).
"""

from __future__ import annotations

from typing import Any

from docintel.application.analysis_service import AnalysisService
from docintel.infrastructure.tools.base_tool import BaseTool


class AnalyzeDocumentTool(BaseTool):
    """Analyze a document with Azure Document Intelligence."""

    tool_name = "analyze_document"

    def __init__(self, service: AnalysisService) -> None:
        self._service = service
        models = ", ".join(f"'{model}'" for model in service.allowed_models)
        self.tool_description = (
            "Analyzes a document using Azure Document Intelligence. "
            + (f"Pass {models} in the modelId parameter. " if models else "")
            + "Provide either documentUrl or base64 documentContent with contentType."
        )
        model_schema: dict[str, Any] = {
            "type": "string",
            "description": "Document Intelligence model id",
        }
        if service.allowed_models:
            model_schema["enum"] = list(service.allowed_models)
        self.tool_parameters_schema = {
            "type": "object",
            "properties": {
                "modelId": model_schema,
                "documentUrl": {
                    "type": "string",
                    "description": "Public URL of the document to analyze",
                },
                "documentContent": {
                    "type": "string",
                    "description": "Base64 encoded document content",
                },
                "contentType": {
                    "type": "string",
                    "description": (
                        "MIME type of documentContent "
                        "(required when documentContent is provided)"
                    ),
                },
            },
            "required": ["modelId"],
            "additionalProperties": False,
        }

    async def _execute(self, **kwargs: Any) -> dict[str, Any]:
        result = await self._service.analyze(
            model_id=kwargs["modelId"],
            document_url=kwargs.get("documentUrl"),
            document_content=kwargs.get("documentContent"),
            content_type=kwargs.get("contentType"),
        )
        return {"success": True, "result": result}
