"""
Analysis Service

Tool-invocation boundary for document analysis. Turns the raw arguments of
the ``analyze_document`` tool into a validated ``AnalysisRequest``, runs it
through the analysis client and returns the JSON-ready outcome payload.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import Any, Iterable, Optional

import structlog

from docintel.core.domain.analysis import build_analysis_request
from docintel.core.domain.errors import InvalidInputError
from docintel.core.domain.settings import DEFAULT_ALLOWED_MODELS
from docintel.core.interfaces.analysis import AnalysisClientProtocol

logger = structlog.get_logger(__name__)


class AnalysisService:
    """Validate tool arguments and delegate to the analysis client.

    Args:
        client: Submit-then-poll analysis client
        allowed_models: Model ids accepted by the tool. An empty collection
            accepts any model id.
    """

    def __init__(
        self,
        client: AnalysisClientProtocol,
        allowed_models: Iterable[str] = DEFAULT_ALLOWED_MODELS,
    ) -> None:
        self._client = client
        self._allowed_models = tuple(allowed_models)

    @property
    def allowed_models(self) -> tuple[str, ...]:
        return self._allowed_models

    async def analyze(
        self,
        model_id: str,
        document_url: Optional[str] = None,
        document_content: Optional[str] = None,
        content_type: Optional[str] = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> dict[str, Any]:
        """
        Analyze a document given as URL or base64 content.

        Args:
            model_id: Remote model id
            document_url: Public URL of the document
            document_content: Base64 encoded document bytes
            content_type: MIME type of ``document_content``
            cancel_event: Optional cancellation token

        Returns:
            The succeeded status envelope as a camelCase JSON dictionary

        Raises:
            InvalidInputError: Unsupported model or invalid source combination
            DocintelError: Any failure reported by the analysis client
        """
        if self._allowed_models and model_id not in self._allowed_models:
            raise InvalidInputError(
                f"unsupported modelId: {model_id}",
                details={"allowed_models": list(self._allowed_models)},
            )

        if bool(document_url) == bool(document_content):
            raise InvalidInputError(
                "either documentUrl or documentContent must be provided, but not both"
            )

        content: bytes | None = None
        if document_content:
            if not content_type:
                raise InvalidInputError(
                    "contentType must be provided when using documentContent"
                )
            content = _decode_base64(document_content)

        request = build_analysis_request(
            document_url=document_url,
            content=content,
            content_type=content_type,
        )

        logger.info(
            "analysis_service.analyze",
            model_id=model_id,
            source="url" if document_url else "inline",
            size_bytes=len(content) if content is not None else None,
        )
        outcome = await self._client.analyze_document(
            model_id, request, cancel_event=cancel_event
        )
        return outcome.to_payload()


def _decode_base64(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(f"failed to decode documentContent: {exc}") from exc
