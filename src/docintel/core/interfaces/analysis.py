"""
Analysis Client Protocol

Contract between the tool-invocation layer and the component that runs a
document analysis against the remote service.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from docintel.core.domain.analysis import AnalysisRequest
from docintel.core.domain.models import AnalysisOutcome


class AnalysisClientProtocol(Protocol):
    """Protocol for submit-then-poll document analysis."""

    async def analyze_document(
        self,
        model_id: str,
        request: AnalysisRequest,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> AnalysisOutcome:
        """
        Analyze one document and wait for the remote job to finish.

        Args:
            model_id: Remote model to run (e.g. "prebuilt-layout")
            request: The document source
            cancel_event: Optional token; setting it aborts the analysis

        Returns:
            The unchanged status envelope of the succeeded job

        Raises:
            DocintelError: One of the typed analysis failures
        """
        ...
