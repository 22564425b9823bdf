"""
Domain Models

This package contains the core domain models for docintel:
- Document sources, job status and polling policy
- The analyze result schema
- Server settings schema
- Error types
"""

from docintel.core.domain.analysis import (
    AnalysisRequest,
    InlineSource,
    JobStatus,
    PollingPolicy,
    UrlSource,
    build_analysis_request,
)
from docintel.core.domain.models import (
    AnalysisOutcome,
    AnalyzeOperationResult,
    AnalyzeResult,
)

__all__ = [
    "AnalysisOutcome",
    "AnalysisRequest",
    "AnalyzeOperationResult",
    "AnalyzeResult",
    "InlineSource",
    "JobStatus",
    "PollingPolicy",
    "UrlSource",
    "build_analysis_request",
]
