"""Application services."""

from docintel.application.analysis_service import AnalysisService

__all__ = ["AnalysisService"]
