"""Document Intelligence analysis client."""

from docintel.infrastructure.analysis.client import DocumentIntelligenceClient

__all__ = ["DocumentIntelligenceClient"]
