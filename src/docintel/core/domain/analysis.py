"""
Analysis Request Models

Value objects describing what is submitted to the analysis service and how
the resulting job is polled:

- UrlSource / InlineSource: the two mutually exclusive document sources
- JobStatus: status values reported by the remote analysis job
- PollingPolicy: attempt ceiling and fixed delay between status polls
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from docintel.core.domain.errors import InvalidInputError

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class UrlSource:
    """A document the service downloads itself from a public URL."""

    url: str

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise InvalidInputError("documentUrl must not be empty")


@dataclass(frozen=True)
class InlineSource:
    """Raw document bytes uploaded with the analyze request."""

    content: bytes = field(repr=False)
    content_type: str

    def __post_init__(self) -> None:
        if not self.content:
            raise InvalidInputError("documentContent must not be empty")
        if not self.content_type or not self.content_type.strip():
            raise InvalidInputError(
                "contentType must be provided when using documentContent"
            )


AnalysisRequest = Union[UrlSource, InlineSource]


def build_analysis_request(
    document_url: Optional[str] = None,
    content: Optional[bytes] = None,
    content_type: Optional[str] = None,
) -> AnalysisRequest:
    """Resolve the caller's inputs into exactly one document source.

    Raises:
        InvalidInputError: If neither or both sources are given, or inline
            content arrives without a content type.
    """
    has_url = bool(document_url)
    has_content = bool(content)
    if has_url == has_content:
        raise InvalidInputError(
            "either documentUrl or documentContent must be provided, but not both"
        )
    if has_url:
        return UrlSource(url=document_url)  # type: ignore[arg-type]
    return InlineSource(content=content, content_type=content_type or "")  # type: ignore[arg-type]


class JobStatus(str, Enum):
    """Status values reported by a remote analysis job."""

    NOT_STARTED = "notStarted"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def parse(cls, value: str | None) -> Optional["JobStatus"]:
        """Return the matching status, or None for an unrecognized string."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class PollingPolicy:
    """Bounded, fixed-delay polling of a remote job."""

    max_attempts: int = 10
    retry_delay: float = 5.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must not be negative")
