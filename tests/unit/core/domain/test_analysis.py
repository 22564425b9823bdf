"""Tests for analysis request value objects and polling policy."""

import pytest

from docintel.core.domain.analysis import (
    InlineSource,
    JobStatus,
    PollingPolicy,
    UrlSource,
    build_analysis_request,
)
from docintel.core.domain.errors import InvalidInputError


class TestSources:
    def test_url_source(self) -> None:
        assert UrlSource("https://example.com/a.pdf").url == "https://example.com/a.pdf"

    @pytest.mark.parametrize("url", ["", "   "])
    def test_url_source_rejects_blank(self, url: str) -> None:
        with pytest.raises(InvalidInputError):
            UrlSource(url)

    def test_inline_source(self) -> None:
        source = InlineSource(content=b"%PDF", content_type="application/pdf")
        assert source.content == b"%PDF"
        assert "%PDF" not in repr(source)

    def test_inline_source_rejects_empty_content(self) -> None:
        with pytest.raises(InvalidInputError, match="documentContent must not be empty"):
            InlineSource(content=b"", content_type="application/pdf")

    def test_inline_source_requires_content_type(self) -> None:
        with pytest.raises(InvalidInputError, match="contentType must be provided"):
            InlineSource(content=b"data", content_type="")


class TestBuildAnalysisRequest:
    def test_url(self) -> None:
        request = build_analysis_request(document_url="https://example.com/a.pdf")
        assert isinstance(request, UrlSource)

    def test_inline(self) -> None:
        request = build_analysis_request(content=b"data", content_type="image/png")
        assert request == InlineSource(content=b"data", content_type="image/png")

    def test_neither(self) -> None:
        with pytest.raises(InvalidInputError, match="but not both"):
            build_analysis_request()

    def test_both(self) -> None:
        with pytest.raises(InvalidInputError, match="but not both"):
            build_analysis_request(
                document_url="https://example.com/a.pdf",
                content=b"data",
                content_type="application/pdf",
            )

    def test_inline_without_content_type(self) -> None:
        with pytest.raises(InvalidInputError, match="contentType"):
            build_analysis_request(content=b"data")


class TestJobStatus:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("notStarted", JobStatus.NOT_STARTED),
            ("running", JobStatus.RUNNING),
            ("succeeded", JobStatus.SUCCEEDED),
            ("failed", JobStatus.FAILED),
        ],
    )
    def test_parse_known(self, raw: str, expected: JobStatus) -> None:
        assert JobStatus.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["weird_status", "Succeeded", "", None])
    def test_parse_unknown(self, raw) -> None:
        assert JobStatus.parse(raw) is None


class TestPollingPolicy:
    def test_defaults(self) -> None:
        policy = PollingPolicy()
        assert policy.max_attempts == 10
        assert policy.retry_delay == 5.0

    def test_zero_delay_allowed(self) -> None:
        assert PollingPolicy(retry_delay=0).retry_delay == 0

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError):
            PollingPolicy(max_attempts=0)

    def test_rejects_negative_delay(self) -> None:
        with pytest.raises(ValueError):
            PollingPolicy(retry_delay=-1)
