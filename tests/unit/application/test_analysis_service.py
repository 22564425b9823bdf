"""Unit tests for AnalysisService."""

import asyncio
import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from docintel.application.analysis_service import AnalysisService
from docintel.core.domain.analysis import InlineSource, UrlSource
from docintel.core.domain.errors import InvalidInputError, JobFailedError
from docintel.core.domain.models import AnalysisOutcome

DOC_URL = "https://example.com/doc.pdf"


@pytest.fixture
def succeeded_envelope() -> AnalysisOutcome:
    return AnalysisOutcome(
        {
            "status": "succeeded",
            "analyzeResult": {"modelId": "prebuilt-read", "content": "Hello"},
        }
    )


@pytest.fixture
def mock_client(succeeded_envelope):
    client = MagicMock()
    client.analyze_document = AsyncMock(return_value=succeeded_envelope)
    return client


@pytest.mark.asyncio
async def test_url_request(mock_client):
    service = AnalysisService(mock_client)

    payload = await service.analyze("prebuilt-read", document_url=DOC_URL)

    assert payload == {
        "status": "succeeded",
        "analyzeResult": {"modelId": "prebuilt-read", "content": "Hello"},
    }
    mock_client.analyze_document.assert_awaited_once_with(
        "prebuilt-read", UrlSource(DOC_URL), cancel_event=None
    )


@pytest.mark.asyncio
async def test_inline_request_decodes_base64(mock_client):
    service = AnalysisService(mock_client)
    encoded = base64.b64encode(b"dummy-content").decode("ascii")

    await service.analyze(
        "prebuilt-layout",
        document_content=encoded,
        content_type="application/pdf",
    )

    _, request = mock_client.analyze_document.await_args.args
    assert request == InlineSource(content=b"dummy-content", content_type="application/pdf")


@pytest.mark.asyncio
async def test_cancel_event_forwarded(mock_client):
    service = AnalysisService(mock_client)
    cancel_event = asyncio.Event()

    await service.analyze("prebuilt-read", document_url=DOC_URL, cancel_event=cancel_event)

    assert mock_client.analyze_document.await_args.kwargs["cancel_event"] is cancel_event


@pytest.mark.asyncio
async def test_unsupported_model(mock_client):
    service = AnalysisService(mock_client)

    with pytest.raises(InvalidInputError, match="unsupported modelId: prebuilt-invoice"):
        await service.analyze("prebuilt-invoice", document_url=DOC_URL)

    mock_client.analyze_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_empty_allow_list_accepts_any_model(mock_client):
    service = AnalysisService(mock_client, allowed_models=[])

    await service.analyze("prebuilt-invoice", document_url=DOC_URL)

    assert service.allowed_models == ()
    mock_client.analyze_document.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"document_url": "", "document_content": ""},
        {
            "document_url": DOC_URL,
            "document_content": "ZHVtbXk=",
            "content_type": "application/pdf",
        },
    ],
)
async def test_exactly_one_source(mock_client, kwargs):
    service = AnalysisService(mock_client)

    with pytest.raises(InvalidInputError, match="but not both"):
        await service.analyze("prebuilt-read", **kwargs)

    mock_client.analyze_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_content_requires_content_type(mock_client):
    service = AnalysisService(mock_client)

    with pytest.raises(InvalidInputError, match="contentType must be provided"):
        await service.analyze("prebuilt-read", document_content="ZHVtbXk=")


@pytest.mark.asyncio
async def test_invalid_base64(mock_client):
    service = AnalysisService(mock_client)

    with pytest.raises(InvalidInputError, match="failed to decode documentContent"):
        await service.analyze(
            "prebuilt-read",
            document_content="not base64!!",
            content_type="application/pdf",
        )

    mock_client.analyze_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_client_errors_propagate(mock_client):
    mock_client.analyze_document.side_effect = JobFailedError()
    service = AnalysisService(mock_client)

    with pytest.raises(JobFailedError):
        await service.analyze("prebuilt-read", document_url=DOC_URL)
