"""Azure Document Intelligence analysis client.

Runs one analysis as two phases against the REST API:

1. Initiate: ``POST .../documentModels/{modelId}:analyze`` and read the job
   handle from the ``Operation-Location`` response header.
2. Poll: ``GET {Operation-Location}`` until the job reports a terminal
   status, waiting a fixed delay between attempts and giving up after the
   attempt ceiling of the ``PollingPolicy``.

The client holds no per-call state, so one instance can serve concurrent
analyses as long as the transport can.
"""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Awaitable, TypeVar

import structlog

from docintel.core.domain.analysis import (
    JSON_CONTENT_TYPE,
    AnalysisRequest,
    InlineSource,
    JobStatus,
    PollingPolicy,
    UrlSource,
)
from docintel.core.domain.errors import (
    PHASE_INITIATE,
    PHASE_POLL,
    AnalysisCancelledError,
    InvalidInputError,
    InvalidResponseError,
    JobFailedError,
    MissingJobHandleError,
    PollingTimedOutError,
    TransportError,
    UnexpectedStatusError,
    UnknownJobStatusError,
)
from docintel.core.domain.models import AnalysisOutcome
from docintel.core.domain.settings import DEFAULT_API_VERSION
from docintel.core.interfaces.transport import (
    TransportProtocol,
    TransportRequest,
    TransportResponse,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

API_KEY_HEADER = "Ocp-Apim-Subscription-Key"
OPERATION_LOCATION_HEADER = "Operation-Location"

HTTP_OK = 200
HTTP_ACCEPTED = 202


class DocumentIntelligenceClient:
    """Submit a document for analysis and poll the job to completion."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        transport: TransportProtocol,
        *,
        api_version: str = DEFAULT_API_VERSION,
        polling: PollingPolicy | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._transport = transport
        self._api_version = api_version
        self._polling = polling or PollingPolicy()

    async def analyze_document(
        self,
        model_id: str,
        request: AnalysisRequest,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> AnalysisOutcome:
        """
        Analyze a document and return the succeeded status envelope.

        Args:
            model_id: Remote model to run (e.g. "prebuilt-read")
            request: ``UrlSource`` or ``InlineSource``
            cancel_event: Optional cancellation token. Setting it aborts the
                running request or the wait between polls.

        Returns:
            The envelope of the poll that reported ``succeeded``, unchanged

        Raises:
            InvalidInputError: Empty model id or unsupported request type
            TransportError: Network failure in either phase
            UnexpectedStatusError: Non-202 initiate or non-200 poll response
            MissingJobHandleError: 202 without Operation-Location
            InvalidResponseError: Poll body is not a JSON object with a status
            JobFailedError: The job reported ``failed``
            UnknownJobStatusError: The job reported an unrecognized status
            PollingTimedOutError: Attempts exhausted while still running
            AnalysisCancelledError: ``cancel_event`` was set
        """
        if not model_id:
            raise InvalidInputError("modelId must not be empty")
        if not isinstance(request, (UrlSource, InlineSource)):
            raise InvalidInputError("no document source provided (URL or content)")

        log = logger.bind(model_id=model_id)
        started = time.monotonic()
        try:
            operation_location = await self._initiate(
                model_id, request, cancel_event, log
            )
            result = await self._poll(operation_location, cancel_event, log)
        except AnalysisCancelledError as exc:
            log.info("analysis.cancelled", phase=exc.phase)
            raise
        except asyncio.CancelledError:
            log.info("analysis.cancelled", phase="task")
            raise

        log.info(
            "analysis.succeeded",
            duration_seconds=round(time.monotonic() - started, 3),
        )
        return result

    # ------------------------------------------------------------------
    # Phase 1: initiate
    # ------------------------------------------------------------------

    def _analyze_url(self, model_id: str) -> str:
        return (
            f"{self._endpoint}/documentintelligence/documentModels/"
            f"{model_id}:analyze?api-version={self._api_version}"
        )

    def _build_initiate_request(
        self, model_id: str, request: AnalysisRequest
    ) -> TransportRequest:
        if isinstance(request, UrlSource):
            body = json.dumps({"urlSource": request.url}).encode("utf-8")
            content_type = JSON_CONTENT_TYPE
        else:
            body = request.content
            content_type = request.content_type

        return TransportRequest(
            method="POST",
            url=self._analyze_url(model_id),
            headers={
                "Content-Type": content_type,
                API_KEY_HEADER: self._api_key,
            },
            body=body,
        )

    async def _initiate(
        self,
        model_id: str,
        request: AnalysisRequest,
        cancel_event: asyncio.Event | None,
        log: Any,
    ) -> str:
        outgoing = self._build_initiate_request(model_id, request)
        log.info(
            "analysis.initiate_started",
            source="url" if isinstance(request, UrlSource) else "inline",
            content_type=outgoing.header("Content-Type"),
        )

        response = await self._send(outgoing, cancel_event, PHASE_INITIATE)

        if response.status != HTTP_ACCEPTED:
            log.warning("analysis.initiate_rejected", http_status=response.status)
            raise UnexpectedStatusError(
                response.status, phase=PHASE_INITIATE, body=response.text()
            )

        operation_location = response.header(OPERATION_LOCATION_HEADER)
        if not operation_location:
            raise MissingJobHandleError()

        log.info("analysis.initiated", operation_location=operation_location)
        return operation_location

    # ------------------------------------------------------------------
    # Phase 2: poll
    # ------------------------------------------------------------------

    async def _poll(
        self,
        operation_location: str,
        cancel_event: asyncio.Event | None,
        log: Any,
    ) -> AnalysisOutcome:
        outgoing = TransportRequest(
            method="GET",
            url=operation_location,
            headers={API_KEY_HEADER: self._api_key},
        )
        max_attempts = self._polling.max_attempts

        for attempt in range(1, max_attempts + 1):
            response = await self._send(outgoing, cancel_event, PHASE_POLL)
            if response.status != HTTP_OK:
                log.warning(
                    "analysis.poll_rejected",
                    attempt=attempt,
                    http_status=response.status,
                )
                raise UnexpectedStatusError(response.status, phase=PHASE_POLL)

            envelope = _decode_envelope(response)
            raw_status = envelope.get("status")
            if not isinstance(raw_status, str):
                raise InvalidResponseError(
                    "polling response has no status field",
                    details={"attempt": attempt},
                )

            log.debug("analysis.poll_status", attempt=attempt, status=raw_status)
            status = JobStatus.parse(raw_status)

            if status is JobStatus.SUCCEEDED:
                return AnalysisOutcome(envelope)
            if status is JobStatus.FAILED:
                service_error = envelope.get("error")
                log.warning(
                    "analysis.failed", attempt=attempt, service_error=service_error
                )
                raise JobFailedError(
                    service_error=service_error
                    if isinstance(service_error, dict)
                    else None
                )
            if status is None:
                log.warning(
                    "analysis.unknown_status", attempt=attempt, status=raw_status
                )
                raise UnknownJobStatusError(raw_status)

            if attempt < max_attempts:
                await self._wait(cancel_event)

        log.warning("analysis.poll_timed_out", attempts=max_attempts)
        raise PollingTimedOutError(max_attempts)

    # ------------------------------------------------------------------
    # Cancellation-aware primitives
    # ------------------------------------------------------------------

    async def _send(
        self,
        request: TransportRequest,
        cancel_event: asyncio.Event | None,
        phase: str,
    ) -> TransportResponse:
        try:
            return await _until_cancelled(
                self._transport.send(request), cancel_event, phase
            )
        except TransportError as exc:
            raise TransportError(
                exc.message, phase=phase, details=exc.details
            ) from exc

    async def _wait(self, cancel_event: asyncio.Event | None) -> None:
        """Sleep the fixed retry delay, waking early if cancelled."""
        delay = self._polling.retry_delay
        if cancel_event is None:
            await asyncio.sleep(delay)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return
        raise AnalysisCancelledError(phase=PHASE_POLL)


async def _until_cancelled(
    operation: Awaitable[T],
    cancel_event: asyncio.Event | None,
    phase: str,
) -> T:
    """Await ``operation`` unless ``cancel_event`` fires first."""
    if cancel_event is None:
        return await operation
    if cancel_event.is_set():
        if asyncio.iscoroutine(operation):
            operation.close()
        raise AnalysisCancelledError(phase=phase)

    task = asyncio.ensure_future(operation)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()

    if task.done() and not task.cancelled():
        return task.result()
    raise AnalysisCancelledError(phase=phase)


def _decode_envelope(response: TransportResponse) -> dict[str, Any]:
    try:
        data = json.loads(response.body)
    except ValueError as exc:
        raise InvalidResponseError(
            f"failed to unmarshal polling response: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise InvalidResponseError("polling response is not a JSON object")
    return data
