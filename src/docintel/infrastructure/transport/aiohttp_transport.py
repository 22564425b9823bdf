"""aiohttp implementation of ``TransportProtocol``.

Usage::

    async with AiohttpTransport(timeout=30.0) as transport:
        response = await transport.send(
            TransportRequest(method="GET", url="https://example.com")
        )
"""

from __future__ import annotations

import asyncio

import aiohttp
import structlog

from docintel.core.domain.errors import TransportError
from docintel.core.interfaces.transport import TransportRequest, TransportResponse

logger = structlog.get_logger(__name__)


class AiohttpTransport:
    """Send requests through one shared ``aiohttp.ClientSession``.

    The session is created on first use. A session passed in by the caller is
    used as-is and left open by ``close()``.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    # ------------------------------------------------------------------
    # TransportProtocol
    # ------------------------------------------------------------------

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Perform one request and read the whole response body."""
        session = self._get_session()
        try:
            async with session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=request.body,
            ) as resp:
                body = await resp.read()
                return TransportResponse(
                    status=resp.status,
                    headers=dict(resp.headers),
                    body=body,
                )
        except asyncio.TimeoutError as exc:
            logger.warning(
                "transport.timeout",
                method=request.method,
                timeout=self._timeout.total,
            )
            raise TransportError(
                f"request timed out after {self._timeout.total}s",
                details={"method": request.method},
            ) from exc
        except aiohttp.ClientError as exc:
            logger.warning(
                "transport.request_failed",
                method=request.method,
                error=str(exc),
            )
            raise TransportError(
                f"failed to send request: {exc}",
                details={"method": request.method},
            ) from exc
