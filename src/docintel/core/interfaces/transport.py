"""
HTTP Transport Protocol

Defines the single capability the analysis client needs from the network:
send one request, receive one fully-read response. Production code uses
``AiohttpTransport``; tests implement the protocol directly with scripted
responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol


@dataclass(frozen=True)
class TransportRequest:
    """One outgoing HTTP request."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return _lookup(self.headers, name)


@dataclass(frozen=True)
class TransportResponse:
    """One fully-read HTTP response."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return _lookup(self.headers, name)

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


def _lookup(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


class TransportProtocol(Protocol):
    """
    Protocol for performing HTTP requests.

    Implementations must be safe for concurrent use: several analyses may
    share one transport.

    Error Handling:
        Network-level failures (connection refused, DNS, timeouts) must be
        raised as ``docintel.core.domain.errors.TransportError``. HTTP error
        statuses are NOT errors at this level; they are returned as normal
        responses and interpreted by the caller.
    """

    async def send(self, request: TransportRequest) -> TransportResponse:
        """
        Perform one HTTP request.

        Args:
            request: Method, URL, headers and optional body

        Returns:
            The response with its body fully read

        Raises:
            TransportError: On any network-level failure
        """
        ...
