"""HTTP transport adapters."""

from docintel.infrastructure.transport.aiohttp_transport import AiohttpTransport

__all__ = ["AiohttpTransport"]
