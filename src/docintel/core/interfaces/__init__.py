"""
Core Protocol Interfaces

Protocol interfaces for the external dependencies of docintel. Protocols
keep the analysis client independent of a concrete HTTP library and make
every collaborator replaceable in tests.

Available Protocols:
    - TransportProtocol: Perform one HTTP request
    - AnalysisClientProtocol: Submit-then-poll document analysis
    - ToolProtocol: Tools exposed by the MCP server
"""

from docintel.core.interfaces.analysis import AnalysisClientProtocol
from docintel.core.interfaces.tools import ToolProtocol
from docintel.core.interfaces.transport import (
    TransportProtocol,
    TransportRequest,
    TransportResponse,
)

__all__ = [
    "AnalysisClientProtocol",
    "ToolProtocol",
    "TransportProtocol",
    "TransportRequest",
    "TransportResponse",
]
