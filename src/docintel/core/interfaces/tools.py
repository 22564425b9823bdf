"""
Tool Execution Protocol

This module defines the protocol interface for tools exposed by the MCP
server. A tool is described by its metadata (name, description, JSON
parameter schema) and executed asynchronously with keyword arguments.

Result Format:
    All execute() methods must return Dict with:
    - success: bool - True if execution succeeded
    - result: Any - Tool output (on success)
    - error / error_type / code / details (on failure)

Error Handling:
    Tools should catch domain exceptions and return {"success": False, ...}
    rather than raising. Cancellation (asyncio.CancelledError) is never
    swallowed.
"""

from typing import Any, Protocol


class ToolProtocol(Protocol):
    """Protocol defining the contract for tool implementations."""

    @property
    def name(self) -> str:
        """
        Unique snake_case identifier for the tool.

        Example:
            >>> tool.name
            'analyze_document'
        """
        ...

    @property
    def description(self) -> str:
        """Human-readable description used by clients for tool selection."""
        ...

    @property
    def parameters_schema(self) -> dict[str, Any]:
        """
        JSON Schema describing the keyword arguments of execute().

        Returns:
            Dictionary with JSON Schema structure:
            {
                "type": "object",
                "properties": {
                    "param_name": {
                        "type": "string",
                        "description": "Parameter description"
                    }
                },
                "required": ["param_name"]
            }
        """
        ...

    def validate_params(self, **kwargs: Any) -> tuple[bool, str | None]:
        """
        Validate parameters before execution.

        Returns:
            ``(True, None)`` when valid, ``(False, "error message")`` otherwise.
        """
        ...

    async def execute(self, **kwargs: Any) -> dict[str, Any]:
        """
        Execute the tool with the given parameters.

        Returns:
            Standardized result dictionary (see module docstring)
        """
        ...
