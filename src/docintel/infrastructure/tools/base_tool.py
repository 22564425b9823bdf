"""Base tool class that reduces boilerplate for ToolProtocol implementations.

Provides:
- Class-level attributes for ``name``, ``description``, ``parameters_schema``
  instead of requiring ``@property`` methods on every tool.
- A default ``validate_params`` that checks required parameters and basic
  JSON types from the schema.
- An ``execute`` wrapper that validates, calls ``_execute`` and converts
  raised ``DocintelError``s into a standardised error payload via
  ``tool_error_payload``.
"""

from __future__ import annotations

from typing import Any

import structlog

from docintel.core.domain.errors import (
    DocintelError,
    InvalidInputError,
    ToolError,
    tool_error_payload,
)

logger = structlog.get_logger(__name__)

# Type mapping from JSON Schema type names to Python built-in types.
_JSON_SCHEMA_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
}


class BaseTool:
    """Convenience base class for tools that satisfy ``ToolProtocol``.

    Subclasses must set ``tool_name``, ``tool_description`` and
    ``tool_parameters_schema`` and override ``_execute`` with the actual
    tool logic.
    """

    tool_name: str = ""
    """Unique snake_case identifier for the tool."""

    tool_description: str = ""
    """Human-readable description used by clients for tool selection."""

    tool_parameters_schema: dict[str, Any] = {}
    """JSON Schema for the keyword arguments of ``execute``."""

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def description(self) -> str:
        return self.tool_description

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return self.tool_parameters_schema

    def validate_params(self, **kwargs: Any) -> tuple[bool, str | None]:
        """Validate parameters against ``parameters_schema``.

        Checks that all ``required`` parameters are present, that provided
        values match the basic JSON type of their schema entry, and that
        enum values are valid when specified.

        Returns:
            ``(True, None)`` when valid, ``(False, "error message")`` otherwise.
        """
        schema = self.parameters_schema
        if not schema:
            return True, None

        properties = schema.get("properties", {})

        for param_name in schema.get("required", []):
            if param_name not in kwargs:
                return False, f"Missing required parameter: {param_name}"

        for param_name, value in kwargs.items():
            prop_schema = properties.get(param_name)
            if prop_schema is None:
                if schema.get("additionalProperties") is False:
                    return False, f"Unknown parameter: {param_name}"
                continue

            expected_type_name = prop_schema.get("type")
            if expected_type_name and value is not None:
                expected_types = _JSON_SCHEMA_TYPE_MAP.get(expected_type_name)
                # bool is an int subclass; keep it out of integer/number.
                if expected_types and (
                    not isinstance(value, expected_types)
                    or (isinstance(value, bool) and expected_type_name != "boolean")
                ):
                    return (
                        False,
                        f"Parameter '{param_name}' must be a {expected_type_name}",
                    )

            allowed_values = prop_schema.get("enum")
            if allowed_values is not None and value not in allowed_values:
                return (
                    False,
                    f"Parameter '{param_name}' must be one of {allowed_values}",
                )

        return True, None

    async def execute(self, **kwargs: Any) -> dict[str, Any]:
        """Validate parameters and run ``_execute`` with error handling.

        Returns:
            Standardised result dictionary with at least a ``success`` key.
        """
        is_valid, error_msg = self.validate_params(**kwargs)
        if not is_valid:
            return tool_error_payload(
                InvalidInputError(error_msg or "invalid parameters"),
                extra={"tool_name": self.name},
            )

        try:
            return await self._execute(**kwargs)
        except DocintelError as exc:
            logger.warning(
                "tool.execute_failed",
                tool=self.name,
                error=str(exc),
                code=exc.code,
            )
            return tool_error_payload(exc, extra={"tool_name": self.name})
        except Exception as exc:
            logger.exception(
                "tool.execute_crashed",
                tool=self.name,
                error_type=type(exc).__name__,
            )
            tool_error = ToolError(
                f"{self.name} failed: {exc}",
                tool_name=self.name,
                details={"kwargs": _sanitize_kwargs(kwargs)},
            )
            return tool_error_payload(tool_error)

    async def _execute(self, **kwargs: Any) -> dict[str, Any]:
        """Actual tool logic to be implemented by subclasses."""
        raise NotImplementedError(
            f"{type(self).__name__} must implement _execute()"
        )


def _sanitize_kwargs(kwargs: dict[str, Any], max_str_len: int = 200) -> dict[str, Any]:
    """Create a loggable copy of kwargs with long strings truncated.

    Keeps base64 document content out of error payloads.
    """
    sanitized: dict[str, Any] = {}
    for key, value in kwargs.items():
        if isinstance(value, str) and len(value) > max_str_len:
            sanitized[key] = value[:max_str_len] + "..."
        else:
            sanitized[key] = value
    return sanitized
