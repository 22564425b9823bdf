"""
Settings loading from YAML and environment variables.

Resolution order (later wins):
1. ``ServerSettings`` defaults
2. YAML file (``config_path`` argument or ``DOCINTEL_CONFIG``)
3. Environment variables

Environment Variables:
    AZURE_DOCUMENT_INTELLIGENCE_ENDPOINT: Resource endpoint (required)
    AZURE_DOCUMENT_INTELLIGENCE_API_KEY: Subscription key (required)
    DOCINTEL_API_VERSION: REST API version
    DOCINTEL_HTTP_TIMEOUT: Per-request timeout in seconds
    DOCINTEL_POLL_MAX_ATTEMPTS: Status polls per analysis
    DOCINTEL_POLL_RETRY_DELAY: Seconds between status polls
    DOCINTEL_ALLOWED_MODELS: Comma separated model ids ("" allows any)
    LOGLEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from pydantic import ValidationError

from docintel.core.domain.errors import ConfigError
from docintel.core.domain.settings import ServerSettings

logger = structlog.get_logger(__name__)

CONFIG_PATH_ENV = "DOCINTEL_CONFIG"

ENV_FIELDS: dict[str, str] = {
    "AZURE_DOCUMENT_INTELLIGENCE_ENDPOINT": "endpoint",
    "AZURE_DOCUMENT_INTELLIGENCE_API_KEY": "api_key",
    "DOCINTEL_API_VERSION": "api_version",
    "DOCINTEL_HTTP_TIMEOUT": "http_timeout",
    "DOCINTEL_POLL_MAX_ATTEMPTS": "poll_max_attempts",
    "DOCINTEL_POLL_RETRY_DELAY": "poll_retry_delay",
    "DOCINTEL_ALLOWED_MODELS": "allowed_models",
    "LOGLEVEL": "log_level",
}

_FIELD_TO_ENV = {field: env for env, field in ENV_FIELDS.items()}


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(
            f"Config file not found: {path}", details={"path": str(path)}
        )
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(
            f"Failed to read config file {path}: {exc}",
            details={"path": str(path)},
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping",
            details={"path": str(path)},
        )
    return data


def _read_env(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = environ.get(env_name)
        if raw is None:
            continue
        if field_name == "allowed_models":
            values[field_name] = [item.strip() for item in raw.split(",") if item.strip()]
        else:
            values[field_name] = raw
    return values


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerSettings:
    """
    Load and validate the server settings.

    Args:
        config_path: Optional YAML file; falls back to ``DOCINTEL_CONFIG``
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated ServerSettings

    Raises:
        ConfigError: If the file is unreadable, a required value is missing,
            or a value fails validation
    """
    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {}
    path_value = config_path or env.get(CONFIG_PATH_ENV)
    if path_value:
        path = Path(path_value)
        raw.update(_read_yaml(path))
        logger.debug("settings.file_loaded", path=str(path))
    raw.update(_read_env(env))

    try:
        return ServerSettings.model_validate(raw)
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "<root>"
            source = _FIELD_TO_ENV.get(field)
            label = f"{field} ({source})" if source else field
            problems.append(f"{label}: {error['msg']}")
        raise ConfigError(
            "Invalid configuration: " + "; ".join(problems),
            details={"errors": problems},
        ) from exc
