"""Tests for the docintel-mcp CLI commands.

The analysis itself is patched out; these tests cover argument handling,
configuration errors and output rendering.
"""

from __future__ import annotations

import base64
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from docintel import __version__
from docintel.api.cli.main import app
from docintel.core.domain.errors import JobFailedError

runner = CliRunner()

_ANALYZE = "docintel.api.cli.main._analyze"
_CONFIGURE_LOGGING = "docintel.api.cli.main.configure_logging"

ENV = {
    "AZURE_DOCUMENT_INTELLIGENCE_ENDPOINT": "https://test.cognitiveservices.azure.com",
    "AZURE_DOCUMENT_INTELLIGENCE_API_KEY": "secret",
    "DOCINTEL_CONFIG": None,
}

PAYLOAD = {
    "status": "succeeded",
    "analyzeResult": {
        "modelId": "prebuilt-read",
        "content": "Hello world",
        "pages": [{"pageNumber": 1, "spans": []}],
    },
}


@pytest.fixture(autouse=True)
def logging_setup():
    with patch(_CONFIGURE_LOGGING) as configure:
        yield configure


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_analyze_url_text_output():
    with patch(_ANALYZE, new=AsyncMock(return_value=PAYLOAD)) as analyze:
        result = runner.invoke(
            app, ["analyze", "prebuilt-read", "--url", "https://example.com/a.pdf"], env=ENV
        )

    assert result.exit_code == 0, result.output
    assert "succeeded" in result.output
    assert "Hello world" in result.output
    _, model_id, url, content, content_type = analyze.await_args.args
    assert model_id == "prebuilt-read"
    assert url == "https://example.com/a.pdf"
    assert content is None
    assert content_type is None


def test_analyze_file_json_output(tmp_path: Path):
    document = tmp_path / "doc.pdf"
    document.write_bytes(b"%PDF-1.4 dummy")

    with patch(_ANALYZE, new=AsyncMock(return_value=PAYLOAD)) as analyze:
        result = runner.invoke(
            app,
            ["analyze", "prebuilt-layout", "--file", str(document), "-o", "json"],
            env=ENV,
        )

    assert result.exit_code == 0, result.output
    assert '"modelId": "prebuilt-read"' in result.output
    _, _, url, content, content_type = analyze.await_args.args
    assert url is None
    assert base64.b64decode(content) == b"%PDF-1.4 dummy"
    assert content_type == "application/pdf"


def test_analyze_invalid_output_format():
    result = runner.invoke(
        app, ["analyze", "prebuilt-read", "--url", "https://x", "-o", "xml"], env=ENV
    )

    assert result.exit_code != 0


def test_analyze_config_error_exits_1():
    env = {**ENV, "AZURE_DOCUMENT_INTELLIGENCE_ENDPOINT": None}

    with patch(_ANALYZE, new=AsyncMock(return_value=PAYLOAD)) as analyze:
        result = runner.invoke(app, ["analyze", "prebuilt-read", "--url", "https://x"], env=env)

    assert result.exit_code == 1
    analyze.assert_not_awaited()


def test_analyze_domain_error_exits_1():
    with patch(_ANALYZE, new=AsyncMock(side_effect=JobFailedError())):
        result = runner.invoke(app, ["analyze", "prebuilt-read", "--url", "https://x"], env=ENV)

    assert result.exit_code == 1


def test_analyze_logs_in_console_format(logging_setup):
    with patch(_ANALYZE, new=AsyncMock(return_value=PAYLOAD)):
        result = runner.invoke(app, ["analyze", "prebuilt-read", "--url", "https://x"], env=ENV)

    assert result.exit_code == 0, result.output
    logging_setup.assert_called_once_with("WARNING", json_output=False)


def test_serve_logs_json(logging_setup):
    with patch("docintel.api.mcp_server.run_server", new=AsyncMock()) as run_server:
        result = runner.invoke(app, ["serve", "--log-level", "debug"], env=ENV)

    assert result.exit_code == 0, result.output
    logging_setup.assert_called_once_with("debug", json_output=True)
    run_server.assert_awaited_once()
