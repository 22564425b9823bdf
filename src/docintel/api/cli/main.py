"""docintel CLI entry point."""

from __future__ import annotations

import asyncio
import base64
import json
import mimetypes
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from docintel.api.logging_setup import configure_logging
from docintel.core.domain.errors import DocintelError
from docintel.core.domain.settings import ServerSettings
from docintel.infrastructure.config.settings_loader import load_settings

app = typer.Typer(
    name="docintel-mcp",
    help="Azure Document Intelligence MCP server",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _load(
    config: Optional[Path], log_level: Optional[str], *, json_output: bool = True
) -> ServerSettings:
    try:
        settings = load_settings(config)
    except DocintelError as exc:
        err_console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    configure_logging(log_level or settings.log_level, json_output=json_output)
    return settings


@app.command()
def serve(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML settings file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Override LOGLEVEL"
    ),
):
    """Run the MCP server over stdio."""
    from docintel.api.mcp_server import run_server

    settings = _load(config, log_level)
    asyncio.run(run_server(settings))


@app.command()
def analyze(
    model_id: str = typer.Argument(..., help="Model id, e.g. prebuilt-layout"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Document URL"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="Local document"
    ),
    content_type: Optional[str] = typer.Option(
        None, "--content-type", "-t", help="MIME type of --file (guessed if omitted)"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML settings file"
    ),
    output: str = typer.Option(
        "text", "--output", "-o", help="Output format: text or json"
    ),
):
    """Analyze one document and print the result."""
    if output not in ("text", "json"):
        raise typer.BadParameter(
            f"Invalid output format: {output}. Must be 'text' or 'json'"
        )

    settings = _load(config, "WARNING", json_output=False)

    document_content = None
    if file is not None:
        document_content = base64.b64encode(file.read_bytes()).decode("ascii")
        content_type = content_type or mimetypes.guess_type(file.name)[0]

    try:
        payload = asyncio.run(
            _analyze(settings, model_id, url, document_content, content_type)
        )
    except DocintelError as exc:
        err_console.print(f"[bold red]Error ({exc.code}):[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    if output == "json":
        console.print_json(json.dumps(payload))
    else:
        _print_summary(payload)


async def _analyze(
    settings: ServerSettings,
    model_id: str,
    url: Optional[str],
    document_content: Optional[str],
    content_type: Optional[str],
) -> dict[str, Any]:
    from docintel.api.mcp_server import build_service
    from docintel.infrastructure.transport.aiohttp_transport import AiohttpTransport

    async with AiohttpTransport(timeout=settings.http_timeout) as transport:
        service = build_service(settings, transport)
        return await service.analyze(
            model_id,
            document_url=url,
            document_content=document_content,
            content_type=content_type,
        )


def _print_summary(payload: dict[str, Any]) -> None:
    result = payload.get("analyzeResult") or {}

    table = Table(title="Analysis result", show_header=False)
    table.add_column("Field", style="bold blue")
    table.add_column("Value", style="cyan")
    table.add_row("Status", str(payload.get("status", "")))
    table.add_row("Model", str(result.get("modelId", "")))
    table.add_row("Pages", str(len(result.get("pages") or [])))
    table.add_row("Paragraphs", str(len(result.get("paragraphs") or [])))
    table.add_row("Tables", str(len(result.get("tables") or [])))
    table.add_row("Key/value pairs", str(len(result.get("keyValuePairs") or [])))
    console.print(table)

    content = result.get("content") or ""
    if content:
        excerpt = content if len(content) <= 500 else content[:500] + "..."
        console.print("[bold]Content:[/bold]")
        console.print(excerpt, markup=False)


@app.command()
def version():
    """Show docintel version."""
    from docintel import __version__

    console.print(f"[bold blue]Version:[/bold blue] [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
