"""Typer-based CLI for ManifestTools with Pydantic v2 configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ManifestTools.config import ManifestToolsConfig, export_config_schema, load_config
from ManifestTools.converters import convert_to
from ManifestTools.errors import ManifestToolsError, describe_error
from ManifestTools.http_session import build_http_client
from ManifestTools.io_utils import get_manifest_from_file, write_to_file
from ManifestTools.locator import get_manifest_url_from_site
from ManifestTools.logging_utils import setup_logging
from ManifestTools.models import ManifestInfo
from ManifestTools.resolver import get_manifest_from_site

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="Retrieve, convert, and write web app manifests.")

LOGGER = logging.getLogger(__name__)


@dataclass
class CliState:
    """Options shared by every command."""

    config: ManifestToolsConfig = field(default_factory=ManifestToolsConfig)
    verbose: bool = False


# ============================================================================
# Setup
# ============================================================================


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML or JSON config file",
        envvar="MANIFEST_TOOLS_CONFIG",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    """Load configuration and logging before any command runs."""
    setup_logging(level="DEBUG" if verbose else "WARNING", json_logs=json_logs)
    try:
        cfg = load_config(path=config)
    except ValueError as e:
        err_console.print(f"[red]✗ Invalid configuration: {e}[/red]")
        raise typer.Exit(code=2)
    ctx.obj = CliState(config=cfg, verbose=verbose)


def _fail(exc: ManifestToolsError, state: CliState) -> None:
    message, suggestion = describe_error(exc)
    err_console.print(f"[red]✗ Error: {message}[/red]")
    if suggestion:
        err_console.print(f"[yellow]{suggestion}[/yellow]")
    if state.verbose:
        LOGGER.debug("Command failed", exc_info=exc)
    raise typer.Exit(code=1)


def _emit(info: ManifestInfo, output: Optional[Path], state: CliState) -> None:
    """Write ``info`` to ``output`` or print its content to stdout."""
    if output is not None:
        write_to_file(info, output, output=state.config.output)
        console.print(f"[green]✓ Manifest ({info.format}) written to {output}[/green]")
    else:
        typer.echo(
            json.dumps(
                info.content,
                indent=state.config.output.indent,
                ensure_ascii=state.config.output.ensure_ascii,
            )
        )


# ============================================================================
# Commands
# ============================================================================


@app.command()
def fetch(
    ctx: typer.Context,
    site_url: str = typer.Argument(..., help="Site whose manifest should be retrieved"),
    target_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Target format (w3c or chromeOS)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write manifest here"),
) -> None:
    """Retrieve a site's manifest (or a default one) and convert it."""
    state: CliState = ctx.obj
    try:
        with build_http_client(state.config.http) as client:
            info = get_manifest_from_site(site_url, client=client, settings=state.config.http)
        converted = convert_to(info, target_format or state.config.default_format)
        _emit(converted, output, state)
    except ManifestToolsError as e:
        _fail(e, state)


@app.command()
def convert(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Manifest file to convert"),
    target_format: str = typer.Option(..., "--format", "-f", help="Target format"),
    source_format: Optional[str] = typer.Option(
        None, "--from", help="Format of the input file (default: w3c)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write manifest here"),
) -> None:
    """Convert a manifest file to another format."""
    state: CliState = ctx.obj
    try:
        info = get_manifest_from_file(input_path)
        info.format = source_format
        converted = convert_to(info, target_format)
        _emit(converted, output, state)
    except ManifestToolsError as e:
        _fail(e, state)


@app.command()
def locate(
    ctx: typer.Context,
    site_url: str = typer.Argument(..., help="Site to inspect"),
) -> None:
    """Print the manifest URL a site declares."""
    state: CliState = ctx.obj
    try:
        with build_http_client(state.config.http) as client:
            manifest_url = get_manifest_url_from_site(
                site_url, client=client, settings=state.config.http
            )
    except ManifestToolsError as e:
        _fail(e, state)
        return

    if manifest_url is None:
        console.print(f"[yellow]No manifest declared by {site_url}[/yellow]")
    else:
        typer.echo(manifest_url)


@app.command()
def schema(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save schema to file"),
) -> None:
    """Export JSON Schema for ManifestToolsConfig."""
    schema_data = export_config_schema()

    if output:
        output.write_text(json.dumps(schema_data, indent=2), encoding="utf-8")
        console.print(f"[green]✓ Schema written to {output}[/green]")
    else:
        console.print(Panel(json.dumps(schema_data, indent=2), title="JSON Schema", expand=False))


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
