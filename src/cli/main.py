"""stackexport CLI (Typer).

Commands:
- `export`: read the input JSON, fetch the questions, write the CSV.
- `doctor`: environment diagnostics and user configuration.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.stackexchange import StackExchangeClient
from cli import doctor
from cli.ui_components import build_questions_table, build_summary_panel, print_banner
from core.config import load_settings
from core.errors import ConfigError, StackExportError
from core.services.export_pipeline import ExportRequest, OutputFormat, PipelineHooks, run_export

app = typer.Typer(
    no_args_is_help=True,
    help="Export Stack Exchange questions listed in a JSON file to CSV.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

_PREVIEW_ROWS = 20


def configure_logging(*, verbose: bool, level: str) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; keep it for --verbose only.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def export(
    input_path: Path = typer.Option(
        Path("input.json"),
        "--input",
        "-i",
        help="JSON file path for input data.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Override the `output` path from the input file.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.CSV,
        "--format",
        "-f",
        case_sensitive=False,
        help="csv (selected columns) or json (full response).",
    ),
    site: str | None = typer.Option(None, "--site", help="Override the Stack Exchange site."),
    preview: bool = typer.Option(False, "--preview/--no-preview", help="Print the exported rows."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Fetch the questions named in the input file and write them out."""

    try:
        settings = load_settings()
    except ConfigError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    configure_logging(verbose=verbose, level=settings.log_level)

    if not no_banner:
        print_banner(_console)
    _console.print("Starting the export...")

    hooks = PipelineHooks(
        config_loaded=lambda cfg: _console.print(
            f"[dim]{len(cfg.question_ids)} question id(s) requested[/dim]"
        ),
        fetched=lambda resp: _console.print(f"Questions found: {len(resp.items)}"),
        warning=lambda message: _err_console.print(f"[yellow]Warning:[/yellow] {message}"),
    )
    request = ExportRequest(
        input_path=input_path,
        output_override=output,
        site_override=site,
        output_format=output_format,
    )

    try:
        result = asyncio.run(
            run_export(
                request,
                source=StackExchangeClient(settings),
                settings=settings,
                hooks=hooks,
            )
        )
    except StackExportError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if preview and result.response.items:
        _console.print(build_questions_table(result.response.items, limit=_PREVIEW_ROWS))
    _console.print(build_summary_panel(result))


def run() -> None:
    app()
