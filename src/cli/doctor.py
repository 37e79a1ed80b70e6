"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, load_settings
from core.errors import ConfigError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()
_err_console = Console(stderr=True)


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    url = f"{settings.api_base_url.rstrip('/')}/info"
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url, params={"site": settings.default_site})
        if response.is_success:
            return True, f"HTTP {response.status_code}"
        return False, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="stackexport doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base URL", "OK", settings.api_base_url)
    table.add_row("Default site", "OK", settings.default_site)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    env_file = get_user_env_file()
    if env_file.exists():
        table.add_row("User config", "OK", str(env_file))
    else:
        table.add_row("User config", "OPTIONAL", f"{env_file} (not created; defaults in use)")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] check network access or STACKEXPORT_API_BASE_URL."
        )
        raise typer.Exit(code=1)
