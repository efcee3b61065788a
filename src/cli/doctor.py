"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.geonames_client import create_client
from core.config import AppSettings, write_user_env_vars
from core.logger import set_log_level

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_service(settings: AppSettings) -> tuple[bool, str]:
    """Call a cheap endpoint and report whether the username is accepted.

    GeoNames answers auth/quota problems with HTTP 200 and a `status` object,
    so the body is inspected here (the client itself never does).
    """

    client = create_client(settings=settings)
    try:
        body = await client.search({"q": "london", "maxRows": 1})
    except Exception as exc:
        return False, str(exc)
    if isinstance(body, dict) and isinstance(body.get("status"), dict):
        return False, str(body["status"].get("message", body["status"]))
    if not isinstance(body, dict):
        return False, "Unexpected non-JSON response"
    return True, f"{body.get('totalResultsCount', '?')} results for 'london'"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    set_log_level(settings.log_level)
    config = settings.client_config()

    table = Table(title="GeoNames-D2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if config.username:
        table.add_row("Username", "OK", config.username)
    else:
        table.add_row("Username", "MISSING", "Set GEONAMES_USERNAME or run `geonames doctor setup`")
    table.add_row("Endpoint", "OK", config.endpoint)
    table.add_row("Language/Country", "OK", f"{config.language} / {config.country}")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_service, detail_service = asyncio.run(_check_service(settings))
    table.add_row("GeoNames API", "OK" if ok_service else "FAIL", detail_service)

    _console.print(table)

    if not ok_service and not config.username:
        _console.print(
            "\n[yellow]Note:[/yellow] geonames.org requires a free account: https://www.geonames.org/login"
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    username = typer.prompt("GeoNames username", default=settings.username or None).strip()
    endpoint = typer.prompt("GeoNames endpoint", default=settings.endpoint, show_default=True).strip()
    language = typer.prompt("Default language", default=settings.language, show_default=True).strip()

    if not username:
        raise typer.BadParameter("username is required")

    env_path = write_user_env_vars(
        {
            "GEONAMES_USERNAME": username,
            "GEONAMES_ENDPOINT": endpoint or None,
            "GEONAMES_LANGUAGE": language or None,
        }
    )

    _console.print(f"[green]Saved GeoNames config to:[/green] {env_path}")
