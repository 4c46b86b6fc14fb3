"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_async_client, parse_proxy_url
from cli.ui_components import build_settings_table
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings, url: str, proxy: str | None) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, proxy_url=proxy) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code} {response.reason_phrase}"
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, f"{exc.__class__.__name__}: {exc}"


@app.command()
def run(
    url: str = typer.Option("https://example.com", "--url", help="URL used for the connectivity check."),
    proxy: Optional[str] = typer.Option(None, "--proxy", help="Proxy URL to check instead of the configured one."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    _console.print(build_settings_table(settings))

    table = Table(title="hostroute doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    effective_proxy = proxy if proxy is not None else settings.proxy_url
    proxy_value, proxy_warning = parse_proxy_url(effective_proxy)
    if proxy_warning:
        table.add_row("Proxy", "FAIL", escape(proxy_warning) + " -> direct connection")
    else:
        table.add_row("Proxy", "OK", proxy_value or "direct")

    ok_http, detail_http = asyncio.run(_check_http(settings, url, proxy_value or ""))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", escape(detail_http))

    _console.print(table)

    if not settings.verify_tls:
        _console.print(
            "\n[yellow]Note:[/yellow] TLS verification is off. Set HOSTROUTE_VERIFY_TLS=true "
            "or pass --verify-tls to `scan` when probing trusted infrastructure."
        )
