"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.models import RunReport


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (en stderr, para no ensuciar stdout)."""

    title = Text("HOSTROUTE", style="bold cyan")
    subtitle = Text("Virtual-host probing • Host header override", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_settings_table(settings: AppSettings, *, title: str = "Effective settings") -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Concurrency", str(settings.max_concurrency))
    table.add_row("Timeout", f"{settings.http_timeout_seconds:g}s per phase")
    table.add_row("Deadline", f"{settings.request_deadline_seconds:g}s per probe")
    table.add_row(
        "TLS verification",
        "on" if settings.verify_tls else "[yellow]off[/yellow] (certificates are not checked)",
    )
    table.add_row("Follow redirects", "yes" if settings.follow_redirects else "no")
    table.add_row("Proxy", settings.proxy_url or "direct")
    return table


def build_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("[cyan]Probing"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_summary(console: Console, report: RunReport) -> None:
    """Resumen final del run."""

    console.print(
        f"[bold]{report.total_tasks}[/bold] probes • "
        f"[green]{len(report.results) - report.errors}[/green] reported • "
        f"[yellow]{report.suppressed}[/yellow] filtered • "
        f"[red]{report.errors}[/red] errors"
    )
