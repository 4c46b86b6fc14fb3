"""CLI principal (Typer).

Comandos:
- `scan`: prueba cada host con cada dominio como header `Host`.
- `doctor`: diagnóstico de configuración y conectividad.

Los resultados van a stdout (una línea por resultado); banner, warnings,
progreso y resumen van a stderr.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_report_json
from cli import doctor
from cli.ui_components import build_progress, print_banner, print_summary
from core.config import AppSettings
from core.domain.models import FilterPolicy
from core.errors import InputListError
from core.resources_loader import load_headers, load_lines
from core.services.probe_pipeline import PipelineHooks, ProbeRequest, run_probes

app = typer.Typer(
    no_args_is_help=True,
    help="Probe hosts with arbitrary Host headers to uncover virtual-host routing.",
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _warn(message: str) -> None:
    _err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _load_list(path: Path, label: str) -> list[str]:
    try:
        return load_lines(path)
    except InputListError as exc:
        _err_console.print(f"[red]Failed to read {label} file:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


@app.command()
def scan(
    host_file: Path = typer.Option(..., "--host", "-H", help="File containing the list of hosts (one URL per line)."),
    domain_file: Path = typer.Option(..., "--domain", "-d", help="File containing the list of Host header values."),
    threads: Optional[int] = typer.Option(None, "--threads", "-t", min=1, max=1000, help="Number of concurrent probes [default: 10]."),
    proxy: Optional[str] = typer.Option(None, "--proxy", help="Proxy URL, e.g. http://127.0.0.1:8080."),
    header_file: Optional[Path] = typer.Option(None, "--header", help="JSON file containing custom headers."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report every response, not only 200 OK."),
    min_content_length: int = typer.Option(0, "--fcl", min=0, help="Only report responses with at least this Content-Length (0 = off)."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Per-phase HTTP timeout in seconds [default: 10]."),
    verify_tls: Optional[bool] = typer.Option(None, "--verify-tls/--no-verify-tls", help="Validate TLS certificates [default: off]."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also write the run report as JSON to this path."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner, progress bar or summary."),
) -> None:
    """Send one GET per (host, domain) pair with the domain as Host header."""

    if not quiet:
        print_banner(_err_console)

    hosts = _load_list(host_file, "hosts")
    domains = _load_list(domain_file, "domains")

    updates: dict[str, Any] = {}
    if threads is not None:
        updates["max_concurrency"] = threads
    if timeout is not None:
        updates["http_timeout_seconds"] = timeout
    if verify_tls is not None:
        updates["verify_tls"] = verify_tls
    settings = AppSettings().model_copy(update=updates)

    headers, header_warning = load_headers(header_file, settings)
    if header_warning:
        _warn(header_warning)

    request = ProbeRequest(
        hosts=hosts,
        domains=domains,
        headers=headers,
        policy=FilterPolicy(min_content_length=min_content_length, verbose=verbose),
        proxy_url=proxy,
    )

    if quiet:
        report = asyncio.run(run_probes(settings=settings, request=request, hooks=PipelineHooks(warning=_warn)))
    else:
        progress = build_progress(_err_console)
        task_ids: dict[str, Any] = {}

        def on_start(total: int) -> None:
            task_ids["probe"] = progress.add_task("probe", total=total)

        def on_progress(done: int, total: int) -> None:
            progress.update(task_ids["probe"], completed=done)

        hooks = PipelineHooks(warning=_warn, start=on_start, progress=on_progress)
        with progress:
            report = asyncio.run(run_probes(settings=settings, request=request, hooks=hooks))

    for message in report.messages:
        typer.echo(message)

    if json_path is not None:
        out = export_report_json(report=report, output_path=json_path)
        if not quiet:
            _err_console.print(f"[green]Saved JSON report to:[/green] {escape(str(out))}")

    if not quiet:
        print_summary(_err_console, report)


def run() -> None:
    app()
