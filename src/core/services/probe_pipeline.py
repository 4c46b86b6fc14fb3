"""Probe orchestration.

The CLI delegates the whole probing flow to `run_probes`: build the shared
client once, fan out one probe per (host, domain) pair through a bounded
pool of workers, filter each outcome, and drain the collector after the
last probe has finished. Printing and progress bars stay in the UI layer,
reachable through `PipelineHooks`.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

import httpx

from adapters.http_client import build_async_client
from adapters.vhost_prober import VHostProber
from core.config import AppSettings
from core.domain.models import FilterPolicy, HeaderSet, ProbeResult, ProbeTarget, RunReport, parse_content_length
from core.interfaces.prober import Prober
from core.services.result_collector import ResultCollector


@dataclass
class ProbeRequest:
    """Parameters that control one run."""

    hosts: Sequence[str]
    domains: Sequence[str]
    headers: HeaderSet
    policy: FilterPolicy = field(default_factory=FilterPolicy)
    max_concurrency: int | None = None
    proxy_url: str | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    start: Callable[[int], None] | None = None
    progress: Callable[[int, int], None] | None = None


def iter_targets(hosts: Sequence[str], domains: Sequence[str]) -> Iterator[ProbeTarget]:
    """Lazily enumerate the cross product hosts x domains."""

    for host, domain in itertools.product(hosts, domains):
        yield ProbeTarget(host=host, domain=domain)


def should_report(result: ProbeResult, policy: FilterPolicy) -> bool:
    """Transport errors are always reported; responses go through the policy."""

    if result.is_error or result.status_code is None:
        return True
    return policy.should_emit(result.status_code, parse_content_length(result.content_length))


async def safe_probe(prober: Prober, target: ProbeTarget) -> ProbeResult:
    """Run one probe; an unexpected failure becomes an error result for that pair."""

    try:
        return await prober.probe(target)
    except Exception as exc:
        return ProbeResult(
            host=target.host,
            domain=target.domain,
            error=f"{exc.__class__.__name__}: {exc}",
        )


async def dispatch(
    *,
    prober: Prober,
    targets: Iterator[ProbeTarget],
    total: int,
    policy: FilterPolicy,
    max_concurrency: int,
    collector: ResultCollector,
    hooks: PipelineHooks | None = None,
) -> tuple[int, int]:
    """Run every target through `prober` and return `(errors, suppressed)`.

    At most `max_concurrency` probes are in flight. Workers pull from a
    shared iterator, so memory stays flat for large cross products. Returns
    only after every target has been probed; if a hook fails, the remaining
    workers are cancelled and awaited before the error propagates.
    """

    hooks = hooks or PipelineHooks()
    done = 0
    errors = 0
    suppressed = 0

    async def worker() -> None:
        nonlocal done, errors, suppressed
        for target in targets:
            result = await safe_probe(prober, target)
            done += 1
            if result.is_error:
                errors += 1
            if should_report(result, policy):
                collector.put(result)
            else:
                suppressed += 1
            if hooks.progress:
                hooks.progress(done, total)

    workers = max(1, min(max_concurrency, total))
    tasks = [asyncio.ensure_future(worker()) for _ in range(workers)]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        # Ningún worker sigue vivo cuando se cierra el cliente compartido.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return errors, suppressed


async def run_probes(
    *,
    settings: AppSettings,
    request: ProbeRequest,
    hooks: PipelineHooks | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RunReport:
    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    total = len(request.hosts) * len(request.domains)
    if hooks.start:
        hooks.start(total)

    collector = ResultCollector(capacity=total)
    max_concurrency = request.max_concurrency or settings.max_concurrency

    async with build_async_client(
        settings,
        proxy_url=request.proxy_url,
        warn=warn,
        transport=transport,
    ) as client:
        if total == 0:
            errors, suppressed = 0, 0
        else:
            prober = VHostProber(
                client,
                headers=request.headers,
                deadline_seconds=settings.request_deadline_seconds,
            )
            errors, suppressed = await dispatch(
                prober=prober,
                targets=iter_targets(request.hosts, request.domains),
                total=total,
                policy=request.policy,
                max_concurrency=max_concurrency,
                collector=collector,
                hooks=hooks,
            )

    return RunReport(
        results=collector.drain(),
        total_tasks=total,
        errors=errors,
        suppressed=suppressed,
        warnings=warnings,
    )
