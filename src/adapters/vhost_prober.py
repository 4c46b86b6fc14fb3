"""Prober de virtual hosts.

Implementación:
- Conecta a la URL del host, pero envía el dominio como header `Host`.
- Aplica el Header Set sobre cada request; el `Host` siempre es el dominio.
- No lee el body: con `client.stream` la respuesta se libera al salir del
  bloque, también ante errores.

Notas:
- Un error de transporte (DNS, connect, TLS, timeout, URL mal formada) se
  devuelve como `ProbeResult` con `error`; nunca se reintenta.
"""

from __future__ import annotations

import asyncio

import httpx

from core.domain.models import HeaderSet, ProbeResult, ProbeTarget
from core.interfaces.prober import Prober


class VHostProber(Prober):
    """Ejecuta un GET por par (host, domain) con un cliente compartido."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        headers: HeaderSet,
        deadline_seconds: float | None = None,
    ) -> None:
        self._client = client
        self._headers = headers
        self._deadline = deadline_seconds

    def build_headers(self, domain: str) -> dict[bytes, bytes]:
        """Headers de la request como bytes UTF-8.

        httpx codifica los `str` como ASCII; con bytes el dominio (y cualquier
        valor) viaja tal cual, sin validar.
        """

        headers = {
            name.encode("utf-8"): value.encode("utf-8")
            for name, value in self._headers.as_dict().items()
            if name.lower() != "host"
        }
        headers[b"Host"] = domain.encode("utf-8")
        return headers

    async def probe(self, target: ProbeTarget) -> ProbeResult:
        try:
            if self._deadline is None:
                return await self._send(target)
            return await asyncio.wait_for(self._send(target), timeout=self._deadline)
        except asyncio.TimeoutError:
            return ProbeResult(
                host=target.host,
                domain=target.domain,
                error=f"deadline of {self._deadline:g}s exceeded",
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            return ProbeResult(
                host=target.host,
                domain=target.domain,
                error=_describe_error(exc),
            )

    async def _send(self, target: ProbeTarget) -> ProbeResult:
        headers = self.build_headers(target.domain)
        async with self._client.stream("GET", target.host, headers=headers) as response:
            return ProbeResult(
                host=target.host,
                domain=target.domain,
                status_code=response.status_code,
                reason=response.reason_phrase,
                content_length=response.headers.get("Content-Length", ""),
            )


def _describe_error(exc: Exception) -> str:
    text = str(exc).strip()
    name = exc.__class__.__name__
    # Algunos errores de httpx (p.ej. timeouts) llegan sin mensaje.
    return f"{name}: {text}" if text else name
