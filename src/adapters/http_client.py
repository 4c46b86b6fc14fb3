"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, TLS, redirects y política de proxy en un solo sitio.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Callable

import httpx

from core.config import AppSettings

_PROXY_SCHEMES = ("http", "https", "socks5", "socks5h")


def parse_proxy_url(value: str | None) -> tuple[str | None, str | None]:
    """Valida la URL del proxy.

    Devuelve `(url, warning)`:
    - vacío => `(None, None)`, conexión directa.
    - inválido => `(None, "Failed to parse proxy URL: ...")`, conexión directa.
    """

    raw = (value or "").strip()
    if not raw:
        return None, None

    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        return None, f"Failed to parse proxy URL: {exc}"

    if url.scheme not in _PROXY_SCHEMES:
        return None, f"Failed to parse proxy URL: unsupported scheme {url.scheme!r} in {raw!r}"
    if not url.host:
        return None, f"Failed to parse proxy URL: missing host in {raw!r}"
    return str(url), None


def build_async_client(
    settings: AppSettings | None = None,
    *,
    proxy_url: str | None = None,
    warn: Callable[[str], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea el `httpx.AsyncClient` compartido por todos los probes.

    - `verify` sale de `settings.verify_tls` (desactivado por defecto).
    - `proxy_url` tiene prioridad sobre `settings.proxy_url`; si no parsea se
      avisa por `warn` y se usa conexión directa.
    - `trust_env=False`: sin proxy explícito no se usan los de entorno.

    El cliente es seguro para uso concurrente desde múltiples corutinas.
    """

    settings = settings or AppSettings()
    proxy, warning = parse_proxy_url(proxy_url if proxy_url is not None else settings.proxy_url)
    if warning and warn:
        warn(warning)

    kwargs: dict[str, object] = {}
    if transport is not None:
        # Un transport inyectado reemplaza a la red; el proxy no aplica.
        kwargs["transport"] = transport
    elif proxy:
        kwargs["proxy"] = proxy

    return httpx.AsyncClient(
        verify=settings.verify_tls,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        trust_env=False,
        **kwargs,
    )
