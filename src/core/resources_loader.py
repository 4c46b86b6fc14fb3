"""Cargador de entradas: listas de hosts/dominios y Header Set.

Este módulo vive en `core/` porque:
- centraliza el *qué* datos necesita un run sin acoplarse a la CLI.
- fija la frontera entre errores fatales (listas) y degradables (headers).
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config import AppSettings
from core.domain.models import HeaderSet
from core.errors import InputListError


def load_lines(path: Path) -> list[str]:
    """Lee un fichero de una entrada por línea.

    Reglas:
    - Se eliminan espacios y `\\r` alrededor de cada línea.
    - Las líneas vacías se ignoran; orden y duplicados se conservan.
    - Fichero ausente/ilegible => `InputListError` (fatal para el run).
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise InputListError(path, reason) from exc

    return [line.strip() for line in raw.splitlines() if line.strip()]


def default_headers(settings: AppSettings | None = None) -> HeaderSet:
    settings = settings or AppSettings()
    return HeaderSet.from_mapping(
        {
            "User-Agent": settings.user_agent,
            "Accept-Language": settings.accept_language,
        }
    )


def load_headers(
    path: Path | None,
    settings: AppSettings | None = None,
) -> tuple[HeaderSet, str | None]:
    """Carga el Header Set desde un JSON `{"Nombre": "valor", ...}`.

    Devuelve `(headers, warning)`. Nunca falla: cualquier problema (fichero
    ilegible, JSON inválido, valores no string, objeto vacío) devuelve los
    headers por defecto y un warning para el operador.
    """

    fallback = default_headers(settings)
    if path is None:
        return fallback, None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        return fallback, f"Failed to read headers file {path}: {exc}; using default headers"
    except json.JSONDecodeError as exc:
        return fallback, f"Invalid JSON in headers file {path}: {exc}; using default headers"

    if not isinstance(data, dict):
        return fallback, f"Headers file {path} must contain a JSON object; using default headers"
    if not data:
        return fallback, f"Headers file {path} is empty; using default headers"

    bad = [key for key, value in data.items() if not isinstance(value, str)]
    if bad:
        return fallback, (
            f"Headers file {path} has non-string values for {', '.join(sorted(bad))}; "
            "using default headers"
        )

    unsendable = [key for key, value in data.items() if not _is_sendable(key, value)]
    if unsendable:
        return fallback, (
            f"Headers file {path} has headers that cannot be sent for {', '.join(sorted(ascii(key) for key in unsendable))}; "
            "using default headers"
        )

    return HeaderSet.from_mapping(data), None


def _is_sendable(name: str, value: str) -> bool:
    """Nombre ASCII sin espacios; valor codificable en UTF-8 sin CR/LF/NUL."""

    if not name or not name.isascii() or any(ch.isspace() or ch == ":" for ch in name):
        return False
    if any(ch in value for ch in "\r\n\x00"):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
