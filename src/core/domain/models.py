"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.
- Los modelos compartidos entre tareas concurrentes son `frozen`: ninguna
  tarea puede mutarlos.

Nota:
- Estos modelos describen *qué* es un probe, no *cómo* se ejecuta.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def parse_content_length(raw: str | None) -> int:
    """Convierte el header `Content-Length` a entero.

    Ausente o no numérico => 0 (solo a efectos de filtrado; el texto original
    se conserva aparte para mostrarlo).
    """

    if not raw:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


class HeaderSet(BaseModel):
    """Headers que se aplican a cada request.

    Claves únicas sin distinguir mayúsculas (semántica HTTP); si una clave
    aparece varias veces gana la última, con su grafía.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[tuple[str, str], ...] = Field(
        default=(),
        description="Pares (nombre, valor) normalizados, sin duplicados.",
    )

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> "HeaderSet":
        merged: dict[str, tuple[str, str]] = {}
        for name, value in headers.items():
            merged[name.lower()] = (name, value)
        return cls(entries=tuple(merged.values()))

    def as_dict(self) -> dict[str, str]:
        """Copia mutable; el `HeaderSet` en sí no cambia nunca."""

        return dict(self.entries)

    def get(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.entries:
            if key.lower() == wanted:
                return value
        return None

    def __len__(self) -> int:
        return len(self.entries)


class ProbeTarget(BaseModel):
    """Un par (host, domain): la unidad de trabajo."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        description="URL a la que se conecta físicamente (p.ej. 'https://1.2.3.4').",
    )
    domain: str = Field(
        ...,
        description="Valor que se envía como header `Host` (virtual host).",
    )


class FilterPolicy(BaseModel):
    """Reglas que deciden si un probe completado se reporta.

    Orden de evaluación:
    1. `min_content_length > 0` y Content-Length menor => se descarta, siempre.
    2. `verbose` => se reporta cualquier status.
    3. Si no, solo se reporta status 200.
    """

    model_config = ConfigDict(frozen=True)

    min_content_length: int = Field(
        default=0,
        ge=0,
        description="Content-Length mínimo para reportar (0 = desactivado).",
    )
    verbose: bool = Field(
        default=False,
        description="Reportar respuestas con cualquier status code.",
    )

    def should_emit(self, status_code: int, content_length: int) -> bool:
        if self.min_content_length > 0 and content_length < self.min_content_length:
            return False
        if self.verbose:
            return True
        return status_code == 200


class ProbeResult(BaseModel):
    """Resultado de un probe: respuesta HTTP o error de transporte."""

    host: str
    domain: str
    status_code: int | None = Field(
        default=None,
        description="Status HTTP final (None si el probe falló antes de obtener respuesta).",
    )
    reason: str = Field(
        default="",
        description="Reason phrase de la respuesta (p.ej. 'OK').",
    )
    content_length: str = Field(
        default="",
        description="Texto original del header Content-Length (vacío si no vino).",
    )
    error: str | None = Field(
        default=None,
        description="Descripción del error de transporte, si lo hubo.",
    )

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".rstrip()

    @property
    def message(self) -> str:
        if self.error is not None:
            return f"Request to {self.host} failed: {self.error}"
        return (
            f"Host: {self.host} Domain: {self.domain} "
            f"Code: {self.status} Content-Length: {self.content_length}"
        )


class RunReport(BaseModel):
    """Agregado de una ejecución completa (hosts x dominios)."""

    results: list[ProbeResult] = Field(
        default_factory=list,
        description="Resultados emitidos (ya filtrados), en orden de recolección.",
    )
    total_tasks: int = Field(
        default=0,
        ge=0,
        description="Número de probes ejecutados (|hosts| x |dominios|).",
    )
    errors: int = Field(
        default=0,
        ge=0,
        description="Probes que terminaron en error de transporte.",
    )
    suppressed: int = Field(
        default=0,
        ge=0,
        description="Respuestas descartadas por la política de filtrado.",
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Problemas de configuración no fatales.",
    )
    finished_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Momento de finalización (UTC).",
    )

    @property
    def messages(self) -> list[str]:
        return [result.message for result in self.results]
