"""Errores del Core.

Solo los errores de preparación (listas de entrada) son fatales; el resto se
degrada a warnings o a resultados de error por probe.
"""

from __future__ import annotations

from pathlib import Path


class HostrouteError(Exception):
    """Raíz de los errores propios de la aplicación."""


class InputListError(HostrouteError):
    """No se pudo leer una lista de entrada (hosts o dominios)."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
