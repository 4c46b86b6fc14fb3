"""Contrato del ejecutor de probes.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el prober HTTP por uno falso en tests del dispatcher.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ProbeResult, ProbeTarget


@runtime_checkable
class Prober(Protocol):
    """Contrato mínimo para ejecutar un probe.

    Reglas de diseño:
    - `probe` es asíncrono porque hace I/O (HTTP).
    - Devuelve siempre un único `ProbeResult`; los errores de transporte se
      devuelven como resultado, no como excepción.
    """

    async def probe(self, target: ProbeTarget) -> ProbeResult:
        """Ejecuta el probe para `target` y devuelve el resultado normalizado."""

        ...
