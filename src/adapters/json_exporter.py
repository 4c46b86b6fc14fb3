"""Exportación JSON del run.

Por qué JSON:
- Interoperabilidad con otras herramientas de recon y pipelines.
- Conserva los campos separados (status, Content-Length, error) que la
  salida de texto junta en una línea.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import RunReport


def export_report_json(*, report: RunReport, output_path: Path) -> Path:
    """Exporta `RunReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    payload["messages"] = report.messages
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
