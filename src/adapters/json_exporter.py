"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas GIS y pipelines.
- Permite guardar la respuesta de GeoNames tal cual, sin re-formatearla.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def export_result_json(*, result: Any, output_path: Path) -> Path:
    """Exporta un resultado a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(result, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
