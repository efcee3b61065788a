"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Columnas preferidas cuando el resultado es una lista de lugares/códigos.
_PREFERRED_COLUMNS: tuple[str, ...] = (
    "postalCode",
    "placeName",
    "name",
    "toponymName",
    "countryCode",
    "adminName1",
    "lat",
    "lng",
    "distance",
)


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("GEONAMES-D2", style="bold cyan")
    subtitle = Text("Cliente asíncrono para geonames.org", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_results_table(rows: list[dict[str, Any]], *, title: str = "Results") -> Table:
    """Tabla Rich para una lista de mappings.

    Usa las columnas conocidas que aparezcan en las filas; si ninguna
    aparece, las claves de la primera fila.
    """

    present = [c for c in _PREFERRED_COLUMNS if any(c in row for row in rows)]
    columns = (present or list(rows[0].keys())) if rows else []

    table = Table(title=title)
    for column in columns:
        table.add_column(column, style="cyan" if column == columns[0] else "white")
    for row in rows:
        table.add_row(*("" if row.get(c) is None else str(row.get(c)) for c in columns))
    return table


def render_result(console: Console, result: Any, *, title: str, as_table: bool = False) -> None:
    """Imprime un resultado: tabla si se pide y es una lista de dicts, JSON si no."""

    if as_table and isinstance(result, list) and all(isinstance(r, dict) for r in result):
        console.print(build_results_table(result, title=title))
        return
    console.print_json(data=result)
