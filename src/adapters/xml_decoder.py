"""Decodificador XML -> dict (xmltodict).

Solo lo usa `extendedFindNearby`, el único endpoint GeoNames sin variante JSON.
La forma resultante imita a los endpoints JSON:
- el texto se recorta (`strip_whitespace`);
- un elemento con un único hijo repetible queda como mapping, no como lista;
- varios hermanos con el mismo tag forman una lista.

Errores de parseo (`xml.parsers.expat.ExpatError`) se propagan sin envolver.
"""

from __future__ import annotations

from typing import Any

import xmltodict


def parse_xml(text: str | bytes) -> dict[str, Any]:
    return xmltodict.parse(text, strip_whitespace=True)
