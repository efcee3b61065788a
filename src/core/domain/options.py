"""Mezcla de opciones de petición.

Reglas:
- `overlay` es un merge superficial sesgado a la derecha: cualquier clave
  presente en `options` gana, incluso si su valor es `None`. Así un caller
  puede anular un default pasando `None` de forma explícita.
- `to_query_params` decide qué se envía: las claves a `None` no viajan.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


def overlay(base: Mapping[str, Any], options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Devuelve `base` con `options` encima, sin mutar ninguno de los dos."""

    merged = dict(base)
    if options:
        for key, value in options.items():
            merged[key] = value
    return merged


def rename_keys(options: Mapping[str, Any] | None, aliases: Mapping[str, str]) -> dict[str, Any]:
    """Renombra claves del caller a los nombres de query de GeoNames.

    Solo se renombran claves que el caller envió; el resto pasa tal cual.
    Si llegan el alias y su clave GeoNames (`countryCode` y `country`), gana
    la clave GeoNames, sin importar el orden del mapping.
    """

    options = options or {}
    renamed: dict[str, Any] = {}
    for key, value in options.items():
        target = aliases.get(key, key)
        if target != key and target in options:
            continue
        renamed[target] = value
    return renamed


def to_query_params(merged: Mapping[str, Any]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key, value in merged.items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        params[key] = value
    return params
