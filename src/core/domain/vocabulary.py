"""Vocabulario controlado de la API GeoNames.

Valores aceptados por los parámetros `style` y `cities`. Viven en el dominio
para que CLI y adaptadores compartan una única fuente de verdad.
"""

from __future__ import annotations

from enum import Enum


class Style(str, Enum):
    """Nivel de detalle de la respuesta (`style`)."""

    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    LONG = "LONG"
    FULL = "FULL"


class Cities(str, Enum):
    """Rango de ciudades consideradas (`cities`).

    - cities1000: población > 1000 o sede de división administrativa (ca 80.000)
    - cities5000: población > 5000 o PPLA (ca 40.000)
    - cities15000: población > 15000 o capitales (ca 20.000)
    """

    CITIES1000 = "cities1000"
    CITIES5000 = "cities5000"
    CITIES15000 = "cities15000"
