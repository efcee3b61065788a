"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- `frozen=True` garantiza que la configuración no cambie tras construir el cliente.
- El dominio no conoce HTTP ni CLI: solo qué valores viajan en cada petición.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

DEFAULT_ENDPOINT = "http://api.geonames.org"

CLIENT_DEFAULTS: dict[str, str] = {
    "username": "",
    "endpoint": DEFAULT_ENDPOINT,
    "language": "en",
    "country": "UK",
    "charset": "UTF-8",
    "fuzzy": "0.8",
    "orderby": "relevance",
}


class ClientConfig(BaseModel):
    """Configuración inmutable de una instancia del cliente GeoNames.

    Cada campo aporta un valor por defecto que se mezcla en las peticiones
    (`username`, `charset`, `lang`, `country`, `orderby`, `fuzzy`).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    username: str = Field(
        default=CLIENT_DEFAULTS["username"],
        description="Usuario de geonames.org; se envía en cada petición.",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Base URL del servicio (sin `/` final).",
    )
    language: str = Field(
        default=CLIENT_DEFAULTS["language"],
        description="Idioma por defecto (`lang`).",
    )
    country: str = Field(
        default=CLIENT_DEFAULTS["country"],
        description="País por defecto (`country`).",
    )
    charset: str = Field(
        default=CLIENT_DEFAULTS["charset"],
        description="Charset de la respuesta.",
    )
    fuzzy: str = Field(
        default=CLIENT_DEFAULTS["fuzzy"],
        description="Umbral de coincidencia difusa de `search`.",
    )
    orderby: str = Field(
        default=CLIENT_DEFAULTS["orderby"],
        description="Orden de resultados de `search`.",
    )

    @field_validator("endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any] | None = None) -> "ClientConfig":
        """Construye la config desde un mapping.

        Un valor ausente o falsy (None, "", 0) toma el default de su clave.
        Claves desconocidas se ignoran.
        """

        config = config or {}
        values: dict[str, str] = {}
        for key, default in CLIENT_DEFAULTS.items():
            raw = config.get(key)
            values[key] = str(raw) if raw else default
        return cls(**values)
