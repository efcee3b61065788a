"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/GeoNames) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import ClientConfig


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "geonames-d2"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "geonames-d2"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "geonames-d2"
    return Path.home() / ".config" / "geonames-d2"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` se ignoran (no borran lo ya guardado).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# geonames-d2 user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEONAMES_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    username: str = Field(
        default="",
        description="Usuario de geonames.org (token estático de la API).",
    )
    endpoint: str = Field(
        default="http://api.geonames.org",
        min_length=1,
        description="Base URL del servicio GeoNames.",
    )
    language: str = Field(
        default="en",
        description="Idioma por defecto (`lang`).",
    )
    country: str = Field(
        default="UK",
        description="País por defecto (`country`).",
    )
    charset: str = Field(
        default="UTF-8",
        description="Charset de la respuesta (`charset`).",
    )
    fuzzy: str = Field(
        default="0.8",
        description="Umbral de coincidencia difusa para `search`.",
    )
    orderby: str = Field(
        default="relevance",
        description="Orden de resultados para `search`.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="geonames-d2/0.1 (+https://www.geonames.org)",
        min_length=1,
        description="User-Agent para peticiones a GeoNames.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        # `debug` en el .env vale igual que `DEBUG`.
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def client_config(self) -> ClientConfig:
        """Congela los campos del servicio en un `ClientConfig`."""

        return ClientConfig.from_mapping(
            {
                "username": self.username,
                "endpoint": self.endpoint,
                "language": self.language,
                "country": self.country,
                "charset": self.charset,
                "fuzzy": self.fuzzy,
                "orderby": self.orderby,
            }
        )
