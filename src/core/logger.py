"""Configuración de logging.

Un único formato para todos los módulos. Importar un módulo nunca lee la
configuración: los loggers nacen en WARNING y el borde de la aplicación (la
CLI) aplica `AppSettings.log_level` con `set_log_level`.
"""

from __future__ import annotations

import logging
import sys

_FORMAT = "[%(asctime)s] %(levelname)s - [%(name)s] - %(message)s"

_configured: set[str] = set()


def setup_logger(name: str, level: int | str = logging.WARNING) -> logging.Logger:
    """Configura un logger con formato consistente (solo la primera vez)."""

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    _configured.add(name)
    return logger


def get_logger(name: str) -> logging.Logger:
    return setup_logger(name)


def set_log_level(level: int | str) -> None:
    """Aplica `level` a todos los loggers creados con `get_logger`."""

    for name in _configured:
        logging.getLogger(name).setLevel(level)
