"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- `httpx.AsyncClient` lo cumple tal cual; en tests basta con un cliente
  montado sobre `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

import httpx


@runtime_checkable
class AsyncHttpClient(Protocol):
    """Contrato mínimo del colaborador HTTP.

    Reglas de diseño:
    - `get` es asíncrono: una sola petición por operación.
    - Los errores de red se propagan tal cual al caller.
    """

    async def get(self, url: str, *, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Emite un GET con `params` serializados como query string."""

        ...
