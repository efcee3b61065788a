"""Fixtures compartidos.

La red real nunca se toca: el servicio GeoNames se sustituye por
`httpx.MockTransport`, y cada test recibe la lista de requests emitidos.
"""

from __future__ import annotations

import os
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

TEST_ENDPOINT = "http://api.geonames.test"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith("GEONAMES_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


class RecordingService:
    """Stub del servicio remoto: responde siempre lo mismo y guarda los requests."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self._responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def json_service() -> Callable[[Any], RecordingService]:
    def factory(body: Any) -> RecordingService:
        return RecordingService(lambda request: httpx.Response(200, json=body))

    return factory


@pytest.fixture
def xml_service() -> Callable[[str], RecordingService]:
    def factory(document: str) -> RecordingService:
        return RecordingService(
            lambda request: httpx.Response(
                200, text=document, headers={"Content-Type": "text/xml;charset=UTF-8"}
            )
        )

    return factory
