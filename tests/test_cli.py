from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.geonames_client import create_client
from cli import main as cli_main
from tests.conftest import TEST_ENDPOINT, RecordingService

runner = CliRunner()


@pytest.fixture
def stub_service(monkeypatch, settings):
    """Redirige `build_client` a un servicio simulado configurable por test."""

    holder: dict[str, RecordingService] = {}

    def install(responder) -> RecordingService:
        service = RecordingService(responder)
        holder["service"] = service

        def build_client():
            return create_client(
                {"username": "demo", "endpoint": TEST_ENDPOINT},
                settings=settings,
                http_client=service.http_client(),
            )

        monkeypatch.setattr(cli_main, "build_client", build_client)
        return service

    return install


def test_postal_code_lookup_prints_json(stub_service):
    service = stub_service(
        lambda request: httpx.Response(200, json={"postalcodes": [{"placeName": "Beringen"}]})
    )

    result = runner.invoke(cli_main.app, ["postal-code-lookup", "3580", "--country", "BE", "--max-rows", "20"])

    assert result.exit_code == 0, result.output
    assert "Beringen" in result.output
    params = service.last.url.params
    assert params["postalcode"] == "3580"
    assert params["country"] == "BE"
    assert params["maxRows"] == "20"


def test_unset_flags_keep_operation_defaults(stub_service):
    service = stub_service(lambda request: httpx.Response(200, json={"geonames": []}))

    result = runner.invoke(cli_main.app, ["nearby-place-name", "--lat", "51.05", "--lng", "5.21"])

    assert result.exit_code == 0, result.output
    params = service.last.url.params
    assert params["style"] == "LONG"
    assert params["cities"] == "cities1000"
    assert "radius" not in params


def test_enum_flags_are_sent_by_value(stub_service):
    service = stub_service(lambda request: httpx.Response(200, json={"geonames": []}))

    result = runner.invoke(
        cli_main.app,
        ["nearby", "--lat", "47.3", "--lng", "9", "--style", "SHORT", "--local-country"],
    )

    assert result.exit_code == 0, result.output
    params = service.last.url.params
    assert params["style"] == "SHORT"
    assert params["localCountry"] == "true"


def test_output_writes_json_file(stub_service, tmp_path):
    stub_service(lambda request: httpx.Response(200, json={"geonames": [{"countryCode": "AD"}]}))
    out = tmp_path / "countries.json"

    result = runner.invoke(cli_main.app, ["postal-code-countries", "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8")) == [{"countryCode": "AD"}]


def test_table_rendering(stub_service):
    stub_service(
        lambda request: httpx.Response(
            200, json={"postalCodes": [{"postalCode": "3580", "placeName": "Beringen", "distance": "0"}]}
        )
    )

    result = runner.invoke(
        cli_main.app, ["nearby-postal-codes", "--lat", "51.05", "--lng", "5.21", "--table"]
    )

    assert result.exit_code == 0, result.output
    assert "placeName" in result.output
    assert "Beringen" in result.output


def test_transport_error_exits_with_code_1(stub_service):
    def responder(request):
        raise httpx.ConnectError("connection refused")

    stub_service(responder)

    result = runner.invoke(cli_main.app, ["timezone", "--lat", "1", "--lng", "2"])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_search_table_uses_geonames_rows(stub_service):
    service = stub_service(
        lambda request: httpx.Response(
            200, json={"totalResultsCount": 1, "geonames": [{"name": "London", "countryCode": "GB"}]}
        )
    )

    result = runner.invoke(cli_main.app, ["search", "london", "--max-rows", "1", "--table"])

    assert result.exit_code == 0, result.output
    assert "London" in result.output
    assert service.last.url.params["q"] == "london"


def test_search_transport_error_exits_with_code_1(stub_service):
    def responder(request):
        raise httpx.ReadTimeout("read timed out")

    stub_service(responder)

    result = runner.invoke(cli_main.app, ["search", "london"])

    assert result.exit_code == 1
    assert "read timed out" in result.output


def test_search_table_exports_full_body(stub_service, tmp_path):
    body = {"totalResultsCount": 1, "geonames": [{"name": "London", "countryCode": "GB"}]}
    stub_service(lambda request: httpx.Response(200, json=body))
    out = tmp_path / "search.json"

    result = runner.invoke(cli_main.app, ["search", "london", "--table", "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert "London" in result.output
    assert json.loads(out.read_text(encoding="utf-8")) == body
