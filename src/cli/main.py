"""CLI principal (Typer).

Un comando por operación GeoNames. Cada comando:
- arma las opciones solo con los flags que el usuario pasó (los demás quedan
  en los defaults de la operación);
- ejecuta la corrutina con `asyncio.run`;
- imprime el resultado (JSON o tabla) y opcionalmente lo guarda con `--output`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional
from xml.parsers.expat import ExpatError

import httpx
import typer
from rich.console import Console

from adapters.geonames_client import GeoNamesClient, create_client
from adapters.json_exporter import export_result_json
from cli import doctor
from cli.ui_components import print_banner, render_result
from core.config import AppSettings
from core.domain.vocabulary import Cities, Style
from core.logger import set_log_level

app = typer.Typer(no_args_is_help=True, help="GeoNames.org web services from the command line.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_OUTPUT_HELP = "Write the result as JSON to this path."
_TABLE_HELP = "Render list results as a table."


@app.callback()
def main(
    banner: bool = typer.Option(False, "--banner", help="Show the welcome banner."),
) -> None:
    if banner:
        print_banner(_console)


def build_client() -> GeoNamesClient:
    settings = AppSettings()
    set_log_level(settings.log_level)
    return create_client(settings=settings)


def _compact(**options: Any) -> dict[str, Any]:
    return {key: value for key, value in options.items() if value is not None}


def _geonames_rows(body: Any) -> Any:
    return body.get("geonames") if isinstance(body, dict) else body


def _execute(
    method_name: str,
    options: dict[str, Any],
    *,
    title: str,
    output: Optional[Path],
    table: bool,
    rows: Callable[[Any], Any] | None = None,
) -> None:
    """Ejecuta una operación y muestra el resultado.

    `rows` elige qué parte del resultado se pinta; `--output` guarda siempre
    el resultado completo.
    """

    client = build_client()
    method = getattr(client, method_name)
    try:
        result = asyncio.run(method(options))
    except (httpx.HTTPError, ExpatError) as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    shown = rows(result) if rows is not None else result
    render_result(_console, shown, title=title, as_table=table)
    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _console.print(f"[green]Saved:[/green] {path}")


@app.command("nearby-postal-codes")
def nearby_postal_codes(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    radius: Optional[float] = typer.Option(None, help="Radius in km (default 10)."),
    max_rows: Optional[int] = typer.Option(None, "--max-rows", help="Max results (default 5)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Postal codes near a coordinate, sorted by distance."""

    options = _compact(lat=lat, lng=lng, radius=radius, maxRows=max_rows)
    _execute(
        "find_nearby_postal_codes_by_gps_coordinates",
        options,
        title="Nearby postal codes",
        output=output,
        table=table,
    )


@app.command("nearby-postal-codes-by-code")
def nearby_postal_codes_by_code(
    postal_code: str = typer.Argument(..., help="Postal code."),
    country: Optional[str] = typer.Option(None, "--country", "-c", help="ISO country code."),
    radius: Optional[float] = typer.Option(None, help="Radius in km."),
    max_rows: Optional[int] = typer.Option(None, "--max-rows", help="Max results (default 5)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Postal codes near another postal code."""

    options = _compact(postalCode=postal_code, countryCode=country, radius=radius, maxRows=max_rows)
    _execute(
        "find_nearby_postal_codes_by_post_code",
        options,
        title="Nearby postal codes",
        output=output,
        table=table,
    )


@app.command("postal-code-lookup")
def postal_code_lookup(
    postal_code: str = typer.Argument(..., help="Postal code."),
    country: Optional[str] = typer.Option(None, "--country", "-c", help="ISO country code."),
    max_rows: Optional[int] = typer.Option(None, "--max-rows", help="Max results (default 5)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Places for a postal code."""

    options = _compact(postalCode=postal_code, countryCode=country, maxRows=max_rows)
    _execute("postal_code_lookup", options, title="Postal codes", output=output, table=table)


@app.command("postal-code-countries")
def postal_code_countries(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Countries where postal code geocoding is available."""

    _execute("postal_code_country_info", {}, title="Postal code countries", output=output, table=table)


@app.command("nearby-place-name")
def nearby_place_name(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    radius: Optional[float] = typer.Option(None, help="Radius in km."),
    cities: Optional[Cities] = typer.Option(None, help="City dataset (default cities1000)."),
    style: Optional[Style] = typer.Option(None, help="Response detail (default LONG)."),
    local_country: Optional[bool] = typer.Option(
        None, "--local-country/--no-local-country", help="Stay within country borders."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Closest populated place for a coordinate."""

    options = _compact(
        lat=lat, lng=lng, radius=radius, cities=cities, style=style, localCountry=local_country
    )
    _execute("find_nearby_place_name", options, title="Nearby places", output=output, table=table)


@app.command("nearby")
def nearby(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    feature_class: Optional[str] = typer.Option(None, "--feature-class", help="Feature class (A, H, P, ...)."),
    feature_code: Optional[str] = typer.Option(None, "--feature-code", help="Feature code (PPL, ADM1, ...)."),
    radius: Optional[float] = typer.Option(None, help="Radius in km."),
    max_rows: Optional[int] = typer.Option(None, "--max-rows", help="Max results (default 20)."),
    style: Optional[Style] = typer.Option(None, help="Response detail (default LONG)."),
    local_country: Optional[bool] = typer.Option(
        None, "--local-country/--no-local-country", help="Stay within country borders."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Closest toponym for a coordinate."""

    options = _compact(
        lat=lat,
        lng=lng,
        featureClass=feature_class,
        featureCode=feature_code,
        radius=radius,
        maxRows=max_rows,
        style=style,
        localCountry=local_country,
    )
    _execute("find_nearby", options, title="Nearby features", output=output, table=table)


@app.command("extended")
def extended(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Address (US), hierarchy or ocean for a coordinate."""

    _execute(
        "find_by_lat_long_extended",
        _compact(lat=lat, lng=lng),
        title="Extended find nearby",
        output=output,
        table=table,
    )


@app.command("feature")
def feature(
    geoname_id: int = typer.Argument(..., help="GeoNames id."),
    style: Optional[Style] = typer.Option(None, help="Response detail."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
) -> None:
    """Attributes of a GeoNames feature."""

    options = _compact(geonameId=geoname_id, style=style)
    _execute("get_feature_by_geo_id", options, title="Feature", output=output, table=False)


@app.command("country-info")
def country_info(
    country_code: str = typer.Argument(..., help="ISO country code."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Capital, population, area and bounding box of a country."""

    _execute(
        "get_country_info_by_country_code",
        _compact(countryCode=country_code),
        title="Country info",
        output=output,
        table=table,
    )


@app.command("country-code")
def country_code(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
) -> None:
    """ISO country code for a coordinate."""

    _execute(
        "get_country_code_by_lat_long",
        _compact(lat=lat, lng=lng),
        title="Country code",
        output=output,
        table=False,
    )


@app.command("subdivision")
def subdivision(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    adm_level: Optional[int] = typer.Option(None, "--adm-level", help="Admin level (default 1)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
) -> None:
    """Country subdivision for a coordinate."""

    _execute(
        "get_country_subdivision_by_lat_long",
        _compact(lat=lat, lng=lng, admLevel=adm_level),
        title="Country subdivision",
        output=output,
        table=False,
    )


@app.command("timezone")
def timezone(
    lat: float = typer.Option(..., help="Latitude."),
    lng: float = typer.Option(..., help="Longitude."),
    date: Optional[str] = typer.Option(None, help="Date (YYYY-MM-DD) for sunrise/sunset."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
) -> None:
    """Timezone for a coordinate."""

    _execute(
        "get_time_zone_by_lat_long",
        _compact(lat=lat, lng=lng, date=date),
        title="Timezone",
        output=output,
        table=False,
    )


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Free text query."),
    max_rows: Optional[int] = typer.Option(None, "--max-rows", help="Max results."),
    country: Optional[str] = typer.Option(None, "--country", "-c", help="ISO country code filter."),
    feature_class: Optional[str] = typer.Option(None, "--feature-class", help="Feature class filter."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=_OUTPUT_HELP),
    table: bool = typer.Option(False, "--table", help=_TABLE_HELP),
) -> None:
    """Free text search over the GeoNames database."""

    options = _compact(q=query, maxRows=max_rows, country=country, featureClass=feature_class)
    _execute(
        "search",
        options,
        title=f"Search: {query}",
        output=output,
        table=table,
        rows=_geonames_rows if table else None,
    )


def run() -> None:
    app()
