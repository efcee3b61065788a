"""Tabla de operaciones GeoNames.

Cada `Operation` describe una llamada remota completa: path, defaults que
aporta la config del cliente, defaults literales, renombrado de claves del
caller y campo a extraer de la respuesta. Mantenerlas en una sola tabla evita
que operaciones que comparten defaults diverjan.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.domain.models import ClientConfig
from core.domain.options import overlay, rename_keys
from core.domain.vocabulary import Cities, Style


class ResponseFormat(str, Enum):
    JSON = "json"
    XML = "xml"


# Nombre del parámetro de query -> atributo de `ClientConfig`.
CLIENT_PARAMS: dict[str, str] = {
    "username": "username",
    "charset": "charset",
    "lang": "language",
    "country": "country",
    "orderby": "orderby",
    "fuzzy": "fuzzy",
}

POSTAL_CODE_ALIASES: dict[str, str] = {
    "postalCode": "postalcode",
    "countryCode": "country",
}


@dataclass(frozen=True)
class Operation:
    name: str
    path: str
    client_params: tuple[str, ...] = ("username", "charset")
    defaults: Mapping[str, Any] = field(default_factory=dict)
    aliases: Mapping[str, str] = field(default_factory=dict)
    extract: str | None = None
    response_format: ResponseFormat = ResponseFormat.JSON

    def base_defaults(self, config: ClientConfig) -> dict[str, Any]:
        """Defaults de la config del cliente seguidos de los literales."""

        base = {param: getattr(config, CLIENT_PARAMS[param]) for param in self.client_params}
        base.update(self.defaults)
        return base

    def build_query(self, config: ClientConfig, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Mezcla las opciones del caller sobre los defaults (ver `overlay`)."""

        return overlay(self.base_defaults(config), rename_keys(options, self.aliases))

    def extract_from(self, body: Any) -> Any:
        """Recorre `extract` (ruta con puntos) sobre el body decodificado.

        Sin ruta devuelve el body entero; una clave ausente o un body que no
        es un mapping devuelve `None`.
        """

        if self.extract is None:
            return body
        value = body
        for key in self.extract.split("."):
            if not isinstance(value, Mapping):
                return None
            value = value.get(key)
        return value


NEARBY_POSTAL_CODES_BY_GPS = Operation(
    name="find_nearby_postal_codes_by_gps_coordinates",
    path="/findNearbyPostalCodesJSON",
    client_params=("username", "charset", "lang"),
    defaults={"maxRows": 5, "radius": 10},
    extract="postalCodes",
)

NEARBY_POSTAL_CODES_BY_POST_CODE = Operation(
    name="find_nearby_postal_codes_by_post_code",
    path="/findNearbyPostalCodesJSON",
    client_params=("username", "charset", "lang", "country"),
    defaults={"maxRows": 5},
    aliases=POSTAL_CODE_ALIASES,
    extract="postalCodes",
)

POSTAL_CODE_LOOKUP = Operation(
    name="postal_code_lookup",
    path="/postalCodeLookupJSON",
    client_params=("username", "charset", "lang", "country"),
    defaults={"maxRows": 5},
    aliases=POSTAL_CODE_ALIASES,
    extract="postalcodes",
)

POSTAL_CODE_COUNTRY_INFO = Operation(
    name="postal_code_country_info",
    path="/postalCodeCountryInfoJSON",
    client_params=("username", "charset", "lang"),
    extract="geonames",
)

NEARBY_PLACE_NAME = Operation(
    name="find_nearby_place_name",
    path="/findNearbyPlaceNameJSON",
    client_params=("username", "charset", "lang", "country"),
    defaults={"maxRows": 20, "style": Style.LONG, "cities": Cities.CITIES1000},
    extract="geonames",
)

NEARBY = Operation(
    name="find_nearby",
    path="/findNearbyJSON",
    client_params=("username", "charset", "country"),
    defaults={"maxRows": 20, "style": Style.LONG, "cities": Cities.CITIES1000},
    extract="geonames",
)

EXTENDED_FIND_NEARBY = Operation(
    name="find_by_lat_long_extended",
    path="/extendedFindNearby",
    extract="geonames.geoname",
    response_format=ResponseFormat.XML,
)

FEATURE_BY_GEO_ID = Operation(
    name="get_feature_by_geo_id",
    path="/getJSON",
    client_params=("username", "charset", "lang"),
)

COUNTRY_INFO = Operation(
    name="get_country_info_by_country_code",
    path="/countryInfoJSON",
    aliases={"countryCode": "country"},
    extract="geonames",
)

COUNTRY_CODE = Operation(
    name="get_country_code_by_lat_long",
    path="/countryCodeJSON",
)

COUNTRY_SUBDIVISION = Operation(
    name="get_country_subdivision_by_lat_long",
    path="/countrySubdivisionJSON",
    defaults={"adm": 1},
    aliases={"admLevel": "adm"},
)

TIMEZONE = Operation(
    name="get_time_zone_by_lat_long",
    path="/timezoneJSON",
)

SEARCH = Operation(
    name="search",
    path="/searchJSON",
    client_params=("username", "charset", "orderby", "fuzzy"),
    defaults={"cities": Cities.CITIES5000},
)

OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        NEARBY_POSTAL_CODES_BY_GPS,
        NEARBY_POSTAL_CODES_BY_POST_CODE,
        POSTAL_CODE_LOOKUP,
        POSTAL_CODE_COUNTRY_INFO,
        NEARBY_PLACE_NAME,
        NEARBY,
        EXTENDED_FIND_NEARBY,
        FEATURE_BY_GEO_ID,
        COUNTRY_INFO,
        COUNTRY_CODE,
        COUNTRY_SUBDIVISION,
        TIMEZONE,
        SEARCH,
    )
}
