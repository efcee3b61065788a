"""Cliente GeoNames (fachada asíncrona).

Documentación del servicio: http://www.geonames.org/export/web-services.html

Cada método sigue el mismo patrón:
1. mezcla opciones del caller sobre los defaults de la operación (`overlay`);
2. emite un único GET a `{endpoint}{path}`;
3. devuelve un campo concreto del body decodificado (o el body entero).

Errores de transporte y de parseo XML se propagan tal cual al hacer `await`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from adapters.http_client import build_async_client
from adapters.xml_decoder import parse_xml
from core.config import AppSettings
from core.domain import operations as ops
from core.domain.models import ClientConfig
from core.domain.operations import Operation, ResponseFormat
from core.domain.options import overlay, to_query_params
from core.domain.vocabulary import Cities, Style
from core.interfaces.transport import AsyncHttpClient
from core.logger import get_logger

logger = get_logger(__name__)

Options = Mapping[str, Any]


def _decode_json(response: httpx.Response) -> Any:
    # Un body que no es JSON se conserva como texto; la extracción dará None.
    try:
        return response.json()
    except ValueError:
        return response.text


class GeoNamesClient:
    """Fachada sobre la API web de GeoNames.

    La config es inmutable y se captura al construir; las llamadas no
    comparten estado mutable y pueden lanzarse en paralelo (`asyncio.gather`).
    """

    style = Style
    cities = Cities

    def __init__(
        self,
        config: ClientConfig,
        *,
        settings: AppSettings | None = None,
        http_client: AsyncHttpClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        # Sin `http_client`, `AppSettings` se lee al abrir el primer cliente.
        self._settings = settings
        self._http_client = http_client
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    def url_for(self, operation: Operation) -> str:
        return f"{self._config.endpoint}{operation.path}"

    def build_query(self, operation: Operation, options: Options | None = None) -> dict[str, Any]:
        """Query mezclada (antes de serializar) que enviaría `operation`."""

        return operation.build_query(self._config, options)

    async def _get(self, url: str, params: dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url, params=params)
        async with build_async_client(self._settings, transport=self._transport) as client:
            return await client.get(url, params=params)

    async def _call(self, operation: Operation, options: Options | None, extra: Options) -> Any:
        query = self.build_query(operation, overlay(options or {}, extra))
        params = to_query_params(query)
        url = self.url_for(operation)
        logger.debug("GET %s (%s) params=%s", url, operation.name, sorted(params))

        response = await self._get(url, params)

        if operation.response_format is ResponseFormat.XML:
            body: Any = parse_xml(response.text)
        else:
            body = _decode_json(response)
        return operation.extract_from(body)

    async def find_nearby_postal_codes_by_gps_coordinates(
        self, options: Options | None = None, **kwargs: Any
    ) -> Any:
        """Reverse geocoding a códigos postales.

        Opciones: `lat`, `lng`, `radius` (km, default 10), `maxRows` (default 5).
        Devuelve `postalCodes`, ordenados por distancia. Para Canadá se
        devuelve el FSA (primeros 3 caracteres del código postal).
        """

        return await self._call(ops.NEARBY_POSTAL_CODES_BY_GPS, options, kwargs)

    async def find_nearby_postal_codes_by_post_code(
        self, options: Options | None = None, **kwargs: Any
    ) -> Any:
        """Códigos postales cercanos a otro código postal.

        Opciones: `postalCode`, `countryCode`, `radius`, `maxRows` (default 5).
        Devuelve `postalCodes`, ordenados por distancia.
        """

        return await self._call(ops.NEARBY_POSTAL_CODES_BY_POST_CODE, options, kwargs)

    async def postal_code_lookup(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Lugares para un código postal.

        Opciones: `postalCode`, `countryCode`, `maxRows` (default 5).
        Devuelve `postalcodes`, ordenados por código postal y nombre de lugar.
        """

        return await self._call(ops.POSTAL_CODE_LOOKUP, options, kwargs)

    async def postal_code_country_info(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Países con geocoding por código postal disponible (`geonames`)."""

        return await self._call(ops.POSTAL_CODE_COUNTRY_INFO, options, kwargs)

    async def find_nearby_place_name(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Lugar poblado (feature class P) más cercano a `lat`/`lng`.

        Opciones: `lat`, `lng`, `radius` (km), `cities` (`Cities`),
        `localCountry` (bool, no salir de las fronteras), `style` (`Style`).
        La distancia de cada resultado viene en km.
        """

        return await self._call(ops.NEARBY_PLACE_NAME, options, kwargs)

    async def find_nearby(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Topónimo más cercano a `lat`/`lng`.

        Opciones: `lat`, `lng`, `featureClass`, `featureCode`, `radius`,
        `maxRows`, `style`, `localCountry`. Lista de feature codes:
        http://download.geonames.org/export/dump/featureCodes_en.txt
        """

        return await self._call(ops.NEARBY, options, kwargs)

    async def find_by_lat_long_extended(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Combinación de servicios según la ubicación (`lat`, `lng`).

        En EE. UU. devuelve la dirección, en otros países la jerarquía
        administrativa y en océanos el nombre del océano. El endpoint solo
        habla XML; se devuelve `geonames.geoname` ya convertido a dict (o a
        lista de dicts si hay varios).
        """

        return await self._call(ops.EXTENDED_FIND_NEARBY, options, kwargs)

    async def get_feature_by_geo_id(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Atributos del feature con `geonameId` (body completo)."""

        return await self._call(ops.FEATURE_BY_GEO_ID, options, kwargs)

    async def get_country_info_by_country_code(
        self, options: Options | None = None, **kwargs: Any
    ) -> Any:
        """Capital, población, área y bounding box de `countryCode`."""

        return await self._call(ops.COUNTRY_INFO, options, kwargs)

    async def get_country_code_by_lat_long(self, options: Options | None = None, **kwargs: Any) -> Any:
        return await self._call(ops.COUNTRY_CODE, options, kwargs)

    async def get_country_subdivision_by_lat_long(
        self, options: Options | None = None, **kwargs: Any
    ) -> Any:
        """Subdivisión administrativa para `lat`/`lng`.

        `admLevel` (default 1) según http://www.geonames.org/export/subdiv-level.html
        """

        return await self._call(ops.COUNTRY_SUBDIVISION, options, kwargs)

    async def get_time_zone_by_lat_long(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Zona horaria para `lat`/`lng`; `date` opcional (YYYY-MM-DD)."""

        return await self._call(ops.TIMEZONE, options, kwargs)

    async def search(self, options: Options | None = None, **kwargs: Any) -> Any:
        """Búsqueda de texto libre (`q`, `name`, `name_equals`, ...).

        Usa `orderby` y `fuzzy` de la config y `cities=cities5000` por defecto.
        Devuelve el body completo (`totalResultsCount` + `geonames`).
        """

        body = await self._call(ops.SEARCH, options, kwargs)
        logger.debug("searchJSON body: %s", body)
        return body


def create_client(
    config: Mapping[str, Any] | ClientConfig | None = None,
    *,
    settings: AppSettings | None = None,
    http_client: AsyncHttpClient | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GeoNamesClient:
    """Factory del cliente.

    - `config`: mapping con `username`, `endpoint`, `language`, `country`,
      `charset`, `fuzzy`, `orderby` (cada una con su default), o un
      `ClientConfig` ya construido.
    - Sin `config`, se lee de `AppSettings` (env vars `GEONAMES_*`).
    - `http_client`: transporte compartido; sin él cada llamada abre un
      cliente corto con `build_async_client` (y `transport`, si se pasa).
    """

    if isinstance(config, ClientConfig):
        client_config = config
    elif config is None:
        client_config = (settings or AppSettings()).client_config()
    else:
        client_config = ClientConfig.from_mapping(config)
    return GeoNamesClient(
        client_config, settings=settings, http_client=http_client, transport=transport
    )
