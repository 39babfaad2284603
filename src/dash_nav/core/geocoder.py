"""Place search and reverse lookup via the Nominatim API."""

import logging
from typing import Optional

import httpx

from dash_nav.config import Settings, settings as default_settings
from dash_nav.errors import InvalidQuery, NetworkError, NoResults
from dash_nav.models import Coordinate, GeocodeCandidate

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


def _parse_candidates(results: list[dict]) -> list[GeocodeCandidate]:
    candidates = []
    for item in results:
        try:
            candidates.append(
                GeocodeCandidate(
                    display_name=item["display_name"],
                    coordinate=Coordinate(lat=float(item["lat"]), lon=float(item["lon"])),
                    place_type=item.get("type", "unknown"),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed Nominatim result %r: %s", item.get("place_id"), exc)
    return candidates


class GeocoderClient:
    """Turns free-text queries into candidate locations.

    The first attempt is biased to the home country; when that comes back
    empty the query is repeated once without the bias.
    """

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings

    async def _get(self, path: str, params: dict) -> object:
        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout_s,
            headers={"User-Agent": self.settings.user_agent},
        ) as client:
            try:
                response = await client.get(f"{self.settings.nominatim_url}{path}", params=params)
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as exc:
                logger.warning("Nominatim %s timed out: %s", path, exc)
                raise NetworkError("Geocoding service timed out") from exc
            except httpx.HTTPStatusError as exc:
                logger.warning("Nominatim %s returned HTTP %s", path, exc.response.status_code)
                raise NetworkError(
                    f"Geocoding service returned HTTP {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                logger.warning("Nominatim %s failed: %s", path, exc)
                raise NetworkError(f"Geocoding service unreachable: {exc}") from exc
            except ValueError as exc:
                logger.warning("Nominatim %s sent an undecodable body: %s", path, exc)
                raise NetworkError("Geocoding service sent an invalid response") from exc

    async def _search_once(self, query: str, country: Optional[str]) -> list[GeocodeCandidate]:
        params = {
            "q": query,
            "format": "json",
            "limit": self.settings.result_limit,
            "accept-language": self.settings.language,
        }
        if country:
            params["countrycodes"] = country
        results = await self._get("/search", params)
        if not isinstance(results, list):
            raise NetworkError("Geocoding service sent an invalid response")
        return _parse_candidates(results)

    async def search(self, query: str) -> list[GeocodeCandidate]:
        """Resolve a free-text query to candidate locations.

        Raises:
            InvalidQuery: fewer than 3 non-blank characters. No request is made.
            NoResults: neither the country-biased nor the broad search matched.
            NetworkError: the service could not be reached or answered badly.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise InvalidQuery(f"Query must be at least {MIN_QUERY_LENGTH} characters")

        candidates = await self._search_once(query, self.settings.home_country)
        if candidates:
            return candidates

        logger.info("No results for %r in %r, retrying without country bias", query,
                    self.settings.home_country)
        candidates = await self._search_once(query, None)
        if candidates:
            return candidates
        raise NoResults(f"No locations found for '{query}'")

    async def reverse(self, coordinate: Coordinate) -> Optional[str]:
        """Return the settlement name at a coordinate, or None if the service has none."""
        data = await self._get(
            "/reverse",
            {
                "lat": coordinate.lat,
                "lon": coordinate.lon,
                "format": "json",
                "accept-language": self.settings.language,
            },
        )
        address = data.get("address") if isinstance(data, dict) else None
        if not address:
            return None
        return (
            address.get("city")
            or address.get("town")
            or address.get("village")
            or address.get("municipality")
            or "Ismeretlen"
        )
