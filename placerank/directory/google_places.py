from __future__ import annotations

import logging
from typing import Any

import requests

from ..errors import ConfigurationError, UpstreamDataError
from .config import DEFAULT_DIRECTORY_CONFIG, DirectoryConfig

logger = logging.getLogger(__name__)

_OK_STATUSES = {"OK", "ZERO_RESULTS"}


def require_api_key(config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG) -> str:
    if not config.api_key:
        raise ConfigurationError("Google Maps API key is not configured.")
    return config.api_key


def _get_json(url: str, params: dict[str, Any], config: DirectoryConfig) -> dict[str, Any]:
    """Single GET against the directory; any transport or decode failure is a 502."""
    try:
        response = requests.get(url, params=params, timeout=config.timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Directory request to %s failed", url, exc_info=True)
        raise UpstreamDataError("The place directory is unavailable.", status_code=502) from exc
    if not isinstance(data, dict):
        raise UpstreamDataError("The place directory returned an invalid response.", status_code=502)
    return data


def nearby_search(
    lat: float,
    lng: float,
    radius_m: int,
    place_type: str,
    open_now: bool = False,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> list[dict[str, Any]]:
    params: dict[str, Any] = {
        "location": f"{lat},{lng}",
        "radius": radius_m,
        "type": place_type,
        "key": require_api_key(config),
        "language": config.language,
    }
    if open_now:
        params["opennow"] = "true"
    data = _get_json(f"{config.places_url}/nearbysearch/json", params, config)
    status = data.get("status")
    if status not in _OK_STATUSES:
        logger.warning("Nearby search for %s returned status %s", place_type, status)
        raise UpstreamDataError(f"Nearby search failed with status {status}.", status_code=502)
    return list(data.get("results") or [])


def place_reviews(
    place_id: str,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> list[dict[str, Any]]:
    """Reviews the directory holds for ``place_id``; empty when it has none."""
    params = {
        "place_id": place_id,
        "fields": "place_id,reviews",
        "key": require_api_key(config),
        "language": config.language,
    }
    data = _get_json(f"{config.places_url}/details/json", params, config)
    if data.get("status") != "OK":
        return []
    reviews = (data.get("result") or {}).get("reviews") or []
    return [r for r in reviews if isinstance(r, dict)]


def _first_component(results: list[dict[str, Any]], component_type: str) -> str | None:
    for result in results:
        for comp in result.get("address_components") or []:
            if component_type in (comp.get("types") or []):
                name = (comp.get("long_name") or "").strip()
                if name:
                    return name
    return None


def reverse_geocode_city(
    lat: float,
    lng: float,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> str | None:
    """Locality for a point, falling back to the first-level administrative area."""
    params = {
        "latlng": f"{lat},{lng}",
        "key": require_api_key(config),
        "language": config.language,
    }
    data = _get_json(config.geocode_url, params, config)
    results = data.get("results") or []
    if data.get("status") != "OK" or not results:
        return None
    return _first_component(results, "locality") or _first_component(
        results, "administrative_area_level_1"
    )
