"""Client utilities for the Google Places API."""

import logging
from typing import Any, Dict, List

import requests

from webless_explorer.core.errors import ProviderError
from webless_explorer.etl.transform import dedupe_stubs, to_business_detail, to_business_stub
from webless_explorer.models import BusinessDetail, BusinessStub

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_DETAIL_FIELDS = "formatted_phone_number,website"


class GooglePlacesError(ProviderError):
    """Raised when the Places API returns a non-successful response."""


def text_search(query: str, radius: int, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    params = {"query": query, "radius": radius, "key": api_key}
    response = _SESSION.get(f"{_BASE_URL}/textsearch/json", params=params, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        error_message = payload.get("error_message")
        logger.error("text_search failed: status=%s, error_message=%s", status, error_message)
        raise GooglePlacesError(
            f"Google Maps Text Search API error: {status} - {error_message or 'Unknown error'}"
        )
    return payload


def place_details(place_id: str, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    params = {"place_id": place_id, "key": api_key, "fields": _DETAIL_FIELDS}
    response = _SESSION.get(f"{_BASE_URL}/details/json", params=params, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status != "OK":
        logger.error("place_details failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise GooglePlacesError(payload.get("error_message") or status)
    return payload.get("result") or {}


class GooglePlacesProvider:
    """Places provider backed by the Google Places web service.

    The API key is passed in explicitly so the pipeline can be exercised with
    any other provider exposing ``search`` and ``get_details``.
    """

    def __init__(self, api_key: str, *, timeout: float = 10) -> None:
        self.api_key = api_key
        self.timeout = timeout

    def _require_key(self) -> None:
        if not self.api_key:
            message = "Google Maps API key is missing. Please set GOOGLE_MAPS_API_KEY in your .env file."
            logger.error(message)
            raise GooglePlacesError(message)

    def search(self, query: str, radius: int) -> List[BusinessStub]:
        self._require_key()
        logger.info("Places text search for query=%s radius=%d", query, radius)
        try:
            payload = text_search(query, radius, self.api_key, timeout=self.timeout)
        except GooglePlacesError:
            raise
        except (requests.RequestException, ValueError) as exc:
            logger.error("text_search request failed: %s", exc)
            raise GooglePlacesError(f"Failed to fetch businesses: {exc}") from exc

        results = payload.get("results") or []
        if payload.get("status") == "ZERO_RESULTS" or not results:
            logger.info("Text search returned zero results.")
            return []

        stubs = []
        for result in results:
            stub = to_business_stub(result)
            if stub is None:
                logger.debug("Skipping result without place_id: %s", result)
                continue
            stubs.append(stub)
        stubs = dedupe_stubs(stubs)
        logger.info("Text search returned %d results (%d unique places)", len(results), len(stubs))
        return stubs

    def get_details(self, place_id: str) -> BusinessDetail:
        if not self.api_key:
            logger.warning("No API key configured; skipping details for %s", place_id)
            return BusinessDetail.empty()
        try:
            detail = to_business_detail(place_details(place_id, self.api_key, timeout=self.timeout))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to fetch details for %s: %s", place_id, exc)
            return BusinessDetail.empty()

        logger.debug(
            "Details for %s: website=%s phone=%s",
            place_id,
            "yes" if detail.website else "no",
            "yes" if detail.phone_number else "no",
        )
        return detail
