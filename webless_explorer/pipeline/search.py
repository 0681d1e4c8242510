"""Search pipeline: cache check, provider search, detail fan-out, filtering, cache write."""

import logging
from typing import Any, List, Optional, Protocol, Tuple

from webless_explorer.core.cache import NullResultCache, ResultCache, build_cache
from webless_explorer.core.config import Settings, get_settings
from webless_explorer.core.errors import ProviderError, ValidationError
from webless_explorer.models import BusinessDetail, BusinessStub, SearchResponse
from webless_explorer.pipeline.assembler import assemble
from webless_explorer.pipeline.enrichment import enrich_businesses
from webless_explorer.vendors.google_places import GooglePlacesProvider

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MIN_RADIUS = 100
MAX_RADIUS = 50000
DEFAULT_RADIUS = 5000
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during search."


class PlacesProvider(Protocol):
    def search(self, query: str, radius: int) -> List[BusinessStub]: ...

    def get_details(self, place_id: str) -> BusinessDetail: ...


def validate_search_request(query: Any, radius: Any) -> Tuple[str, int]:
    """Normalise and validate raw search input; raises ValidationError."""
    query = str(query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        raise ValidationError(f"Search query must be at least {MIN_QUERY_LENGTH} characters.")

    if isinstance(radius, bool):
        raise ValidationError("Radius must be a whole number of meters.")
    try:
        radius_value = float(radius)
    except (TypeError, ValueError):
        raise ValidationError("Radius must be a whole number of meters.") from None
    if not radius_value.is_integer():
        raise ValidationError("Radius must be a whole number of meters.")
    if radius_value < MIN_RADIUS:
        raise ValidationError(f"Radius must be at least {MIN_RADIUS} meters.")
    if radius_value > MAX_RADIUS:
        raise ValidationError(f"Radius cannot exceed {MAX_RADIUS:,} meters.")
    return query, int(radius_value)


class SearchPipeline:
    """Runs one search request end to end and always returns a SearchResponse."""

    def __init__(
        self,
        provider: PlacesProvider,
        cache: Optional[ResultCache] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.provider = provider
        self.cache = cache if cache is not None else NullResultCache()
        self.max_workers = max_workers

    def run(self, query: str, radius: int, only_no_website: bool = False) -> SearchResponse:
        logger.info(
            "Searching for query=%r within %dm radius (only_no_website=%s)", query, radius, only_no_website
        )
        try:
            return self._run(query, radius, only_no_website)
        except ProviderError as exc:
            logger.error("Business search failed: %s", exc)
            return SearchResponse.failed(str(exc) or UNEXPECTED_ERROR_MESSAGE, is_filtered=only_no_website)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error during business search: %s", exc)
            return SearchResponse.failed(str(exc) or UNEXPECTED_ERROR_MESSAGE, is_filtered=only_no_website)

    def _run(self, query: str, radius: int, only_no_website: bool) -> SearchResponse:
        # Filtered views are never read from or written to the cache.
        if not only_no_website:
            cached = self.cache.get(query, radius)
            if cached is not None:
                results, dashboard = assemble(cached, only_no_website=False)
                return SearchResponse(results=results, is_filtered=False, dashboard=dashboard)
        else:
            logger.info("Skipping cache lookup for filtered search")

        stubs = self.provider.search(query, radius)
        logger.info("Found %d initial results", len(stubs))
        if not stubs:
            return SearchResponse(is_filtered=only_no_website)

        records = enrich_businesses(stubs, self.provider, max_workers=self.max_workers)
        results, dashboard = assemble(records, only_no_website)
        logger.info(
            "Results after filtering: %d (total=%d with_website=%d without_website=%d)",
            len(results),
            dashboard.total,
            dashboard.with_website,
            dashboard.without_website,
        )

        if not only_no_website:
            self.cache.put(query, radius, records)
        else:
            logger.info("Skipping cache for filtered results")

        return SearchResponse(results=results, is_filtered=only_no_website, dashboard=dashboard)


def build_pipeline(settings: Optional[Settings] = None) -> SearchPipeline:
    settings = settings or get_settings()
    provider = GooglePlacesProvider(settings.google_api_key, timeout=settings.request_timeout)
    return SearchPipeline(provider, cache=build_cache(settings), max_workers=settings.detail_workers)
