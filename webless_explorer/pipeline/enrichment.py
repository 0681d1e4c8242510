"""Concurrent detail enrichment for search stubs."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Protocol, Sequence

from webless_explorer.etl.transform import merge_business
from webless_explorer.models import BusinessDetail, BusinessStub, FullBusinessData

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 10


class DetailProvider(Protocol):
    def get_details(self, place_id: str) -> BusinessDetail: ...


def _fetch_detail(provider: DetailProvider, stub: BusinessStub) -> BusinessDetail:
    try:
        return provider.get_details(stub.place_id)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Error fetching details for %s: %s", stub.place_id, exc)
        return BusinessDetail.empty()


def enrich_businesses(
    stubs: Sequence[BusinessStub],
    provider: DetailProvider,
    max_workers: Optional[int] = None,
) -> List[FullBusinessData]:
    """Resolve details for every stub concurrently.

    Result ``i`` always belongs to ``stubs[i]``. A failed lookup degrades only
    its own record to empty phone/website; the call returns once every lookup
    has settled.
    """
    if not stubs:
        return []

    workers = min(max_workers or DEFAULT_MAX_WORKERS, len(stubs))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="place-details") as executor:
        futures = [executor.submit(_fetch_detail, provider, stub) for stub in stubs]
        details = [future.result() for future in futures]

    records = [merge_business(stub, detail) for stub, detail in zip(stubs, details)]
    logger.info("Fetched details for %d businesses using %d workers", len(records), workers)
    return records
