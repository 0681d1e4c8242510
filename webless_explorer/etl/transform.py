"""Utilities for transforming Google Places responses into business records."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from webless_explorer.models import BusinessDetail, BusinessStub, FullBusinessData

logger = logging.getLogger(__name__)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_rating(value: Any) -> float:
    try:
        return float(value) if value else 0.0
    except (TypeError, ValueError):
        return 0.0


def to_business_stub(result: Dict[str, Any]) -> Optional[BusinessStub]:
    """Map one text-search result; returns None when the place has no id."""
    place_id = result.get("place_id")
    if not place_id:
        return None
    return BusinessStub(
        name=result.get("name") or "N/A",
        address=result.get("formatted_address") or result.get("vicinity") or "N/A",
        rating=_parse_rating(result.get("rating")),
        place_id=place_id,
    )


def to_business_detail(result: Dict[str, Any]) -> BusinessDetail:
    # Blank strings become None so downstream records carry a single "missing" value.
    return BusinessDetail(
        phone_number=_clean_text(result.get("formatted_phone_number")),
        website=_clean_text(result.get("website")),
    )


def dedupe_stubs(stubs: Iterable[BusinessStub]) -> List[BusinessStub]:
    unique: List[BusinessStub] = []
    seen = set()
    for stub in stubs:
        if stub.place_id in seen:
            logger.debug("Dropping duplicate place_id=%s", stub.place_id)
            continue
        seen.add(stub.place_id)
        unique.append(stub)
    return unique


def merge_business(stub: BusinessStub, detail: BusinessDetail) -> FullBusinessData:
    return FullBusinessData(
        name=stub.name,
        address=stub.address,
        rating=stub.rating,
        place_id=stub.place_id,
        phone_number=detail.phone_number,
        website=detail.website,
    )
