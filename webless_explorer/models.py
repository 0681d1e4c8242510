"""Core data models shared by the search, cache and export layers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True, slots=True)
class BusinessStub:
    """Minimal business record returned by a Places text search."""

    name: str
    address: str
    rating: float
    place_id: str


@dataclass(frozen=True, slots=True)
class BusinessDetail:
    """Phone/website information for one place; None means unavailable or failed."""

    phone_number: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def empty(cls) -> "BusinessDetail":
        return cls(phone_number=None, website=None)


@dataclass(frozen=True, slots=True)
class FullBusinessData:
    """A stub merged with its detail lookup."""

    name: str
    address: str
    rating: float
    place_id: str
    phone_number: Optional[str] = None
    website: Optional[str] = None

    @property
    def has_website(self) -> bool:
        return bool(self.website)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "rating": self.rating,
            "placeId": self.place_id,
            "phoneNumber": self.phone_number,
            "website": self.website,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FullBusinessData":
        """Build a record from the camelCase wire shape (snake_case keys are accepted too)."""
        rating_raw = payload.get("rating")
        try:
            rating = float(rating_raw) if rating_raw not in (None, "") else 0.0
        except (TypeError, ValueError):
            rating = 0.0
        return cls(
            name=str(payload.get("name") or ""),
            address=str(payload.get("address") or ""),
            rating=rating,
            place_id=str(payload.get("placeId") or payload.get("place_id") or ""),
            phone_number=_optional_str(payload.get("phoneNumber", payload.get("phone_number"))),
            website=_optional_str(payload.get("website")),
        )


@dataclass(frozen=True, slots=True)
class Dashboard:
    """Aggregate counts: total is pre-filter, the split is post-filter."""

    total: int = 0
    with_website: int = 0
    without_website: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "withWebsite": self.with_website,
            "withoutWebsite": self.without_website,
        }


@dataclass(slots=True)
class SearchResponse:
    results: List[FullBusinessData] = field(default_factory=list)
    is_filtered: bool = False
    dashboard: Dashboard = field(default_factory=Dashboard)
    error: Optional[str] = None

    @classmethod
    def failed(cls, message: str, is_filtered: bool = False) -> "SearchResponse":
        return cls(results=[], is_filtered=is_filtered, dashboard=Dashboard(), error=message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [record.to_dict() for record in self.results],
            "isFiltered": self.is_filtered,
            "dashboard": self.dashboard.to_dict(),
            "error": self.error,
        }


class ExportFormat(str, enum.Enum):
    CSV = "csv"
    EXCEL = "excel"

    @property
    def extension(self) -> str:
        return "csv" if self is ExportFormat.CSV else "xlsx"

    @property
    def mime_type(self) -> str:
        if self is ExportFormat.CSV:
            return "text/csv"
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    @classmethod
    def parse(cls, value: Union["ExportFormat", str]) -> "ExportFormat":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass(slots=True)
class ExportResult:
    success: bool
    error: Optional[str] = None
    file_content: Optional[Union[str, bytes]] = field(default=None, repr=False)
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
