import sys
from pathlib import Path

import pytest

# Ensure the `webless_explorer` package is importable when running pytest from the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from webless_explorer.core import config  # noqa: E402
from webless_explorer.models import BusinessDetail, BusinessStub, FullBusinessData  # noqa: E402


class FakeProvider:
    """In-memory places provider; details map place_id -> BusinessDetail or Exception."""

    def __init__(self, stubs=None, details=None, search_error=None):
        self.stubs = list(stubs or [])
        self.details = dict(details or {})
        self.search_error = search_error
        self.search_calls = []
        self.detail_calls = []

    def search(self, query, radius):
        self.search_calls.append((query, radius))
        if self.search_error is not None:
            raise self.search_error
        return list(self.stubs)

    def get_details(self, place_id):
        self.detail_calls.append(place_id)
        detail = self.details.get(place_id, BusinessDetail.empty())
        if isinstance(detail, Exception):
            raise detail
        return detail


def make_stub(index, rating=4.0):
    return BusinessStub(name=f"Biz {index}", address=f"{index} Main St", rating=rating, place_id=f"p{index}")


def make_record(index, website=None, phone="555-0000", rating=4.0):
    return FullBusinessData(
        name=f"Biz {index}",
        address=f"{index} Main St",
        rating=rating,
        place_id=f"p{index}",
        phone_number=phone,
        website=website,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
