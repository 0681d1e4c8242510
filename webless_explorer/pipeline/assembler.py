"""Filtering and dashboard statistics over enriched records."""

from typing import List, Sequence, Tuple

from webless_explorer.models import Dashboard, FullBusinessData


def assemble(records: Sequence[FullBusinessData], only_no_website: bool) -> Tuple[List[FullBusinessData], Dashboard]:
    """Return the (optionally) filtered records and their dashboard.

    ``total`` counts the records before filtering; the website split counts
    the filtered view. None and "" websites both count as "no website".
    """
    if only_no_website:
        filtered = [record for record in records if not record.has_website]
    else:
        filtered = list(records)

    without_website = sum(1 for record in filtered if not record.has_website)
    dashboard = Dashboard(
        total=len(records),
        with_website=len(filtered) - without_website,
        without_website=without_website,
    )
    return filtered, dashboard
