"""Prospect list views and search.

Usage:
    from fieldplan.engine.views import filter_prospects, search_prospects

    stale = filter_prospects(prospects, "Stale")
    matches = search_prospects(prospects, "acme")
"""

from collections.abc import Iterable
from datetime import date
from typing import Optional

from fieldplan.core.exceptions import ValidationError
from fieldplan.data.models import Prospect, ProspectStatus, days_since
from fieldplan.engine.stats import FOLLOW_UP_AFTER_DAYS, HIGH_PRIORITY_THRESHOLD

VIEW_ALL = "All"
VIEW_HIGH_PRIORITY = "High Priority"
VIEW_STALE = "Stale"

VIEWS = (VIEW_ALL, VIEW_HIGH_PRIORITY, VIEW_STALE) + tuple(s.value for s in ProspectStatus)


def filter_prospects(
    prospects: Iterable[Prospect],
    view: str = VIEW_ALL,
    today: Optional[date] = None,
) -> list[Prospect]:
    """Filter prospects for a list view.

    Views:
        All: everything
        High Priority: priority score >= 80
        Stale: not contacted in 30+ days and not Customer or Lost
        <status>: exact status match (New, Contacted, ...)

    Raises:
        ValidationError: If view is not one of VIEWS
    """
    today = today or date.today()

    if view == VIEW_ALL:
        return list(prospects)
    if view == VIEW_HIGH_PRIORITY:
        return [p for p in prospects if p.priority_score >= HIGH_PRIORITY_THRESHOLD]
    if view == VIEW_STALE:
        return [
            p
            for p in prospects
            if days_since(p.last_contact_date, today) > FOLLOW_UP_AFTER_DAYS
            and p.status not in (ProspectStatus.CUSTOMER, ProspectStatus.LOST)
        ]
    try:
        status = ProspectStatus(view)
    except ValueError as e:
        raise ValidationError(f"Unknown view: {view!r}") from e
    return [p for p in prospects if p.status == status]


def search_prospects(
    prospects: Iterable[Prospect],
    term: str,
    limit: int = 5,
) -> list[Prospect]:
    """Case-insensitive substring search on company name.

    Returns:
        Up to limit matches in input order; empty for a blank term
    """
    needle = term.strip().casefold()
    if not needle:
        return []
    matches = [p for p in prospects if needle in p.company_name.casefold()]
    return matches[:limit]
