"""Next-day visit planning.

Ranks every prospect by plan score, takes the best one as the anchor,
and fills the day around it:

    1. Anchor (highest plan score) is always the first stop
    2. Other candidates in the anchor's city, best first
    3. If stops remain, candidates from other cities, best first

"Same city" is exact equality on the resolved city name. It stands in
for driving distance and is knowingly coarse; no road network is used.

Ties keep input order (stable sort), so the same inputs always give the
same plan.

Usage:
    from fieldplan.engine.planner import plan

    stops = plan(session.prospects, max_stops=12)
"""

from collections.abc import Iterable
from dataclasses import fields, replace
from datetime import date
from typing import Optional

from fieldplan.core.exceptions import ValidationError
from fieldplan.core.logging import get_logger
from fieldplan.data.models import PlanItem, Prospect
from fieldplan.engine.scoring import DEFAULT_WEIGHTS, PlanWeights, ScoreResult, score
from fieldplan.integrations.geocode import distance_km

logger = get_logger(__name__)

DEFAULT_MAX_STOPS = 12

_PROSPECT_FIELDS = tuple(f.name for f in fields(Prospect))


def to_plan_item(prospect: Prospect, result: ScoreResult) -> PlanItem:
    """Attach a score result to a prospect."""
    values = {name: getattr(prospect, name) for name in _PROSPECT_FIELDS}
    return PlanItem(**values, plan_score=result.plan_score, reason=result.reason)


def rank_candidates(
    prospects: Iterable[Prospect],
    today: Optional[date] = None,
    weights: PlanWeights = DEFAULT_WEIGHTS,
) -> list[PlanItem]:
    """Score prospects and return eligible ones, best first.

    Args:
        prospects: Prospects to score
        today: Reference date (defaults to today)
        weights: Rule weights

    Returns:
        PlanItems with plan_score > 0, sorted descending (stable)
    """
    today = today or date.today()
    scored = [to_plan_item(p, score(p, today, weights)) for p in prospects]
    candidates = [item for item in scored if item.plan_score > 0]
    # sorted() is stable with reverse=True: equal scores keep input order
    return sorted(candidates, key=lambda item: item.plan_score, reverse=True)


def plan(
    prospects: Iterable[Prospect],
    max_stops: int = DEFAULT_MAX_STOPS,
    today: Optional[date] = None,
    weights: PlanWeights = DEFAULT_WEIGHTS,
) -> list[PlanItem]:
    """Build an ordered visit plan.

    Args:
        prospects: All prospects in the session
        max_stops: Maximum number of stops (at least 1)
        today: Reference date (defaults to today)
        weights: Rule weights

    Returns:
        Stops in visit order, anchor first. Empty if nothing is eligible.

    Raises:
        ValidationError: If max_stops is less than 1
    """
    if max_stops < 1:
        raise ValidationError(f"max_stops must be at least 1, got {max_stops}")

    candidates = rank_candidates(prospects, today, weights)
    if not candidates:
        logger.info("No eligible prospects for plan")
        return []

    anchor = candidates[0]
    remaining = candidates[1:]
    same_city = [c for c in remaining if c.city == anchor.city]
    other_cities = [c for c in remaining if c.city != anchor.city]

    stops = [anchor] + same_city[: max_stops - 1]
    if len(stops) < max_stops:
        stops.extend(other_cities[: max_stops - len(stops)])

    stops = [
        replace(stop, distance_from_anchor=distance_km(anchor.coordinates, stop.coordinates))
        for stop in stops
    ]

    logger.info(
        "Plan built",
        extra={
            "context": {
                "candidates": len(candidates),
                "stops": len(stops),
                "anchor": anchor.company_name,
                "city": anchor.city,
                "same_city": min(len(same_city), max_stops - 1),
            }
        },
    )
    return stops
