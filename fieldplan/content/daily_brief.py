"""Daily brief generation.

Produces a plain-text memo readable in under a minute:
    - Dashboard counts (prospects, customers, hot leads, follow-ups, revenue)
    - Pipeline by stage
    - Tomorrow's route, anchor first, with the reason for each stop

The layout lives in ``templates/daily_brief.txt.j2``.

Usage:
    from fieldplan.content.daily_brief import generate_daily_brief

    brief = generate_daily_brief(session, max_stops=12)
    print(brief.full_text)
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

import jinja2

from fieldplan.core.logging import get_logger
from fieldplan.data.models import PlanItem
from fieldplan.data.session import Session
from fieldplan.engine import planner
from fieldplan.engine.stats import DashboardStats, compute_stats, stage_breakdown

logger = get_logger(__name__)


TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
TEMPLATE_NAME = "daily_brief.txt.j2"

# Jinja2 environment (created once, reused)
_env: Optional[jinja2.Environment] = None


@dataclass
class DailyBrief:
    """Daily brief content."""

    date: str
    stops: list[PlanItem]
    stats: DashboardStats
    full_text: str
    stages: dict[str, int] = field(default_factory=dict)


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _km(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.1f} km"


def _get_env() -> jinja2.Environment:
    """Get or create the Jinja2 environment."""
    global _env
    if _env is None:
        _env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        _env.filters["money"] = _money
        _env.filters["km"] = _km
    return _env


def render_daily_brief(
    plan: Sequence[PlanItem],
    stats: DashboardStats,
    today: Optional[date] = None,
    stages: Optional[dict[str, int]] = None,
) -> str:
    """Render the daily brief text.

    Args:
        plan: Planned stops, anchor first
        stats: Dashboard counts
        today: Date printed in the heading (defaults to today)
        stages: Optional pipeline counts by stage

    Returns:
        Rendered brief

    Raises:
        jinja2.TemplateNotFound: If the template file is missing
        jinja2.UndefinedError: If the template references an unknown name
    """
    today = today or date.today()
    template = _get_env().get_template(TEMPLATE_NAME)

    rendered: str = template.render(
        today=today.isoformat(),
        stops=list(plan),
        stats=stats,
        stages=stages or {},
    )
    logger.info(
        "Rendered daily brief",
        extra={"context": {"stops": len(plan), "date": today.isoformat()}},
    )
    return rendered


def generate_daily_brief(
    session: Session,
    max_stops: int = planner.DEFAULT_MAX_STOPS,
    today: Optional[date] = None,
) -> DailyBrief:
    """Plan tomorrow's route and build the brief for a session.

    Args:
        session: Reconciled session
        max_stops: Upper bound on route length
        today: Reference date (defaults to today)

    Returns:
        DailyBrief with structured data and rendered text
    """
    today = today or date.today()

    stops = planner.plan(session.prospects, max_stops=max_stops, today=today)
    stats = compute_stats(session.prospects, session.accounts, today=today)
    stages = stage_breakdown(session.prospects)

    return DailyBrief(
        date=today.isoformat(),
        stops=stops,
        stats=stats,
        stages=stages,
        full_text=render_daily_brief(stops, stats, today=today, stages=stages),
    )
