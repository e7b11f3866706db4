"""Dashboard statistics.

Pure reductions over the session collections. Empty input gives
all-zero counts.

Usage:
    from fieldplan.engine.stats import compute_stats

    stats = compute_stats(session.prospects, session.accounts)
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Optional

from fieldplan.data.models import Account, Prospect, ProspectStatus, days_since

HIGH_PRIORITY_THRESHOLD = 80
FOLLOW_UP_AFTER_DAYS = 30

# Pipeline chart columns, in display order
PIPELINE_STAGES = (
    ProspectStatus.NEW,
    ProspectStatus.CONTACTED,
    ProspectStatus.QUALIFIED,
    ProspectStatus.CUSTOMER,
)


@dataclass(frozen=True)
class DashboardStats:
    """Summary counts for the dashboard.

    Attributes:
        total_prospects: All prospects
        active_customers: Prospects with Customer status
        high_priority_leads: Priority >= 80, not Customer or Lost
        due_for_follow_up: Not Customer, contacted, last contact more than 30 days ago
        monthly_potential_revenue: Sum of account monthly revenue
    """

    total_prospects: int = 0
    active_customers: int = 0
    high_priority_leads: int = 0
    due_for_follow_up: int = 0
    monthly_potential_revenue: float = 0.0


def is_high_priority_lead(prospect: Prospect) -> bool:
    """High priority and still winnable."""
    return prospect.priority_score >= HIGH_PRIORITY_THRESHOLD and prospect.status not in (
        ProspectStatus.CUSTOMER,
        ProspectStatus.LOST,
    )


def compute_stats(
    prospects: Sequence[Prospect],
    accounts: Iterable[Account],
    today: Optional[date] = None,
) -> DashboardStats:
    """Reduce prospects and accounts to dashboard counts.

    Prospects that were never contacted are not counted as due for
    follow-up.

    Args:
        prospects: Reconciled prospect set
        accounts: Deployed accounts
        today: Reference date (defaults to today)

    Returns:
        DashboardStats
    """
    today = today or date.today()
    return DashboardStats(
        total_prospects=len(prospects),
        active_customers=sum(1 for p in prospects if p.status == ProspectStatus.CUSTOMER),
        high_priority_leads=sum(1 for p in prospects if is_high_priority_lead(p)),
        due_for_follow_up=sum(
            1
            for p in prospects
            if p.status != ProspectStatus.CUSTOMER
            and p.last_contact_date is not None
            and days_since(p.last_contact_date, today) > FOLLOW_UP_AFTER_DAYS
        ),
        monthly_potential_revenue=sum((a.monthly_revenue or 0.0) for a in accounts),
    )


def stage_breakdown(prospects: Iterable[Prospect]) -> dict[str, int]:
    """Count prospects per pipeline stage.

    Lost prospects are not charted.

    Returns:
        Ordered mapping of stage name to count (New, Contacted, Qualified, Customer)
    """
    counts = {stage.value: 0 for stage in PIPELINE_STAGES}
    for prospect in prospects:
        if prospect.status.value in counts:
            counts[prospect.status.value] += 1
    return counts
