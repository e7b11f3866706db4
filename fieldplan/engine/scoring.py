"""Visit-plan scoring.

Turns a prospect into a plan score and a one-line reason. The base is
the prospect's static priority score (0-100); rules then add boosts
and penalties in a fixed order, each free to overwrite the reason:

    1. Follow-up due by tomorrow      +200  "Follow-up Due: <next step>"
    2. Qualified                      +30   "Qualified Lead - Push to close"
    3. High priority gone stale       +50   "High Priority - At Risk (Stale)"
    4. Contacted within a week        -500  unless already >= 200 (cooldown)
    5. Existing customer              -50   unless already >= 200

Only prospects with a final score above zero are eligible for a plan.

Usage:
    from fieldplan.engine.scoring import score

    result = score(prospect, today)
    if result.eligible:
        ...
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from fieldplan.data.models import Prospect, ProspectStatus, days_since

# =============================================================================
# PLAN WEIGHTS
# =============================================================================


@dataclass(frozen=True)
class PlanWeights:
    """Boosts, penalties and thresholds for plan scoring.

    protected_score is the line above which the cooldown and customer
    penalties no longer apply (something is genuinely due).
    """

    due_boost: int = 200
    qualified_boost: int = 30
    stale_boost: int = 50
    cooldown_penalty: int = 500
    customer_penalty: int = 50
    protected_score: int = 200
    high_priority_threshold: int = 80
    stale_after_days: int = 30
    cooldown_days: int = 7


DEFAULT_WEIGHTS = PlanWeights()

REASON_DEFAULT = "High Value Prospect"
REASON_QUALIFIED = "Qualified Lead - Push to close"
REASON_STALE = "High Priority - At Risk (Stale)"
DEFAULT_NEXT_STEP = "Check in"


@dataclass(frozen=True)
class ScoreResult:
    """Plan score and explanation for one prospect."""

    plan_score: int
    reason: str

    @property
    def eligible(self) -> bool:
        """Whether the prospect can be placed on a plan."""
        return self.plan_score > 0


# =============================================================================
# SCORING
# =============================================================================


def is_follow_up_due(prospect: Prospect, today: date) -> bool:
    """Next step is due today, overdue, or due tomorrow."""
    return prospect.next_step_due is not None and prospect.next_step_due <= today + timedelta(
        days=1
    )


def score(
    prospect: Prospect,
    today: Optional[date] = None,
    weights: PlanWeights = DEFAULT_WEIGHTS,
) -> ScoreResult:
    """Score a prospect for tomorrow's visit plan.

    Deterministic for a given today.

    Args:
        prospect: Prospect to score
        today: Reference date (defaults to today)
        weights: Rule weights

    Returns:
        ScoreResult with plan_score and reason
    """
    today = today or date.today()
    plan_score = prospect.priority_score or 0
    reason = REASON_DEFAULT
    stale_days = days_since(prospect.last_contact_date, today)

    if is_follow_up_due(prospect, today):
        plan_score += weights.due_boost
        reason = f"Follow-up Due: {prospect.next_step or DEFAULT_NEXT_STEP}"

    if prospect.status == ProspectStatus.QUALIFIED:
        plan_score += weights.qualified_boost
        reason = REASON_QUALIFIED

    if (
        prospect.priority_score >= weights.high_priority_threshold
        and stale_days > weights.stale_after_days
        and prospect.status not in (ProspectStatus.CUSTOMER, ProspectStatus.LOST)
    ):
        plan_score += weights.stale_boost
        reason = REASON_STALE

    # Cooldown: recently contacted and nothing due
    if stale_days < weights.cooldown_days and plan_score < weights.protected_score:
        plan_score -= weights.cooldown_penalty

    if prospect.status == ProspectStatus.CUSTOMER and plan_score < weights.protected_score:
        plan_score -= weights.customer_penalty

    return ScoreResult(plan_score=plan_score, reason=reason)
