"""Engine package - Business logic layer.

This package contains all business logic. Every function is pure over
its inputs and returns new collections.

Modules:
    - reconcile: Account/log linkage onto prospects
    - scoring: Plan score and reason per prospect
    - planner: Anchor-and-cluster day plan
    - stats: Dashboard counts
    - views: Prospect list filters and search
    - visits: New interaction logs, company history
    - workflow: Session loading and visit recording
    - export: Outreach CSV export
"""

from fieldplan.engine.planner import DEFAULT_MAX_STOPS, plan, rank_candidates
from fieldplan.engine.reconcile import latest_log, reconcile, reconcile_if_needed
from fieldplan.engine.scoring import DEFAULT_WEIGHTS, PlanWeights, ScoreResult, score
from fieldplan.engine.stats import DashboardStats, compute_stats, stage_breakdown

__all__ = [
    # Reconciliation
    "latest_log",
    "reconcile",
    "reconcile_if_needed",
    # Scoring
    "DEFAULT_WEIGHTS",
    "PlanWeights",
    "ScoreResult",
    "score",
    # Planning
    "DEFAULT_MAX_STOPS",
    "plan",
    "rank_candidates",
    # Stats
    "DashboardStats",
    "compute_stats",
    "stage_breakdown",
]
