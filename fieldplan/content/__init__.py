"""Content generation package.

Generates:
    - Daily brief (tomorrow's route plus dashboard counts)
"""

from fieldplan.content.daily_brief import DailyBrief, generate_daily_brief, render_daily_brief

__all__ = [
    "DailyBrief",
    "generate_daily_brief",
    "render_daily_brief",
]
