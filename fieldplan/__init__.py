"""fieldplan - field sales prospect reconciliation and visit planning.

Turns account, prospect and outreach exports into one prospect per
company, scores them, and proposes a next-day visit plan.

Layers:
    - core: Configuration, logging, exceptions
    - data: Record models, import normalization, session context
    - integrations: File reading, city geocoding
    - engine: Business logic (reconcile, scoring, planner, stats, export)
    - content: Rendered daily brief
"""

__version__ = "0.1.0"
