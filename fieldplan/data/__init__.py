"""Data package - Record models, import normalization, session context.

Modules:
    - models: Enumerations and frozen record dataclasses
    - intake: Raw export rows to typed records
    - session: Immutable holder for the three working collections
"""

from fieldplan.data.models import (
    Account,
    Coordinates,
    OutreachLog,
    OutreachOutcome,
    OutreachType,
    PlanItem,
    Prospect,
    ProspectStatus,
    RecordKind,
)
from fieldplan.data.session import Session

__all__ = [
    "Account",
    "Coordinates",
    "OutreachLog",
    "OutreachOutcome",
    "OutreachType",
    "PlanItem",
    "Prospect",
    "ProspectStatus",
    "RecordKind",
    "Session",
]
