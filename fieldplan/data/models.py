"""Data models and enumerations for fieldplan.

Records are frozen dataclasses. Nothing downstream of the normalizer
edits a record in place; reconciliation builds replacements with
dataclasses.replace and the session swaps whole collections.

This module defines:
    - Enumerations for all categorical fields
    - Dataclasses for accounts, prospects, outreach logs and plan items
    - Utility functions (join key, date parsing, staleness)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

# =============================================================================
# ENUMERATIONS
# =============================================================================


class ProspectStatus(str, Enum):
    """Where a prospect sits in the sales pipeline.

    Values:
        NEW: Imported, never contacted
        CONTACTED: At least one logged interaction
        QUALIFIED: Confirmed fit, working toward close
        CUSTOMER: Container deployed (account exists or deal won)
        LOST: Not buying
    """

    NEW = "New"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    CUSTOMER = "Customer"
    LOST = "Lost"


class OutreachType(str, Enum):
    """Channel of an outreach interaction."""

    VISIT = "Visit"
    CALL = "Call"
    EMAIL = "Email"


class OutreachOutcome(str, Enum):
    """Outcome recorded for an outreach interaction."""

    INTERESTED = "Interested"
    HAS_VENDOR = "Has Vendor"
    NO_SCRAP = "No Scrap"
    NOT_INTERESTED = "Not Interested"
    WON = "Won"
    NURTURE = "Nurture"
    APPROVAL_NEEDED = "Corporate/Manager Approval"


class RecordKind(str, Enum):
    """Which export a batch of rows came from."""

    ACCOUNTS = "accounts"
    PROSPECTS = "prospects"
    OUTREACH = "outreach"


# =============================================================================
# NORMALIZATION
# =============================================================================

STALE_SENTINEL_DAYS = 999

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


def company_key(name: Optional[str]) -> str:
    """Return the join key for a company name.

    Matching across accounts, prospects and logs is exact equality on
    this key. No suffix stripping, no fuzzy matching.

    Examples:
        >>> company_key("  ACME Co ")
        'acme co'
    """
    return (name or "").strip().casefold()


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse a date from an export cell.

    Accepts ISO dates, ISO datetimes and US-style M/D/YYYY.

    Args:
        value: Raw cell text, or a date already

    Returns:
        Parsed date, or None if empty or unparsable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def days_since(value: Optional[date], today: date) -> int:
    """Absolute number of days between a contact date and today.

    Args:
        value: Last contact date (None if never contacted or unknown)
        today: Reference date

    Returns:
        Day count, or STALE_SENTINEL_DAYS when value is None
    """
    if value is None:
        return STALE_SENTINEL_DAYS
    return abs((today - value).days)


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class Coordinates:
    """Map position in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class Account:
    """Deployed customer location from the accounts export.

    Attributes:
        company_name: Join key against prospects and logs
        location_name: Site name
        address: Site address
        city: City inferred from the address
        container_size: Container size in cubic yards
        monthly_revenue: Projected monthly revenue ($)
        monthly_profit: Projected monthly profit ($)
        fill_frequency: Fills per month
        coordinates: Jittered map position
    """

    company_name: str = ""
    location_name: str = ""
    address: str = ""
    city: str = "Tyler"
    container_size: float = 0.0
    monthly_revenue: float = 0.0
    monthly_profit: float = 0.0
    fill_frequency: float = 0.0
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class Prospect:
    """Prospect record, one per company.

    id, company_name, industry and priority_score are fixed at import.
    status, is_deployed, contact and date fields are rewritten by
    reconciliation whenever accounts or logs change.

    Attributes:
        id: Session-stable identifier
        company_name: Join key (case-insensitive)
        address: Street address
        city: Resolved city
        industry: Industry label
        phone: Phone number as imported
        priority_score: Static import weight 0-100
        status: Pipeline status
        is_deployed: Container already on site
        last_contact_date: Date of the latest interaction
        next_step: Planned next action
        next_step_due: When the next action is due
        notes: Free-text notes
        container_potential: Estimated container size (yd3)
        contact_name: Primary contact
        email: Contact email
        coordinates: Jittered map position
    """

    id: str = ""
    company_name: str = ""
    address: str = ""
    city: str = "Tyler"
    industry: str = "Unknown"
    phone: str = ""
    priority_score: int = 50
    status: ProspectStatus = ProspectStatus.NEW
    is_deployed: bool = False
    last_contact_date: Optional[date] = None
    next_step: str = ""
    next_step_due: Optional[date] = None
    notes: Optional[str] = None
    container_potential: str = "30"
    contact_name: Optional[str] = None
    email: Optional[str] = None
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class OutreachLog:
    """One logged interaction. Append-only.

    Attributes:
        id: Unique identifier
        company: Company name as typed (matched case-insensitively)
        date: Interaction date; None if the source date was unparsable
        type: Visit, call or email
        outcome: Result of the interaction
        notes: Free-text notes
        next_step: Agreed next action
        next_step_due_date: When the next action is due
        contact_name: Captured only when outcome is Won
        email: Captured only when outcome is Won
    """

    id: str = ""
    company: str = ""
    date: Optional[date] = None
    type: OutreachType = OutreachType.VISIT
    outcome: OutreachOutcome = OutreachOutcome.NURTURE
    notes: str = ""
    next_step: str = ""
    next_step_due_date: Optional[date] = None
    contact_name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class PlanItem(Prospect):
    """Prospect as it appears in a day plan.

    Planner output only; never stored back on the prospect.

    Attributes:
        plan_score: Ranking value for this planning run
        reason: Why the stop is on the plan
        distance_from_anchor: Straight-line km from the first stop (display only)
    """

    plan_score: int = 0
    reason: str = ""
    distance_from_anchor: Optional[float] = None
