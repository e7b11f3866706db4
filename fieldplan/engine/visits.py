"""Logging new interactions and reading company history.

Usage:
    from fieldplan.engine.visits import build_visit_log, company_history

    log = build_visit_log("Acme Co", OutreachOutcome.INTERESTED, notes="Wants a 30yd")
    history = company_history(session.logs, "acme co")
"""

from collections.abc import Iterable
from datetime import date, timedelta
from typing import Optional

from fieldplan.core.exceptions import ValidationError
from fieldplan.data.intake import IdFactory, generate_id
from fieldplan.data.models import OutreachLog, OutreachOutcome, OutreachType, company_key

DEFAULT_VISIT_NEXT_STEP = "Follow up in 3 months"
FOLLOW_UP_DAYS = 7


def build_visit_log(
    company: str,
    outcome: OutreachOutcome = OutreachOutcome.INTERESTED,
    today: Optional[date] = None,
    visit_date: Optional[date] = None,
    notes: str = "",
    next_step: str = DEFAULT_VISIT_NEXT_STEP,
    contact_name: Optional[str] = None,
    email: Optional[str] = None,
    visit_type: OutreachType = OutreachType.VISIT,
    id_factory: IdFactory = generate_id,
) -> OutreachLog:
    """Create an outreach log for an interaction entered by hand.

    The next step is due a week after today. Contact details are kept
    only for a Won outcome.

    Args:
        company: Company visited (free text, may be a new company)
        outcome: Result of the visit
        today: Entry date (defaults to today)
        visit_date: Date of the visit (defaults to today)
        notes: Visit notes
        next_step: Agreed next action
        contact_name: Primary contact (Won only)
        email: Contact email (Won only)
        visit_type: Visit, call or email
        id_factory: Id generator

    Returns:
        New OutreachLog

    Raises:
        ValidationError: If company is blank
    """
    company = (company or "").strip()
    if not company:
        raise ValidationError("Company is required to log a visit")

    today = today or date.today()
    won = outcome == OutreachOutcome.WON

    return OutreachLog(
        id=id_factory(),
        company=company,
        date=visit_date or today,
        type=visit_type,
        outcome=outcome,
        notes=notes,
        next_step=next_step,
        next_step_due_date=today + timedelta(days=FOLLOW_UP_DAYS),
        contact_name=(contact_name or None) if won else None,
        email=(email or None) if won else None,
    )


def company_history(logs: Iterable[OutreachLog], company: str) -> list[OutreachLog]:
    """Logs for one company, newest first.

    Undated logs come last. On equal dates the later-inserted log comes
    first, so the head of the list is the log reconciliation uses.
    """
    key = company_key(company)
    matching = [log for log in logs if company_key(log.company) == key]
    ordered = sorted(
        enumerate(matching),
        key=lambda pair: (pair[1].date is not None, pair[1].date or date.min, pair[0]),
        reverse=True,
    )
    return [log for _, log in ordered]
