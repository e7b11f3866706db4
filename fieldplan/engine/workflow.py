"""Session workflow: loading imports and recording visits.

Every step returns a new Session. Reconciliation re-runs through
reconcile_if_needed, so it fires after account and log changes but
not after a prospect-only import.

Usage:
    from fieldplan.engine.workflow import import_rows, record_visit

    session = import_rows(Session(), RecordKind.ACCOUNTS, account_rows)
    session = import_rows(session, RecordKind.PROSPECTS, prospect_rows)
    session = record_visit(session, log)
"""

import random
from collections.abc import Sequence
from datetime import date
from typing import Optional

from fieldplan.core.logging import get_logger
from fieldplan.data.intake import IdFactory, Row, generate_id, normalize_rows
from fieldplan.data.models import OutreachLog, RecordKind
from fieldplan.data.session import Session
from fieldplan.engine.reconcile import reconcile_if_needed
from fieldplan.integrations.geocode import DEFAULT_CITY, DEFAULT_JITTER

logger = get_logger(__name__)


def load_records(session: Session, kind: RecordKind, records: Sequence) -> Session:
    """Replace one collection of the session with freshly imported records.

    An empty batch leaves the session untouched, so a failed or blank
    upload never wipes existing data.

    Args:
        session: Current session
        kind: Which collection the records replace
        records: Typed records of that kind

    Returns:
        New session, reconciled if accounts or logs changed
    """
    kind = RecordKind(kind)
    if not records:
        logger.info("Empty import ignored", extra={"context": {"kind": kind.value}})
        return session

    if kind == RecordKind.ACCOUNTS:
        updated = session.replace_accounts(records)
    elif kind == RecordKind.PROSPECTS:
        updated = session.replace_prospects(records)
    else:
        updated = session.replace_logs(records)

    logger.info(
        f"Loaded {kind.value}",
        extra={"context": {"kind": kind.value, "count": len(records)}},
    )
    return reconcile_if_needed(session, updated)


def import_rows(
    session: Session,
    kind: RecordKind,
    rows: Sequence[Row],
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
    id_factory: IdFactory = generate_id,
    jitter: float = DEFAULT_JITTER,
    default_city: str = DEFAULT_CITY,
) -> Session:
    """Normalize raw rows and load them into the session.

    Prospect rows are checked against the session's accounts for
    customer detection.

    Returns:
        New session
    """
    records = normalize_rows(
        kind,
        rows,
        existing_accounts=session.accounts,
        rng=rng,
        today=today,
        id_factory=id_factory,
        jitter=jitter,
        default_city=default_city,
    )
    return load_records(session, kind, records)


def record_visit(session: Session, log: OutreachLog) -> Session:
    """Append a new outreach log and re-reconcile.

    The log is appended last, so it wins a same-date tie against
    older entries. Reconciliation still picks the latest by date.

    Returns:
        New session with the log added
    """
    updated = session.replace_logs(session.logs + (log,))
    logger.info(
        "Visit recorded",
        extra={"context": {"company": log.company, "outcome": log.outcome.value}},
    )
    return reconcile_if_needed(session, updated)
