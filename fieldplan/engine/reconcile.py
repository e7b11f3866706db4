"""Reconciliation of prospects against accounts and outreach history.

Each prospect's mutable fields are recomputed from two sources:
    - Account linkage: a matching account makes the prospect a deployed
      Customer, whatever the outreach history says
    - Latest outreach log: drives status, last contact, next step and
      captured contact details

Reconciliation is a pure function and a fixed point: running it again
on its own output with the same accounts and logs changes nothing.

Usage:
    from fieldplan.engine.reconcile import reconcile, reconcile_if_needed

    prospects = reconcile(prospects, accounts, logs)
    session = reconcile_if_needed(previous_session, updated_session)
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date
from typing import Optional

from fieldplan.core.logging import get_logger
from fieldplan.data.models import (
    Account,
    OutreachLog,
    OutreachOutcome,
    Prospect,
    ProspectStatus,
    company_key,
)
from fieldplan.data.session import Session

logger = get_logger(__name__)


def latest_log(logs: Sequence[OutreachLog]) -> Optional[OutreachLog]:
    """Pick the most recent log.

    Ordering:
        1. Latest date wins
        2. Logs without a date rank below every dated log
        3. Same date: the log inserted later wins

    Args:
        logs: Logs for a single company, in insertion order

    Returns:
        The latest log, or None if logs is empty
    """
    if not logs:
        return None
    _, log = max(
        enumerate(logs),
        key=lambda pair: (pair[1].date is not None, pair[1].date or date.min, pair[0]),
    )
    return log


def reconcile_prospect(
    prospect: Prospect,
    account: Optional[Account],
    last_log: Optional[OutreachLog],
) -> Prospect:
    """Recompute one prospect's mutable fields.

    Args:
        prospect: Current prospect
        account: Matching account, if any
        last_log: Latest matching outreach log, if any

    Returns:
        Updated prospect (a new instance)
    """
    if account is not None:
        status = ProspectStatus.CUSTOMER
    elif last_log is not None:
        status = (
            ProspectStatus.CUSTOMER
            if last_log.outcome == OutreachOutcome.WON
            else ProspectStatus.CONTACTED
        )
    else:
        status = prospect.status

    if last_log is None:
        return replace(
            prospect,
            status=status,
            is_deployed=prospect.is_deployed or account is not None,
        )

    return replace(
        prospect,
        status=status,
        is_deployed=prospect.is_deployed or account is not None,
        last_contact_date=last_log.date,
        next_step=last_log.next_step,
        next_step_due=last_log.next_step_due_date,
        contact_name=last_log.contact_name or prospect.contact_name,
        email=last_log.email or prospect.email,
    )


def reconcile(
    prospects: Iterable[Prospect],
    accounts: Iterable[Account],
    logs: Iterable[OutreachLog],
) -> list[Prospect]:
    """Reconcile every prospect against accounts and outreach logs.

    Company names match by case-insensitive equality. Pure: inputs are
    not modified and the result depends only on the arguments.

    Args:
        prospects: Current prospect set
        accounts: All deployed accounts
        logs: All outreach logs, in insertion order

    Returns:
        New prospect list in the same order
    """
    accounts_by_key: dict[str, Account] = {}
    for account in accounts:
        accounts_by_key.setdefault(company_key(account.company_name), account)

    logs_by_key: dict[str, list[OutreachLog]] = defaultdict(list)
    for log in logs:
        logs_by_key[company_key(log.company)].append(log)

    result: list[Prospect] = []
    changed = 0
    for prospect in prospects:
        key = company_key(prospect.company_name)
        updated = reconcile_prospect(
            prospect,
            accounts_by_key.get(key),
            latest_log(logs_by_key.get(key, [])),
        )
        if updated != prospect:
            changed += 1
        result.append(updated)

    logger.debug(
        "Reconciled prospects",
        extra={"context": {"prospects": len(result), "changed": changed}},
    )
    return result


def reconcile_if_needed(prev: Session, updated: Session) -> Session:
    """Re-run reconciliation after a session change, when it applies.

    Runs only when the account or log collection differs between prev
    and updated. A prospect-only change (a fresh prospect import) does not
    trigger it.

    Precondition for acting: updated holds prospects and at least one of
    accounts or logs. Otherwise updated is returned unchanged.

    Args:
        prev: Session before the change
        updated: Session after the change

    Returns:
        updated, with its prospects replaced by the reconciled set if it ran
    """
    if prev.accounts == updated.accounts and prev.logs == updated.logs:
        return updated

    if not updated.prospects or not (updated.accounts or updated.logs):
        logger.debug(
            "Reconciliation skipped",
            extra={
                "context": {
                    "prospects": len(updated.prospects),
                    "accounts": len(updated.accounts),
                    "logs": len(updated.logs),
                }
            },
        )
        return updated

    return updated.replace_prospects(
        reconcile(updated.prospects, updated.accounts, updated.logs)
    )
