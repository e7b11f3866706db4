"""Session context for the three working collections.

A Session is an immutable snapshot of accounts, prospects and outreach
logs. Engine functions take a Session (or its collections) and return
new ones; nothing is mutated in place, so any function can be re-run
safely after a data change.

Usage:
    from fieldplan.data.session import Session

    session = Session()
    session = session.replace_accounts(accounts)
"""

from dataclasses import dataclass, replace
from typing import Iterable

from fieldplan.data.models import Account, OutreachLog, Prospect, company_key


@dataclass(frozen=True)
class Session:
    """Working set for one planning session.

    Attributes:
        accounts: Deployed customer locations
        prospects: Authoritative prospect set (reconciled)
        logs: Outreach history, newest-inserted last
    """

    accounts: tuple[Account, ...] = ()
    prospects: tuple[Prospect, ...] = ()
    logs: tuple[OutreachLog, ...] = ()

    def replace_accounts(self, accounts: Iterable[Account]) -> "Session":
        """Return a copy with the account collection swapped out."""
        return replace(self, accounts=tuple(accounts))

    def replace_prospects(self, prospects: Iterable[Prospect]) -> "Session":
        """Return a copy with the prospect collection swapped out."""
        return replace(self, prospects=tuple(prospects))

    def replace_logs(self, logs: Iterable[OutreachLog]) -> "Session":
        """Return a copy with the outreach log collection swapped out."""
        return replace(self, logs=tuple(logs))

    def find_prospect(self, company_name: str) -> Prospect | None:
        """Look up a prospect by company name (case-insensitive)."""
        key = company_key(company_name)
        for prospect in self.prospects:
            if company_key(prospect.company_name) == key:
                return prospect
        return None

    def get_prospect(self, prospect_id: str) -> Prospect | None:
        """Look up a prospect by id."""
        for prospect in self.prospects:
            if prospect.id == prospect_id:
                return prospect
        return None
