"""Import normalization: raw export rows to typed records.

Each export (accounts, prospects, outreach) arrives as a list of
string-keyed rows with free-text headers. This module maps them to
Account, Prospect and OutreachLog records, applying the per-source
heuristics:

    - Accounts: city inferred from the address, numbers default to 0
    - Prospects: customer detection, city resolution, priority default 50,
      fresh id and jittered coordinate per record
    - Outreach: outcome defaults to Nurture, type to Visit, date to today

Rows without a company name are dropped. Nothing here raises on bad
data; malformed values degrade to defaults.

Usage:
    from fieldplan.data.intake import clean_accounts, clean_prospects

    accounts = clean_accounts(account_rows)
    prospects = clean_prospects(prospect_rows, accounts)
"""

import random
import re
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Callable, Optional

from fieldplan.core.exceptions import ValidationError
from fieldplan.core.logging import get_logger
from fieldplan.data.models import (
    Account,
    OutreachLog,
    OutreachOutcome,
    OutreachType,
    Prospect,
    ProspectStatus,
    RecordKind,
    company_key,
    parse_date,
)
from fieldplan.integrations.geocode import (
    DEFAULT_CITY,
    DEFAULT_JITTER,
    canonical_city,
    infer_city,
    jittered_coordinates,
)

logger = get_logger(__name__)

Row = Mapping[str, str]
IdFactory = Callable[[], str]

DEFAULT_PRIORITY = 50
DEFAULT_CONTAINER_POTENTIAL = "30"
DEFAULT_INDUSTRY = "Unknown"

_TRUTHY = {"true", "yes", "y", "1"}
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)")


def generate_id() -> str:
    """Return a fresh unique record id."""
    return uuid.uuid4().hex[:12]


# =============================================================================
# CELL PARSING
# =============================================================================


def _cell(row: Row, *columns: str) -> str:
    """Return the first non-empty value among the given columns."""
    for column in columns:
        value = row.get(column)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def parse_number(value: Optional[str]) -> float:
    """Parse the leading number of a cell, ignoring $ and thousands separators.

    Examples:
        >>> parse_number("$1,250.50")
        1250.5
        >>> parse_number("10 yd")
        10.0
        >>> parse_number("n/a")
        0.0
    """
    if not value:
        return 0.0
    text = str(value).strip().replace("$", "").replace(",", "")
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    return float(match.group(0))


def parse_priority(value: Optional[str]) -> int:
    """Parse a priority score as an integer clamped to 0-100.

    Reads the leading number like parse_number, so "85 pts" is 85.
    Decimals truncate. A cell with no leading number yields DEFAULT_PRIORITY.
    """
    if value is None:
        return DEFAULT_PRIORITY
    match = _LEADING_NUMBER.match(str(value).strip())
    if not match:
        return DEFAULT_PRIORITY
    score = int(float(match.group(0)))
    return max(0, min(100, score))


def is_truthy(value: Optional[str]) -> bool:
    """Interpret a spreadsheet flag cell (TRUE/yes/1)."""
    return str(value or "").strip().lower() in _TRUTHY


def _parse_outcome(value: str) -> OutreachOutcome:
    wanted = value.strip().casefold()
    for outcome in OutreachOutcome:
        if outcome.value.casefold() == wanted:
            return outcome
    if wanted:
        logger.debug("Unknown outcome, using Nurture", extra={"context": {"outcome": value}})
    return OutreachOutcome.NURTURE


def _parse_type(value: str) -> OutreachType:
    wanted = value.strip().casefold()
    for kind in OutreachType:
        if kind.value.casefold() == wanted:
            return kind
    return OutreachType.VISIT


def resolve_prospect_city(row: Row, default: str = DEFAULT_CITY) -> str:
    """Resolve a prospect's city.

    Order:
        1. Explicit City column
        2. First token of the second-to-last comma segment of Address
        3. Known city name appearing anywhere in Address
        4. default

    Known cities are returned in their table spelling.
    """
    city = _cell(row, "City")
    address = _cell(row, "Address")

    if not city and address:
        parts = address.split(",")
        if len(parts) >= 2:
            tokens = parts[-2].strip().split()
            # A first token without letters (a zip or street number) is not a city.
            if tokens and any(ch.isalpha() for ch in tokens[0]):
                city = tokens[0]
        if not city:
            city = infer_city(address, default=None) or ""

    if not city:
        return default
    return canonical_city(city) or city


def _log_summary(kind: RecordKind, total: int, kept: int) -> None:
    logger.info(
        f"Normalized {kind.value}",
        extra={"context": {"kind": kind.value, "rows": total, "kept": kept, "dropped": total - kept}},
    )


# =============================================================================
# PER-SOURCE NORMALIZERS
# =============================================================================


def clean_accounts(
    rows: Sequence[Row],
    rng: Optional[random.Random] = None,
    jitter: float = DEFAULT_JITTER,
    default_city: str = DEFAULT_CITY,
) -> list[Account]:
    """Normalize account export rows.

    Args:
        rows: Raw rows from the accounts export
        rng: Random source for coordinate jitter
        jitter: Coordinate jitter in degrees
        default_city: City used when the address names none

    Returns:
        Accounts for rows that carry a company name
    """
    accounts: list[Account] = []
    for row in rows:
        name = _cell(row, "Company Name")
        if not name:
            continue
        address = _cell(row, "Location Address")
        city = infer_city(address, default=default_city) or default_city
        accounts.append(
            Account(
                company_name=name,
                location_name=_cell(row, "Location Name"),
                address=address,
                city=city,
                container_size=parse_number(_cell(row, "Container Size (yd3)")),
                monthly_revenue=parse_number(_cell(row, "Projected Monthly Revenue ($)")),
                monthly_profit=parse_number(_cell(row, "Projected Monthly Profit ($)")),
                fill_frequency=parse_number(_cell(row, "Fill Frequency (per month)")),
                coordinates=jittered_coordinates(city, rng, jitter, default_city),
            )
        )

    _log_summary(RecordKind.ACCOUNTS, len(rows), len(accounts))
    return accounts


def clean_prospects(
    rows: Sequence[Row],
    existing_accounts: Iterable[Account] = (),
    rng: Optional[random.Random] = None,
    id_factory: IdFactory = generate_id,
    jitter: float = DEFAULT_JITTER,
    default_city: str = DEFAULT_CITY,
) -> list[Prospect]:
    """Normalize prospect export rows.

    A row is a customer when its company matches an existing account or
    its Is Deployed flag is set.

    Args:
        rows: Raw rows from the prospects export
        existing_accounts: Accounts already loaded in the session
        rng: Random source for coordinate jitter
        id_factory: Produces a fresh id per record
        jitter: Coordinate jitter in degrees
        default_city: City used when none can be resolved

    Returns:
        Prospects for rows that carry a company name
    """
    account_keys = {company_key(a.company_name) for a in existing_accounts}

    prospects: list[Prospect] = []
    for row in rows:
        name = _cell(row, "Company Name", "Company")
        # Repeated header lines inside concatenated exports
        if not name or name == "Company Name":
            continue

        is_customer = company_key(name) in account_keys or is_truthy(row.get("Is Deployed"))
        city = resolve_prospect_city(row, default_city)

        prospects.append(
            Prospect(
                id=id_factory(),
                company_name=name,
                address=_cell(row, "Address", "Street"),
                city=city,
                industry=_cell(row, "Industry") or DEFAULT_INDUSTRY,
                phone=_cell(row, "Phone"),
                priority_score=parse_priority(_cell(row, "Priority Score") or None),
                status=ProspectStatus.CUSTOMER if is_customer else ProspectStatus.NEW,
                is_deployed=is_customer,
                last_contact_date=parse_date(_cell(row, "Last Outreach Date")),
                next_step=_cell(row, "Next Step"),
                next_step_due=parse_date(_cell(row, "Next Step Due")),
                notes=_cell(row, "Notes") or None,
                container_potential=_cell(row, "Container Size (yd3)")
                or DEFAULT_CONTAINER_POTENTIAL,
                contact_name=_cell(row, "Contact Name") or None,
                email=_cell(row, "Email") or None,
                coordinates=jittered_coordinates(city, rng, jitter, default_city),
            )
        )

    _log_summary(RecordKind.PROSPECTS, len(rows), len(prospects))
    return prospects


def clean_outreach(
    rows: Sequence[Row],
    today: Optional[date] = None,
    id_factory: IdFactory = generate_id,
) -> list[OutreachLog]:
    """Normalize outreach history rows.

    Args:
        rows: Raw rows from the outreach export
        today: Date used for rows without a visit date (defaults to today)
        id_factory: Produces a fresh id per record

    Returns:
        Outreach logs for rows that carry a company name
    """
    today = today or date.today()
    logs: list[OutreachLog] = []
    unparsable = 0

    for row in rows:
        company = _cell(row, "Company", "Company Name")
        if not company:
            continue

        raw_date = _cell(row, "Visit/Call Date", "Date")
        log_date = parse_date(raw_date) if raw_date else today
        if raw_date and log_date is None:
            unparsable += 1

        outcome = _parse_outcome(_cell(row, "Outcome"))
        won = outcome == OutreachOutcome.WON

        logs.append(
            OutreachLog(
                id=id_factory(),
                company=company,
                date=log_date,
                type=_parse_type(_cell(row, "Type")),
                outcome=outcome,
                notes=_cell(row, "Notes"),
                next_step=_cell(row, "Next Step"),
                next_step_due_date=parse_date(_cell(row, "Next Step Due")),
                contact_name=(_cell(row, "Contact Name") or None) if won else None,
                email=(_cell(row, "Email") or None) if won else None,
            )
        )

    if unparsable:
        logger.warning(
            "Outreach rows with unreadable dates",
            extra={"context": {"count": unparsable}},
        )
    _log_summary(RecordKind.OUTREACH, len(rows), len(logs))
    return logs


def normalize_rows(
    kind: RecordKind,
    rows: Sequence[Row],
    existing_accounts: Iterable[Account] = (),
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
    id_factory: IdFactory = generate_id,
    jitter: float = DEFAULT_JITTER,
    default_city: str = DEFAULT_CITY,
) -> list:
    """Normalize rows of the given kind.

    Args:
        kind: Which export the rows came from
        rows: Raw rows
        existing_accounts: Accounts for prospect customer detection
        rng: Random source for coordinate jitter
        today: Default date for outreach rows
        id_factory: Id generator for prospects and logs
        jitter: Coordinate jitter in degrees
        default_city: Fallback city

    Returns:
        List of Account, Prospect or OutreachLog records

    Raises:
        ValidationError: If kind is not a RecordKind
    """
    try:
        kind = RecordKind(kind)
    except ValueError as e:
        raise ValidationError(f"Unknown record kind: {kind!r}") from e

    if kind == RecordKind.ACCOUNTS:
        return clean_accounts(rows, rng, jitter, default_city)
    if kind == RecordKind.PROSPECTS:
        return clean_prospects(rows, existing_accounts, rng, id_factory, jitter, default_city)
    return clean_outreach(rows, today, id_factory)
