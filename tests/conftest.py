"""Shared pytest fixtures for fieldplan tests.

Fixtures:
    - today: Fixed reference date
    - rng: Seeded random source for coordinate jitter
    - id_factory: Deterministic record ids
    - sample_account / sample_prospect / sample_log: Typed records
    - account_rows / prospect_rows / outreach_rows: Raw export rows
    - mock_config: Test configuration with temp paths
"""

import itertools
import random
from datetime import date
from pathlib import Path
from typing import Callable, Generator

import pytest

from fieldplan.core.config import Config, reset_config
from fieldplan.data.models import (
    Account,
    Coordinates,
    OutreachLog,
    OutreachOutcome,
    OutreachType,
    Prospect,
    ProspectStatus,
)

TODAY = date(2026, 3, 2)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Keep FIELDPLAN_* settings from the developer's shell out of tests."""
    for key in (
        "FIELDPLAN_LOG_PATH",
        "FIELDPLAN_EXPORT_PATH",
        "FIELDPLAN_MAX_STOPS",
        "FIELDPLAN_DEFAULT_CITY",
        "FIELDPLAN_JITTER_DEGREES",
        "FIELDPLAN_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def today() -> date:
    """Fixed reference date (a Monday)."""
    return TODAY


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Ids id-1, id-2, ... in call order."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def sample_account() -> Account:
    """Deployed account for Acme Co."""
    return Account(
        company_name="Acme Co",
        location_name="Acme Yard",
        address="100 Industrial Dr, Tyler, TX 75701",
        city="Tyler",
        container_size=30.0,
        monthly_revenue=1200.0,
        monthly_profit=400.0,
        fill_frequency=2.0,
        coordinates=Coordinates(32.35, -95.30),
    )


@pytest.fixture
def sample_prospect() -> Prospect:
    """New prospect, never contacted."""
    return Prospect(
        id="p-1",
        company_name="Acme Co",
        address="100 Industrial Dr, Tyler, TX 75701",
        city="Tyler",
        industry="Manufacturing",
        priority_score=70,
        status=ProspectStatus.NEW,
        coordinates=Coordinates(32.35, -95.30),
    )


@pytest.fixture
def sample_log() -> OutreachLog:
    """Interested visit a week before today."""
    return OutreachLog(
        id="log-1",
        company="Acme Co",
        date=date(2026, 2, 23),
        type=OutreachType.VISIT,
        outcome=OutreachOutcome.INTERESTED,
        notes="Met the yard manager",
        next_step="Send pricing",
        next_step_due_date=date(2026, 3, 2),
    )


@pytest.fixture
def account_rows() -> list[dict[str, str]]:
    """Rows as read from the accounts export."""
    return [
        {
            "Company Name": "Acme Co",
            "Location Name": "Acme Yard",
            "Location Address": "100 Industrial Dr, Tyler, TX 75701",
            "Container Size (yd3)": "30",
            "Projected Monthly Revenue ($)": "$1,200.00",
            "Projected Monthly Profit ($)": "400",
            "Fill Frequency (per month)": "2",
        },
        {
            "Company Name": "Pine Fab",
            "Location Name": "Pine Fab Main",
            "Location Address": "9 Loop 281, Longview, TX 75605",
            "Container Size (yd3)": "20 yd",
            "Projected Monthly Revenue ($)": "850",
            "Projected Monthly Profit ($)": "",
            "Fill Frequency (per month)": "1",
        },
    ]


@pytest.fixture
def prospect_rows() -> list[dict[str, str]]:
    """Rows as read from the prospect master export."""
    return [
        {
            "Company Name": "Acme Co",
            "Address": "100 Industrial Dr, Tyler, TX 75701",
            "Industry": "Manufacturing",
            "Priority Score": "70",
            "Is Deployed": "",
        },
        {
            "Company Name": "Rose City Metals",
            "Address": "55 Front St, Tyler, TX 75702",
            "Industry": "Scrap",
            "Priority Score": "90",
            "Is Deployed": "FALSE",
        },
        {
            "Company Name": "Kilgore Steel",
            "Address": "12 Main St, Kilgore, TX 75662",
            "Industry": "Fabrication",
            "Priority Score": "85",
            "Is Deployed": "",
        },
    ]


@pytest.fixture
def outreach_rows() -> list[dict[str, str]]:
    """Rows as read from the outreach log export."""
    return [
        {
            "Company": "Acme Co",
            "Visit/Call Date": "2026-02-23",
            "Outcome": "Interested",
            "Notes": "Met the yard manager",
            "Next Step": "Send pricing",
            "Next Step Due": "2026-03-02",
        },
    ]


@pytest.fixture
def mock_config(tmp_path: Path) -> Config:
    """Test configuration with temp paths."""
    return Config(
        log_path=tmp_path / "logs",
        export_path=tmp_path / "exports",
        debug=True,
    )
