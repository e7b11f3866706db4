"""Tests for prospect list views and search."""

from datetime import date, timedelta

import pytest

from fieldplan.core.exceptions import ValidationError
from fieldplan.data.models import Prospect, ProspectStatus
from fieldplan.engine.views import (
    VIEW_ALL,
    VIEW_HIGH_PRIORITY,
    VIEW_STALE,
    VIEWS,
    filter_prospects,
    search_prospects,
)

TODAY = date(2026, 3, 2)


@pytest.fixture
def prospects() -> list[Prospect]:
    return [
        Prospect(company_name="Acme Co", priority_score=90, status=ProspectStatus.CUSTOMER),
        Prospect(
            company_name="Acme Metals",
            priority_score=85,
            status=ProspectStatus.CONTACTED,
            last_contact_date=TODAY - timedelta(days=5),
        ),
        Prospect(company_name="Bolt Works", priority_score=40),
        Prospect(company_name="Cedar Scrap", priority_score=60, status=ProspectStatus.LOST),
    ]


class TestFilterProspects:
    """Test list view filters."""

    def test_all(self, prospects):
        assert filter_prospects(prospects, VIEW_ALL, TODAY) == prospects

    def test_high_priority(self, prospects):
        names = [p.company_name for p in filter_prospects(prospects, VIEW_HIGH_PRIORITY, TODAY)]
        assert names == ["Acme Co", "Acme Metals"]

    def test_stale_excludes_customers_and_lost(self, prospects):
        names = [p.company_name for p in filter_prospects(prospects, VIEW_STALE, TODAY)]
        assert names == ["Bolt Works"]

    def test_status_view(self, prospects):
        names = [p.company_name for p in filter_prospects(prospects, "Lost", TODAY)]
        assert names == ["Cedar Scrap"]

    def test_unknown_view_raises(self, prospects):
        with pytest.raises(ValidationError):
            filter_prospects(prospects, "Hot", TODAY)

    def test_views_list(self):
        assert VIEWS[:3] == ("All", "High Priority", "Stale")
        assert "Customer" in VIEWS


class TestSearchProspects:
    """Test company name search."""

    def test_case_insensitive_substring(self, prospects):
        names = [p.company_name for p in search_prospects(prospects, "ACME")]
        assert names == ["Acme Co", "Acme Metals"]

    def test_limit(self, prospects):
        assert len(search_prospects(prospects, "c", limit=2)) == 2

    def test_blank_term(self, prospects):
        assert search_prospects(prospects, "  ") == []
