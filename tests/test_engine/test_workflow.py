"""Tests for session workflow.

Covers:
    - Import order and customer detection
    - Empty imports leave the session untouched
    - The Acme round trip (account, prospect, interested visit)
    - Recording visits
"""

from datetime import date

from fieldplan.data.models import OutreachOutcome, Prospect, ProspectStatus, RecordKind
from fieldplan.data.session import Session
from fieldplan.engine.visits import build_visit_log
from fieldplan.engine.workflow import import_rows, load_records, record_visit

TODAY = date(2026, 3, 2)


class TestLoadRecords:
    """Test collection replacement."""

    def test_empty_batch_ignored(self, sample_prospect: Prospect):
        session = Session(prospects=(sample_prospect,))
        assert load_records(session, RecordKind.PROSPECTS, []) is session

    def test_replaces_collection(self, sample_prospect: Prospect):
        other = Prospect(id="p-2", company_name="Other Co")
        session = Session(prospects=(sample_prospect,))
        updated = load_records(session, RecordKind.PROSPECTS, [other])
        assert updated.prospects == (other,)

    def test_kind_as_string(self, sample_account):
        updated = load_records(Session(), "accounts", [sample_account])
        assert updated.accounts == (sample_account,)


class TestImportRows:
    """Test the full import path."""

    def test_full_load_order(self, account_rows, prospect_rows, outreach_rows, rng, id_factory):
        session = Session()
        session = import_rows(session, RecordKind.ACCOUNTS, account_rows, rng=rng)
        session = import_rows(
            session, RecordKind.PROSPECTS, prospect_rows, rng=rng, id_factory=id_factory
        )
        session = import_rows(
            session, RecordKind.OUTREACH, outreach_rows, today=TODAY, id_factory=id_factory
        )

        assert len(session.accounts) == 2
        assert len(session.prospects) == 3
        assert len(session.logs) == 1

        acme = session.find_prospect("Acme Co")
        assert acme.status == ProspectStatus.CUSTOMER
        assert acme.last_contact_date == date(2026, 2, 23)
        assert session.find_prospect("Rose City Metals").status == ProspectStatus.NEW

    def test_blank_rows_do_not_wipe(self, prospect_rows, rng, id_factory):
        session = import_rows(
            Session(), RecordKind.PROSPECTS, prospect_rows, rng=rng, id_factory=id_factory
        )
        again = import_rows(session, RecordKind.PROSPECTS, [{"Company Name": ""}], rng=rng)
        assert again is session

    def test_accounts_after_prospects_reconcile(self, prospect_rows, account_rows, rng, id_factory):
        """Loading accounts later still links them to existing prospects."""
        session = import_rows(
            Session(), RecordKind.PROSPECTS, prospect_rows, rng=rng, id_factory=id_factory
        )
        session = import_rows(session, RecordKind.ACCOUNTS, account_rows, rng=rng)
        acme = session.find_prospect("acme co")
        assert acme.status == ProspectStatus.CUSTOMER
        assert acme.is_deployed is True


class TestAcmeRoundTrip:
    """Account plus interested visit still ends as a deployed customer."""

    def test_round_trip(self, rng, id_factory):
        session = import_rows(
            Session(),
            RecordKind.ACCOUNTS,
            [{"Company Name": "Acme", "Location Address": "1 Main St, Tyler, TX"}],
            rng=rng,
        )
        session = import_rows(
            session,
            RecordKind.PROSPECTS,
            [{"Company Name": "acme"}],
            rng=rng,
            id_factory=id_factory,
        )
        session = record_visit(
            session,
            build_visit_log("ACME", OutreachOutcome.INTERESTED, today=TODAY, id_factory=id_factory),
        )

        acme = session.find_prospect("Acme")
        assert acme.status == ProspectStatus.CUSTOMER
        assert acme.is_deployed is True
        assert acme.last_contact_date == TODAY


class TestRecordVisit:
    """Test appending visits."""

    def test_visit_appended_and_reconciled(self, sample_prospect: Prospect, id_factory):
        session = Session(prospects=(sample_prospect,))
        log = build_visit_log(
            "Acme Co",
            OutreachOutcome.WON,
            today=TODAY,
            contact_name="Dana",
            id_factory=id_factory,
        )
        updated = record_visit(session, log)

        assert updated.logs == (log,)
        acme = updated.find_prospect("Acme Co")
        assert acme.status == ProspectStatus.CUSTOMER
        assert acme.contact_name == "Dana"
        assert acme.next_step_due == date(2026, 3, 9)
        assert session.logs == ()

    def test_same_day_visit_wins_tie(self, sample_prospect: Prospect, id_factory):
        session = Session(prospects=(sample_prospect,))
        session = record_visit(
            session,
            build_visit_log("Acme Co", OutreachOutcome.NURTURE, today=TODAY, next_step="First"),
        )
        session = record_visit(
            session,
            build_visit_log("Acme Co", OutreachOutcome.INTERESTED, today=TODAY, next_step="Second"),
        )
        assert session.find_prospect("Acme Co").next_step == "Second"
