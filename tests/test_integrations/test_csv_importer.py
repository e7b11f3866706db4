"""Tests for CSV/XLSX export reading."""

from datetime import datetime
from pathlib import Path

import openpyxl
import pytest

from fieldplan.core.exceptions import ImportError_
from fieldplan.data.models import RecordKind
from fieldplan.integrations.csv_importer import KIND_SIGNATURES, CSVImporter, ParseResult

# =========================================================================
# CSV PARSING TESTS
# =========================================================================


class TestParseCSV:
    """Test CSV file parsing."""

    def test_parse_basic_csv(self, tmp_path: Path):
        """Parse a simple CSV file."""
        csv_file = tmp_path / "prospects.csv"
        csv_file.write_text(
            "Company Name,Industry,Priority Score\n"
            "Acme Co,Manufacturing,70\n"
            "Rose City Metals,Scrap,90\n"
        )
        result = CSVImporter().parse_file(csv_file)

        assert isinstance(result, ParseResult)
        assert result.headers == ["Company Name", "Industry", "Priority Score"]
        assert result.total_rows == 2
        assert result.sample_rows[0] == ["Acme Co", "Manufacturing", "70"]
        assert result.encoding == "utf-8-sig"

    def test_parse_returns_sample_max_5(self, tmp_path: Path):
        """Sample rows capped at 5."""
        lines = ["Company Name,Industry\n"] + [f"Company {i},Scrap\n" for i in range(20)]
        csv_file = tmp_path / "big.csv"
        csv_file.write_text("".join(lines))

        result = CSVImporter().parse_file(csv_file)
        assert len(result.sample_rows) == 5
        assert result.total_rows == 20

    def test_parse_headers_only(self, tmp_path: Path):
        """CSV with headers only returns 0 total_rows."""
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("Company,Outcome\n")

        result = CSVImporter().parse_file(csv_file)
        assert result.total_rows == 0
        assert result.headers == ["Company", "Outcome"]

    def test_parse_nonexistent_file(self, tmp_path: Path):
        """Missing file raises ImportError_."""
        with pytest.raises(ImportError_, match="not found"):
            CSVImporter().parse_file(tmp_path / "missing.csv")

    def test_parse_unsupported_extension(self, tmp_path: Path):
        """Unsupported suffix raises ImportError_."""
        doc = tmp_path / "notes.pdf"
        doc.write_text("hello")
        with pytest.raises(ImportError_, match="Unsupported"):
            CSVImporter().parse_file(doc)

    def test_empty_file_raises(self, tmp_path: Path):
        """A file without a header row cannot be imported."""
        csv_file = tmp_path / "blank.csv"
        csv_file.write_text("")
        with pytest.raises(ImportError_, match="no headers"):
            CSVImporter().parse_file(csv_file)

    def test_parse_csv_latin1(self, tmp_path: Path):
        """Latin-1 files are read via encoding fallback."""
        csv_file = tmp_path / "latin.csv"
        csv_file.write_bytes("Company Name,Notes\nCafé Metals,Señor Lopez\n".encode("latin-1"))

        result = CSVImporter().parse_file(csv_file)
        assert result.encoding == "latin-1"
        assert result.sample_rows[0] == ["Café Metals", "Señor Lopez"]

    def test_utf8_bom_stripped(self, tmp_path: Path):
        """Excel's UTF-8 BOM does not leak into the first header."""
        csv_file = tmp_path / "bom.csv"
        csv_file.write_bytes("\ufeffCompany Name,Industry\nAcme Co,Scrap\n".encode("utf-8"))
        assert CSVImporter().parse_file(csv_file).headers[0] == "Company Name"


class TestReadRows:
    """Test header-keyed row reading."""

    def test_rows_keyed_by_header(self, tmp_path: Path):
        csv_file = tmp_path / "outreach.csv"
        csv_file.write_text(
            "Company,Visit/Call Date,Outcome,Notes\n"
            '"Pine Fab, LLC",2026-02-23,  Interested ,Met Sam\n'
        )
        rows = CSVImporter().read_rows(csv_file)
        assert rows == [
            {
                "Company": "Pine Fab, LLC",
                "Visit/Call Date": "2026-02-23",
                "Outcome": "Interested",
                "Notes": "Met Sam",
            }
        ]

    def test_blank_rows_skipped(self, tmp_path: Path):
        csv_file = tmp_path / "gaps.csv"
        csv_file.write_text("Company Name,Industry\nAcme Co,Scrap\n,\n\nBolt Works,Fab\n")
        rows = CSVImporter().read_rows(csv_file)
        assert [r["Company Name"] for r in rows] == ["Acme Co", "Bolt Works"]

    def test_short_rows_padded(self, tmp_path: Path):
        csv_file = tmp_path / "short.csv"
        csv_file.write_text("Company Name,Industry,Priority Score\nAcme Co\n")
        rows = CSVImporter().read_rows(csv_file)
        assert rows == [{"Company Name": "Acme Co", "Industry": "", "Priority Score": ""}]


# =========================================================================
# XLSX PARSING TESTS
# =========================================================================


class TestParseXLSX:
    """Test workbook parsing."""

    def _write_workbook(self, path: Path, rows: list[list]) -> Path:
        wb = openpyxl.Workbook()
        ws = wb.active
        for row in rows:
            ws.append(row)
        wb.save(str(path))
        return path

    def test_read_rows_from_xlsx(self, tmp_path: Path):
        path = self._write_workbook(
            tmp_path / "accounts.xlsx",
            [
                ["Company Name", "Location Address", "Projected Monthly Revenue ($)"],
                ["Acme Co", "1 Main St, Tyler, TX", 1200.0],
                [None, None, None],
                ["Pine Fab", "9 Loop 281, Longview, TX", 850.5],
            ],
        )
        rows = CSVImporter().read_rows(path)
        assert len(rows) == 2
        assert rows[0]["Projected Monthly Revenue ($)"] == "1200"
        assert rows[1]["Projected Monthly Revenue ($)"] == "850.5"

    def test_datetime_cells_become_iso_dates(self, tmp_path: Path):
        path = self._write_workbook(
            tmp_path / "outreach.xlsx",
            [["Company", "Visit/Call Date", "Outcome"], ["Acme Co", datetime(2026, 2, 23), "Won"]],
        )
        rows = CSVImporter().read_rows(path)
        assert rows[0]["Visit/Call Date"] == "2026-02-23"

    def test_parse_file_reports_xlsx(self, tmp_path: Path):
        path = self._write_workbook(
            tmp_path / "outreach.xlsx",
            [["Company", "Visit/Call Date", "Outcome", "Next Step Due"], ["Acme Co", None, "Won", None]],
        )
        result = CSVImporter().parse_file(path)
        assert result.encoding == "xlsx"
        assert result.detected_kind == RecordKind.OUTREACH

    def test_corrupt_workbook_raises(self, tmp_path: Path):
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook")
        with pytest.raises(ImportError_, match="XLSX"):
            CSVImporter().parse_file(path)


# =========================================================================
# KIND DETECTION TESTS
# =========================================================================


class TestDetectKind:
    """Test export layout detection."""

    def test_detect_accounts(self, account_rows):
        assert CSVImporter().detect_kind(list(account_rows[0])) == RecordKind.ACCOUNTS

    def test_detect_prospects(self, prospect_rows):
        assert CSVImporter().detect_kind(list(prospect_rows[0])) == RecordKind.PROSPECTS

    def test_detect_outreach(self, outreach_rows):
        assert CSVImporter().detect_kind(list(outreach_rows[0])) == RecordKind.OUTREACH

    def test_detect_case_insensitive(self):
        headers = ["company", "VISIT/CALL DATE", " outcome "]
        assert CSVImporter().detect_kind(headers) == RecordKind.OUTREACH

    def test_detect_unknown_format(self):
        assert CSVImporter().detect_kind(["First Name", "Last Name", "Email"]) is None

    def test_every_kind_has_signature(self):
        assert set(KIND_SIGNATURES) == set(RecordKind)
