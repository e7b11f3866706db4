"""CSV and XLSX export reader.

Turns an exported spreadsheet into string-keyed rows for the normalizer.

Provides:
    - CSV parsing with encoding fallback and dialect sniffing
    - XLSX parsing (requires openpyxl)
    - Export kind detection (accounts, prospects, outreach)

Usage:
    from fieldplan.integrations.csv_importer import CSVImporter

    importer = CSVImporter()
    result = importer.parse_file(Path("prospects.csv"))
    rows = importer.read_rows(Path("prospects.csv"))
"""

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fieldplan.core.exceptions import ImportError_
from fieldplan.core.logging import get_logger
from fieldplan.data.models import RecordKind

logger = get_logger(__name__)


@dataclass
class ParseResult:
    """Result of parsing a CSV/XLSX file.

    Attributes:
        headers: Column headers
        sample_rows: First 5 rows of data
        total_rows: Total non-blank data rows
        detected_kind: Auto-detected export kind (if any)
        encoding: File encoding used ("xlsx" for workbooks)
    """

    headers: list[str]
    sample_rows: list[list[str]]
    total_rows: int
    detected_kind: Optional[RecordKind] = None
    encoding: str = "utf-8"


# Columns that identify each export layout
KIND_SIGNATURES: dict[RecordKind, list[str]] = {
    RecordKind.ACCOUNTS: [
        "Location Name",
        "Location Address",
        "Projected Monthly Revenue ($)",
        "Projected Monthly Profit ($)",
        "Fill Frequency (per month)",
    ],
    RecordKind.OUTREACH: [
        "Visit/Call Date",
        "Outcome",
        "Next Step Due",
    ],
    RecordKind.PROSPECTS: [
        "Priority Score",
        "Industry",
        "Is Deployed",
        "Last Outreach Date",
        "Address",
    ],
}


class CSVImporter:
    """CSV and XLSX export reader.

    Handles:
        - Multiple encodings (UTF-8 with/without BOM, Latin-1, CP1252)
        - Excel files (requires openpyxl)
        - Blank row skipping and cell trimming
    """

    # Delimiters the sniffer is allowed to detect; anything else
    # (e.g. ``@`` from email addresses) is treated as a mis-detection.
    _VALID_DELIMITERS = {",", "\t", ";", "|"}

    def parse_file(self, path: Path) -> ParseResult:
        """Parse CSV or XLSX file for preview.

        Args:
            path: Path to file

        Returns:
            ParseResult with headers and sample data

        Raises:
            ImportError_: If file cannot be parsed
        """
        headers, rows, encoding = self._load(Path(path))

        return ParseResult(
            headers=headers,
            sample_rows=rows[:5],
            total_rows=len(rows),
            detected_kind=self.detect_kind(headers),
            encoding=encoding,
        )

    def read_rows(self, path: Path) -> list[dict[str, str]]:
        """Read a file as header-keyed rows.

        Short rows are padded with empty strings; extra cells beyond
        the header are ignored.

        Args:
            path: Path to file

        Returns:
            One dict per non-blank data row

        Raises:
            ImportError_: If file cannot be parsed
        """
        path = Path(path)
        headers, rows, _ = self._load(path)

        records = [
            {header: (row[i] if i < len(row) else "") for i, header in enumerate(headers) if header}
            for row in rows
        ]
        logger.info(
            f"Read {len(records)} rows from {path.name}",
            extra={"context": {"path": str(path), "rows": len(records)}},
        )
        return records

    def detect_kind(self, headers: list[str]) -> Optional[RecordKind]:
        """Detect which export a header row belongs to.

        The kind whose signature columns match best wins, provided at
        least 60% of them are present.

        Args:
            headers: Column headers

        Returns:
            RecordKind or None
        """
        headers_lower = {h.lower().strip() for h in headers}

        best: Optional[RecordKind] = None
        best_ratio = 0.0
        for kind, columns in KIND_SIGNATURES.items():
            matched = sum(1 for col in columns if col.lower() in headers_lower)
            ratio = matched / len(columns)
            if ratio >= 0.6 and ratio > best_ratio:
                best, best_ratio = kind, ratio

        return best

    def _load(self, path: Path) -> tuple[list[str], list[list[str]], str]:
        """Load headers and non-blank rows from a supported file."""
        if not path.exists():
            raise ImportError_(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix in (".xlsx", ".xlsm"):
            headers, rows = self._parse_xlsx(path)
            encoding = "xlsx"
        elif suffix in (".csv", ".txt"):
            headers, rows, encoding = self._parse_csv(path)
        else:
            raise ImportError_(f"Unsupported file type: {suffix}")

        if not headers:
            raise ImportError_("File contains no headers")

        rows = [row for row in rows if any(cell for cell in row)]
        return headers, rows, encoding

    def _parse_csv(self, path: Path) -> tuple[list[str], list[list[str]], str]:
        """Parse CSV file, trying multiple encodings.

        Returns:
            Tuple of (headers, all_rows, encoding)
        """
        encodings = ["utf-8-sig", "utf-8", "latin-1", "cp1252"]

        for encoding in encodings:
            try:
                with open(path, "r", encoding=encoding, newline="") as f:
                    sample = f.read(8192)
                    f.seek(0)

                    try:
                        dialect = csv.Sniffer().sniff(sample)
                        if dialect.delimiter in self._VALID_DELIMITERS:
                            reader = csv.reader(f, dialect)
                        else:
                            reader = csv.reader(f)
                    except csv.Error:
                        # Sniffer fails on small/simple files; comma is the default
                        reader = csv.reader(f)
                    rows = list(reader)

                    if not rows:
                        return [], [], encoding

                    headers = [str(h).strip() for h in rows[0]]
                    data_rows = [[str(cell).strip() if cell else "" for cell in row] for row in rows[1:]]
                    return headers, data_rows, encoding

            except UnicodeDecodeError:
                continue
            except csv.Error as e:
                raise ImportError_(f"Cannot parse CSV: {e}") from e
            except OSError as e:
                raise ImportError_(f"Cannot read file {path}: {e}") from e

        raise ImportError_(f"Cannot read file with any supported encoding: {path}")

    def _parse_xlsx(self, path: Path) -> tuple[list[str], list[list[str]]]:
        """Parse the active sheet of an XLSX workbook.

        Returns:
            Tuple of (headers, all_rows)
        """
        try:
            import openpyxl
        except ImportError as e:
            raise ImportError_(
                "openpyxl is required for XLSX files. Install with: pip install openpyxl"
            ) from e

        try:
            wb = openpyxl.load_workbook(str(path), read_only=True, data_only=True)
        except Exception as e:
            raise ImportError_(f"Cannot parse XLSX: {e}") from e

        try:
            rows_iter = wb.active.iter_rows(values_only=True)

            header_row = next(rows_iter, None)
            if header_row is None:
                return [], []

            headers = [_xlsx_cell(cell) for cell in header_row]
            data_rows = [[_xlsx_cell(cell) for cell in row] for row in rows_iter]
            return headers, data_rows
        finally:
            wb.close()


def _xlsx_cell(value: object) -> str:
    """Render a workbook cell the way it would appear in a CSV export."""
    if value is None:
        return ""
    if hasattr(value, "date") and hasattr(value, "hour"):
        # datetime cells: exports carry the date only
        return value.date().isoformat()  # type: ignore[attr-defined]
    if hasattr(value, "isoformat"):
        return value.isoformat()  # type: ignore[attr-defined]
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
