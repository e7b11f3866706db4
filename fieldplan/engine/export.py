"""Outreach history export.

Writes outreach logs as a comma-separated table. The header row is the
OutreachLog field names; every data value is double-quoted with
embedded quotes doubled. Enum values export as their display string,
dates as ISO YYYY-MM-DD, missing values as "".

Output depends only on the input logs, so exporting the same list twice
gives byte-identical files.

Usage:
    from fieldplan.engine.export import export_outreach_logs, default_export_filename

    export_outreach_logs(session.logs, export_dir / default_export_filename())
"""

import csv
import io
from collections.abc import Sequence
from dataclasses import fields
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from fieldplan.core.logging import get_logger
from fieldplan.data.models import OutreachLog

logger = get_logger(__name__)

EXPORT_COLUMNS: tuple[str, ...] = tuple(f.name for f in fields(OutreachLog))


def default_export_filename(today: Optional[date] = None) -> str:
    """Return the dated export filename, e.g. KL_Outreach_Export_2026-02-01.csv."""
    today = today or date.today()
    return f"KL_Outreach_Export_{today.isoformat()}.csv"


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_outreach_csv(logs: Sequence[OutreachLog]) -> str:
    """Serialize outreach logs to CSV text.

    Args:
        logs: Logs to serialize, in output order

    Returns:
        Header line plus one fully quoted line per log
    """
    buffer = io.StringIO()
    buffer.write(",".join(EXPORT_COLUMNS) + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, doublequote=True, lineterminator="\n")
    for log in logs:
        writer.writerow([_format_value(getattr(log, col)) for col in EXPORT_COLUMNS])

    return buffer.getvalue()


def export_outreach_logs(logs: Sequence[OutreachLog], path: Path) -> bool:
    """Export outreach logs to a CSV file.

    Args:
        logs: Logs to export
        path: Output file path (parent directories are created)

    Returns:
        True if export successful, False if there was nothing to write
        or the file could not be written
    """
    if not logs:
        logger.warning("No outreach logs to export")
        return False

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(format_outreach_csv(logs))

        logger.info(
            f"Exported {len(logs)} outreach logs to {path}",
            extra={"context": {"count": len(logs), "path": str(path)}},
        )
        return True

    except OSError as e:
        logger.error(
            f"Failed to export outreach logs: {e}",
            extra={"context": {"path": str(path), "error": str(e)}},
        )
        return False
