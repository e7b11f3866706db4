"""fieldplan - next-day field visit planner.

Single entry point for the command line.

Usage:
    fieldplan --accounts accounts.csv --prospects prospects.csv --outreach logs.csv
    fieldplan --prospects prospects.xlsx --max-stops 8 --date 2026-03-02
    fieldplan --outreach logs.csv --export-logs exports/
    fieldplan --version
"""

import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from fieldplan import __version__
from fieldplan.content.daily_brief import generate_daily_brief
from fieldplan.core.config import get_config, validate_config
from fieldplan.core.exceptions import FieldPlanError
from fieldplan.core.logging import get_logger, setup_logging
from fieldplan.data.models import RecordKind
from fieldplan.data.session import Session
from fieldplan.engine.export import default_export_filename, export_outreach_logs
from fieldplan.engine.workflow import import_rows
from fieldplan.integrations.csv_importer import CSVImporter

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_DATE = 2

# Accounts first so prospect rows can be matched against them
LOAD_ORDER = (RecordKind.ACCOUNTS, RecordKind.PROSPECTS, RecordKind.OUTREACH)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="fieldplan",
        description="fieldplan - Plan tomorrow's field visits from CRM exports",
    )
    parser.add_argument("--accounts", type=Path, help="Deployed accounts export (CSV or XLSX)")
    parser.add_argument("--prospects", type=Path, help="Prospect master export (CSV or XLSX)")
    parser.add_argument("--outreach", type=Path, help="Outreach log export (CSV or XLSX)")
    parser.add_argument(
        "--max-stops",
        type=int,
        default=None,
        help="Maximum stops in the plan (default: FIELDPLAN_MAX_STOPS or 12)",
    )
    parser.add_argument("--date", help="Plan as of this date, YYYY-MM-DD (default: today)")
    parser.add_argument(
        "--export-logs",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Write outreach logs to CSV (file or directory; default: FIELDPLAN_EXPORT_PATH)",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def parse_plan_date(value: Optional[str]) -> date:
    """Parse ``--date``; None means today.

    Raises:
        ValueError: If the value is not YYYY-MM-DD
    """
    if not value:
        return date.today()
    return datetime.strptime(value, "%Y-%m-%d").date()


def resolve_export_path(target: str, default_dir: Path, today: date) -> Path:
    """Resolve ``--export-logs`` to a file path.

    Empty means the configured export directory. A directory gets the
    dated default filename.
    """
    path = Path(target) if target else default_dir
    if not target or path.is_dir() or not path.suffix:
        return path / default_export_filename(today)
    return path


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for fieldplan.

    Args:
        argv: Arguments (defaults to sys.argv)

    Returns:
        Exit code (0 = success, 1 = import/validation failure, 2 = bad date)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"fieldplan v{__version__}")
        return EXIT_OK

    try:
        today = parse_plan_date(args.date)
    except ValueError:
        print(f"Invalid --date {args.date!r}; expected YYYY-MM-DD")
        return EXIT_BAD_DATE

    # Load and validate configuration
    try:
        config = get_config()
    except FieldPlanError as e:
        print(f"Configuration error: {e}")
        return EXIT_FAILURE

    # Initialize logging
    debug = args.debug or config.debug
    setup_logging(
        log_dir=config.log_path,
        console_level=logging.DEBUG if debug else logging.WARNING,
    )
    logger = get_logger("main")
    logger.info(f"fieldplan v{__version__} starting...")

    issues = validate_config(config)
    for issue in issues:
        if issue.startswith("CRITICAL:"):
            logger.error(f"Configuration: {issue}")
        else:
            logger.warning(f"Configuration issue: {issue}")

    max_stops = args.max_stops if args.max_stops is not None else config.max_stops

    sources = {
        RecordKind.ACCOUNTS: args.accounts,
        RecordKind.PROSPECTS: args.prospects,
        RecordKind.OUTREACH: args.outreach,
    }

    importer = CSVImporter()
    session = Session()
    try:
        for kind in LOAD_ORDER:
            path = sources[kind]
            if path is None:
                continue
            rows = importer.read_rows(path)
            session = import_rows(
                session,
                kind,
                rows,
                today=today,
                jitter=config.jitter_degrees,
                default_city=config.default_city,
            )

        brief = generate_daily_brief(session, max_stops=max_stops, today=today)
    except FieldPlanError as e:
        logger.error(f"{e}", extra={"context": {"error": type(e).__name__}})
        print(f"Error: {e}")
        return EXIT_FAILURE

    print(brief.full_text, end="")

    if args.export_logs is not None:
        export_path = resolve_export_path(args.export_logs, config.export_path, today)
        if export_outreach_logs(session.logs, export_path):
            print(f"\nExported {len(session.logs)} outreach logs to {export_path}")
        else:
            print("\nNo outreach logs exported")

    logger.info("fieldplan run complete", extra={"context": {"stops": len(brief.stops)}})
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
