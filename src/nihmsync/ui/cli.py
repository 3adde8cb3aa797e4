from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from nihmsync.app import reconcile_nihms_records
from nihmsync.config import configure_logging
from nihmsync.domain.normalize import build_record

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from nihmsync.domain.model import NihmsPublication

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile NIHMS compliance records with the research catalog"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    record = subparsers.add_parser("record", help="Reconcile a single NIHMS record")
    record.add_argument("--pmid", type=str, required=True, help="PubMed id of the article")
    record.add_argument(
        "--grant",
        type=str,
        required=True,
        help="Award number as reported by NIHMS",
    )
    record.add_argument(
        "--status",
        type=str,
        required=True,
        help="NIHMS compliance status (compliant, non-compliant, in-process)",
    )
    record.add_argument("--nihms-id", type=str, help="Provisional NIHMS manuscript id")
    record.add_argument("--pmc-id", type=str, help="PubMed Central id, with or without PMC prefix")
    for flag, label in (
        ("--file-deposited", "files were deposited"),
        ("--initial-approval", "the manuscript received initial approval"),
        ("--tagging-complete", "tagging was completed"),
        ("--final-approval", "the manuscript received final approval"),
    ):
        record.add_argument(flag, type=str, help=f"Date {label} (MM/DD/YYYY)")
    record.add_argument(
        "--skip-metadata",
        action="store_true",
        help="Do not look up PubMed metadata for new publications",
    )
    record.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the full reconciliation but roll back instead of committing",
    )

    return parser.parse_args(list(argv))


def _record_from_args(args: argparse.Namespace) -> NihmsPublication:
    return build_record(
        pmid=args.pmid,
        grant_number=args.grant,
        compliance=args.status,
        nihms_id=args.nihms_id,
        pmc_id=args.pmc_id,
        file_deposited_date=args.file_deposited,
        initial_approval_date=args.initial_approval,
        tagging_complete_date=args.tagging_complete,
        final_approval_date=args.final_approval,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        record = _record_from_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        summary = reconcile_nihms_records(
            [record],
            use_metadata=not parsed_args.skip_metadata,
            dry_run=parsed_args.dry_run,
        )
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    if summary.failed:
        log.error("Record with pmid %s could not be reconciled", record.pmid)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
