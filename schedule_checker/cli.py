"""Command-line entrypoint for schedule reconciliation."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from schedule_checker.application.dto import ExtractionRequest
from schedule_checker.application.use_cases import (
    ExtractScheduleUseCase,
    ReconcileScheduleUseCase,
    ScheduleReconciliationContext,
)
from schedule_checker.config import SETTINGS
from schedule_checker.domain.errors import CanonicalScheduleError, VisionServiceError
from schedule_checker.domain.filters import ScheduleFilter, filter_outcomes
from schedule_checker.domain.normalizers import normalize_day
from schedule_checker.domain.repositories import VisionExtractionClient
from schedule_checker.domain.services import PARTITION_ORDERS, ScheduleReconciler
from schedule_checker.infrastructure.parsing.utils import compute_file_hash, ensure_bytes, guess_image_mime_type
from schedule_checker.infrastructure.repositories.file_repositories import repository_for_path
from schedule_checker.infrastructure.vision.gemini import GeminiVisionClient
from schedule_checker.infrastructure.vision.replay import ReplayVisionClient
from schedule_checker.presentation.diff_report import records_to_dataframe, render_csv, render_html

logger = logging.getLogger("schedule_checker")


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return number


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare a photographed schedule board against the canonical class schedule"
    )
    parser.add_argument("canonical", type=str, help="Path to the canonical schedule (CSV or XLSX)")
    parser.add_argument("image", type=str, nargs="?", help="Path to the schedule board image")
    parser.add_argument("--location", type=str, default="", help="Studio location shown on the board")
    parser.add_argument("--response-file", type=str, help="Replay a saved model response instead of calling Gemini")
    parser.add_argument("--sheet", type=str, help="Worksheet name for Excel canonical schedules")
    parser.add_argument(
        "--tolerance",
        type=non_negative_int,
        default=SETTINGS.time_tolerance_minutes,
        help="Minutes two class times may differ and still pair up",
    )
    parser.add_argument("--partition-order", choices=PARTITION_ORDERS, default=SETTINGS.partition_order)
    parser.add_argument("--day", action="append", default=[], help="Only report these days (repeatable)")
    parser.add_argument("--report-csv", type=str, help="Write every comparison outcome to this CSV file")
    parser.add_argument("--report-html", type=str, help="Write the discrepancy table to this HTML file")
    parser.add_argument("--extracted-csv", type=str, help="Write the normalized extracted classes to this CSV file")
    parser.add_argument("--fail-on-issues", action="store_true", help="Exit with status 2 when discrepancies exist")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if not args.image and not args.response_file:
        parser.error("an image is required unless --response-file is given")
    return args


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    for name in ("httpx", "urllib3", "google"):
        logging.getLogger(name).setLevel(logging.WARNING)


def build_client(args: argparse.Namespace) -> VisionExtractionClient:
    if args.response_file:
        return ReplayVisionClient.from_file(args.response_file)
    return GeminiVisionClient()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    try:
        image = ensure_bytes(Path(args.image)) if args.image else b""
    except OSError as exc:
        print(f"Could not read image: {exc}", file=sys.stderr)
        return 1
    mime_type = guess_image_mime_type(args.image) if args.image else "image/jpeg"
    if image:
        logger.info("Image %s sha256=%s", args.image, compute_file_hash(image))

    try:
        client = build_client(args)
    except VisionServiceError as exc:
        print(f"Extraction failed: {exc}", file=sys.stderr)
        return 1

    extraction = ExtractScheduleUseCase(client).execute(
        ExtractionRequest(image=image, mime_type=mime_type, location=args.location),
        on_progress=lambda percent, message: logger.info("[%3d%%] %s", percent, message),
    )
    if not extraction.success:
        print(f"Extraction failed: {extraction.error}", file=sys.stderr)
        if extraction.raw_text:
            print(extraction.raw_text, file=sys.stderr)
        return 1

    if args.extracted_csv:
        records_to_dataframe(extraction.records).to_csv(args.extracted_csv, index=False)

    try:
        context = ScheduleReconciliationContext(
            canonical_repository=repository_for_path(
                args.canonical, sheet_name=args.sheet, default_location=args.location
            ),
            reconciler=ScheduleReconciler(
                time_tolerance_minutes=args.tolerance,
                partition_order=args.partition_order,
                accept_cover_trainer=SETTINGS.accept_cover_trainer,
            ),
        )
        response = ReconcileScheduleUseCase(context).execute(extraction.records)
    except (CanonicalScheduleError, OSError) as exc:
        print(f"Canonical schedule error: {exc}", file=sys.stderr)
        return 1

    report = response.report
    outcomes = report.outcomes
    schedule_filter = ScheduleFilter(days=frozenset(normalize_day(day) for day in args.day))
    if not schedule_filter.is_empty():
        outcomes = filter_outcomes(outcomes, schedule_filter)

    if args.report_csv:
        Path(args.report_csv).write_bytes(render_csv(outcomes))
    if args.report_html:
        Path(args.report_html).write_text(render_html(outcomes), encoding="utf-8")

    print("Reconciliation Summary")
    print("======================")
    summary = report.summary
    print(f"Canonical classes: {summary.total_canonical}")
    print(f"Extracted classes: {summary.total_extracted}")
    print(f"Matched: {summary.matched}")
    print(f"Mismatched: {summary.mismatched}")
    print(f"Missing in extracted: {summary.missing_in_extracted}")
    print(f"Not in canonical: {summary.not_in_canonical}")
    print(f"Duplicate canonical entries: {summary.duplicates_in_canonical}")

    issues = [outcome for outcome in outcomes if not outcome.is_match]
    if issues:
        print("\nDiscrepancies detected:")
        for outcome in issues:
            record = outcome.canonical or outcome.extracted
            print(f"- {record.day} {record.time} {record.class_name} / {record.trainer}: {outcome.reason}")
    else:
        print("\nNo discrepancies detected.")

    if args.fail_on_issues and issues:
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
