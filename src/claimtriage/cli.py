"""Command-line interface for claimtriage."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from claimtriage.analytics.aggregator import AnalyticsAggregator
from claimtriage.config.settings import Settings
from claimtriage.console.logger import ClaimsConsole
from claimtriage.core.errors import ClaimTriageError, InputError
from claimtriage.core.types import ClaimStatus, DenialReasonCode, Priority
from claimtriage.orchestrator.pipeline import ClaimPipeline
from claimtriage.reporting.html import HTMLReportWriter
from claimtriage.storage.repository import SQLiteClaimStore
from claimtriage.storage.seed import seed_sample_data


console = ClaimsConsole()


def _load_settings(db_path: str | None = None) -> Settings:
    settings = Settings()
    if db_path:
        settings.storage.db_path = db_path
    console.setup_logging(settings.log_level)
    return settings


def _open_store(settings: Settings) -> SQLiteClaimStore:
    return SQLiteClaimStore(settings.storage.db_path, busy_timeout=settings.storage.busy_timeout_seconds)


def _parse_datetime(value: str | None, field: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise InputError(f"Invalid {field}: {value}", details={field: "expected an ISO 8601 date or timestamp"}) from e

def _claim_payload(args: argparse.Namespace) -> dict[str, Any]:
    if args.file:
        try:
            return json.loads(Path(args.file).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise InputError(f"Could not read claim file: {e}", details={"file": args.file}) from e
    return {
        "patient": {
            "firstName": args.first_name,
            "lastName": args.last_name,
            "dateOfBirth": args.dob,
            "memberId": args.member_id,
        },
        "service": {
            "cptCode": args.cpt,
            "icd10Code": args.icd10,
            "serviceDate": args.service_date,
            "billedAmount": args.amount,
        },
    }


def init_db(db_path: str | None, load_sample: bool = True) -> None:
    """Create the schema and load sample providers and users."""
    settings = _load_settings(db_path)
    store = _open_store(settings)
    if load_sample:
        providers, users = seed_sample_data(store)
        console.console.print(f"  Providers: {providers}, Users: {users}")
    console.console.print(f"[green]✓[/green] Claim store initialized at {settings.storage.db_path}")
    console.print_store_stats(store.get_stats())


async def submit_claim(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    if args.mock:
        console.console.print("[yellow]Running in MOCK mode (no API calls)[/yellow]\n")
    pipeline = ClaimPipeline(settings, store=_open_store(settings), mock=args.mock)
    claim = await pipeline.submit_claim(_claim_payload(args), args.user)
    console.print_claim(claim)


def adjudicate_claim(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    pipeline = ClaimPipeline(settings, store=_open_store(settings))
    claim = pipeline.find_claim(args.claim)
    if args.approve is not None:
        payload: dict[str, Any] = {"decision": "approve", "approved_amount": args.approve, "notes": args.notes}
    else:
        payload = {"decision": "deny", "denial_reason_code": args.deny, "denial_explanation": args.explanation}
    console.print_adjudication(pipeline.adjudicate(claim.id, payload, args.user))


def show_claim(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    pipeline = ClaimPipeline(settings, store=_open_store(settings))
    console.print_claim_detail(pipeline.get_claim_detail(pipeline.find_claim(args.claim).id))


def list_claims(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    pipeline = ClaimPipeline(settings, store=_open_store(settings))
    console.print_claims(
        pipeline.list_claims(
            status=ClaimStatus(args.status) if args.status else None,
            priority=Priority(args.priority) if args.priority else None,
            provider_id=args.provider,
        )
    )


def show_analytics(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    aggregator = AnalyticsAggregator(_open_store(settings), settings)
    report = aggregator.overview(_parse_datetime(args.start, "start_date"), _parse_datetime(args.end, "end_date"))
    if args.json:
        console.print_json(report.model_dump_json())
    else:
        console.print_analytics(report)


def show_trends(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    aggregator = AnalyticsAggregator(_open_store(settings), settings)
    console.print_trends(
        aggregator.trends(_parse_datetime(args.start, "start_date"), _parse_datetime(args.end, "end_date"))
    )


def write_report(args: argparse.Namespace) -> None:
    settings = _load_settings(args.db)
    aggregator = AnalyticsAggregator(_open_store(settings), settings)
    start, end = _parse_datetime(args.start, "start_date"), _parse_datetime(args.end, "end_date")
    report = aggregator.overview(start, end)
    trends = list(aggregator.trends(report.period.start_date, report.period.end_date))
    path = HTMLReportWriter().write(report, args.output_path, trends=trends)
    console.print_success("Analytics report generated", str(path))


def check_config() -> int:
    settings = _load_settings()
    report = settings.validate_config()
    console.print_config_report(report)
    return 0 if report.valid else 1


def _add_db(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--db", help="Claim store path (default: CLAIMS_DB_PATH or claims.db)")


def _add_window(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", help="Window start (ISO 8601, default: 30 days before end)")
    parser.add_argument("--end", help="Window end (ISO 8601, default: now)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claimtriage", description="Healthcare claim intake, triage and adjudication"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show log output at the configured log level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_cmd = subparsers.add_parser("init-db", help="Initialize the claim store")
    _add_db(init_cmd)
    init_cmd.add_argument("--no-sample", action="store_true", help="Don't load sample providers and users")

    sub = subparsers.add_parser("submit", help="Submit a claim")
    _add_db(sub)
    sub.add_argument("--user", required=True, help="Submitting user id")
    sub.add_argument("--file", "-f", help="JSON claim payload")
    sub.add_argument("--first-name", help="Patient first name")
    sub.add_argument("--last-name", help="Patient last name")
    sub.add_argument("--dob", help="Patient date of birth (YYYY-MM-DD)")
    sub.add_argument("--member-id", help="Patient member id")
    sub.add_argument("--cpt", help="CPT code")
    sub.add_argument("--icd10", help="ICD-10 diagnosis code")
    sub.add_argument("--service-date", help="Service date (YYYY-MM-DD)")
    sub.add_argument("--amount", help="Billed amount")
    sub.add_argument("--mock", action="store_true", help="Use mock LLM for testing")

    adj = subparsers.add_parser("adjudicate", help="Approve or deny a claim")
    _add_db(adj)
    adj.add_argument("claim", help="Claim id or claim number")
    adj.add_argument("--user", required=True, help="Adjudicating user id")
    decision = adj.add_mutually_exclusive_group(required=True)
    decision.add_argument("--approve", metavar="AMOUNT", help="Approve for this amount")
    decision.add_argument("--deny", choices=[c.value for c in DenialReasonCode], help="Deny with this reason code")
    adj.add_argument("--notes", help="Approval notes")
    adj.add_argument("--explanation", help="Denial explanation (20-1000 characters)")

    show = subparsers.add_parser("show", help="Show a claim and its audit trail")
    _add_db(show)
    show.add_argument("claim", help="Claim id or claim number")

    lst = subparsers.add_parser("list", help="List claims, newest first")
    _add_db(lst)
    lst.add_argument("--status", choices=[s.value for s in ClaimStatus])
    lst.add_argument("--priority", choices=[p.value for p in Priority])
    lst.add_argument("--provider", help="Provider id")

    ana = subparsers.add_parser("analytics", help="Show the analytics overview")
    _add_db(ana)
    _add_window(ana)
    ana.add_argument("--json", action="store_true", help="Print the report as JSON")

    trd = subparsers.add_parser("trends", help="Show daily submission counts")
    _add_db(trd)
    _add_window(trd)

    rep = subparsers.add_parser("report", help="Write the HTML analytics report")
    _add_db(rep)
    _add_window(rep)
    rep.add_argument("output_path", help="Path for the output HTML report")

    subparsers.add_parser("check-config", help="Validate configuration")
    return parser


def main() -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)
    console.verbose = args.verbose

    try:
        if args.command == "init-db":
            init_db(args.db, not args.no_sample)
        elif args.command == "submit":
            asyncio.run(submit_claim(args))
        elif args.command == "adjudicate":
            adjudicate_claim(args)
        elif args.command == "show":
            show_claim(args)
        elif args.command == "list":
            list_claims(args)
        elif args.command == "analytics":
            show_analytics(args)
        elif args.command == "trends":
            show_trends(args)
        elif args.command == "report":
            write_report(args)
        elif args.command == "check-config":
            sys.exit(check_config())
    except KeyboardInterrupt:
        console.console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except ClaimTriageError as e:
        console.print_error(e.message, e.details)
        sys.exit(1)
    except Exception as e:
        console.print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
