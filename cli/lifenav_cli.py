"""Command-line utility for scoring payload files, purging caches, and serving the API."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, Optional

from app.deps import get_app_state
from app.services.evaluation_service import evaluate_payloads
from app.services.maintenance_service import purge_cache


def _read_json(path: Optional[str]) -> Optional[Dict]:
    if not path:
        return None
    with Path(path).open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _collect_payloads(args: argparse.Namespace) -> Dict[str, Optional[Dict]]:
    """Merge a combined --payloads file with per-source overrides."""
    payloads: Dict[str, Optional[Dict]] = dict(_read_json(args.payloads) or {})
    for source in ("email", "calendar", "activity"):
        single = _read_json(getattr(args, source))
        if single is not None:
            payloads[source] = single
    return payloads


def print_report(report: Dict) -> None:
    score = report["score"]
    print(f"Wellbeing Score: {score['value']} ({score['status_description']})")

    print("\nAdjustments:")
    if not report["adjustments"]:
        print("  (no sources supplied)")
    for adjustment in report["adjustments"]:
        print(f"  {adjustment['category']}: {adjustment['delta']:+d} ({adjustment['detail_label']})")

    degraded = [metric["source_kind"] for metric in report["metrics"] if metric["degraded"]]
    if degraded:
        print(f"\nDegraded sources: {', '.join(degraded)}")

    print("\nRecommendations:")
    if not report["recommendations"]:
        print("  (none)")
    for idx, rec in enumerate(report["recommendations"], start=1):
        print(f"  {idx}. [{rec['priority']}] {rec['action']}")
        print(f"       {rec['reason']} ({rec['category']})")


def cmd_evaluate(args: argparse.Namespace) -> None:
    """Score payload files and print the report."""
    report = evaluate_payloads(_collect_payloads(args))
    if args.pretty:
        print_report(report)
    else:
        print(json.dumps(report, indent=2))


def cmd_purge(_args: argparse.Namespace) -> None:
    """Clear cached source summaries and stored tokens."""
    print(json.dumps(purge_cache(), indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
    from app.uvicorn_runner import main as run_server  # noqa: WPS433

    run_server(host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(prog="lifenav")
    sub = parser.add_subparsers(dest="command")

    evaluate_p = sub.add_parser("evaluate", help="Score raw source payloads from JSON files")
    evaluate_p.add_argument("--payloads", help="JSON file with optional email/calendar/activity keys")
    evaluate_p.add_argument("--email", help="EMAIL payload JSON file")
    evaluate_p.add_argument("--calendar", help="CALENDAR payload JSON file")
    evaluate_p.add_argument("--activity", help="ACTIVITY payload JSON file")
    evaluate_p.add_argument("--pretty", action="store_true", help="Human-readable summary instead of JSON")
    evaluate_p.set_defaults(func=cmd_evaluate)

    purge_p = sub.add_parser("purge")
    purge_p.set_defaults(func=cmd_purge)

    serve_p = sub.add_parser("serve")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)
    serve_p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[list] = None) -> None:
    """CLI entry point invoked via `python -m cli.lifenav_cli ...` or `lifenav`."""
    get_app_state()  # ensure initialization
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    args.func(args)


if __name__ == "__main__":
    main(sys.argv[1:])
