from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Optional

from sinar.compliance import ComplianceComparator
from sinar.errors import SinarError
from sinar.loaders import load_business, load_catalog
from sinar.scoring import score, score_breakdown
from sinar.valuation import investment_capacity, valuation_summary

logger = logging.getLogger(__name__)


def _existing_file(value: str) -> Path:
    path = Path(value)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"File not found: '{value}'")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SINAR investment readiness engine",
    )
    subparsers = parser.add_subparsers(dest="command")

    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare held legal documents against the compliance catalog",
    )
    compare_parser.add_argument("--business", required=True, type=_existing_file, help="Business profile YAML")
    compare_parser.add_argument(
        "--catalog",
        type=_existing_file,
        default=None,
        help="Compliance catalog YAML (default: bundled catalog)",
    )

    score_parser = subparsers.add_parser(
        "score",
        help="Compute the investment readiness score and stage",
    )
    score_parser.add_argument("--business", required=True, type=_existing_file, help="Business profile YAML")

    valuation_parser = subparsers.add_parser(
        "valuation",
        help="Compute the current valuation and valuation history",
    )
    valuation_parser.add_argument("--business", required=True, type=_existing_file, help="Business profile YAML")
    valuation_parser.add_argument(
        "--existing",
        type=float,
        default=0.0,
        help="Amount already invested, used for the remaining investment capacity",
    )

    return parser


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _handle_compare(args: argparse.Namespace) -> None:
    business = load_business(args.business)
    comparator = ComplianceComparator(load_catalog(args.catalog))
    comparison = comparator.compare(business, force_refresh=True)
    payload = comparison.to_dict()
    payload["missing_count"] = comparison.missing_count
    payload["completed_count"] = comparison.completed_count
    _emit(payload)


def _handle_score(args: argparse.Namespace) -> None:
    business = load_business(args.business)
    payload = score(business).to_dict()
    payload["breakdown"] = score_breakdown(business)
    _emit(payload)


def _handle_valuation(args: argparse.Namespace) -> None:
    business = load_business(args.business)
    summary = valuation_summary(business)
    summary["investment_capacity"] = investment_capacity(business, args.existing).to_dict()
    summary["history"] = [point.to_dict() for point in summary["history"]]
    _emit(summary)


HANDLERS = {
    "compare": _handle_compare,
    "score": _handle_score,
    "valuation": _handle_valuation,
}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    try:
        handler(args)
    except SinarError as exc:
        logger.error("cli.failed", extra={"command": args.command, "error": str(exc)})
        parser.exit(status=2, message=f"error: {exc}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
