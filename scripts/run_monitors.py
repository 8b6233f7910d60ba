"""Run one pass of the booking monitors from cron or a one-off shell."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import datetime

from collabhunts.application.use_cases import run_monitors
from collabhunts.infrastructure.database import SessionLocal
from collabhunts.utils import ensure_app_timezone

logger = logging.getLogger("collabhunts.monitors")

_ONLY_CHOICES = ("deliveries", "disputes")


def _parse_now(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid ISO 8601 timestamp: {value}") from exc
    return ensure_app_timezone(parsed)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for a monitor pass."""

    parser = argparse.ArgumentParser(
        description="Auto-release reviewed deliveries and enforce dispute deadlines.",
    )
    parser.add_argument(
        "--only",
        choices=_ONLY_CHOICES,
        default=None,
        help="Run a single monitor instead of both.",
    )
    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Evaluate deadlines as of this ISO 8601 timestamp (naive values are UTC).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the monitors once and print the summary as JSON."""

    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    session = SessionLocal()
    try:
        summary = run_monitors(
            session,
            now=args.now,
            include_deliveries=args.only in (None, "deliveries"),
            include_disputes=args.only in (None, "disputes"),
        )
    except Exception:
        session.rollback()
        logger.exception("Monitor run failed")
        return 1
    finally:
        session.close()

    print(json.dumps(asdict(summary), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
