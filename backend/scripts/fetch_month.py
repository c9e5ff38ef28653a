#!/usr/bin/env python3
"""
Fetch a month of Sea-Style availability for one marina and print a line per day.

Usage: cd backend && python scripts/fetch_month.py 3802 2025-06 [--verbose] [--api-base URL]

Ctrl+C stops after the day in flight; days already printed stay printed.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from seastyle.core.errors import CancellationError
from seastyle.services.normalize import format_summary
from seastyle.services.upstream import CancelSignal, SeaStyleClient, SeaStyleConfig, fetch_month_availability


def _print_day(index: int, total: int, outcome) -> None:
    day = outcome.day.isoformat()
    if not outcome.ok:
        print(f"[{index + 1:2d}/{total}] {day}  ERROR  {outcome.error}")
        return
    debug = outcome.result.debug
    via = f"  ({debug.strategy})" if debug else ""
    print(f"[{index + 1:2d}/{total}] {day}  {format_summary(outcome.result.summary)}{via}")


async def run(marina_cd: str, month_id: str, api_base: str | None, signal: CancelSignal) -> int:
    client = SeaStyleClient(SeaStyleConfig(api_base=api_base))
    task = asyncio.ensure_future(
        fetch_month_availability(client, marina_cd, month_id, signal=signal, on_progress=_print_day)
    )
    try:
        outcomes = await asyncio.shield(task)
    except asyncio.CancelledError:
        # Ctrl+C: let the current day finish, then stop before the next one
        signal.cancel("interrupted")
        try:
            outcomes = await task
        except CancellationError:
            print("Stopped.")
            return 130
    failed = sum(1 for o in outcomes if not o.ok)
    print(f"Done: {len(outcomes) - failed} day(s) fetched, {failed} failed.")
    return 1 if failed == len(outcomes) else 0


def main():
    parser = argparse.ArgumentParser(description="Fetch a month of Sea-Style availability for one marina")
    parser.add_argument("marina_cd", help="Marina code, e.g. 3802")
    parser.add_argument("month", help="Month as YYYY-MM")
    parser.add_argument("--api-base", default=None, help="Relay base URL (overrides SEASTYLE_API_BASE)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every strategy attempt")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        code = asyncio.run(run(args.marina_cd, args.month, args.api_base, CancelSignal()))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
