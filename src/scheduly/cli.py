from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from .config import DEFAULT_POLICY, PolicyConstants
from .errors import SchedulyError
from .models import ScheduleState, TimeBlock
from .store import ScheduleStore


def format_block(block: TimeBlock) -> str:
    flag = " (optional)" if block.is_optional else ""
    return (
        f"{block.start}-{block.end}  {block.duration_minutes:>3}m  "
        f"{block.name} [{block.activity.value}]{flag}"
    )


def format_state(state: ScheduleState) -> str:
    lines = []
    if state.time_window is not None:
        window = state.time_window
        arrived = state.arrival_time_home
        lines.append(f"{window.label}: arrived at {arrived} - {window.hint}")
    lines.extend(format_block(block) for block in state.blocks)
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="scheduly",
        description=(
            "Plan tonight's wind-down or this morning's routine as time blocks."
        ),
    )
    ap.add_argument("--policy", default=None, help="JSON file with policy overrides")
    ap.add_argument("--json", action="store_true", help="Print blocks as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = ap.add_subparsers(dest="command", required=True)

    evening = sub.add_parser("evening", help="Plan the evening from an arrival time")
    evening.add_argument("arrival", help="Arrival time home, HH:MM")
    evening.add_argument(
        "--cards", type=int, default=0, help="Review cards due (default: 0)"
    )

    sub.add_parser("morning", help="Print the fixed morning routine")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        policy = DEFAULT_POLICY
        if args.policy:
            policy = PolicyConstants.from_json_file(args.policy)
        store = ScheduleStore(policy=policy)
        if args.command == "evening":
            store.set_review_cards(args.cards)
            state = store.set_arrival_time(args.arrival)
        else:
            state = store.generate_morning_schedule()
    except (SchedulyError, ValidationError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    if args.json:
        payload = [block.model_dump(mode="json") for block in state.blocks]
        print(json.dumps(payload, indent=2))
    else:
        print(format_state(state))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
