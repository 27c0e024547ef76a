"""
Script to evaluate a Tim export without the GUI.

Imports the export, optionally enables every detected gap and assigns the
enabled gaps to a task, then writes an updated Tim file and/or a CSV
timesheet.

Usage:
    python evaluate_export.py export.json --enable-gaps --gap-task <task id> --json out.json
    python evaluate_export.py export.json --csv-task <task id> --csv timesheet.csv
"""

import sys
import asyncio
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.domain.errors import ParseError, InvalidSelectionError
from app.domain.models import format_duration
from app.infra.config import get_settings
from app.services.session import EvaluatorSession


def non_negative_minutes(value: str) -> float:
    minutes = float(value)
    if minutes < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return minutes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a Tim time-tracking export")
    parser.add_argument("input", type=Path, help="Tim export (JSON)")
    parser.add_argument("--min-gap", type=non_negative_minutes, default=None,
                        help="Minimum idle minutes to count as a gap (default: from settings)")
    parser.add_argument("--enable-gaps", action="store_true", help="Enable every detected gap")
    parser.add_argument("--gap-task", help="Task id receiving the enabled gaps")
    parser.add_argument("--json", type=Path, dest="json_out", help="Write the updated Tim export here")
    parser.add_argument("--csv-task", help="Task id for the CSV timesheet")
    parser.add_argument("--csv", type=Path, dest="csv_out", help="Write the CSV timesheet here")
    return parser


def print_summary(session: EvaluatorSession):
    graph = session.graph
    print(f"Groups: {len(graph.groups)}  Tasks: {len(graph.tasks)}  Records: {len(graph.records)}")
    for task_id, title in session.task_choices():
        task = graph.tasks[task_id]
        seconds = sum(r.duration_seconds for r in graph.records_of(task) if not r.disabled)
        print(f"  {task_id:<24} {title:<32} {format_duration(seconds)}")

    gaps = list(graph.gaps())
    gap_seconds = sum(g.duration_seconds for g in gaps)
    print(f"Gaps: {len(gaps)} ({format_duration(gap_seconds)})")


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.min_gap is not None:
        settings.min_gap_minutes = args.min_gap

    if not args.input.exists():
        print(f"Error: Input file '{args.input}' not found.")
        return 1

    session = EvaluatorSession.from_settings(settings)
    try:
        await session.load_file(args.input)
    except ParseError as e:
        print(f"Error: {e}")
        return 1

    if args.enable_gaps:
        for gap in list(session.graph.gaps()):
            if gap.disabled:
                session.toggle_disabled(gap.id)

    print_summary(session)

    try:
        if args.json_out:
            if not args.gap_task:
                print("Error: --json requires --gap-task")
                return 1
            written = session.save_json(args.gap_task, args.json_out)
            print(f"Tim export saved to: {written.absolute()}")

        if args.csv_out:
            written = session.save_csv(args.csv_task, args.csv_out)
            print(f"CSV timesheet saved to: {written.absolute()}")
    except InvalidSelectionError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(main()))
