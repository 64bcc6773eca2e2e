#!/usr/bin/env python3
import argparse
import logging
import sys

from config import CONFIG
from meal_extender import (
    PlanningError, extend_with_report, repeat_cycle, order_by_tolerance,
    format_sequence, format_report
)
from meal_store import generate_meals, load_meals


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extend a short meal list into a longer rotation, respecting each meal's tolerance"
    )
    parser.add_argument(
        "--meals-csv",
        type=str,
        default=None,
        help="CSV with 'name' and 'tolerance' columns (default: built-in demo meals)",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=CONFIG["target_length"],
        help="Number of slots in the extended sequence",
    )
    parser.add_argument(
        "--strategy",
        choices=["spread", "cycle"],
        default=CONFIG["strategy"],
        help="'spread' spaces repeats by tolerance, 'cycle' repeats the list as-is",
    )
    parser.add_argument(
        "--no-sort",
        dest="sort",
        action="store_false",
        default=CONFIG["sort_by_tolerance"],
        help="Keep the input order instead of placing long-tolerance meals first",
    )
    parser.add_argument("--strict", action="store_true",
                        help="Fail when a repeat cannot be placed")
    parser.add_argument("--report", action="store_true",
                        help="Print dropped repeats and placeholders after the sequence")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        meals = load_meals(args.meals_csv) if args.meals_csv else generate_meals()
        if args.sort:
            meals = order_by_tolerance(meals)

        if args.strategy == "cycle":
            print(format_sequence(repeat_cycle(meals, args.length)))
        else:
            report = extend_with_report(meals, args.length, strict=args.strict)
            print(format_report(report) if args.report else format_sequence(report.sequence))
    except (PlanningError, ValueError, OSError) as e:
        # unreadable or malformed CSVs come out of pandas as OSError / ValueError
        print(f"⚠️ Could not build meal sequence: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
