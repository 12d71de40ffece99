"""CLI entry point for the meal calendar."""

from __future__ import annotations

import argparse
from pathlib import Path

from meal_calendar.config import DEFAULT_CONFIG_PATH


def get_config_path(args: argparse.Namespace) -> Path:
    return Path(args.config) if args.config else DEFAULT_CONFIG_PATH


def cmd_week(args: argparse.Namespace) -> None:
    from meal_calendar.week import run_week

    run_week(
        config_path=get_config_path(args),
        url=args.url,
        api_key=args.api_key,
        anchor=args.anchor,
        reference_date=args.today,
        output_format=args.format,
    )


def cmd_move(args: argparse.Namespace) -> None:
    from meal_calendar.edit import run_move

    run_move(
        plan_id=args.plan_id,
        from_date=args.from_date,
        to_date=args.to_date,
        config_path=get_config_path(args),
        url=args.url,
        api_key=args.api_key,
    )


def _add_server_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--url", type=str, help="Recipe server base URL")
    p.add_argument("--api-key", type=str, help="API token for the recipe server")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meal-calendar",
        description="Weekly meal plan calendar for a Tandoor recipe server",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to settings YAML (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging verbosity (default: warning)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # week
    p_week = sub.add_parser("week", help="Show the meal plans for the current week")
    _add_server_args(p_week)
    p_week.add_argument(
        "--today", type=str, help="Reference date YYYY-MM-DD (default: today)"
    )
    p_week.add_argument(
        "--anchor", type=str, help="Weekday the week starts on (default: saturday)"
    )
    p_week.add_argument(
        "--format", type=str, choices=["json", "table"], default="table"
    )
    p_week.set_defaults(func=cmd_week)

    # move
    p_move = sub.add_parser("move", help="Move or extend a meal plan")
    _add_server_args(p_move)
    p_move.add_argument("plan_id", type=int, help="Meal plan id")
    p_move.add_argument("--from-date", type=str, required=True, help="New start date YYYY-MM-DD")
    p_move.add_argument(
        "--to-date", type=str, default=None, help="New end date YYYY-MM-DD (omit for one day)"
    )
    p_move.set_defaults(func=cmd_move)

    return parser


def main() -> None:
    from meal_calendar.log import setup_logging

    parser = build_parser()
    args = parser.parse_args()

    log_file = Path(args.log_file) if args.log_file else None
    secrets = [args.api_key] if args.api_key else None
    setup_logging(level=args.log_level, log_file=log_file, secrets=secrets)

    args.func(args)


if __name__ == "__main__":
    main()
