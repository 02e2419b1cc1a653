#!/usr/bin/env python3
"""
erp-core command line.

Date helpers for scripting plus session maintenance against the persisted
session token.

Usage:
    erp-core add-months 2024-01-31 1
    erp-core in-period 2024-03-15 QUARTER --reference 2024-02-01
    erp-core session
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from loguru import logger

from .auth import CredentialStore
from .config import Settings
from .dates import (
    Period,
    add_business_days,
    add_calendar_months,
    count_business_days,
    is_expired,
    is_in_period,
    recurring_due_dates,
    set_day_of_month,
)
from .errors import ConfigurationError
from .log import configure_logging
from .navigation import AppShell, get_role_label, resolve_view
from .services import check_connection


def _flag(value: bool) -> str:
    return "yes" if value else "no"


def _run_session(settings: Settings) -> int:
    shell = AppShell.from_settings(settings)
    state = asyncio.run(shell.guard.check_session())
    if not state.is_authenticated:
        print("Not signed in")
        return 1

    profile = state.profile
    print(f"User:  {profile.full_name or profile.email}")
    print(f"Role:  {profile.role.value} ({get_role_label(profile.role)})")
    print(f"View:  {resolve_view(state).value}")
    return 0


def _run_logout(settings: Settings) -> int:
    # Forgetting the token needs no secret
    try:
        CredentialStore(settings.token_file).clear_token()
    except OSError as e:
        logger.error(f"Failed to clear session token: {e}")
        return 1
    print("Signed out")
    return 0


def _run_ping(settings: Settings, url: Optional[str]) -> int:
    url = url or settings.backend_url
    if not url:
        print("No backend URL configured (set ERP_BACKEND_URL or pass --url)")
        return 1

    status = asyncio.run(check_connection(url, timeout=settings.connectivity_timeout))
    if status.success:
        print(f"OK: {url}")
        return 0
    print(f"FAILED: {status.message}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="erp-core", description="erp-core utilities")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: ERP_LOG_LEVEL or INFO)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("add-months", help="Add calendar months to a date")
    p.add_argument("date")
    p.add_argument("months", type=int)

    p = commands.add_parser("set-day", help="Set the day of month, clamped to the month")
    p.add_argument("date")
    p.add_argument("day", type=int)

    p = commands.add_parser("add-business-days", help="Add Monday-Friday days to a date")
    p.add_argument("date")
    p.add_argument("days", type=int)

    p = commands.add_parser("count-business-days", help="Business days in (start, end]")
    p.add_argument("start")
    p.add_argument("end")

    p = commands.add_parser("in-period", help="Check whether a date is in the current period")
    p.add_argument("date")
    p.add_argument("period", choices=[period.value for period in Period])
    p.add_argument("--reference", default=None, help="Anchor date (default: today)")

    p = commands.add_parser("expired", help="Check whether a validity window has passed")
    p.add_argument("date")
    p.add_argument("validity_days", type=int)
    p.add_argument("--today", default=None, help="Reference date (default: today)")

    p = commands.add_parser("due-dates", help="Monthly installment due dates")
    p.add_argument("first_due")
    p.add_argument("count", type=int)
    p.add_argument("--day", type=int, default=None, help="Fixed day of month")

    commands.add_parser("session", help="Show the stored session")
    commands.add_parser("logout", help="Forget the stored session")

    p = commands.add_parser("ping", help="Check backend connectivity")
    p.add_argument("--url", default=None, help="Health URL (default: ERP_BACKEND_URL)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        configure_logging(args.log_level or settings.log_level)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.command == "add-months":
        print(add_calendar_months(args.date, args.months))
    elif args.command == "set-day":
        print(set_day_of_month(args.date, args.day))
    elif args.command == "add-business-days":
        print(add_business_days(args.date, args.days))
    elif args.command == "count-business-days":
        print(count_business_days(args.start, args.end))
    elif args.command == "in-period":
        print(_flag(is_in_period(args.date, args.period, args.reference)))
    elif args.command == "expired":
        print(_flag(is_expired(args.date, args.validity_days, today=args.today)))
    elif args.command == "due-dates":
        for due in recurring_due_dates(args.first_due, args.count, due_day=args.day):
            print(due)
    else:
        try:
            if args.command == "session":
                return _run_session(settings)
            if args.command == "logout":
                return _run_logout(settings)
            return _run_ping(settings, args.url)
        except ConfigurationError as e:
            logger.error(str(e))
            return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
