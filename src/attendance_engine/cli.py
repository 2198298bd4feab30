"""Attendance report command line interface.

Usage:
    python -m attendance_engine.cli employee --id X --start 2024-06-01 --end 2024-07-31
    python -m attendance_engine.cli line-manager --id X --start ... --end ...
    python -m attendance_engine.cli department --id X --start ... --end ...
    python -m attendance_engine.cli company --id X --start ... --end ...
    python -m attendance_engine.cli create-schema
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from typing import Any, Callable
from uuid import UUID

from attendance_engine.api.schemas import EmployeeSummaryResponse, ManagerSummaryResponse
from attendance_engine.calculators import AttendanceCalculator, HierarchicalAggregator
from attendance_engine.calculators.errors import AttendanceEngineError
from attendance_engine.config import get_settings
from attendance_engine.database import dispose_db, init_db
from attendance_engine.models import Base
from attendance_engine.stores import SqlAttendanceStore

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_uuid(s: str) -> UUID:
    """Parse UUID string."""
    return UUID(s)


def _default_store() -> Any:
    _, factory = init_db()
    return SqlAttendanceStore(factory)


class AttendanceCli:
    """Attendance report command line interface."""

    REPORTS = ("employee", "line-manager", "department", "company")

    def __init__(self, store_factory: Callable[[], Any] = _default_store) -> None:
        self.store_factory = store_factory
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m attendance_engine.cli",
            description="Attendance deduction reports",
        )
        parser.add_argument(
            "--log-level",
            default=None,
            help="Logging level (defaults to LOG_LEVEL from the environment)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        helps = {
            "employee": "Daily deductions for one employee",
            "line-manager": "Team report for a line manager",
            "department": "Department report for a department manager",
            "company": "Company report for a CEO",
        }
        for name in self.REPORTS:
            report = subparsers.add_parser(name, help=helps[name])
            report.add_argument(
                "--id",
                type=parse_uuid,
                required=True,
                help="Employee, manager or CEO ID",
            )
            report.add_argument(
                "--start",
                type=parse_date,
                required=True,
                help="First day of the report (YYYY-MM-DD)",
            )
            report.add_argument(
                "--end",
                type=parse_date,
                required=True,
                help="Last day of the report (YYYY-MM-DD)",
            )

        subparsers.add_parser(
            "create-schema",
            help="Create database tables for the configured DATABASE_URL",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        logging.basicConfig(level=parsed.log_level or get_settings().log_level)

        if not parsed.command:
            self.parser.print_help()
            return 1

        if parsed.command == "create-schema":
            return asyncio.run(self._cmd_create_schema())

        try:
            payload = asyncio.run(self._cmd_report(parsed))
        except AttendanceEngineError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        print(json.dumps(payload, indent=2))
        return 0

    async def _cmd_report(self, args: argparse.Namespace) -> dict[str, Any]:
        store = self.store_factory()
        try:
            if args.command == "employee":
                calculator = AttendanceCalculator(store, store)
                summary = await calculator.calculate(args.id, args.start, args.end)
                return EmployeeSummaryResponse.from_summary(summary).model_dump(mode="json")

            aggregator = HierarchicalAggregator(
                store, store, concurrency=get_settings().report_concurrency
            )
            build = {
                "line-manager": aggregator.line_manager_summary,
                "department": aggregator.department_summary,
                "company": aggregator.company_summary,
            }[args.command]
            manager_summary = await build(args.id, args.start, args.end)
            return ManagerSummaryResponse.from_summary(manager_summary).model_dump(mode="json")
        finally:
            await dispose_db()

    async def _cmd_create_schema(self) -> int:
        engine, _ = init_db()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        finally:
            await dispose_db()
        logger.info("Schema created")
        return 0


def main() -> int:
    """CLI entry point."""
    cli = AttendanceCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
