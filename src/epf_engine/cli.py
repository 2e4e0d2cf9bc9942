"""EPF Command Line Interface.

Provides inspection tools for:
- Listing Third Schedule sections
- Printing a section's rate table
- Looking up the rate for a wage
- Resolving an employee's section and rate

Usage:
    python -m epf_engine sections
    python -m epf_engine table --section A
    python -m epf_engine rate --section A --wages 550
    python -m epf_engine employee --citizenship malaysian --dob 1990-01-01 --wages 1500
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, TextIO

from epf_engine.calculators import InvalidWagesError, Rate
from epf_engine.config import OUTPUT_FORMATS, Settings, get_settings
from epf_engine.employee import Citizenship, Employee, IncompleteEmployeeError
from epf_engine.schedule import SectionNotFoundError, get_schedule

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{s}', expected YYYY-MM-DD") from e


def parse_wages(s: str) -> Decimal:
    """Parse a wage amount."""
    try:
        return Decimal(s)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"invalid wages '{s}'") from e


class EPFCli:
    """EPF Command Line Interface."""

    def __init__(
        self,
        settings: Settings | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m epf_engine",
            description="EPF Third Schedule contribution rates",
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {self.settings.engine_version}",
        )

        # Shared output option
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--format",
            type=str,
            choices=OUTPUT_FORMATS,
            default=self.settings.output_format,
            help=f"Output format (default: {self.settings.output_format})",
        )

        subparsers = parser.add_subparsers(dest="command", help="Commands")

        subparsers.add_parser(
            "sections",
            parents=[common],
            help="List schedule sections",
        )

        table = subparsers.add_parser(
            "table",
            parents=[common],
            help="Print a section's rate table",
        )
        table.add_argument(
            "--section",
            type=str,
            required=True,
            help="Section name (A, B, C or D)",
        )

        rate = subparsers.add_parser(
            "rate",
            parents=[common],
            help="Look up the rate for wages in a section",
        )
        rate.add_argument(
            "--section",
            type=str,
            required=True,
            help="Section name (A, B, C or D)",
        )
        rate.add_argument(
            "--wages",
            type=parse_wages,
            required=True,
            help="Monthly wages",
        )

        employee = subparsers.add_parser(
            "employee",
            parents=[common],
            help="Resolve an employee's section and rate",
        )
        employee.add_argument(
            "--citizenship",
            type=str,
            choices=[c.value for c in Citizenship],
            default=Citizenship.UNKNOWN.value,
            help="Citizenship category",
        )
        employee.add_argument(
            "--elected-before-cutoff",
            action="store_true",
            help="Non-Malaysian who elected to contribute before 1 August 1998",
        )
        employee.add_argument(
            "--dob",
            type=parse_date,
            help="Date of birth (YYYY-MM-DD)",
        )
        employee.add_argument(
            "--wages",
            type=parse_wages,
            default=Decimal("0"),
            help="Monthly wages",
        )
        employee.add_argument(
            "--as-of",
            type=parse_date,
            help="Evaluation date (default: today)",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help(self.out)
            return 1

        handlers: dict[str, Callable[..., int]] = {
            "sections": self._cmd_sections,
            "table": self._cmd_table,
            "rate": self._cmd_rate,
            "employee": self._cmd_employee,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=self.err)
            return 1

        try:
            return handler(parsed)
        except (SectionNotFoundError, InvalidWagesError, IncompleteEmployeeError) as e:
            logger.debug("Command %s failed", parsed.command, exc_info=True)
            print(f"Error: {e}", file=self.err)
            return 1

    def _cmd_sections(self, args: argparse.Namespace) -> int:
        """List sections."""
        schedule = get_schedule()
        if args.format == "json":
            self._emit_json(
                [
                    {"name": s.name.value, "description": s.description}
                    for s in schedule
                ]
            )
            return 0

        for section in schedule:
            print(f"Section {section.name.value}", file=self.out)
            print("=" * 40, file=self.out)
            print(section.description, file=self.out)
            print(file=self.out)
        return 0

    def _cmd_table(self, args: argparse.Namespace) -> int:
        """Print a section's full rate table."""
        section = get_schedule().by_name(args.section)
        rates = section.rates()

        if args.format == "json":
            self._emit_json(
                {"section": section.name.value, "rates": [r.to_dict() for r in rates]}
            )
            return 0

        print(f"Section {section.name.value}: {len(rates)} bands", file=self.out)
        print(self._rate_header(), file=self.out)
        for rate in rates:
            print(self._rate_row(rate), file=self.out)
        return 0

    def _cmd_rate(self, args: argparse.Namespace) -> int:
        """Look up one rate."""
        section = get_schedule().by_name(args.section)
        rate = section.rate_for_wages(args.wages)

        if args.format == "json":
            self._emit_json({"section": section.name.value, **rate.to_dict()})
            return 0

        print(f"Section {section.name.value}, wages {args.wages}", file=self.out)
        print(self._rate_header(), file=self.out)
        print(self._rate_row(rate), file=self.out)
        return 0

    def _cmd_employee(self, args: argparse.Namespace) -> int:
        """Resolve an employee's sections and, if unambiguous, the rate."""
        employee = Employee(
            citizenship=Citizenship(args.citizenship),
            contribution_before_cutoff=args.elected_before_cutoff,
            date_of_birth=args.dob,
            wages=args.wages,
        )
        sections = employee.sections(as_of=args.as_of)
        rate = employee.rate(as_of=args.as_of) if len(sections) == 1 else None

        if args.format == "json":
            result: dict[str, Any] = {
                "citizenship": employee.citizenship.value,
                "age": employee.age(args.as_of),
                "wages": str(employee.wages),
                "sections": [s.name.value for s in sections],
                "rate": rate.to_dict() if rate else None,
            }
            self._emit_json(result)
            return 0

        print(f"Citizenship: {employee.citizenship.value}", file=self.out)
        age = employee.age(args.as_of)
        print(f"Age: {age if age is not None else 'unknown'}", file=self.out)
        print(
            f"Sections: {', '.join(s.name.value for s in sections)}",
            file=self.out,
        )
        if rate is not None:
            print(self._rate_header(), file=self.out)
            print(self._rate_row(rate), file=self.out)
        else:
            print("Rate: ambiguous, supply citizenship and date of birth", file=self.out)
        return 0

    def _emit_json(self, data: Any) -> None:
        print(json.dumps(data, indent=2), file=self.out)

    @staticmethod
    def _rate_header() -> str:
        return f"{'From':>10} {'To':>10} {'Employer':>10} {'Employee':>10} {'Total':>10}"

    @staticmethod
    def _rate_row(rate: Rate) -> str:
        return (
            f"{rate.wages_from:>10} {rate.wages_to:>10} "
            f"{rate.contribution_employer:>10} {rate.contribution_employee:>10} "
            f"{rate.contribution_total:>10}"
        )


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli = EPFCli(settings)
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
