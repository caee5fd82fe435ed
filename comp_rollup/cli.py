# comp_rollup/cli.py
# Command-line interface entry point (argparse)
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from comp_rollup.config.loaders import load_budget_settings
from comp_rollup.config.models import BudgetSettings
from comp_rollup.data.readers import read_roster
from comp_rollup.data.writers import write_report_json, write_roster_csv
from comp_rollup.exceptions import CompRollupError
from comp_rollup.reporting.report import Report, compute_report
from comp_rollup.state.roster import Roster
from comp_rollup.storage.project_store import Project, ProjectStore
from logging_config import DEFAULT_LOG_DIR, setup_logging

# Get logger for this module
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comp-rollup",
        description="Compensation review rollup: budget status and level breakdown for a roster.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(DEFAULT_LOG_DIR),
        help=f"Directory to store log files (default: {DEFAULT_LOG_DIR})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Compute and print the review report for a roster file.")
    report.add_argument("--roster", required=True, help="Roster file (.csv or .json).")
    report.add_argument("--config", default=None, help="YAML budget settings file.")
    report.add_argument("--json-out", default=None, help="Write the full report as JSON.")
    report.add_argument("--csv-out", default=None, help="Write the refreshed roster as CSV.")
    report.add_argument(
        "--resolve",
        action="store_true",
        help="Resolve increases on load (seeds absent merit %% from the standard merit).",
    )

    export = sub.add_parser("export-csv", help="Export a roster file as the review CSV.")
    export.add_argument("--roster", required=True, help="Roster file (.csv or .json).")
    export.add_argument("--output", required=True, help="CSV file to write.")
    export.add_argument("--config", default=None, help="YAML budget settings file.")
    export.add_argument("--resolve", action="store_true", help="Resolve increases on load.")

    project = sub.add_parser("project", help="Manage stored projects.")
    project.add_argument("--store", required=True, help="Directory holding stored projects.")
    project_sub = project.add_subparsers(dest="project_command", required=True)

    save = project_sub.add_parser("save", help="Save a roster and budget settings as a project.")
    save.add_argument("--name", required=True)
    save.add_argument("--key", required=True, help="Shared access key.")
    save.add_argument("--roster", required=True, help="Roster file (.csv or .json).")
    save.add_argument("--config", default=None, help="YAML budget settings file.")
    save.add_argument("--resolve", action="store_true", help="Resolve increases before saving.")

    load = project_sub.add_parser("load", help="Load a project and print its report.")
    load.add_argument("--name", required=True)
    load.add_argument("--key", required=True, help="Shared access key.")
    load.add_argument("--json-out", default=None, help="Write the full report as JSON.")
    load.add_argument("--csv-out", default=None, help="Write the roster as CSV.")

    delete = project_sub.add_parser("delete", help="Delete a stored project.")
    delete.add_argument("--name", required=True)
    delete.add_argument("--key", required=True, help="Shared access key.")

    project_sub.add_parser("list", help="List stored projects.")
    return parser


def _settings(config: Optional[str]) -> BudgetSettings:
    if config:
        return load_budget_settings(config)
    logger.info("No budget config given, using default settings")
    return BudgetSettings()


def _fmt_pct(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.1f}%"


def format_report(report: Report) -> str:
    """Plain-text summary of a report for the terminal."""
    lines = [f"Employees: {report.employee_count}"]
    for cat in (report.budget.base, report.budget.stock):
        lines.append(
            f"{cat.category.capitalize():<6} allowance {cat.allowance:>12,.0f}  "
            f"max {cat.max_allowed:>12,.0f}  used {cat.used:>12,.0f}  "
            f"remaining {cat.remaining:>12,.0f}  utilisation {_fmt_pct(cat.utilization_percent):>7}  "
            f"[{cat.health}]"
        )
    lines.append(f"Over budget: {'yes' if report.is_over_budget else 'no'}")

    if report.level_breakdown:
        levels = pd.DataFrame([lvl.to_dict() for lvl in report.level_breakdown])
        lines.append("")
        lines.append(levels.to_string(index=False, float_format=lambda v: f"{v:,.1f}"))

    flagged = report.flagged_employees
    if flagged:
        lines.append("")
        lines.append(f"Flagged ({len(flagged)}):")
        lines.extend(f"  {emp.name} +{emp.total_increase_percent:.1f}%" for emp in flagged)

    promoted = report.promoted_employees
    if promoted:
        lines.append("")
        lines.append(f"Promotions ({len(promoted)}):")
        lines.extend(
            f"  {emp.name} {emp.current_level or '?'} -> {emp.next_level or '?'}" for emp in promoted
        )
    return "\n".join(lines)


def _emit(report: Report, json_out: Optional[str], csv_out: Optional[str]) -> None:
    print(format_report(report))
    if json_out:
        write_report_json(report, json_out)
    if csv_out:
        write_roster_csv(report.employees, csv_out)


def _load_roster(path: str, settings: BudgetSettings, resolve: bool) -> Roster:
    roster = read_roster(path)
    if resolve:
        roster.resolve_all(settings)
    return roster


def run_command(args: argparse.Namespace) -> int:
    if args.command == "report":
        settings = _settings(args.config)
        report = compute_report(_load_roster(args.roster, settings, args.resolve), settings)
        _emit(report, args.json_out, args.csv_out)
        return 0

    if args.command == "export-csv":
        settings = _settings(args.config)
        report = compute_report(_load_roster(args.roster, settings, args.resolve), settings)
        write_roster_csv(report.employees, args.output)
        return 0

    store = ProjectStore(args.store)
    if args.project_command == "save":
        settings = _settings(args.config)
        project = Project(
            project_name=args.name,
            access_key=args.key,
            roster=_load_roster(args.roster, settings, args.resolve),
            budget_settings=settings,
        )
        store.save(project)
        print(f"Saved project '{args.name}' ({len(project.roster)} employees)")
    elif args.project_command == "load":
        project = store.load(args.name, args.key)
        _emit(compute_report(project.roster, project.budget_settings), args.json_out, args.csv_out)
    elif args.project_command == "delete":
        store.delete(args.name, args.key)
        print(f"Deleted project '{args.name}'")
    elif args.project_command == "list":
        print(json.dumps(store.list_projects(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the comp-rollup CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(log_dir=Path(args.log_dir), debug=args.debug)
    # Access keys stay out of the logs
    command = " ".join(filter(None, [args.command, getattr(args, "project_command", None)]))
    logger.info(f"Starting comp-rollup {command}")

    try:
        return run_command(args)
    except CompRollupError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=args.debug)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
