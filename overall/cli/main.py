"""Command-line entry point for overall"""

import json
import sys
from datetime import datetime, timezone
from typing import Optional

from rich.console import Console

from overall.cli.args import parse_args
from overall.config import load_config
from overall.exceptions import ConfigurationError, OverallError
from overall.logging_config import get_logger, setup_logging
from overall.models.signals import LocalStatus
from overall.services.display_service import DisplayService
from overall.services.local_status_service import LocalStatusService
from overall.services.report_service import ReportService, attach_local_statuses
from overall.services.signal_builder import load_export, parse_timestamp
from overall.utils.threading import get_threading_info

console = Console()
logger = get_logger(__name__)


def _local_status_to_dict(status: LocalStatus) -> dict:
    return {
        "repo_id": status.repo_id,
        "local_path": status.local_path,
        "current_branch": status.current_branch,
        "uncommitted_files": status.uncommitted_files,
        "unpushed_commits": status.unpushed_commits,
        "behind_commits": status.behind_commits,
        "is_dirty": status.is_dirty,
        "last_checked": status.last_checked.isoformat() if status.last_checked else None,
    }


def _parse_now(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        return parse_timestamp(value, "now", "command line", required=True)
    except OverallError as e:
        raise ConfigurationError("now", str(e))


def run_report(args) -> int:
    """Evaluate an export and print the ranked report."""
    config = load_config(args.config).with_overrides(
        recency_half_life_days=args.half_life,
        unmerged_branch_weight=args.branch_weight,
        fork_penalty_multiplier=args.fork_penalty,
    )
    now = _parse_now(args.now)

    groups = load_export(args.export)

    local_service = LocalStatusService()
    for root in args.local_root:
        statuses = local_service.scan_root(root)
        logger.info(f"Read {len(statuses)} local clone(s) under {root}")
        groups = attach_local_statuses(groups, statuses)

    service = ReportService(config, now=now, workers=args.workers, sequential=args.sequential)
    group_reports = service.evaluate_groups(groups)

    if args.json:
        print(json.dumps(service.to_dict(group_reports), indent=2))
    else:
        DisplayService(console).display_group_reports(group_reports, now)
    return 0


def run_local(args) -> int:
    """Inspect local clones and print their status."""
    statuses = LocalStatusService().scan_root(args.root)
    if args.json:
        print(json.dumps([_local_status_to_dict(statuses[k]) for k in sorted(statuses)], indent=2))
    else:
        DisplayService(console).display_local_statuses(statuses)
    return 0


COMMANDS = {
    "report": run_report,
    "local": run_local,
}


def main(argv=None):
    """Main entry point for the application."""
    args = None
    try:
        args = parse_args(argv)

        if args.command is None:
            console.print("Use --help for usage information")
            return 1

        setup_logging(verbose=args.verbose, debug=args.debug)

        if args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            threading_info = get_threading_info()
            console.print(f"  Python version: {threading_info['python_version']}")
            console.print(f"  Threading mode: {threading_info['mode']}")
            console.print(f"  CPU count: {threading_info['cpu_count']}")
            console.print(f"  Optimal workers: {threading_info['optimal_workers']}")

        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except OverallError as e:
        console.print(f"[red]Error: {e}[/red]")
        if args is not None and getattr(args, "debug", False):
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
