"""Command-line argument parsing for overall."""

import argparse
from overall.__version__ import __version__


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="overall",
        description="GitHub Repository Manager - Track and prioritize your repositories",
    )
    parser.add_argument("--version", action="version", version=f"overall {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    report = subparsers.add_parser(
        "report",
        help="Resolve status and priority for exported repositories",
        description="Resolve status and priority for every repository in a dashboard export",
    )
    report.add_argument("export", help="Path to the exported repos.json")
    report.add_argument("--config", help="Scoring config JSON (default: ~/.overall/config.json)")
    report.add_argument(
        "--local-root",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory of local clones (owner/name layout); may be repeated",
    )
    report.add_argument("--half-life", type=float, help="Recency half-life in days")
    report.add_argument("--branch-weight", type=float, help="Priority added per unmerged branch")
    report.add_argument("--fork-penalty", type=float, help="Multiplier applied to forks")
    report.add_argument(
        "--now", help="Reference time as an ISO 8601 timestamp (default: current time)"
    )
    report.add_argument("--json", action="store_true", help="Print the report as JSON")
    report.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers (default: auto-detect)",
    )
    report.add_argument(
        "--sequential",
        action="store_true",
        help="Force sequential processing (disable parallelism)",
    )
    _add_common_arguments(report)

    local = subparsers.add_parser(
        "local",
        help="Show working-copy status of local clones",
        description="Show working-copy status of every clone under a directory",
    )
    local.add_argument("root", help="Directory of local clones")
    local.add_argument("--json", action="store_true", help="Print statuses as JSON")
    _add_common_arguments(local)

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
