"""Display service for repository reports"""
from datetime import datetime
from typing import Dict, Sequence

from rich.console import Console
from rich.table import Table

from overall.constants import LOCAL_COLUMNS, REPORT_COLUMNS
from overall.formatters import (
    format_age,
    format_date,
    format_priority,
    format_repo_name,
    format_status,
    get_status_style,
)
from overall.logging_config import get_logger
from overall.models.signals import LocalStatus
from overall.models.verdict import RepoStatus
from overall.services.report_service import GroupReport

logger = get_logger(__name__)


class DisplayService:
    def __init__(self, console: Console = None):
        self.console = console or Console()

    def display_group_reports(self, group_reports: Sequence[GroupReport], now: datetime,
                              show_summary: bool = True) -> None:
        """Display one table per group, headed by the group's worst-case status."""
        if not group_reports:
            self.console.print("[yellow]No repositories to report.[/yellow]")
            return

        for group in group_reports:
            style = get_status_style(group.verdict.status)
            title = f"{group.name}: {format_status(group.verdict.status)}"
            table = Table(title=title, title_style=style, caption=group.verdict.reason)

            for col in REPORT_COLUMNS:
                if col.width:
                    table.add_column(col.label, min_width=col.width)
                else:
                    table.add_column(col.label)

            for report in group.repositories:
                # Match REPORT_COLUMNS order: Repository, Status, Priority, Unmerged, Last Push, Reason
                table.add_row(
                    format_repo_name(report.repository),
                    format_status(report.verdict.status),
                    format_priority(report.priority),
                    str(report.unmerged_count),
                    f"{format_date(report.repository.pushed_at)} ({format_age(report.repository.pushed_at, now)})",
                    report.verdict.reason,
                    style=get_status_style(report.verdict.status),
                )

            self.console.print(table)

        if show_summary:
            self.display_summary(group_reports, now)

    def display_summary(self, group_reports: Sequence[GroupReport], now: datetime) -> None:
        """Print status counts across all groups."""
        counts: Dict[RepoStatus, int] = {status: 0 for status in RepoStatus}
        for group in group_reports:
            for report in group.repositories:
                counts[report.verdict.status] += 1

        total = sum(counts.values())
        self.console.print(f"\nSummary ({format_date(now)}):")
        self.console.print(f"Total repositories: {total}")
        for status in RepoStatus:
            style = get_status_style(status) or "default"
            self.console.print(f"[{style}]{format_status(status)}[/{style}]: {counts[status]}")

    def display_local_statuses(self, statuses: Dict[str, LocalStatus]) -> None:
        """Display a table of local clone statuses."""
        table = Table(title="Local clones")
        for col in LOCAL_COLUMNS:
            table.add_column(col.label)

        for repo_id in sorted(statuses):
            status = statuses[repo_id]
            if status.is_dirty:
                style = get_status_style(RepoStatus.LOCAL_CHANGES)
            elif status.needs_sync:
                style = get_status_style(RepoStatus.NEEDS_SYNC)
            else:
                style = None
            table.add_row(
                repo_id,
                status.current_branch or "(detached)",
                str(status.uncommitted_files),
                str(status.unpushed_commits),
                str(status.behind_commits),
                status.local_path or "",
                style=style,
            )

        self.console.print(table)
