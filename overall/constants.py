"""Shared constants for overall."""

from dataclasses import dataclass
from typing import FrozenSet, List


# Branches that never count as unmerged work
EXCLUDED_BRANCHES: FrozenSet[str] = frozenset({"main", "master", "develop"})


# Reason strings shown next to each status icon
REASON_LOCAL_CHANGES = "Has local uncommitted changes."
REASON_NEEDS_SYNC = "Has uncommitted, unpushed, or unfetched commits."
REASON_STALE = "Has unmerged feature branches."
REASON_COMPLETE = "All repositories up to date."


# Scoring defaults
DEFAULT_RECENCY_HALF_LIFE_DAYS = 30.0
DEFAULT_UNMERGED_BRANCH_WEIGHT = 0.25
DEFAULT_FORK_PENALTY_MULTIPLIER = 0.5

SECONDS_PER_DAY = 86400.0

UNGROUPED_NAME = "Ungrouped"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


REPORT_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("repo", "Repository", 36),
    ColumnDefinition("status", "Status", 14),
    ColumnDefinition("priority", "Priority", 8),
    ColumnDefinition("unmerged", "Unmerged", 8),
    ColumnDefinition("last_push", "Last Push", 18),
    ColumnDefinition("reason", "Reason", 0),
]

LOCAL_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("repo", "Repository", 36),
    ColumnDefinition("branch", "Branch", 20),
    ColumnDefinition("uncommitted", "Uncommitted", 11),
    ColumnDefinition("unpushed", "Unpushed", 8),
    ColumnDefinition("behind", "Behind", 6),
    ColumnDefinition("path", "Path", 0),
]


# Status labels (traffic-light wording from the dashboard tabs)
STATUS_LABELS = {
    "local-changes": "YIELD",
    "needs-sync": "STOP",
    "stale": "CLEAN UP",
    "complete": "PROCEED",
}

# CLI colors (Rich color names)
CLI_COLORS = {
    "local-changes": "yellow",
    "needs-sync": "red",
    "stale": "white",
    "complete": "green",
}

SYMBOL_FORK = "⑂"
