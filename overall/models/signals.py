"""Repository signal models consumed by the status resolver and scorer"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from overall.exceptions import InvalidInputError


def _check_count(value, field: str, record: str) -> None:
    """Reject anything that is not a non-negative int."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(field, f"expected an integer, got {value!r}", record)
    if value < 0:
        raise InvalidInputError(field, f"cannot be negative, got {value}", record)


def _check_timestamp(value, field: str, record: str, required: bool = False) -> None:
    if value is None:
        if required:
            raise InvalidInputError(field, "is required", record)
        return
    if not isinstance(value, datetime):
        raise InvalidInputError(field, f"expected a datetime, got {value!r}", record)


@dataclass(frozen=True)
class BranchSignal:
    """A remote branch compared against the repository's default branch."""
    name: str
    ahead_by: int = 0
    behind_by: int = 0
    last_commit_date: Optional[datetime] = None
    sha: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidInputError("name", "branch name cannot be empty")
        _check_count(self.ahead_by, "ahead_by", self.name)
        _check_count(self.behind_by, "behind_by", self.name)
        _check_timestamp(self.last_commit_date, "last_commit_date", self.name)

    @property
    def needs_sync(self) -> bool:
        return self.ahead_by > 0 or self.behind_by > 0


@dataclass(frozen=True)
class LocalStatus:
    """Working-copy state of a registered local clone."""
    uncommitted_files: int = 0
    unpushed_commits: int = 0
    behind_commits: int = 0
    last_checked: Optional[datetime] = None
    repo_id: Optional[str] = None
    local_path: Optional[str] = None
    current_branch: Optional[str] = None  # None = detached HEAD or unknown

    def __post_init__(self):
        record = self.repo_id or self.local_path or "local status"
        _check_count(self.uncommitted_files, "uncommitted_files", record)
        _check_count(self.unpushed_commits, "unpushed_commits", record)
        _check_count(self.behind_commits, "behind_commits", record)
        _check_timestamp(self.last_checked, "last_checked", record)

    @property
    def is_dirty(self) -> bool:
        return self.uncommitted_files > 0

    @property
    def needs_sync(self) -> bool:
        return self.unpushed_commits > 0 or self.behind_commits > 0


@dataclass(frozen=True)
class RepositorySignals:
    """Everything known about one repository, normalized and immutable."""
    id: str
    pushed_at: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_fork: bool = False
    branches: Tuple[BranchSignal, ...] = ()
    local_status: Optional[LocalStatus] = None
    owner: Optional[str] = None
    name: Optional[str] = None
    language: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidInputError("id", "repository id cannot be empty")
        _check_timestamp(self.pushed_at, "pushed_at", self.id, required=True)
        _check_timestamp(self.created_at, "created_at", self.id)
        _check_timestamp(self.updated_at, "updated_at", self.id)
        if not isinstance(self.is_fork, bool):
            raise InvalidInputError("is_fork", f"expected a boolean, got {self.is_fork!r}", self.id)
        # Freeze the branch sequence so callers cannot mutate it behind our back
        if not isinstance(self.branches, tuple):
            object.__setattr__(self, "branches", tuple(self.branches))
        for branch in self.branches:
            if not isinstance(branch, BranchSignal):
                raise InvalidInputError("branches", f"expected BranchSignal, got {branch!r}", self.id)
        if self.local_status is not None and not isinstance(self.local_status, LocalStatus):
            raise InvalidInputError("local_status", f"expected LocalStatus, got {self.local_status!r}", self.id)

    @property
    def display_name(self) -> str:
        return self.name or self.id.split("/")[-1]


@dataclass(frozen=True)
class RepositoryGroup:
    """A named tab of repositories; group_id is None for the ungrouped bucket."""
    name: str
    repositories: Tuple[RepositorySignals, ...] = ()
    group_id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.repositories, tuple):
            object.__setattr__(self, "repositories", tuple(self.repositories))
