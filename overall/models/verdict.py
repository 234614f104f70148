"""Status verdict model and related enums"""
from enum import Enum
from dataclasses import dataclass

from overall.constants import (
    REASON_COMPLETE,
    REASON_LOCAL_CHANGES,
    REASON_NEEDS_SYNC,
    REASON_STALE,
)


class RepoStatus(Enum):
    """Worst-case status of a repository, most urgent first."""
    LOCAL_CHANGES = "local-changes"
    NEEDS_SYNC = "needs-sync"
    STALE = "stale"
    COMPLETE = "complete"

    @property
    def urgency(self) -> int:
        """Rank in the total order; 0 is the most urgent."""
        return _URGENCY[self]


_URGENCY = {
    RepoStatus.LOCAL_CHANGES: 0,
    RepoStatus.NEEDS_SYNC: 1,
    RepoStatus.STALE: 2,
    RepoStatus.COMPLETE: 3,
}

_REASONS = {
    RepoStatus.LOCAL_CHANGES: REASON_LOCAL_CHANGES,
    RepoStatus.NEEDS_SYNC: REASON_NEEDS_SYNC,
    RepoStatus.STALE: REASON_STALE,
    RepoStatus.COMPLETE: REASON_COMPLETE,
}


@dataclass(frozen=True)
class StatusVerdict:
    """A single status together with the one reason shown for it."""
    status: RepoStatus
    reason: str

    @classmethod
    def of(cls, status: RepoStatus) -> "StatusVerdict":
        return cls(status, _REASONS[status])

    def is_more_urgent_than(self, other: "StatusVerdict") -> bool:
        return self.status.urgency < other.status.urgency

    def to_dict(self) -> dict:
        return {"status": self.status.value, "reason": self.reason}


LOCAL_CHANGES = StatusVerdict.of(RepoStatus.LOCAL_CHANGES)
NEEDS_SYNC = StatusVerdict.of(RepoStatus.NEEDS_SYNC)
STALE = StatusVerdict.of(RepoStatus.STALE)
COMPLETE = StatusVerdict.of(RepoStatus.COMPLETE)
