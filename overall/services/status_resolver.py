"""Service for resolving the worst-case status of a repository"""

from typing import Iterable, Tuple

from overall.constants import EXCLUDED_BRANCHES
from overall.logging_config import get_logger
from overall.models.signals import BranchSignal, RepositorySignals
from overall.models.verdict import (
    COMPLETE,
    LOCAL_CHANGES,
    NEEDS_SYNC,
    STALE,
    StatusVerdict,
)

logger = get_logger(__name__)


def is_excluded_branch(branch_name: str) -> bool:
    """Check if a branch is a long-lived branch that never counts as unmerged."""
    return branch_name in EXCLUDED_BRANCHES


def unmerged_branches(signals: RepositorySignals) -> Tuple[BranchSignal, ...]:
    """Branches other than main/master/develop, in remote order."""
    return tuple(b for b in signals.branches if not is_excluded_branch(b.name))


def count_unmerged(signals: RepositorySignals) -> int:
    """Number of unmerged feature branches."""
    return len(unmerged_branches(signals))


def resolve(signals: RepositorySignals) -> StatusVerdict:
    """
    Resolve a repository to its single most urgent status.

    Rules are checked in order and the first match wins:
    local uncommitted changes, then local or remote sync drift, then the
    presence of unmerged branches, then complete.

    Args:
        signals: Normalized repository signals (not modified)

    Returns:
        StatusVerdict carrying exactly one reason
    """
    local = signals.local_status

    # Uncommitted work has to be committed before any sync is meaningful
    if local is not None and local.uncommitted_files > 0:
        logger.debug(f"{signals.id}: {local.uncommitted_files} uncommitted file(s)")
        return LOCAL_CHANGES

    if local is not None and local.needs_sync:
        logger.debug(
            f"{signals.id}: local clone {local.unpushed_commits} ahead, "
            f"{local.behind_commits} behind upstream"
        )
        return NEEDS_SYNC

    # A clean clone says nothing about branches moved elsewhere
    feature_branches = unmerged_branches(signals)
    drifting = next((b for b in feature_branches if b.needs_sync), None)
    if drifting is not None:
        logger.debug(
            f"{signals.id}: branch {drifting.name} is {drifting.ahead_by} ahead, "
            f"{drifting.behind_by} behind"
        )
        return NEEDS_SYNC

    if feature_branches:
        logger.debug(f"{signals.id}: {len(feature_branches)} unmerged branch(es)")
        return STALE

    logger.debug(f"{signals.id}: complete")
    return COMPLETE


def aggregate(verdicts: Iterable[StatusVerdict]) -> StatusVerdict:
    """
    Roll a collection of verdicts up to the most urgent one.

    The result carries only that verdict's own reason. Order of the input
    does not matter: equally urgent verdicts with different reasons are
    settled by reason text. An empty collection is complete.
    """
    return min(verdicts, key=lambda v: (v.status.urgency, v.reason), default=COMPLETE)
