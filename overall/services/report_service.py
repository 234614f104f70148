"""Batch evaluation of repositories and group rollups"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from overall.config import ScoringConfig
from overall.logging_config import get_logger
from overall.models.signals import LocalStatus, RepositoryGroup, RepositorySignals
from overall.models.verdict import StatusVerdict
from overall.services.priority_scorer import score
from overall.services.status_resolver import aggregate, count_unmerged, resolve
from overall.utils.threading import get_optimal_worker_count

logger = get_logger(__name__)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class RepositoryReport:
    """Verdict and priority computed for one repository."""
    repository: RepositorySignals
    verdict: StatusVerdict
    priority: float
    unmerged_count: int

    def to_dict(self) -> dict:
        return {
            "id": self.repository.id,
            "status": self.verdict.status.value,
            "reason": self.verdict.reason,
            "priority": self.priority,
            "unmergedCount": self.unmerged_count,
            "lastPush": _isoformat(self.repository.pushed_at),
            "isFork": self.repository.is_fork,
        }


@dataclass(frozen=True)
class GroupReport:
    """Ranked repository reports for a group plus its worst-case verdict."""
    name: str
    group_id: Optional[int]
    repositories: Tuple[RepositoryReport, ...]
    verdict: StatusVerdict

    def to_dict(self) -> dict:
        return {
            "id": self.group_id,
            "name": self.name,
            "status": self.verdict.status.value,
            "reason": self.verdict.reason,
            "repos": [r.to_dict() for r in self.repositories],
        }


def rank(reports: Sequence[RepositoryReport]) -> List[RepositoryReport]:
    """Sort by priority descending, ties broken by repository id."""
    return sorted(reports, key=lambda r: (-r.priority, r.repository.id))


class ReportService:
    """Evaluates batches of repositories against one scoring config."""

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        now: Optional[datetime] = None,
        workers: Optional[int] = None,
        sequential: bool = False,
    ):
        """Initialize the service.

        Args:
            config: Scoring weights, shared read-only by every evaluation
            now: Reference time for the whole run; current UTC time when None
            workers: Number of parallel workers (None = auto-detect)
            sequential: Evaluate in the calling thread
        """
        self.config = config or ScoringConfig()
        self.now = now or datetime.now(timezone.utc)
        self.workers = workers
        self.sequential = sequential

    def evaluate(self, signals: RepositorySignals) -> RepositoryReport:
        """Resolve and score a single repository."""
        return RepositoryReport(
            repository=signals,
            verdict=resolve(signals),
            priority=score(signals, self.now, self.config),
            unmerged_count=count_unmerged(signals),
        )

    def evaluate_all(self, repositories: Sequence[RepositorySignals]) -> List[RepositoryReport]:
        """Evaluate a batch and return it ranked by priority."""
        if not repositories:
            return []

        max_workers = get_optimal_worker_count(self.workers, batch_size=len(repositories))
        if self.sequential or max_workers == 1:
            logger.debug(f"Evaluating {len(repositories)} repositories sequentially")
            reports = [self.evaluate(r) for r in repositories]
        else:
            logger.debug(f"Evaluating {len(repositories)} repositories using {max_workers} workers")
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                reports = list(executor.map(self.evaluate, repositories))

        return rank(reports)

    def evaluate_group(self, group: RepositoryGroup) -> GroupReport:
        """Evaluate a group and roll its verdicts up to the worst case."""
        reports = self.evaluate_all(group.repositories)
        return GroupReport(
            name=group.name,
            group_id=group.group_id,
            repositories=tuple(reports),
            verdict=aggregate(r.verdict for r in reports),
        )

    def evaluate_groups(self, groups: Sequence[RepositoryGroup]) -> List[GroupReport]:
        """Evaluate every group, keeping the given group order."""
        reports = [self.evaluate_group(g) for g in groups]
        logger.info(
            f"Evaluated {sum(len(g.repositories) for g in reports)} repositories "
            f"in {len(reports)} group(s)"
        )
        return reports

    def to_dict(self, group_reports: Sequence[GroupReport]) -> dict:
        """JSON-ready report for the dashboard."""
        return {
            "generatedAt": self.now.isoformat(),
            "scoring": self.config.to_dict(),
            "groups": [g.to_dict() for g in group_reports],
        }


def attach_local_statuses(
    groups: Sequence[RepositoryGroup], local_statuses: Dict[str, LocalStatus]
) -> List[RepositoryGroup]:
    """
    Return new groups whose repositories carry the matching local status.

    Inputs are left untouched; repositories without a matching clone keep
    whatever local status they already had.
    """
    if not local_statuses:
        return list(groups)

    updated = []
    for group in groups:
        repos = tuple(
            replace(r, local_status=local_statuses[r.id]) if r.id in local_statuses else r
            for r in group.repositories
        )
        updated.append(replace(group, repositories=repos))
    return updated
