"""Service for scoring how urgently a repository should surface"""

from datetime import datetime, timezone
from typing import Optional

from overall.config import ScoringConfig
from overall.constants import SECONDS_PER_DAY
from overall.logging_config import get_logger
from overall.models.signals import RepositorySignals
from overall.services.status_resolver import count_unmerged

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from remote data are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def age_in_days(pushed_at: Optional[datetime], now: datetime) -> Optional[float]:
    """
    Age of the last push in fractional days, clamped at zero.

    Returns None when pushed_at is missing or not a datetime.
    """
    if not isinstance(pushed_at, datetime) or not isinstance(now, datetime):
        return None
    seconds = (_as_utc(now) - _as_utc(pushed_at)).total_seconds()
    # Clock skew between data sources can put pushed_at after now
    return max(0.0, seconds / SECONDS_PER_DAY)


def recency_term(age_days: Optional[float], half_life_days: float) -> float:
    """Exponential decay: 1.0 for age zero, halving every half_life_days."""
    if age_days is None:
        return 0.0
    return 0.5 ** (max(0.0, age_days) / half_life_days)


def score(signals: RepositorySignals, now: datetime, config: Optional[ScoringConfig] = None) -> float:
    """
    Compute the priority score for a repository.

    score = multiplier * (recency_term + unmerged_branch_weight * unmerged)
    where multiplier is fork_penalty_multiplier for forks and 1.0 otherwise.

    Args:
        signals: Repository signals (not modified)
        now: Reference time for the run
        config: Scoring weights; defaults when None

    Returns:
        Priority score, higher is more urgent
    """
    config = config or ScoringConfig()

    age = age_in_days(signals.pushed_at, now)
    base = recency_term(age, config.recency_half_life_days)
    base += config.unmerged_branch_weight * count_unmerged(signals)

    multiplier = config.fork_penalty_multiplier if signals.is_fork else 1.0
    result = multiplier * base

    logger.debug(f"{signals.id}: age={age} days, score={result:.4f}")
    return result
