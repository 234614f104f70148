"""
overall - Track and prioritize your GitHub repositories
"""

from .__version__ import __version__
from .config import ScoringConfig
from .models.signals import BranchSignal, LocalStatus, RepositorySignals
from .models.verdict import RepoStatus, StatusVerdict
from .services.status_resolver import aggregate, resolve
from .services.priority_scorer import score

__all__ = [
    "ScoringConfig",
    "BranchSignal",
    "LocalStatus",
    "RepositorySignals",
    "RepoStatus",
    "StatusVerdict",
    "aggregate",
    "resolve",
    "score",
    "__version__",
]
