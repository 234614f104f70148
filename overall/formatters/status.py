"""Status and priority formatting utilities."""

from typing import Optional

from overall.constants import CLI_COLORS, STATUS_LABELS, SYMBOL_FORK
from overall.models.signals import RepositorySignals
from overall.models.verdict import RepoStatus


def format_status(status: RepoStatus) -> str:
    """
    Format a status as display text.

    Args:
        status: Repository status enum value

    Returns:
        Icon name with its traffic-light label, e.g. "needs-sync (STOP)"
    """
    label = STATUS_LABELS.get(status.value)
    return f"{status.value} ({label})" if label else status.value


def get_status_style(status: RepoStatus) -> Optional[str]:
    """Rich color name for a status."""
    return CLI_COLORS.get(status.value)


def format_priority(priority: float) -> str:
    """Format a priority score with fixed precision."""
    return f"{priority:.3f}"


def format_repo_name(repository: RepositorySignals) -> str:
    """Repository id, marked when it is a fork."""
    if repository.is_fork:
        return f"{repository.id} {SYMBOL_FORK}"
    return repository.id
