"""Pytest fixtures for overall tests"""
import logging
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import git
import pytest

from overall.config import ScoringConfig
from overall.models.signals import BranchSignal, LocalStatus, RepositorySignals


NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference time for scoring."""
    return NOW


@pytest.fixture
def scoring_config():
    """Default scoring configuration."""
    return ScoringConfig()


@pytest.fixture
def make_repo():
    """Factory for RepositorySignals with sensible defaults."""
    def _make_repo(repo_id="test/repo", days_ago=0, branches=(), local_status=None, is_fork=False):
        return RepositorySignals(
            id=repo_id,
            pushed_at=NOW - timedelta(days=days_ago),
            created_at=NOW - timedelta(days=400),
            updated_at=NOW - timedelta(days=days_ago),
            is_fork=is_fork,
            branches=tuple(branches),
            local_status=local_status,
        )
    return _make_repo


@pytest.fixture
def make_branch():
    """Factory for BranchSignal."""
    def _make_branch(name="feature-x", ahead_by=0, behind_by=0):
        return BranchSignal(
            name=name,
            ahead_by=ahead_by,
            behind_by=behind_by,
            last_commit_date=NOW - timedelta(days=3),
        )
    return _make_branch


@pytest.fixture
def clean_local():
    """A registered local clone with nothing to do."""
    return LocalStatus(
        uncommitted_files=0,
        unpushed_commits=0,
        behind_commits=0,
        last_checked=NOW,
    )


@pytest.fixture
def sample_export():
    """Dashboard export with one group and one ungrouped repository."""
    return {
        "groups": [
            {
                "id": 1,
                "name": "CLI Tools",
                "repos": [
                    {
                        "id": "softwarewrighter/overall",
                        "owner": "softwarewrighter",
                        "name": "overall",
                        "language": "Rust",
                        "lastPush": "2025-05-31T12:00:00Z",
                        "branches": [
                            {"name": "main", "sha": "a1", "aheadBy": 0, "behindBy": 0,
                             "status": "ReadyForPR", "lastCommitDate": "2025-05-31T12:00:00Z"},
                            {"name": "feature-x", "sha": "b2", "aheadBy": 0, "behindBy": 34,
                             "status": "ReadyForPR", "lastCommitDate": "2025-05-01T12:00:00Z"},
                        ],
                        "pullRequests": [],
                        "unmergedCount": 0,
                        "prCount": 0,
                    },
                    {
                        "id": "softwarewrighter/repo-tool",
                        "owner": "softwarewrighter",
                        "name": "repo-tool",
                        "language": "Rust",
                        "lastPush": "2025-04-01T12:00:00Z",
                        "branches": [
                            {"name": "main", "sha": "c3", "aheadBy": 0, "behindBy": 0,
                             "lastCommitDate": "2025-04-01T12:00:00Z"},
                        ],
                    },
                ],
            }
        ],
        "ungrouped": [
            {
                "id": "softwarewrighter/sw-install",
                "owner": "softwarewrighter",
                "name": "sw-install",
                "lastPush": "2025-05-20T12:00:00Z",
                "isFork": True,
                "branches": [
                    {"name": "develop", "sha": "d4", "aheadBy": 3, "behindBy": 0,
                     "lastCommitDate": "2025-05-20T12:00:00Z"},
                ],
            }
        ],
        "localStatuses": [
            {
                "id": 1,
                "repo_id": "softwarewrighter/sw-install",
                "local_path": "/home/mike/github/softwarewrighter/sw-install",
                "current_branch": "main",
                "uncommitted_files": 2,
                "unpushed_commits": 0,
                "behind_commits": 0,
                "is_dirty": True,
                "last_checked": "2025-06-01T11:00:00Z",
            }
        ],
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _configure_user(repo):
    writer = repo.config_writer()
    writer.set_value("user", "name", "Test User")
    writer.set_value("user", "email", "test@example.com")
    writer.release()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository laid out as <root>/owner/name."""
    repo_path = temp_dir / "github" / "test" / "origin-repo"
    repo_path.mkdir(parents=True)

    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def cloned_repo(git_repo, temp_dir):
    """Clone of git_repo whose main branch tracks origin/main."""
    clone_path = temp_dir / "github" / "test" / "clone"
    clone = git.Repo.clone_from(git_repo.working_dir, clone_path)
    _configure_user(clone)

    yield clone

    clone.close()


@pytest.fixture
def commit_file():
    """Write, stage and commit a file in a repository."""
    def _commit_file(repo, filename, content, message):
        path = Path(repo.working_dir) / filename
        path.write_text(content)
        repo.index.add([filename])
        return repo.index.commit(message)
    return _commit_file


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging so handlers never outlive a test's captured streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    git_level = logging.getLogger("git").level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("git").setLevel(git_level)
