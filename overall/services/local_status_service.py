"""Local clone inspection service for overall."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import git

from overall.exceptions import LocalGitError
from overall.logging_config import get_logger
from overall.models.signals import LocalStatus

logger = get_logger(__name__)


def scan_for_git_repos(root_path: Union[str, Path]) -> List[Path]:
    """
    Find git repositories directly under a root directory.

    Args:
        root_path: Directory whose immediate children are clones

    Returns:
        Sorted list of repository paths
    """
    root = Path(root_path).expanduser()
    if not root.exists():
        raise LocalGitError("scan", str(root), "Path does not exist")
    if not root.is_dir():
        raise LocalGitError("scan", str(root), "Path is not a directory")

    repos = [p for p in root.iterdir() if p.is_dir() and (p / ".git").exists()]
    logger.debug(f"Found {len(repos)} git repositories under {root}")
    return sorted(repos)


def extract_repo_id(local_path: Union[str, Path]) -> Optional[str]:
    """Derive owner/name from the last two path components.

    ~/github/softwarewrighter/overall -> softwarewrighter/overall
    """
    path = Path(local_path)
    parts = path.parts
    if len(parts) < 2 or parts[-2] == path.anchor:
        return None
    return f"{parts[-2]}/{parts[-1]}"


class LocalStatusService:
    """Service for reading working-copy state from local clones."""

    def __init__(self, remote_name: str = "origin"):
        self.remote_name = remote_name

    def _get_repo(self, repo_path: Union[str, Path]) -> git.Repo:
        """Open a fresh git.Repo for each call so threads never share one."""
        try:
            return git.Repo(str(repo_path))
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise LocalGitError("open", str(repo_path), f"Not a git repository ({e.__class__.__name__})")

    def get_current_branch(self, repo: git.Repo) -> Optional[str]:
        """Name of the checked-out branch, None when HEAD is detached."""
        try:
            return repo.active_branch.name
        except TypeError:
            return None

    def count_uncommitted_files(self, repo: git.Repo) -> int:
        """Count modified, staged and untracked entries from porcelain status."""
        try:
            output = repo.git.status("--porcelain")
        except git.exc.GitCommandError as e:
            logger.debug(f"git status failed in {repo.working_dir}: {e}")
            return 0
        return sum(1 for line in output.split("\n") if line.strip())

    def get_ahead_behind(self, repo: git.Repo, branch_name: Optional[str]) -> Tuple[int, int]:
        """
        Commits ahead of and behind the upstream of a branch.

        Returns (0, 0) when there is no branch or no upstream configured.
        """
        if not branch_name:
            return 0, 0
        try:
            tracking = repo.heads[branch_name].tracking_branch()
        except (IndexError, AttributeError) as e:
            logger.debug(f"No head {branch_name} in {repo.working_dir}: {e}")
            return 0, 0
        if tracking is None or not tracking.is_valid():
            return 0, 0

        try:
            ahead = sum(1 for _ in repo.iter_commits(f"{tracking.name}..{branch_name}"))
            behind = sum(1 for _ in repo.iter_commits(f"{branch_name}..{tracking.name}"))
        except git.exc.GitCommandError as e:
            logger.debug(f"Error comparing {branch_name} with {tracking.name}: {e}")
            return 0, 0
        return ahead, behind

    def get_local_status(self, repo_path: Union[str, Path], repo_id: Optional[str] = None) -> LocalStatus:
        """
        Read the full working-copy status of a clone.

        Args:
            repo_path: Path to the clone
            repo_id: owner/name; derived from the path when omitted

        Returns:
            LocalStatus snapshot stamped with the current time
        """
        path = Path(repo_path)
        repo_id = repo_id or extract_repo_id(path)
        if not repo_id:
            raise LocalGitError("extract_repo_id", str(path), "Failed to extract repo ID")

        repo = self._get_repo(path)
        try:
            current_branch = self.get_current_branch(repo)
            uncommitted = self.count_uncommitted_files(repo)
            unpushed, behind = self.get_ahead_behind(repo, current_branch)
        finally:
            repo.close()

        logger.debug(
            f"{repo_id}: branch={current_branch} uncommitted={uncommitted} "
            f"unpushed={unpushed} behind={behind}"
        )
        return LocalStatus(
            uncommitted_files=uncommitted,
            unpushed_commits=unpushed,
            behind_commits=behind,
            last_checked=datetime.now(timezone.utc),
            repo_id=repo_id,
            local_path=str(path),
            current_branch=current_branch,
        )

    def scan_root(self, root_path: Union[str, Path]) -> Dict[str, LocalStatus]:
        """
        Inspect every clone under a root, keyed by repo id.

        Clones that cannot be read are skipped with a warning.
        """
        statuses: Dict[str, LocalStatus] = {}
        for repo_path in scan_for_git_repos(root_path):
            try:
                status = self.get_local_status(repo_path)
            except LocalGitError as e:
                logger.warning(f"Skipping {repo_path}: {e}")
                continue
            statuses[status.repo_id] = status
        return statuses
