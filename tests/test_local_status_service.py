"""Tests for local clone inspection"""
from pathlib import Path

import pytest

from overall.exceptions import LocalGitError
from overall.services.local_status_service import (
    LocalStatusService,
    extract_repo_id,
    scan_for_git_repos,
)


@pytest.fixture
def service():
    return LocalStatusService()


class TestScanForGitRepos:
    """Test discovery of clones under a root."""

    def test_finds_immediate_children(self, cloned_repo, temp_dir):
        root = temp_dir / "github" / "test"
        (root / "not-a-repo").mkdir()

        found = scan_for_git_repos(root)

        assert [p.name for p in found] == ["clone", "origin-repo"]

    def test_missing_root(self, temp_dir):
        with pytest.raises(LocalGitError) as exc_info:
            scan_for_git_repos(temp_dir / "missing")

        assert exc_info.value.operation == "scan"

    def test_root_is_file(self, temp_dir):
        path = temp_dir / "file.txt"
        path.write_text("x")

        with pytest.raises(LocalGitError):
            scan_for_git_repos(path)

    def test_empty_root(self, temp_dir):
        assert scan_for_git_repos(temp_dir) == []


class TestExtractRepoId:
    """Test owner/name derivation from paths."""

    def test_owner_and_name(self):
        assert extract_repo_id("/home/mike/github/softwarewrighter/overall") == "softwarewrighter/overall"

    def test_path_object(self):
        assert extract_repo_id(Path("/tmp/owner/name")) == "owner/name"

    def test_too_short(self):
        assert extract_repo_id("/overall") is None


class TestGetLocalStatus:
    """Test status of real clones."""

    def test_clean_clone(self, service, cloned_repo):
        status = service.get_local_status(cloned_repo.working_dir)

        assert status.repo_id == "test/clone"
        assert status.current_branch == "main"
        assert status.uncommitted_files == 0
        assert status.unpushed_commits == 0
        assert status.behind_commits == 0
        assert status.is_dirty is False
        assert status.last_checked is not None

    def test_untracked_file_counts(self, service, cloned_repo):
        (Path(cloned_repo.working_dir) / "notes.txt").write_text("todo\n")

        status = service.get_local_status(cloned_repo.working_dir)

        assert status.uncommitted_files == 1
        assert status.is_dirty is True

    def test_modified_and_untracked(self, service, cloned_repo):
        work = Path(cloned_repo.working_dir)
        (work / "README.md").write_text("# Changed\n")
        (work / "new.txt").write_text("new\n")

        assert service.get_local_status(work).uncommitted_files == 2

    def test_local_commit_is_unpushed(self, service, cloned_repo, commit_file):
        commit_file(cloned_repo, "feature.txt", "feature\n", "Add feature")

        status = service.get_local_status(cloned_repo.working_dir)

        assert status.unpushed_commits == 1
        assert status.behind_commits == 0
        assert status.uncommitted_files == 0

    def test_remote_commit_is_behind(self, service, git_repo, cloned_repo, commit_file):
        commit_file(git_repo, "upstream.txt", "upstream\n", "Upstream change")
        cloned_repo.remotes.origin.fetch()

        status = service.get_local_status(cloned_repo.working_dir)

        assert status.behind_commits == 1
        assert status.unpushed_commits == 0

    def test_no_upstream(self, service, git_repo):
        status = service.get_local_status(git_repo.working_dir)

        assert status.repo_id == "test/origin-repo"
        assert (status.unpushed_commits, status.behind_commits) == (0, 0)

    def test_detached_head(self, service, cloned_repo):
        cloned_repo.git.checkout(cloned_repo.head.commit.hexsha)

        status = service.get_local_status(cloned_repo.working_dir)

        assert status.current_branch is None
        assert (status.unpushed_commits, status.behind_commits) == (0, 0)

    def test_explicit_repo_id(self, service, cloned_repo):
        status = service.get_local_status(cloned_repo.working_dir, repo_id="softwarewrighter/overall")

        assert status.repo_id == "softwarewrighter/overall"

    def test_not_a_repository(self, service, temp_dir):
        plain = temp_dir / "owner" / "plain"
        plain.mkdir(parents=True)

        with pytest.raises(LocalGitError) as exc_info:
            service.get_local_status(plain)

        assert exc_info.value.operation == "open"

    def test_missing_path(self, service, temp_dir):
        with pytest.raises(LocalGitError):
            service.get_local_status(temp_dir / "owner" / "missing")


class TestScanRoot:
    """Test whole-root inspection."""

    def test_keyed_by_repo_id(self, service, cloned_repo, temp_dir):
        statuses = service.scan_root(temp_dir / "github" / "test")

        assert set(statuses) == {"test/clone", "test/origin-repo"}
        assert statuses["test/clone"].current_branch == "main"
