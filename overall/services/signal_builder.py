"""Build repository signals from exported dashboard JSON"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from overall.constants import UNGROUPED_NAME
from overall.exceptions import InvalidInputError
from overall.logging_config import get_logger
from overall.models.signals import (
    BranchSignal,
    LocalStatus,
    RepositoryGroup,
    RepositorySignals,
)

logger = get_logger(__name__)

_FRACTION = re.compile(r"\.(\d+)")


def _get(data: Mapping[str, Any], *keys: str, default=None):
    """Return the first present key; exports use camelCase, rows snake_case."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _get_list(data: Mapping[str, Any], *keys: str, record: Optional[str] = None) -> List[Any]:
    """Like _get, but the value must be a JSON array (missing means empty)."""
    value = _get(data, *keys, default=[])
    if not isinstance(value, list):
        raise InvalidInputError(keys[0], f"expected a list, got {type(value).__name__}", record)
    return value


def _normalize_fraction(match: "re.Match") -> str:
    # fromisoformat before 3.11 wants exactly 3 or 6 fractional digits
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: Any, field: str, record: str, required: bool = False) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp into an aware UTC datetime.

    Args:
        value: String, datetime or None
        field: Field name used in error messages
        record: Record identifier used in error messages
        required: Raise when the value is missing

    Returns:
        Parsed datetime, or None for a missing optional value
    """
    if value is None or value == "":
        if required:
            raise InvalidInputError(field, "is required", record)
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        # fromisoformat only accepts a trailing Z from Python 3.11
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        # chrono writes nanoseconds, e.g. 11:00:00.123456789+00:00
        text = _FRACTION.sub(_normalize_fraction, text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidInputError(field, f"unparsable timestamp {value!r}", record)
    else:
        raise InvalidInputError(field, f"expected a timestamp string, got {value!r}", record)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_count(value: Any, field: str, record: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(field, f"expected an integer, got {value!r}", record)
    return value


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidInputError(what, f"expected an object, got {type(data).__name__}")
    return data


def build_branch(data: Mapping[str, Any], repo_id: str = "") -> BranchSignal:
    """Build a BranchSignal from an exported branch record."""
    data = _require_mapping(data, "branch")
    name = _get(data, "name")
    record = f"{repo_id}:{name}" if repo_id else str(name)
    return BranchSignal(
        name=name,
        ahead_by=_parse_count(_get(data, "aheadBy", "ahead_by", "ahead"), "ahead_by", record),
        behind_by=_parse_count(_get(data, "behindBy", "behind_by", "behind"), "behind_by", record),
        last_commit_date=parse_timestamp(
            _get(data, "lastCommitDate", "last_commit_date"), "last_commit_date", record
        ),
        sha=_get(data, "sha"),
    )


def build_local_status(data: Mapping[str, Any], repo_id: Optional[str] = None) -> LocalStatus:
    """Build a LocalStatus from a local_repo_status row."""
    data = _require_mapping(data, "local_status")
    repo_id = _get(data, "repo_id", "repoId", default=repo_id)
    record = repo_id or "local status"
    return LocalStatus(
        uncommitted_files=_parse_count(
            _get(data, "uncommitted_files", "uncommittedFiles"), "uncommitted_files", record
        ),
        unpushed_commits=_parse_count(
            _get(data, "unpushed_commits", "unpushedCommits"), "unpushed_commits", record
        ),
        behind_commits=_parse_count(
            _get(data, "behind_commits", "behindCommits"), "behind_commits", record
        ),
        last_checked=parse_timestamp(
            _get(data, "last_checked", "lastChecked"), "last_checked", record
        ),
        repo_id=repo_id,
        local_path=_get(data, "local_path", "localPath"),
        current_branch=_get(data, "current_branch", "currentBranch"),
    )


def build_repository(
    data: Mapping[str, Any],
    local_statuses: Optional[Mapping[str, LocalStatus]] = None,
) -> RepositorySignals:
    """
    Build RepositorySignals from an exported repository record.

    Args:
        data: Repository record (camelCase export or snake_case row)
        local_statuses: Local statuses keyed by repo id, used when the
            record carries no embedded localStatus

    Returns:
        Validated RepositorySignals
    """
    data = _require_mapping(data, "repository")
    owner = _get(data, "owner")
    if isinstance(owner, Mapping):
        owner = owner.get("login")
    name = _get(data, "name")

    repo_id = _get(data, "id")
    if repo_id is None and owner and name:
        repo_id = f"{owner}/{name}"
    if not isinstance(repo_id, str) or not repo_id.strip():
        raise InvalidInputError("id", "repository id cannot be empty")

    is_fork = _get(data, "isFork", "is_fork", default=False)
    if isinstance(is_fork, int) and not isinstance(is_fork, bool) and is_fork in (0, 1):
        # SQLite stores booleans as integers
        is_fork = bool(is_fork)

    branches_data = _get_list(data, "branches", record=repo_id)

    local_data = _get(data, "localStatus", "local_status")
    if local_data is not None:
        local_status = build_local_status(local_data, repo_id)
    else:
        local_status = (local_statuses or {}).get(repo_id)

    return RepositorySignals(
        id=repo_id,
        pushed_at=parse_timestamp(
            _get(data, "pushedAt", "pushed_at", "lastPush", "last_push"),
            "pushed_at", repo_id, required=True,
        ),
        created_at=parse_timestamp(_get(data, "createdAt", "created_at"), "created_at", repo_id),
        updated_at=parse_timestamp(_get(data, "updatedAt", "updated_at"), "updated_at", repo_id),
        is_fork=is_fork,
        branches=tuple(build_branch(b, repo_id) for b in branches_data),
        local_status=local_status,
        owner=owner,
        name=name,
        language=_get(data, "language"),
        description=_get(data, "description"),
    )


def build_groups(export: Union[Mapping[str, Any], Sequence[Any]]) -> List[RepositoryGroup]:
    """
    Build repository groups from a dashboard export.

    Accepts {"groups": [...], "ungrouped": [...], "localStatuses": [...]}
    or a bare list of repository records (returned as one ungrouped group).
    """
    if isinstance(export, list):
        export = {"ungrouped": export}
    export = _require_mapping(export, "export")

    local_statuses: Dict[str, LocalStatus] = {}
    for row in _get_list(export, "localStatuses", "local_statuses"):
        status = build_local_status(row)
        if status.repo_id:
            local_statuses[status.repo_id] = status

    groups: List[RepositoryGroup] = []
    for group_data in _get_list(export, "groups"):
        group_data = _require_mapping(group_data, "group")
        group_name = _get(group_data, "name")
        if not isinstance(group_name, str) or not group_name.strip():
            raise InvalidInputError("name", "group name cannot be empty")
        repos = _get_list(group_data, "repos", "repositories", record=group_name)
        groups.append(RepositoryGroup(
            name=group_name,
            group_id=_get(group_data, "id"),
            repositories=tuple(build_repository(r, local_statuses) for r in repos),
        ))

    ungrouped = _get_list(export, "ungrouped")
    if ungrouped:
        groups.append(RepositoryGroup(
            name=UNGROUPED_NAME,
            group_id=None,
            repositories=tuple(build_repository(r, local_statuses) for r in ungrouped),
        ))

    logger.debug(
        f"Built {sum(len(g.repositories) for g in groups)} repositories in {len(groups)} group(s)"
    )
    return groups


def load_export(path: Union[str, Path]) -> List[RepositoryGroup]:
    """Load and build groups from an export JSON file."""
    export_path = Path(path)
    try:
        data = json.loads(export_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InvalidInputError("path", f"export file not found: {export_path}")
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidInputError("path", f"cannot read {export_path}: {e}")
    return build_groups(data)
