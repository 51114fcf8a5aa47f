"""Git/project metadata for document frontmatter."""

from __future__ import annotations

import subprocess
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

_GIT_TIMEOUT = 10


@dataclass(frozen=True)
class ThoughtsMetadata:
    """Timestamps and git state captured at one instant."""

    date_time_tz: str
    iso_date_time: str
    date_short: str
    git_commit: str
    git_branch: str
    repo_name: str
    git_user: str
    git_email: str
    filename_timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _git(cwd: Path, *args: str) -> str | None:
    """Run ``git <args>`` in *cwd*; ``None`` on any failure or empty output."""
    try:
        result = subprocess.run(
            ["git", *args],  # noqa: S607
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=_GIT_TIMEOUT,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def _is_git_repo(cwd: Path) -> bool:
    return _git(cwd, "rev-parse", "--is-inside-work-tree") == "true"


def get_metadata(cwd: Path, *, now: datetime | None = None) -> ThoughtsMetadata:
    """Collect metadata for *cwd*.

    Outside a git work tree (or without git installed) the git fields fall
    back to ``no-commit``, ``no-branch``, ``no-repo`` and ``unknown``.
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()

    git_commit = "no-commit"
    git_branch = "no-branch"
    repo_name = "no-repo"
    git_user = "unknown"
    git_email = "unknown"

    if _is_git_repo(cwd):
        toplevel = _git(cwd, "rev-parse", "--show-toplevel")
        if toplevel:
            repo_name = PurePosixPath(toplevel.replace("\\", "/")).name or "no-repo"
        git_branch = (
            _git(cwd, "branch", "--show-current")
            or _git(cwd, "rev-parse", "--abbrev-ref", "HEAD")
            or "no-branch"
        )
        git_commit = _git(cwd, "rev-parse", "HEAD") or "no-commit"
        git_user = _git(cwd, "config", "user.name") or "unknown"
        git_email = _git(cwd, "config", "user.email") or "unknown"

    utc = now.astimezone(timezone.utc)
    date_short = utc.strftime("%Y-%m-%d")
    return ThoughtsMetadata(
        date_time_tz=now.strftime("%m/%d/%Y, %I:%M:%S %p %Z"),
        iso_date_time=utc.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        date_short=date_short,
        git_commit=git_commit,
        git_branch=git_branch,
        repo_name=repo_name,
        git_user=git_user,
        git_email=git_email,
        filename_timestamp=f"{date_short}_{now.strftime('%H-%M-%S')}",
    )


def format_metadata(meta: ThoughtsMetadata) -> str:
    """Render *meta* as the labelled lines printed by ``thoughts metadata``."""
    lines = [
        f"Current Date/Time (TZ): {meta.date_time_tz}",
        f"ISO DateTime: {meta.iso_date_time}",
        f"Date Short: {meta.date_short}",
        f"Current Git Commit Hash: {meta.git_commit}",
        f"Current Branch Name: {meta.git_branch}",
        f"Repository Name: {meta.repo_name}",
        f"Git User: {meta.git_user}",
        f"Git Email: {meta.git_email}",
        f"Timestamp For Filename: {meta.filename_timestamp}",
    ]
    return "\n".join(lines)
