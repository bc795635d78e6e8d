"""Git utilities for reading a working tree's pending changes."""

import subprocess
from pathlib import Path

from rich.markup import escape

from common.logger import get_logger

logger = get_logger(__name__)


class GitError(RuntimeError):
    """Raised when a git command fails."""


def _run_git(repo_root: Path, *args: str) -> str:
    """
    Run a git sub-command in ``repo_root`` and return its stdout.

    Raises:
        GitError: If git exits non-zero
        FileNotFoundError: If git is not installed
    """
    logger.debug(f"Running git {escape(' '.join(args))}")
    # Report non-ASCII paths verbatim instead of as octal escapes
    result = subprocess.run(
        ["git", "-c", "core.quotepath=off", *args],
        cwd=repo_root,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    if result.returncode != 0:
        raise GitError(result.stderr.strip() or f"git {args[0]} failed")
    return result.stdout


def git_status_porcelain(repo_root: Path) -> str:
    """
    Get the machine-readable working tree status.

    Uses: git status --porcelain

    Args:
        repo_root: Path to git repository root

    Returns:
        Raw status output; empty when there are no pending changes

    Raises:
        GitError: If git command fails (e.g. not a repository)
    """
    return _run_git(repo_root, "status", "--porcelain")


def git_diff_head(repo_root: Path, context_lines: int) -> str:
    """
    Get the unified diff of all tracked modifications against HEAD.

    Uses: git diff --unified=<context_lines> HEAD

    Args:
        repo_root: Path to git repository root
        context_lines: Lines of context on each side of every hunk

    Returns:
        Raw unified diff text covering every changed tracked file

    Raises:
        GitError: If git command fails (e.g. no commits yet)
    """
    return _run_git(repo_root, "diff", f"--unified={context_lines}", "HEAD")


def git_untracked_files(repo_root: Path) -> list[str]:
    """
    List untracked files that git does not ignore.

    Uses: git ls-files -z --others --exclude-standard

    The listing is NUL-separated, so paths are never quoted or escaped.

    Returns:
        Paths relative to ``repo_root``, in git's listing order

    Raises:
        GitError: If git command fails
    """
    output = _run_git(repo_root, "ls-files", "-z", "--others", "--exclude-standard")
    return [path for path in output.split("\0") if path]
