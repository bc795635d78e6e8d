"""Turn a working tree's pending changes into per-file diff records."""

import re
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape

from common.logger import get_logger

from .git_utils import GitError, git_diff_head, git_status_porcelain, git_untracked_files
from .models import DiffRecord

logger = get_logger(__name__)

_DIFF_PREFIX = "diff --git "
# git wraps a path in double quotes and C-escapes it when it holds a quote,
# a backslash or a control character
_DIFF_HEADER = re.compile(r'^diff --git (?:"a/.*?"|a/.*?) (?:(?P<quoted>"b/.*")|b/(?P<plain>.*))$')

_C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}


def unquote_git_path(quoted: str) -> str:
    """
    Decode a path that git printed as a C-style quoted string.

    Octal escapes are raw bytes of the UTF-8 encoded path.

    Example:
        >>> unquote_git_path('"caf\\\\303\\\\251.py"')
        'café.py'
    """
    body = quoted[1:-1]
    raw = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            following = body[i + 1]
            if following in "01234567":
                raw.append(int(body[i + 1 : i + 4], 8))
                i += 4
                continue
            raw.extend(_C_ESCAPES.get(following, following).encode("utf-8"))
            i += 2
            continue
        raw.extend(char.encode("utf-8"))
        i += 1
    return raw.decode("utf-8", errors="replace")


def _header_path(line: str) -> str | None:
    match = _DIFF_HEADER.match(line)
    if not match:
        return None
    if match.group("quoted") is not None:
        return unquote_git_path(match.group("quoted"))[len("b/") :]
    return match.group("plain")


def split_unified_diff(diff_text: str) -> list[tuple[str, str]]:
    """
    Split combined ``git diff`` output into per-file sections.

    Every line starting with ``diff --git`` opens a new section, which keeps
    its header line. The path is taken from the ``b/`` side of the header,
    i.e. the file's path in the working tree. Text before the first header is
    dropped, as is a section whose header cannot be parsed.

    Args:
        diff_text: Raw unified diff output

    Returns:
        List of (path, section_text) in the order git reported them
    """
    sections: list[tuple[str, str]] = []
    current_path: str | None = None
    current_lines: list[str] = []

    for line in diff_text.removesuffix("\n").split("\n"):
        if line.startswith(_DIFF_PREFIX):
            if current_path is not None:
                sections.append((current_path, "\n".join(current_lines)))
            current_path = _header_path(line)
            current_lines = [line]
            if current_path is None:
                logger.warning(f"Could not parse diff header {escape(repr(line))}, skipping")
            continue
        if current_path is not None:
            current_lines.append(line)

    if current_path is not None:
        sections.append((current_path, "\n".join(current_lines)))

    return sections


def _tracked_diffs(diff_text: str, is_ignored: Callable[[str], bool]) -> list[DiffRecord]:
    records: list[DiffRecord] = []
    for path, section in split_unified_diff(diff_text):
        if is_ignored(path):
            logger.debug(f"Ignoring {escape(path)}")
            continue
        records.append(DiffRecord(path=path, diff=section))
    return records


def _untracked_diffs(
    repo_root: Path,
    untracked: list[str],
    is_ignored: Callable[[str], bool],
) -> list[DiffRecord]:
    records: list[DiffRecord] = []
    for path in untracked:
        if is_ignored(path):
            logger.debug(f"Ignoring untracked {escape(path)}")
            continue
        try:
            content = (repo_root / path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read untracked file {escape(path)}: {escape(str(e))}")
            continue
        records.append(DiffRecord.from_new_file(path, content))
    return records


def extract_diffs(
    repo_root: Path,
    context_lines: int,
    is_ignored: Callable[[str], bool],
) -> list[DiffRecord]:
    """
    Collect diffs for every pending change in ``repo_root``.

    Tracked modifications come first, in the order git reports them, followed
    by untracked files in listing order. Untracked files are turned into
    whole-file additions.

    Args:
        repo_root: Path to git repository root
        context_lines: Lines of context around each hunk
        is_ignored: Predicate for paths to leave out

    Returns:
        List of DiffRecord; empty when there are no changes or git cannot be
        queried (not a repository, no HEAD, git missing)
    """
    try:
        status = git_status_porcelain(repo_root)
        if not status.strip():
            logger.info("No changes detected")
            return []

        diff_text = git_diff_head(repo_root, context_lines)
        untracked = git_untracked_files(repo_root)
    except (GitError, OSError) as e:
        logger.error(f"Error getting git diffs: {escape(str(e))}")
        return []

    records = _tracked_diffs(diff_text, is_ignored)
    records.extend(_untracked_diffs(repo_root, untracked, is_ignored))
    return records
