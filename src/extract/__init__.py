"""Extract pending changes from a git working tree as per-file diffs."""

from .diffs import extract_diffs, split_unified_diff
from .git_utils import GitError
from .ignore import compile_ignore_patterns
from .models import DiffRecord

__all__ = [
    "DiffRecord",
    "GitError",
    "compile_ignore_patterns",
    "extract_diffs",
    "split_unified_diff",
]
