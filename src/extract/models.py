"""Data models for diff extraction."""

from dataclasses import dataclass, replace

from common.constants import TRUNCATION_MARKER


@dataclass(frozen=True)
class DiffRecord:
    """One changed file's unified diff."""

    path: str  # Relative to the repository root, as reported by git
    diff: str
    is_new_file: bool = False  # Synthesized from an untracked file's content
    is_truncated: bool = False

    @classmethod
    def from_new_file(cls, path: str, content: str) -> "DiffRecord":
        """Build an "entire file is new" diff from an untracked file's content.

        Every line of the content becomes an addition; there is no prior
        version, so the diff carries no context lines.

        Example:
            >>> DiffRecord.from_new_file("a.py", "x = 1\\n").diff
            'diff --git a/a.py b/a.py\\nnew file\\n--- /dev/null\\n+++ b/a.py\\n+x = 1'
        """
        header = [
            f"diff --git a/{path} b/{path}",
            "new file",
            "--- /dev/null",
            f"+++ b/{path}",
        ]
        lines = content.removesuffix("\n").split("\n") if content else []
        added = [f"+{line}" for line in lines]
        return cls(path=path, diff="\n".join(header + added), is_new_file=True)

    @property
    def line_count(self) -> int:
        return len(self.diff.split("\n"))

    def truncated(self, max_lines: int) -> "DiffRecord":
        """Return this record cut to ``max_lines`` lines plus a marker line.

        Records within the budget, or already truncated, come back unchanged.
        """
        if self.is_truncated or self.line_count <= max_lines:
            return self
        kept = self.diff.split("\n")[:max_lines]
        return replace(
            self,
            diff="\n".join(kept + [TRUNCATION_MARKER]),
            is_truncated=True,
        )
