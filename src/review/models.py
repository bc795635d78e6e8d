"""Data models for snippet matching and verdicts."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class Verdict(Enum):
    """Outcome of comparing a diff against a snippet, or of a whole file."""

    ACCEPTED = "accepted"  # No issues
    WARNING = "warning"  # Minor concerns, or the oracle could not decide
    REJECTED = "rejected"  # Significant issues

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {Verdict.ACCEPTED: 0, Verdict.WARNING: 1, Verdict.REJECTED: 2}


@dataclass(frozen=True)
class Snippet:
    """A curated reference sample."""

    name: str  # Source file's base name
    content: str


@dataclass(frozen=True)
class SnippetMatch:
    """A candidate snippet returned by the ranking oracle."""

    snippet_name: str
    relevance_score: float  # Requested on a 0-100 scale, higher = more relevant


@dataclass(frozen=True)
class MatchVerdict:
    """The adjudication oracle's judgment for one (diff, snippet) pair."""

    commentary: str
    status: Verdict


@dataclass(frozen=True)
class MatchCommentary:
    """A retained match as reported for a file."""

    snippet_name: str
    commentary: str


@dataclass(frozen=True)
class FileResult:
    """Aggregated outcome for one changed file."""

    path: str
    status: Verdict
    matches: tuple[MatchCommentary, ...] = ()


@dataclass(frozen=True)
class RunSummary:
    """Counts of file verdicts across a run."""

    accepted: int = 0
    warning: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.accepted + self.warning + self.rejected

    @classmethod
    def from_results(cls, results: Iterable[FileResult]) -> "RunSummary":
        counts = {verdict: 0 for verdict in Verdict}
        for result in results:
            counts[result.status] += 1
        return cls(
            accepted=counts[Verdict.ACCEPTED],
            warning=counts[Verdict.WARNING],
            rejected=counts[Verdict.REJECTED],
        )


class RunStatus(Enum):
    """How a review run ended."""

    COMPLETED = "completed"
    NO_SNIPPETS = "no_snippets"  # Nothing to compare against
    NO_CHANGES = "no_changes"  # Nothing to review


@dataclass(frozen=True)
class ReviewOutcome:
    """Everything a run produced, ready for reporting."""

    status: RunStatus
    results: tuple[FileResult, ...] = ()
    summary: RunSummary = field(default_factory=RunSummary)

    @property
    def has_rejections(self) -> bool:
        return any(r.status is Verdict.REJECTED for r in self.results)

    @property
    def exit_code(self) -> int:
        """Process exit code: 1 if any file was rejected, else 0."""
        return 1 if self.has_rejections else 0
