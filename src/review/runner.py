"""End-to-end orchestration of a review run."""

from collections.abc import Callable
from pathlib import Path

from rich.markup import escape

from common.constants import CONFIG_FILENAME, QUALITY_DIRNAME, RELEVANCE_THRESHOLD
from common.logger import get_logger
from extract.diffs import extract_diffs
from extract.ignore import compile_ignore_patterns
from extract.models import DiffRecord

from .adjudicator import Adjudicator
from .aggregator import aggregate_file
from .config import QAConfig, base_ignore_patterns, load_config
from .models import FileResult, ReviewOutcome, RunStatus, RunSummary
from .ranker import Ranker
from .snippets import SnippetCorpus, load_snippets

logger = get_logger(__name__)

DiffExtractor = Callable[[Path, int, Callable[[str], bool]], list[DiffRecord]]


class ReviewRunner:
    """Sequence extraction, ranking and adjudication for one repository.

    Diffs are processed one at a time; diff i+1 is not ranked until every
    adjudication for diff i has finished. A run makes at most
    ``max_diffs_per_run * (1 + max_snippet_matches)`` oracle calls.
    """

    def __init__(
        self,
        repo_root: Path,
        config: QAConfig,
        ranker: Ranker,
        adjudicator: Adjudicator,
        *,
        base_ignores: list[str] | None = None,
        extractor: DiffExtractor = extract_diffs,
        relevance_threshold: float = RELEVANCE_THRESHOLD,
    ):
        """Initialize the runner.

        Args:
            repo_root: Repository whose pending changes are reviewed
            config: Resolved run options
            ranker: Ranking capability
            adjudicator: Adjudication capability
            base_ignores: Patterns always ignored in addition to config.ignore_files
            extractor: Diff source (git-backed by default)
            relevance_threshold: Minimum relevance score for adjudication
        """
        self.repo_root = repo_root
        self.config = config
        self.ranker = ranker
        self.adjudicator = adjudicator
        self.ignore_patterns = [*(base_ignores or []), *config.ignore_files]
        self.extractor = extractor
        self.relevance_threshold = relevance_threshold

    def run(self, corpus: SnippetCorpus) -> ReviewOutcome:
        """Review pending changes against ``corpus``.

        Returns:
            ReviewOutcome; NO_SNIPPETS or NO_CHANGES when there is nothing to do
        """
        logger.info(f"Loaded {len(corpus)} quality snippets")
        if len(corpus) == 0:
            logger.warning("No snippets found. Please add some quality samples.")
            return ReviewOutcome(status=RunStatus.NO_SNIPPETS)

        is_ignored = compile_ignore_patterns(self.ignore_patterns)
        diffs = self.extractor(self.repo_root, self.config.context_lines, is_ignored)
        logger.info(f"Found {len(diffs)} changed files")
        if not diffs:
            logger.info("No changes to analyze")
            return ReviewOutcome(status=RunStatus.NO_CHANGES)

        to_process = diffs[: self.config.max_diffs_per_run]
        if len(diffs) > len(to_process):
            logger.info(
                f"Analyzing the first {len(to_process)} files "
                f"(maxDiffsPerRun={self.config.max_diffs_per_run})"
            )

        results = [self.review_diff(diff, corpus) for diff in to_process]
        return ReviewOutcome(
            status=RunStatus.COMPLETED,
            results=tuple(results),
            summary=RunSummary.from_results(results),
        )

    def review_diff(self, diff: DiffRecord, corpus: SnippetCorpus) -> FileResult:
        """Truncate, rank and aggregate a single diff."""
        logger.info(f"\nAnalyzing [bold]{escape(diff.path)}[/bold]...")
        diff = diff.truncated(self.config.max_diff_lines)

        matches = self.ranker.rank(diff, corpus.names(), self.config.max_snippet_matches)
        logger.info(f"  Found {len(matches)} relevant snippets")

        return aggregate_file(
            diff,
            matches,
            corpus,
            self.adjudicator,
            relevance_threshold=self.relevance_threshold,
        )


def run_review(
    repo_root: Path,
    ranker: Ranker,
    adjudicator: Adjudicator,
    *,
    config_path: Path | None = None,
    quality_dir: Path | None = None,
) -> ReviewOutcome:
    """Load configuration and snippets for ``repo_root``, then run a review.

    Args:
        repo_root: Repository to review
        ranker: Ranking capability
        adjudicator: Adjudication capability
        config_path: qa.json location (default: <repo_root>/qa.json)
        quality_dir: Snippet directory (default: <repo_root>/quality)

    Raises:
        ConfigError: If qa.json holds invalid values
    """
    config_path = config_path or repo_root / CONFIG_FILENAME
    quality_dir = quality_dir or repo_root / QUALITY_DIRNAME

    config = load_config(config_path)
    corpus = load_snippets(quality_dir)

    runner = ReviewRunner(
        repo_root,
        config,
        ranker,
        adjudicator,
        base_ignores=base_ignore_patterns(repo_root, config_path, quality_dir),
    )
    return runner.run(corpus)
