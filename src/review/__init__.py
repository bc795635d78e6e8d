"""Review pending changes against curated reference snippets."""

from .adjudicator import Adjudicator, OracleAdjudicator
from .aggregator import aggregate_file, fold_verdicts
from .config import ConfigError, QAConfig, load_config
from .models import (
    FileResult,
    MatchCommentary,
    MatchVerdict,
    ReviewOutcome,
    RunStatus,
    RunSummary,
    Snippet,
    SnippetMatch,
    Verdict,
)
from .ranker import OracleRanker, Ranker
from .runner import ReviewRunner, run_review
from .snippets import SnippetCorpus, load_snippets

__all__ = [
    "Adjudicator",
    "ConfigError",
    "FileResult",
    "MatchCommentary",
    "MatchVerdict",
    "OracleAdjudicator",
    "OracleRanker",
    "QAConfig",
    "Ranker",
    "ReviewOutcome",
    "ReviewRunner",
    "RunStatus",
    "RunSummary",
    "Snippet",
    "SnippetCorpus",
    "SnippetMatch",
    "Verdict",
    "aggregate_file",
    "fold_verdicts",
    "load_config",
    "load_snippets",
    "run_review",
]
