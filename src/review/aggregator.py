"""Fold per-match verdicts into one verdict per file."""

from collections.abc import Iterable, Sequence

from rich.markup import escape

from common.constants import RELEVANCE_THRESHOLD
from common.logger import get_logger
from extract.models import DiffRecord

from .adjudicator import Adjudicator
from .models import FileResult, MatchCommentary, SnippetMatch, Verdict
from .snippets import SnippetCorpus

logger = get_logger(__name__)


def fold_verdicts(verdicts: Iterable[Verdict]) -> Verdict:
    """Combine verdicts with rejected > warning > accepted precedence.

    An empty sequence is accepted. Adding verdicts can only raise the result.
    """
    overall = Verdict.ACCEPTED
    for verdict in verdicts:
        if verdict.severity > overall.severity:
            overall = verdict
    return overall


def aggregate_file(
    diff: DiffRecord,
    matches: Sequence[SnippetMatch],
    corpus: SnippetCorpus,
    adjudicator: Adjudicator,
    relevance_threshold: float = RELEVANCE_THRESHOLD,
) -> FileResult:
    """Adjudicate the relevant matches for one diff and aggregate the verdicts.

    Matches are processed in ranker order. A match is skipped when its snippet
    is not in the corpus or its score is below ``relevance_threshold``; every
    other match costs exactly one adjudication call.

    Args:
        diff: The file's (possibly truncated) diff
        matches: Ranker output for this diff
        corpus: Loaded snippets, used to resolve names
        adjudicator: Adjudication capability
        relevance_threshold: Minimum score for a match to be adjudicated

    Returns:
        FileResult with the aggregated verdict and retained commentary
    """
    retained: list[MatchCommentary] = []
    verdicts: list[Verdict] = []

    for match in matches:
        snippet = corpus.get(match.snippet_name)
        if snippet is None:
            logger.warning(
                f"  Oracle suggested unknown snippet '{escape(match.snippet_name)}', skipping"
            )
            continue

        logger.info(
            f"  Analyzing against {escape(snippet.name)}..."
            f" Relevance Score: {match.relevance_score}"
        )
        if match.relevance_score < relevance_threshold:
            logger.info(f"    Skipping low relevance match ({match.relevance_score})")
            continue

        analysis = adjudicator.adjudicate(diff, snippet)
        retained.append(MatchCommentary(snippet_name=snippet.name, commentary=analysis.commentary))
        verdicts.append(analysis.status)

    return FileResult(path=diff.path, status=fold_verdicts(verdicts), matches=tuple(retained))
