"""Judge a diff against one reference snippet."""

from abc import ABC, abstractmethod

from rich.markup import escape

from common.constants import UNPARSABLE_ANALYSIS
from common.logger import get_logger
from extract.models import DiffRecord

from .clients.base import OracleClient, OracleError
from .models import MatchVerdict, Snippet, Verdict
from .parsing import first_json_value

logger = get_logger(__name__)

ADJUDICATION_PROMPT = """You are a code quality analyst. Compare this code diff against a quality snippet to identify potential issues.

Code Diff:
{diff}

Quality Snippet ({snippet_name}):
{snippet_content}

Analyze if the changes in the diff align with or violate the quality standards shown in the snippet. Provide:
1. A brief commentary on the match
2. A status: "accepted" (no issues), "warning" (minor concerns), or "rejected" (significant issues)

Return ONLY valid JSON in this exact format:
{{"commentary": "your analysis here", "status": "accepted"}}"""

_STATUSES = {verdict.value: verdict for verdict in Verdict}


class Adjudicator(ABC):
    """Adjudication capability: compare a diff with a snippet's content."""

    @abstractmethod
    def adjudicate(self, diff: DiffRecord, snippet: Snippet) -> MatchVerdict:
        """Return commentary and a verdict.

        Never raises for oracle failures; returns a WARNING verdict instead.
        """
        pass


def parse_match_verdict(reply: str) -> MatchVerdict:
    """Parse the first JSON object in an adjudication reply.

    The object needs a string ``commentary`` and a ``status`` of accepted,
    warning or rejected. Anything else becomes a WARNING.
    """
    data = first_json_value(reply, dict)
    if data is not None:
        commentary = data.get("commentary")
        status = data.get("status")
        status = _STATUSES.get(status) if isinstance(status, str) else None
        if isinstance(commentary, str) and status is not None:
            return MatchVerdict(commentary=commentary, status=status)

    logger.debug(f"Unusable adjudication reply: {escape(repr(reply[:200]))}")
    return MatchVerdict(commentary=UNPARSABLE_ANALYSIS, status=Verdict.WARNING)


class OracleAdjudicator(Adjudicator):
    """Adjudicator backed by one oracle call per (diff, snippet) pair."""

    def __init__(self, client: OracleClient):
        self.client = client

    def build_prompt(self, diff: DiffRecord, snippet: Snippet) -> str:
        return ADJUDICATION_PROMPT.format(
            diff=diff.diff,
            snippet_name=snippet.name,
            snippet_content=snippet.content,
        )

    def adjudicate(self, diff: DiffRecord, snippet: Snippet) -> MatchVerdict:
        try:
            reply = self.client.complete(self.build_prompt(diff, snippet))
        except OracleError as e:
            logger.error(f"Error analyzing match for {escape(diff.path)}: {escape(str(e))}")
            return MatchVerdict(commentary=f"Error during analysis: {e}", status=Verdict.WARNING)
        return parse_match_verdict(reply)
