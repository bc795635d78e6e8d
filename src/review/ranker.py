"""Rank reference snippets by relevance to a diff."""

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from rich.markup import escape

from common.logger import get_logger
from extract.models import DiffRecord

from .clients.base import OracleClient, OracleError
from .models import SnippetMatch
from .parsing import first_json_value

logger = get_logger(__name__)

RANKING_PROMPT = """You are a code quality analyst. Given the following code diff and a list of quality snippet names, identify which snippets are most relevant to review this change.

Code Diff:
{diff}

Available Quality Snippets:
{snippet_names}

Return up to {max_matches} snippet names that are most relevant to this diff, with a relevance score (0-100). Return ONLY valid JSON in this exact format:
[{{"snippetName": "example.js", "relevanceScore": 95}}]"""


class Ranker(ABC):
    """Ranking capability: pick the snippets worth comparing against a diff."""

    @abstractmethod
    def rank(
        self,
        diff: DiffRecord,
        snippet_names: Sequence[str],
        max_matches: int,
    ) -> list[SnippetMatch]:
        """Return at most ``max_matches`` candidates, most relevant first.

        Never raises for oracle failures; returns an empty list instead.
        """
        pass


def _to_match(item: Any) -> SnippetMatch | None:
    if not isinstance(item, dict):
        return None
    name = item.get("snippetName")
    score = item.get("relevanceScore")
    if not isinstance(name, str):
        return None
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    if not math.isfinite(score):
        return None
    return SnippetMatch(snippet_name=name, relevance_score=score)


def parse_snippet_matches(reply: str) -> list[SnippetMatch]:
    """Parse the first JSON array in a ranking reply.

    Elements without a string ``snippetName`` and a finite numeric ``relevanceScore``
    are dropped. A reply without an array yields an empty list.
    """
    items = first_json_value(reply, list)
    if items is None:
        logger.debug("Ranking reply contained no JSON array")
        return []
    matches = [m for m in (_to_match(item) for item in items) if m is not None]
    if len(matches) < len(items):
        logger.debug(f"Dropped {len(items) - len(matches)} malformed ranking entries")
    return matches


class OracleRanker(Ranker):
    """Ranker backed by one oracle call per diff."""

    def __init__(self, client: OracleClient):
        self.client = client

    def build_prompt(self, diff: DiffRecord, snippet_names: Sequence[str], max_matches: int) -> str:
        return RANKING_PROMPT.format(
            diff=diff.diff,
            snippet_names=", ".join(snippet_names),
            max_matches=max_matches,
        )

    def rank(
        self,
        diff: DiffRecord,
        snippet_names: Sequence[str],
        max_matches: int,
    ) -> list[SnippetMatch]:
        prompt = self.build_prompt(diff, snippet_names, max_matches)
        try:
            reply = self.client.complete(prompt)
        except OracleError as e:
            logger.error(f"Error matching snippets for {escape(diff.path)}: {escape(str(e))}")
            return []

        matches = parse_snippet_matches(reply)
        if len(matches) > max_matches:
            logger.debug(f"Oracle returned {len(matches)} matches, keeping {max_matches}")
        return matches[:max_matches]
