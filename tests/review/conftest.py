"""Deterministic stand-ins for the oracle capabilities."""

import pytest

from review.adjudicator import Adjudicator
from review.clients.base import OracleClient
from review.models import MatchVerdict, Snippet, Verdict
from review.ranker import Ranker
from review.snippets import SnippetCorpus


class FakeRanker(Ranker):
    """Returns fixed matches, optionally per diff path, and records calls."""

    def __init__(self, matches=(), by_path=None):
        self.matches = list(matches)
        self.by_path = by_path or {}
        self.calls = []

    def rank(self, diff, snippet_names, max_matches):
        self.calls.append((diff, list(snippet_names), max_matches))
        return list(self.by_path.get(diff.path, self.matches))


class FakeAdjudicator(Adjudicator):
    """Returns a fixed verdict per snippet name and records calls."""

    def __init__(self, verdicts=None, default=Verdict.ACCEPTED):
        self.verdicts = verdicts or {}
        self.default = default
        self.calls = []

    def adjudicate(self, diff, snippet):
        self.calls.append((diff, snippet))
        status = self.verdicts.get(snippet.name, self.default)
        return MatchVerdict(commentary=f"{snippet.name}: {status.value}", status=status)


class FakeOracleClient(OracleClient):
    """Replays canned replies, or raises a given exception, and records prompts."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def corpus():
    return SnippetCorpus(
        [
            Snippet(name="errors.py", content="try:\n    run()\nexcept ValueError:\n    raise\n"),
            Snippet(name="naming.ts", content="const userCount = users.length;\n"),
            Snippet(name="logging.py", content="logger.info('done')\n"),
        ]
    )


@pytest.fixture
def fake_ranker():
    return FakeRanker()


@pytest.fixture
def fake_adjudicator():
    return FakeAdjudicator()


@pytest.fixture
def fake_client():
    return FakeOracleClient()
