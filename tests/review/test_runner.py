"""Tests for the run controller."""

import json
import subprocess

from common.constants import TRUNCATION_MARKER
from extract.models import DiffRecord
from review.config import QAConfig
from review.models import RunStatus, SnippetMatch, Verdict
from review.runner import ReviewRunner, run_review
from review.snippets import SnippetCorpus


class StubExtractor:
    """Returns fixed diffs and records the arguments it was called with."""

    def __init__(self, diffs):
        self.diffs = diffs
        self.calls = []

    def __call__(self, repo_root, context_lines, is_ignored):
        self.calls.append((repo_root, context_lines, is_ignored))
        return list(self.diffs)


def make_diffs(count):
    return [DiffRecord(path=f"file{i}.py", diff=f"+line {i}") for i in range(count)]


def make_runner(tmp_path, ranker, adjudicator, diffs, **config):
    extractor = StubExtractor(diffs)
    runner = ReviewRunner(
        tmp_path,
        QAConfig(**config),
        ranker,
        adjudicator,
        base_ignores=["qa.json", "quality/**"],
        extractor=extractor,
    )
    return runner, extractor


class TestShortCircuits:
    """Tests for the successful nothing-to-do terminal states."""

    def test_empty_corpus(self, tmp_path, fake_ranker, fake_adjudicator):
        runner, extractor = make_runner(tmp_path, fake_ranker, fake_adjudicator, make_diffs(2))

        outcome = runner.run(SnippetCorpus())

        assert outcome.status is RunStatus.NO_SNIPPETS
        assert outcome.exit_code == 0
        assert outcome.results == ()
        assert extractor.calls == []
        assert fake_ranker.calls == []
        assert fake_adjudicator.calls == []

    def test_no_changes(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        runner, extractor = make_runner(tmp_path, fake_ranker, fake_adjudicator, [])

        outcome = runner.run(corpus)

        assert outcome.status is RunStatus.NO_CHANGES
        assert outcome.exit_code == 0
        assert len(extractor.calls) == 1
        assert fake_ranker.calls == []


class TestReviewRunner:
    """Tests for a full pass with stand-in oracle capabilities."""

    def test_only_first_diffs_are_analyzed(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        runner, _ = make_runner(
            tmp_path, fake_ranker, fake_adjudicator, make_diffs(5), max_diffs_per_run=3
        )

        outcome = runner.run(corpus)

        assert [r.path for r in outcome.results] == ["file0.py", "file1.py", "file2.py"]
        assert len(fake_ranker.calls) == 3

    def test_diff_truncated_before_any_oracle_call(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        long_diff = DiffRecord(path="big.py", diff="\n".join(f"+{i}" for i in range(600)))
        fake_ranker.matches = [SnippetMatch("errors.py", 95)]
        runner, _ = make_runner(
            tmp_path, fake_ranker, fake_adjudicator, [long_diff], max_diff_lines=500
        )

        runner.run(corpus)

        ranked_diff = fake_ranker.calls[0][0]
        adjudicated_diff = fake_adjudicator.calls[0][0]
        for diff in (ranked_diff, adjudicated_diff):
            lines = diff.diff.split("\n")
            assert len(lines) == 501
            assert lines[-1] == TRUNCATION_MARKER

    def test_ranker_receives_names_and_cap(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        runner, _ = make_runner(
            tmp_path, fake_ranker, fake_adjudicator, make_diffs(1), max_snippet_matches=2
        )

        runner.run(corpus)

        _, names, max_matches = fake_ranker.calls[0]
        assert names == ["errors.py", "naming.ts", "logging.py"]
        assert max_matches == 2

    def test_extractor_gets_context_and_effective_ignores(
        self, tmp_path, corpus, fake_ranker, fake_adjudicator
    ):
        runner, extractor = make_runner(
            tmp_path,
            fake_ranker,
            fake_adjudicator,
            make_diffs(1),
            context_lines=7,
            ignore_files=("*.lock",),
        )

        runner.run(corpus)

        repo_root, context_lines, is_ignored = extractor.calls[0]
        assert repo_root == tmp_path
        assert context_lines == 7
        assert is_ignored("qa.json")
        assert is_ignored("quality/errors.py")
        assert is_ignored("poetry.lock")
        assert not is_ignored("src/app.py")

    def test_summary_and_exit_code(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        fake_ranker.by_path = {
            "file0.py": [SnippetMatch("errors.py", 90)],
            "file1.py": [SnippetMatch("naming.ts", 90)],
            "file2.py": [],
        }
        fake_adjudicator.verdicts = {"errors.py": Verdict.REJECTED, "naming.ts": Verdict.WARNING}
        runner, _ = make_runner(tmp_path, fake_ranker, fake_adjudicator, make_diffs(3))

        outcome = runner.run(corpus)

        assert [r.status for r in outcome.results] == [
            Verdict.REJECTED,
            Verdict.WARNING,
            Verdict.ACCEPTED,
        ]
        assert (outcome.summary.accepted, outcome.summary.warning, outcome.summary.rejected) == (
            1,
            1,
            1,
        )
        assert outcome.exit_code == 1

    def test_no_rejections_exit_zero(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        fake_ranker.matches = [SnippetMatch("logging.py", 90)]
        fake_adjudicator.verdicts = {"logging.py": Verdict.WARNING}
        runner, _ = make_runner(tmp_path, fake_ranker, fake_adjudicator, make_diffs(2))

        outcome = runner.run(corpus)

        assert outcome.status is RunStatus.COMPLETED
        assert outcome.summary.warning == 2
        assert outcome.exit_code == 0

    def test_diffs_processed_sequentially(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        """Test that diff i+1 is ranked only after diff i's adjudications finish."""
        events = []
        inner_rank = fake_ranker.rank
        inner_adjudicate = fake_adjudicator.adjudicate

        def rank(diff, names, max_matches):
            events.append(("rank", diff.path))
            return inner_rank(diff, names, max_matches)

        def adjudicate(diff, snippet):
            events.append(("adjudicate", diff.path))
            return inner_adjudicate(diff, snippet)

        fake_ranker.rank = rank
        fake_adjudicator.adjudicate = adjudicate
        fake_ranker.matches = [SnippetMatch("errors.py", 90), SnippetMatch("naming.ts", 90)]
        runner, _ = make_runner(tmp_path, fake_ranker, fake_adjudicator, make_diffs(2))

        runner.run(corpus)

        assert events == [
            ("rank", "file0.py"),
            ("adjudicate", "file0.py"),
            ("adjudicate", "file0.py"),
            ("rank", "file1.py"),
            ("adjudicate", "file1.py"),
            ("adjudicate", "file1.py"),
        ]

    def test_oracle_call_budget(self, tmp_path, corpus, fake_ranker, fake_adjudicator):
        """Test calls stay within max_diffs_per_run * (1 + max_snippet_matches)."""
        fake_ranker.matches = [SnippetMatch(name, 99) for name in corpus.names()]
        runner, _ = make_runner(
            tmp_path,
            fake_ranker,
            fake_adjudicator,
            make_diffs(4),
            max_diffs_per_run=2,
            max_snippet_matches=3,
        )

        runner.run(corpus)

        assert len(fake_ranker.calls) + len(fake_adjudicator.calls) <= 2 * (1 + 3)


def run_git(repo, *args):
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


class TestRunReview:
    """End-to-end test against a real repository with stand-in oracle capabilities."""

    def test_reviews_pending_changes(self, tmp_path, fake_ranker, fake_adjudicator):
        repo = tmp_path / "repo"
        repo.mkdir()
        run_git(repo, "init")
        run_git(repo, "config", "user.name", "Test User")
        run_git(repo, "config", "user.email", "test@example.com")
        (repo / "app.py").write_text("x = 1\n")
        run_git(repo, "add", ".")
        run_git(repo, "commit", "-m", "initial")

        (repo / "quality").mkdir()
        (repo / "quality" / "style.py").write_text("good = True\n")
        (repo / "qa.json").write_text(json.dumps({"contextLines": 2}))
        (repo / "app.py").write_text("x = 2\n")
        (repo / "new.py").write_text("y = 1\n")

        fake_ranker.matches = [SnippetMatch("style.py", 90)]
        fake_adjudicator.verdicts = {"style.py": Verdict.REJECTED}

        outcome = run_review(repo, fake_ranker, fake_adjudicator)

        assert [r.path for r in outcome.results] == ["app.py", "new.py"]
        assert fake_ranker.calls[0][1] == ["style.py"]
        assert all(r.status is Verdict.REJECTED for r in outcome.results)
        assert outcome.exit_code == 1

    def test_missing_quality_dir_is_created(self, tmp_path, fake_ranker, fake_adjudicator):
        outcome = run_review(tmp_path, fake_ranker, fake_adjudicator)

        assert outcome.status is RunStatus.NO_SNIPPETS
        assert (tmp_path / "quality").is_dir()
        assert fake_ranker.calls == []

    def test_custom_locations(self, tmp_path, fake_ranker, fake_adjudicator):
        samples = tmp_path / "samples"
        samples.mkdir()
        (samples / "a.py").write_text("a = 1\n")

        # tmp_path is not a git repository, so extraction finds no changes
        outcome = run_review(
            tmp_path,
            fake_ranker,
            fake_adjudicator,
            config_path=tmp_path / "review.json",
            quality_dir=samples,
        )

        assert outcome.status is RunStatus.NO_CHANGES
        assert not (tmp_path / "quality").exists()
