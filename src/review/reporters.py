"""Review result reporters."""

import json

from rich.markup import escape

from common.logger import get_logger

from .models import ReviewOutcome, RunStatus, Verdict

logger = get_logger(__name__)

_ICONS = {
    Verdict.ACCEPTED: "[green]✓[/green]",
    Verdict.WARNING: "[yellow]⚠[/yellow]",
    Verdict.REJECTED: "[red]✗[/red]",
}

_RULE = "=" * 60


class ReviewReporter:
    """Format and display review outcomes."""

    def report_console(self, outcome: ReviewOutcome) -> int:
        """Print per-file verdicts and the run summary.

        Args:
            outcome: Result of a review run

        Returns:
            Exit code (0 for success, 1 if any file was rejected)
        """
        if outcome.status is RunStatus.NO_SNIPPETS:
            logger.info("Nothing to compare against; add snippets to the quality directory.")
            return outcome.exit_code
        if outcome.status is RunStatus.NO_CHANGES:
            logger.info("No changes to analyze.")
            return outcome.exit_code

        logger.info(f"\n{_RULE}\nQA RESULTS\n{_RULE}\n")

        for result in outcome.results:
            logger.info(
                f"{_ICONS[result.status]} [bold]{escape(result.path)}[/bold]"
                f" - {result.status.value.upper()}"
            )
            for match in result.matches:
                logger.info(f"   {escape(match.snippet_name)}")
                logger.info(f"      {escape(match.commentary)}")
            logger.info("")

        summary = outcome.summary
        logger.info(f"{_RULE}\nSUMMARY\n{_RULE}")
        logger.info(f"Total files analyzed: [bold]{summary.total}[/bold]")
        logger.info(f"{_ICONS[Verdict.ACCEPTED]} Accepted: {summary.accepted}")
        logger.info(f"{_ICONS[Verdict.WARNING]} Warnings: {summary.warning}")
        logger.info(f"{_ICONS[Verdict.REJECTED]} Rejected: {summary.rejected}")

        return outcome.exit_code

    def report_json(self, outcome: ReviewOutcome) -> str:
        """Format an outcome as JSON.

        Args:
            outcome: Result of a review run

        Returns:
            JSON string representation of the outcome
        """
        data = {
            "status": outcome.status.value,
            "files": [
                {
                    "file": r.path,
                    "status": r.status.value,
                    "matches": [
                        {"snippetName": m.snippet_name, "commentary": m.commentary}
                        for m in r.matches
                    ],
                }
                for r in outcome.results
            ],
            "summary": {
                "total": outcome.summary.total,
                "accepted": outcome.summary.accepted,
                "warning": outcome.summary.warning,
                "rejected": outcome.summary.rejected,
            },
        }

        return json.dumps(data, indent=2)
