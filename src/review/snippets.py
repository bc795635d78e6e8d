"""Curated reference snippets loaded from the quality directory."""

from collections.abc import Iterable, Iterator
from pathlib import Path

from rich.markup import escape

from common.logger import get_logger

from .models import Snippet

logger = get_logger(__name__)


class SnippetCorpus:
    """Immutable, order-preserving collection of snippets keyed by name.

    When two snippets share a name, the first one wins and the later one is
    dropped with a warning.
    """

    def __init__(self, snippets: Iterable[Snippet] = ()) -> None:
        by_name: dict[str, Snippet] = {}
        for snippet in snippets:
            if snippet.name in by_name:
                logger.warning(
                    f"Duplicate snippet name '{escape(snippet.name)}', keeping the first"
                )
                continue
            by_name[snippet.name] = snippet
        self._by_name = by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[Snippet]:
        return iter(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def names(self) -> list[str]:
        return list(self._by_name)

    def get(self, name: str) -> Snippet | None:
        return self._by_name.get(name)


def load_snippets(quality_dir: Path) -> SnippetCorpus:
    """Load one snippet per regular file in ``quality_dir``.

    Sub-directories and other non-regular entries are skipped. A missing
    directory is created and yields an empty corpus.

    Args:
        quality_dir: Directory holding the reference snippets

    Returns:
        Corpus ordered by file name
    """
    if not quality_dir.is_dir():
        logger.warning(f"No {escape(quality_dir.name)}/ directory found. Creating one...")
        quality_dir.mkdir(parents=True, exist_ok=True)
        return SnippetCorpus()

    snippets: list[Snippet] = []
    for entry in sorted(quality_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        try:
            content = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read snippet {escape(entry.name)}: {escape(str(e))}")
            continue
        snippets.append(Snippet(name=entry.name, content=content))

    return SnippetCorpus(snippets)
