"""Run configuration loaded from qa.json."""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from rich.markup import escape

from common.logger import get_logger

logger = get_logger(__name__)


class ConfigError(ValueError):
    """Raised when qa.json holds a recognized key with an invalid value."""


@dataclass(frozen=True)
class QAConfig:
    """Resolved options for one review run."""

    context_lines: int = 50  # Lines of context around each hunk
    max_diff_lines: int = 500  # Diff text beyond this is truncated
    max_snippet_matches: int = 3  # Ranked snippets kept per diff
    max_diffs_per_run: int = 3  # Diffs analyzed per run
    ignore_files: tuple[str, ...] = ()  # User glob patterns, on top of the base ignores


# qa.json key -> QAConfig field
_CONFIG_KEYS = {
    "contextLines": "context_lines",
    "maxDiffLines": "max_diff_lines",
    "maxSnippetMatches": "max_snippet_matches",
    "maxDiffsPerRun": "max_diffs_per_run",
    "ignoreFiles": "ignore_files",
}

_COUNT_FIELDS = {f.name for f in fields(QAConfig)} - {"ignore_files"}


def _validate(key: str, value: Any) -> Any:
    field_name = _CONFIG_KEYS[key]
    if field_name in _COUNT_FIELDS:
        # bool is an int subclass; true/false are not counts
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"{key} must be a positive integer, got {value!r}")
        return value

    if not isinstance(value, list) or not all(isinstance(p, str) and p for p in value):
        raise ConfigError(f"{key} must be a list of non-empty glob patterns, got {value!r}")
    return tuple(value)


def config_from_dict(data: dict[str, Any]) -> QAConfig:
    """Merge recognized keys from ``data`` over the defaults.

    Unknown keys are ignored.

    Raises:
        ConfigError: If a recognized key has an invalid value
    """
    overrides = {
        _CONFIG_KEYS[key]: _validate(key, value)
        for key, value in data.items()
        if key in _CONFIG_KEYS
    }
    return replace(QAConfig(), **overrides)


def load_config(path: Path | None) -> QAConfig:
    """Load configuration from a JSON file, falling back to defaults.

    A missing, unreadable or malformed file yields the defaults.

    Args:
        path: Path to qa.json, or None for defaults only

    Returns:
        Resolved configuration

    Raises:
        ConfigError: If a recognized key has an invalid value
    """
    if path is None or not path.is_file():
        logger.info("No qa.json found, using default configuration")
        return QAConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(
            f"Could not read {escape(str(path))}: {escape(str(e))}. Using default configuration"
        )
        return QAConfig()

    if not isinstance(data, dict):
        logger.warning(
            f"{escape(str(path))} does not contain a JSON object. Using default configuration"
        )
        return QAConfig()

    config = config_from_dict(data)
    logger.debug(f"Configuration loaded: {escape(repr(config))}")
    return config


def _relative_posix(path: Path, repo_root: Path) -> str | None:
    try:
        return path.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        return None


def base_ignore_patterns(repo_root: Path, config_path: Path, quality_dir: Path) -> list[str]:
    """Patterns that are always ignored: the config file and the snippet directory.

    Paths outside the repository contribute no pattern.

    Example:
        >>> base_ignore_patterns(Path("."), Path("qa.json"), Path("quality"))
        ['qa.json', 'quality/**']
    """
    patterns: list[str] = []
    config_rel = _relative_posix(config_path, repo_root)
    if config_rel and config_rel != ".":
        patterns.append(config_rel)
    quality_rel = _relative_posix(quality_dir, repo_root)
    if quality_rel and quality_rel != ".":
        patterns.append(f"{quality_rel}/**")
    return patterns
