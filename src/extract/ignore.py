"""Glob-style ignore patterns for changed paths.

Supported syntax:
    **  any run of characters, crossing path separators
    *   any run of characters within one path segment

Everything else, including ``.``, ``?`` and brackets, matches literally, so a
pattern can never fail to compile. A path is ignored when it matches at least
one pattern in full.
"""

import re
from collections.abc import Callable, Iterable

_WILDCARD = re.compile(r"\*\*|\*")


def glob_to_regex(pattern: str) -> str:
    """Translate one ignore pattern into an (unanchored) regular expression.

    Example:
        >>> glob_to_regex("quality/**")
        'quality/.*'
        >>> glob_to_regex("src/*.ts")
        'src/[^/]*\\\\.ts'
    """
    parts: list[str] = []
    position = 0
    for match in _WILDCARD.finditer(pattern):
        parts.append(re.escape(pattern[position : match.start()]))
        parts.append(".*" if match.group(0) == "**" else "[^/]*")
        position = match.end()
    parts.append(re.escape(pattern[position:]))
    return "".join(parts)


def compile_ignore_patterns(patterns: Iterable[str]) -> Callable[[str], bool]:
    """Compile ignore patterns into a single path predicate.

    Args:
        patterns: Glob patterns; order does not affect the result

    Returns:
        Function returning True when a path matches any pattern
    """
    compiled = [re.compile(glob_to_regex(p)) for p in patterns if p]

    def is_ignored(path: str) -> bool:
        return any(regex.fullmatch(path) for regex in compiled)

    return is_ignored
