"""Locate JSON literals embedded in free-form model replies."""

import json
from typing import Any

_decoder = json.JSONDecoder()


def first_json_value(text: str, kind: type) -> Any | None:
    """Return the first JSON array or object literal found in ``text``.

    Scans each opening bracket in order and returns the first one that decodes
    to a value of ``kind`` (``list`` or ``dict``). Prose, markdown fences and
    trailing text around the literal are ignored.

    Example:
        >>> first_json_value('Sure! [{"a": 1}] Hope that helps.', list)
        [{'a': 1}]
    """
    opener = "[" if kind is list else "{"
    start = text.find(opener)
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, kind):
            return value
        start = text.find(opener, start + 1)
    return None
