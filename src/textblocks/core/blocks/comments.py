"""HTML comment stripping, including entity-encoded comment delimiters."""
from __future__ import annotations

import re

COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)

_ENCODED_DELIMITERS = (
    ("&lt;!--", "<!--"),
    ("--&gt;", "-->"),
)


def strip_comments(text: str) -> str:
    """Remove ``<!-- ... -->`` comments, raw or entity-encoded.

    Repeats until nothing changes, so removing one comment cannot leave a new
    one behind and the result is idempotent.
    """
    previous = None
    while text != previous:
        previous = text
        for encoded, literal in _ENCODED_DELIMITERS:
            text = text.replace(encoded, literal)
        text = COMMENT_PATTERN.sub("", text)
    return text


__all__ = ["COMMENT_PATTERN", "strip_comments"]
