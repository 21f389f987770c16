"""URL discovery in free text."""

from __future__ import annotations

import re

URL_RE = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"[-a-zA-Z0-9()@:%_+.~#?&/=]*",
    # ASCII \b: a URL may run straight into CJK or accented text.
    re.ASCII,
)


def extract_urls(text: str) -> list[str]:
    """Return URL-like substrings of *text* in order, duplicates preserved."""
    if not text:
        return []
    return [match.group(0) for match in URL_RE.finditer(text)]
