from __future__ import annotations

import re

from bs4 import BeautifulSoup

DEFAULT_EXCERPT_LENGTH = 55
DEFAULT_EXCERPT_MORE = " [&hellip;]"


def strip_tags(html: str) -> str:
    """Return the text of ``html`` with tags removed and whitespace collapsed."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for bad in soup.find_all(["script", "style"]):
        bad.decompose()
    text = soup.get_text(" ").replace("\xa0", " ")
    return re.sub(r"\s+", " ", text).strip()


def trim_words(html: str, length: int = DEFAULT_EXCERPT_LENGTH, more: str = DEFAULT_EXCERPT_MORE) -> str:
    """Strip tags from ``html`` and keep its first ``length`` words.

    ``more`` is appended only when words were dropped.
    """
    words = strip_tags(html).split()
    if len(words) <= length:
        return " ".join(words)
    return " ".join(words[:length]) + more
