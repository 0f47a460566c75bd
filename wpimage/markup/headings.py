from __future__ import annotations

import re

HEADING_LEVELS = range(1, 7)

_HEADING_TAG = re.compile(r"(</?)h(\d)")


def top_heading_level(html: str) -> int:
    """Return the highest (smallest number) heading level in ``html``, or 0."""
    for level in HEADING_LEVELS:
        if f"<h{level}" in html:
            return level
    return 0


def normalize_headings(html: str, limit: int = 2) -> str:
    """Promote or demote headings so that the highest one is ``<h{limit}>``.

    Every heading is shifted by the same amount.  Levels pushed outside 1-6
    become paragraphs.  Content without headings, a zero shift, or a
    ``limit`` outside 1-6 leaves ``html`` unchanged.
    """
    if not html or limit not in HEADING_LEVELS:
        return html
    top = top_heading_level(html)
    if not top:
        return html
    diff = limit - top
    if diff == 0:
        return html

    def _shift(match: re.Match) -> str:
        level = int(match.group(2)) + diff
        name = f"h{level}" if level in HEADING_LEVELS else "p"
        return match.group(1) + name

    return _HEADING_TAG.sub(_shift, html)
