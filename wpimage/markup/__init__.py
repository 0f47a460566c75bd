"""
HTML helpers used to render images and post content.

Exposes the attribute helpers from :mod:`wpimage.markup.attributes`, the
heading shifter from :mod:`wpimage.markup.headings` and the text helpers
from :mod:`wpimage.markup.text`.
"""

from .attributes import format_attributes, order_image_attributes, sanitize_attributes, tag
from .headings import normalize_headings
from .text import strip_tags, trim_words

__all__ = [
    "format_attributes",
    "normalize_headings",
    "order_image_attributes",
    "sanitize_attributes",
    "strip_tags",
    "tag",
    "trim_words",
]
