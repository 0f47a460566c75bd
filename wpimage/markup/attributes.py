"""
HTML attribute handling for image markup.

Attributes are passed around as plain dictionaries.  Values may be strings,
numbers or lists of strings; lists are rendered as space separated values
(e.g. several CSS classes).
"""

from __future__ import annotations

from html import escape
from typing import Any, Dict, Mapping, Optional

PERMITTED_ATTRIBUTES = ("alt", "class", "id", "style", "title")
DATA_PREFIX = "data-"


def sanitize_attributes(attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Keep only the attributes permitted on an image element.

    ``alt``, ``class``, ``id``, ``style``, ``title`` and any ``data-*``
    attribute survive; everything else is dropped silently.
    """
    if not attributes:
        return {}
    return {
        key: value
        for key, value in attributes.items()
        if key in PERMITTED_ATTRIBUTES or key.startswith(DATA_PREFIX)
    }


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = " ".join(str(v) for v in value)
    return escape(str(value), quote=True)


def format_attributes(attributes: Mapping[str, Any]) -> str:
    """Render ``attributes`` as ``key="value"`` pairs in their given order."""
    return " ".join(f'{key}="{_format_value(value)}"' for key, value in attributes.items())


def order_image_attributes(attributes: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``src`` first, then ``alt``, then the rest sorted by key."""
    ordered: Dict[str, Any] = {}
    for key in ("src", "alt"):
        if key in attributes:
            ordered[key] = attributes[key]
    for key in sorted(attributes):
        if key not in ordered:
            ordered[key] = attributes[key]
    return ordered


def tag(name: str, attributes: Mapping[str, Any], *, void: bool = False) -> str:
    """Build an opening tag, or a self-closing one when ``void`` is set."""
    rendered = format_attributes(attributes)
    inner = f"{name} {rendered}" if rendered else name
    return f"<{inner} />" if void else f"<{inner}>"
