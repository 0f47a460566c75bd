"""
The record currently being rendered.

Rendering code establishes the current record with :func:`rendering`;
resolvers created without an explicit record read it once, when they are
constructed.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

from wpimage.references import record_id

_current_record: ContextVar[int] = ContextVar("wpimage_current_record", default=0)


def get_current_record() -> int:
    """Return the id of the record being rendered, or 0."""
    return _current_record.get()


@contextmanager
def rendering(record: Any) -> Iterator[int]:
    """Make ``record`` the current record for the duration of the block."""
    token = _current_record.set(record_id(record))
    try:
        yield _current_record.get()
    finally:
        _current_record.reset(token)
