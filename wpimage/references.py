"""
Image references.

An image can be pointed at in three ways: by the name of a custom field on
a record, by a record whose featured image is wanted, or by the attachment
itself.  :func:`to_reference` turns the loose values accepted by the public
API into one of these three types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from wpimage.models import Record
from wpimage.stores.base import RecordStore


@dataclass(frozen=True)
class FieldRef:
    """A custom field on the context record."""

    name: str


@dataclass(frozen=True)
class RecordRef:
    """The featured image of a record.  ``id == 0`` means the context record."""

    id: int = 0


@dataclass(frozen=True)
class AttachmentRef:
    id: int


ImageReference = Union[FieldRef, RecordRef, AttachmentRef]


def record_id(value: Any) -> int:
    """Return the id of a record given as a model, a mapping or a number."""
    if isinstance(value, Record):
        return value.id
    if isinstance(value, dict):
        value = value.get("id") or value.get("ID") or 0
    if isinstance(value, bool) or value is None:
        return 0
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def to_reference(value: Any, records: RecordStore) -> ImageReference:
    """Classify ``value`` as a field, record or attachment reference.

    Strings are always field names.  Anything else is reduced to a record
    id; ids whose record type is ``attachment`` are attachments, other ids
    (including 0, the context record) point at a featured image.
    """
    if isinstance(value, (FieldRef, RecordRef, AttachmentRef)):
        return value
    if isinstance(value, str):
        return FieldRef(value)
    rid = record_id(value)
    if rid and records.get_record_type(rid) == "attachment":
        return AttachmentRef(rid)
    return RecordRef(rid)
