"""
In-memory implementation of the store protocols.

Useful when the records have already been fetched (e.g. from an export)
and in tests.  Values may be given as models or as plain dictionaries.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from wpimage.models import AttachmentMeta, Record, SizeVariant

RecordInput = Union[Record, Mapping[str, Any]]


class MemoryStore:
    """Records, attachment meta, size variants and custom fields held in dicts.

    ``variants`` maps an attachment id to a mapping of size name to variant.
    ``fields`` maps a record id to its custom field values; values given on
    a record's own ``fields`` are used when no separate entry exists.
    """

    def __init__(
        self,
        records: Optional[Iterable[RecordInput]] = None,
        *,
        attachments: Optional[Mapping[int, Any]] = None,
        variants: Optional[Mapping[int, Mapping[str, Any]]] = None,
        fields: Optional[Mapping[int, Mapping[str, Any]]] = None,
        fields_enabled: bool = True,
    ) -> None:
        self.records: Dict[int, Record] = {}
        for item in records or []:
            record = item if isinstance(item, Record) else Record.model_validate(item)
            self.records[record.id] = record
        self.attachments: Dict[int, AttachmentMeta] = {
            int(k): v if isinstance(v, AttachmentMeta) else AttachmentMeta.model_validate(v)
            for k, v in (attachments or {}).items()
        }
        self.variants: Dict[int, Dict[str, SizeVariant]] = {}
        for att_id, sizes in (variants or {}).items():
            self.variants[int(att_id)] = {
                name: v if isinstance(v, SizeVariant) else SizeVariant.model_validate(v)
                for name, v in sizes.items()
            }
        self.fields: Dict[int, Dict[str, Any]] = {int(k): dict(v) for k, v in (fields or {}).items()}
        self.fields_enabled = fields_enabled

    def add_record(self, record: RecordInput) -> Record:
        obj = record if isinstance(record, Record) else Record.model_validate(record)
        self.records[obj.id] = obj
        return obj

    # Record store
    def get_record(self, record_id: int) -> Optional[Record]:
        return self.records.get(record_id)

    def get_record_type(self, record_id: int) -> str:
        record = self.records.get(record_id)
        return record.type if record else ""

    def get_featured_image_id(self, record_id: int) -> Optional[int]:
        record = self.records.get(record_id)
        if record is None or not record.featured_media:
            return None
        return record.featured_media

    # Field store
    def fields_available(self) -> bool:
        return self.fields_enabled

    def get_field_value(self, name: str, record_id: int) -> Any:
        if record_id in self.fields:
            return self.fields[record_id].get(name)
        record = self.records.get(record_id)
        if record is None:
            return None
        return record.fields.get(name)

    # Attachment store
    def get_attachment_meta(self, attachment_id: int) -> Optional[AttachmentMeta]:
        return self.attachments.get(attachment_id)

    # Size variant store
    def get_sized_variant(self, attachment_id: int, size: str) -> Optional[SizeVariant]:
        return self.variants.get(attachment_id, {}).get(size)
