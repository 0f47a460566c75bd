"""
Capabilities the resolver expects from the hosting site.

Each protocol covers one concern so that a caller can mix sources, e.g.
records from the REST API and file contents from a local uploads mirror.
:class:`~wpimage.stores.memory.MemoryStore` and
:class:`~wpimage.stores.wordpress_rest.WordPressRestStore` implement the
four store protocols at once.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

from wpimage.models import AttachmentMeta, Record, SizeVariant


@runtime_checkable
class RecordStore(Protocol):
    def get_record(self, record_id: int) -> Optional[Record]: ...

    def get_record_type(self, record_id: int) -> str: ...

    def get_featured_image_id(self, record_id: int) -> Optional[int]: ...


@runtime_checkable
class FieldStore(Protocol):
    def fields_available(self) -> bool: ...

    def get_field_value(self, name: str, record_id: int) -> Any: ...


@runtime_checkable
class AttachmentStore(Protocol):
    def get_attachment_meta(self, attachment_id: int) -> Optional[AttachmentMeta]: ...


@runtime_checkable
class SizeVariantStore(Protocol):
    def get_sized_variant(self, attachment_id: int, size: str) -> Optional[SizeVariant]: ...


@runtime_checkable
class Filesystem(Protocol):
    def read_file(self, path: str) -> bytes: ...


class LocalFilesystem:
    """Read files from the local disk.  ``OSError`` propagates."""

    def read_file(self, path: str) -> bytes:
        return Path(path).read_bytes()
