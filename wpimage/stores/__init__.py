"""
Sources of records, attachments and custom fields.

This subpackage defines the capabilities the resolver depends on
(:mod:`wpimage.stores.base`) and two implementations: an in-memory store
for data already at hand and a WordPress REST API client.
"""

from .base import (
    AttachmentStore,
    FieldStore,
    Filesystem,
    LocalFilesystem,
    RecordStore,
    SizeVariantStore,
)
from .memory import MemoryStore
from .wordpress_rest import RateLimiter, WordPressRestStore, with_retries

__all__ = [
    "AttachmentStore",
    "FieldStore",
    "Filesystem",
    "LocalFilesystem",
    "MemoryStore",
    "RateLimiter",
    "RecordStore",
    "SizeVariantStore",
    "WordPressRestStore",
    "with_retries",
]
