"""
Pydantic models shared by the stores and the resolver.
"""

from .image import AttachmentMeta, ImageMeta, SizeVariant
from .record import Record

__all__ = ["AttachmentMeta", "ImageMeta", "Record", "SizeVariant"]
