"""
Top-level package for the WordPress image helpers.

This package gives templates and scripts one consistent way to reach an
image, whether it is an attachment, the featured image of a post, or the
value of a custom field, and to render it as an ``<img>`` or responsive
``<picture>`` element.  Modules are split into subpackages:

* :mod:`wpimage.models` – pydantic models for records and image meta data
* :mod:`wpimage.stores` – record, attachment and custom field sources
  (in memory or the WordPress REST API)
* :mod:`wpimage.markup` – attribute, heading and text helpers
* :mod:`wpimage.utils` – event logging

:class:`~wpimage.image_resolver.ImageResolver` and
:class:`~wpimage.post.Post` tie these together.
"""

from .image_resolver import ImageResolver
from .post import Post, PostNotFoundError
from .references import AttachmentRef, FieldRef, RecordRef
from .stores import MemoryStore, WordPressRestStore

__all__ = [
    "AttachmentRef",
    "FieldRef",
    "ImageResolver",
    "MemoryStore",
    "Post",
    "PostNotFoundError",
    "RecordRef",
    "WordPressRestStore",
]
