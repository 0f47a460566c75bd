"""
Access to filtered post properties outside the template loop.

:class:`Post` reads a record once and exposes its final title, permalink,
content and excerpt, its custom fields and its featured image as an
:class:`~wpimage.image_resolver.ImageResolver`.
"""

from __future__ import annotations

from typing import Any, Optional

from wpimage.image_resolver import ImageResolver
from wpimage.markup.headings import normalize_headings
from wpimage.markup.text import DEFAULT_EXCERPT_LENGTH, DEFAULT_EXCERPT_MORE, trim_words
from wpimage.models import Record
from wpimage.references import record_id
from wpimage.stores.base import FieldStore, Filesystem

DEFAULT_DATE_FORMAT = "%B %d, %Y"


class PostNotFoundError(LookupError):
    """Raised when a post cannot be found in the store."""


class Post:
    def __init__(
        self,
        post: Any,
        *,
        store: Any,
        fields: Optional[FieldStore] = None,
        filesystem: Optional[Filesystem] = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
        excerpt_more: str = DEFAULT_EXCERPT_MORE,
    ) -> None:
        rid = record_id(post)
        record = store.get_record(rid) if rid else None
        if record is None:
            raise PostNotFoundError(f"Post {post} not found")

        self.store = store
        if fields is None and isinstance(store, FieldStore):
            fields = store
        self.fields = fields
        self.filesystem = filesystem
        self.date_format = date_format

        self._record: Record = record
        self._content = record.content
        # A manual excerpt wins over one trimmed from the content
        self._excerpt = record.excerpt or trim_words(record.content, excerpt_length, excerpt_more)
        self._image: Optional[ImageResolver] = None

    @property
    def record(self) -> Record:
        return self._record

    @property
    def id(self) -> int:
        return self._record.id

    @property
    def title(self) -> str:
        return self._record.title

    @property
    def url(self) -> str:
        return self._record.link

    @property
    def content(self) -> str:
        return self._content

    @property
    def excerpt(self) -> str:
        return self._excerpt

    def date(self, fmt: Optional[str] = None) -> str:
        """Return the publication date formatted with ``fmt`` (strftime)."""
        if self._record.date is None:
            return ""
        return self._record.date.strftime(fmt or self.date_format)

    def field(self, name: str) -> Any:
        """Return a custom field value, or ``None`` without a field store."""
        if self.fields is None or not self.fields.fields_available():
            return None
        return self.fields.get_field_value(name, self.id)

    def image(self) -> ImageResolver:
        """Return the featured image, resolved on first use."""
        if self._image is None:
            self._image = ImageResolver(
                self.id,
                store=self.store,
                fields=self.fields,
                filesystem=self.filesystem,
                current_record=lambda: self.id,
            )
        return self._image

    def normalize_headings(self, limit: int = 2) -> "Post":
        """Shift the content's headings so that the highest is ``<h{limit}>``."""
        self._content = normalize_headings(self._content, limit)
        return self

    def reset_headings(self) -> "Post":
        """Undo :meth:`normalize_headings`."""
        self._content = self._record.content
        return self
