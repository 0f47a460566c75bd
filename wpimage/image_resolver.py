"""
Consistent access to image attachments.

This module defines :class:`ImageResolver`, which gives one way of reaching
an attachment whether it is named directly, found as the featured image of
a record, or stored in a custom field.  Once resolved, the attachment's
meta data is kept on the instance and the URL and dimensions of each size
are looked up once and cached, so that templates can ask for them freely.

Example::

    from wpimage import ImageResolver, MemoryStore

    image = ImageResolver("hero", post=12, store=store)
    image.url("medium")
    image.element("large", {"class": "hero__image"})
    image.element({"medium": "(max-width: 480px)", "large": "(min-width: 481px)"})

A reference that cannot be resolved leaves the instance empty: every
accessor then returns ``None`` (or empty meta data) instead of raising.
"""

from __future__ import annotations

import base64
import logging
import os
import posixpath
from typing import Any, Callable, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from wpimage.context import get_current_record
from wpimage.markup.attributes import order_image_attributes, sanitize_attributes, tag
from wpimage.models import ImageMeta, SizeVariant
from wpimage.references import AttachmentRef, FieldRef, ImageReference, record_id, to_reference
from wpimage.stores.base import FieldStore, Filesystem, LocalFilesystem
from wpimage.utils.errors import report_error, report_warning

logger = logging.getLogger("wpimage")

SOURCE_KEYS = ("url", "width", "height")

SizeSpec = Union[str, Mapping[str, str]]


class ImageResolver:
    """
    Resolves an image reference to an attachment and renders it.

    :param image: A custom field name (``str``), an attachment id, a record
        id whose featured image is wanted, a :class:`~wpimage.models.Record`,
        or a reference from :mod:`wpimage.references`.  ``0`` means the
        featured image of the context record.
    :param post: The context record for field and featured image lookups.
        Defaults to the record returned by ``current_record``.
    :param store: Provides records, attachment meta data and size variants.
    :param fields: Custom field store.  Defaults to ``store`` when it
        provides custom fields; ``None`` otherwise.
    :param filesystem: Reads files for data URIs.
    :param current_record: Zero-argument callable returning the record
        being rendered.  It is called once, here.
    """

    def __init__(
        self,
        image: Any = 0,
        post: Any = None,
        *,
        store: Any,
        fields: Optional[FieldStore] = None,
        filesystem: Optional[Filesystem] = None,
        current_record: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.store = store
        if fields is None and isinstance(store, FieldStore):
            fields = store
        self.fields = fields
        self.filesystem = filesystem or LocalFilesystem()
        self.default_post_id = record_id((current_record or get_current_record)())

        self._id = 0
        self._meta = ImageMeta.empty()
        self._sources: Dict[str, Optional[SizeVariant]] = {}

        self.resolve(image, post)

    ###########################################################################
    # Resolution
    ###########################################################################

    def resolve(self, image: Any, post: Any = None) -> int:
        """
        Point the instance at a new image and return its attachment id.

        Meta data is rebuilt and cached sizes are dropped whatever the
        outcome; ``0`` means nothing was found.
        """
        context_id = record_id(post) or self.default_post_id
        ref = to_reference(image, self.store)
        attachment_id = self._dispatch(ref, context_id)
        self._load(attachment_id)
        return self._id

    def _dispatch(self, ref: ImageReference, context_id: int) -> int:
        if isinstance(ref, FieldRef):
            return self._from_field(ref.name, context_id)
        if isinstance(ref, AttachmentRef):
            return self._from_attachment(ref.id)
        return self._from_record(ref.id or context_id)

    def _from_field(self, name: str, context_id: int) -> int:
        if self.fields is None or not self.fields.fields_available():
            report_warning("FIELDS_UNAVAILABLE", {"field": name})
            return 0
        if not context_id:
            logger.debug("No record to read field %s from", name)
            return 0

        value = self.fields.get_field_value(name, context_id)
        if not value:
            logger.debug("Field %s is empty on record %s", name, context_id)
            return 0

        # Image fields may return an array with the attachment id in it
        if isinstance(value, Mapping) and "id" in value:
            value = value["id"]
        if isinstance(value, str):
            value = value.strip()
            if not value.isdecimal():
                report_warning("FIELD_NOT_AN_IMAGE", {"field": name, "record": context_id})
                return 0
            value = int(value)

        rid = record_id(value)
        if not rid:
            report_warning("FIELD_NOT_AN_IMAGE", {"field": name, "record": context_id})
            return 0

        ref = to_reference(rid, self.store)
        if isinstance(ref, AttachmentRef):
            return self._from_attachment(ref.id)
        return self._from_record(ref.id)

    def _from_attachment(self, attachment_id: int) -> int:
        if self.store.get_record(attachment_id) is None:
            report_warning("ATTACHMENT_NOT_FOUND", {"attachment": attachment_id})
            return 0
        return attachment_id

    def _from_record(self, rid: int) -> int:
        if not rid:
            logger.debug("No record given and no current record")
            return 0
        if self.store.get_record(rid) is None:
            report_warning("RECORD_NOT_FOUND", {"record": rid})
            return 0
        image_id = self.store.get_featured_image_id(rid)
        if not image_id:
            logger.debug("Record %s has no featured image", rid)
            return 0
        return int(image_id)

    def _reset(self) -> None:
        self._id = 0
        self._meta = ImageMeta.empty()
        self._sources = {}

    def _load(self, attachment_id: int) -> None:
        self._reset()
        if not attachment_id:
            return

        attachment = self.store.get_attachment_meta(attachment_id)
        if attachment is None:
            report_warning("ATTACHMENT_NOT_FOUND", {"attachment": attachment_id})
            return

        self._id = attachment_id
        try:
            url = self.url("full")
        except Exception:
            self._reset()
            raise

        self._meta = ImageMeta(
            url=url,
            file_name=os.path.basename(attachment.file_path),
            file_path=attachment.file_path,
            mime_type=attachment.mime_type,
            title=attachment.title,
            alt=attachment.alt_text,
            caption=attachment.caption,
            description=attachment.description,
        )

    ###########################################################################
    # Accessors
    ###########################################################################

    @property
    def id(self) -> int:
        return self._id

    @property
    def resolved(self) -> bool:
        return self._id > 0

    def meta(self, field: Optional[str] = None) -> Any:
        """Return all meta data as a dict, or one field (``None`` if unknown)."""
        if field is None:
            return self._meta.model_dump()
        if field not in ImageMeta.model_fields:
            return None
        return getattr(self._meta, field)

    def size(self, key: str = "url", size: str = "full") -> Any:
        """
        Return the URL, width or height of a size.

        Each size is looked up at most once per resolved image, including
        sizes that turn out not to exist.
        """
        if not self._id:
            return None
        if size not in self._sources:
            variant = self.store.get_sized_variant(self._id, size)
            if variant is None:
                logger.debug("Attachment %s has no %s size", self._id, size)
            self._sources[size] = variant
        variant = self._sources[size]
        if variant is None or key not in SOURCE_KEYS:
            return None
        return getattr(variant, key)

    def url(self, size: str = "full") -> Optional[str]:
        return self.size("url", size)

    def width(self, size: str = "full") -> Optional[int]:
        return self.size("width", size)

    def height(self, size: str = "full") -> Optional[int]:
        return self.size("height", size)

    def data_uri(self, size: Optional[str] = None) -> Optional[str]:
        """
        Return the image file as a base64 ``data:`` URI.

        With ``size``, the sized file is assumed to live next to the
        original and to be named like the last segment of that size's URL.
        This matches the default WordPress uploads layout but is not
        guaranteed for every image backend.

        :raises OSError: if the file cannot be read.
        """
        if not self._id:
            return None

        path = self._meta.file_path
        if size:
            sized_url = self.url(size)
            if not sized_url:
                return None
            file_name = self._meta.file_name
            if file_name:
                path = path.replace(file_name, posixpath.basename(urlparse(sized_url).path))

        try:
            content = self.filesystem.read_file(path)
        except OSError as e:
            report_error("FILE_UNREADABLE", {"attachment": self._id, "path": path}, e)
            raise

        encoded = base64.b64encode(content).decode("ascii")
        return f"data:{self._meta.mime_type};base64,{encoded}"

    ###########################################################################
    # Markup
    ###########################################################################

    def element(
        self,
        size: SizeSpec = "full",
        attributes: Optional[Mapping[str, Any]] = None,
        data_uri: bool = False,
        dimensions: bool = True,
    ) -> Optional[str]:
        """
        Return an ``<img>`` element, or a ``<picture>`` element for a
        mapping of size names to media queries.

        Only ``alt``, ``class``, ``id``, ``style``, ``title`` and ``data-*``
        attributes are kept.  ``alt`` defaults to the image's alt text.
        ``data_uri`` inlines the file and applies to ``<img>`` only; a
        ``<picture>`` of inlined variants would load every one of them.

        In a ``<picture>``, sizes without a variant get no ``<source>``, and
        the result is ``None`` when the last size, used for the fallback
        ``<img>``, has none.
        """
        if not self._id:
            return None

        if isinstance(size, Mapping):
            return self._responsive_element(size, attributes)

        atts = sanitize_attributes(attributes)
        src = self.data_uri(size) if data_uri else self.url(size)
        if src is None:
            return None
        atts["src"] = src
        atts.setdefault("alt", self._meta.alt)

        if dimensions:
            for key in ("width", "height"):
                value = self.size(key, size)
                if value is not None:
                    atts[key] = value

        return tag("img", order_image_attributes(atts), void=True)

    def _responsive_element(self, sizes: Mapping[str, str], attributes: Optional[Mapping[str, Any]]) -> Optional[str]:
        if not sizes:
            return None

        # The alt text belongs to the fallback image, not to the picture
        attributes = dict(attributes or {})
        image_atts = {"alt": attributes.pop("alt")} if "alt" in attributes else {}
        picture_atts = dict(sorted(sanitize_attributes(attributes).items()))

        sources = []
        for name, media in sizes.items():
            srcset = self.url(name)
            if srcset is None:
                continue
            sources.append(tag("source", {"srcset": srcset, "media": media}, void=True))

        # The last size listed is used for the fallback image
        fallback = self.element(list(sizes)[-1], image_atts)
        if fallback is None:
            return None
        sources.append(fallback)

        return tag("picture", picture_atts) + "\n".join(sources) + "</picture>"
