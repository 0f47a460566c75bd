"""
WordPress REST API implementation of the store protocols.

This module reads records, attachment meta data, size variants and custom
field values from a live site through the core ``/wp-json/wp/v2``
endpoints.  Custom fields are taken from the ``acf`` object that the
Advanced Custom Fields plugin adds to REST responses.  A simple rate
limiter keeps the number of requests per minute under control and a
generic retry wrapper handles transient network errors and server-side
rate limiting responses (429 or 5xx).

Usage example::

    from wpimage.stores.wordpress_rest import WordPressRestStore
    from wpimage.image_resolver import ImageResolver

    cfg = {"base_url": "https://example.com", "uploads_dir": "/srv/www/wp-content/uploads"}
    store = WordPressRestStore(cfg)
    image = ImageResolver(42, store=store)
    print(image.element("medium", {"class": "hero"}))

Responses are memoised per record id for the lifetime of the store, so a
store should be created per rendering run.
"""

from __future__ import annotations

import os
import time
from typing import Any, Callable, Dict, Iterable, Optional

import requests

from wpimage.markup.text import strip_tags
from wpimage.models import AttachmentMeta, Record, SizeVariant
from wpimage.utils.errors import report_error, report_warning

DEFAULT_REST_BASES = ("media", "posts", "pages")
ABSENT_STATUSES = (404, 410)
# Private and draft records answer like this without the right credentials
NOT_VISIBLE_STATUSES = (401, 403)

###############################################################################
# Rate limiting and retry utilities
###############################################################################

class RateLimiter:
    """
    Simple time-based rate limiter.  Ensures that no more than ``rpm``
    requests are dispatched per minute.
    """

    def __init__(self, rpm: int = 180) -> None:
        self.rpm = max(1, rpm)
        self.interval = 60.0 / float(self.rpm)
        self._last = 0.0

    def wait(self, time_fn: Callable[[], float] = time.time, sleep_fn: Callable[[float], None] = time.sleep) -> None:
        now = time_fn()
        dt = now - self._last
        if dt < self.interval:
            sleep_fn(self.interval - dt)
        self._last = time_fn()


def with_retries(
    fn: Callable[[], requests.Response],
    *,
    max_attempts: int = 5,
    base_delay: float = 0.7,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> requests.Response:
    """
    Execute a function returning a ``requests.Response``, retrying on
    transient HTTP errors.  Retries are attempted on status codes 429
    (too many requests) and 5xx server errors.  Backoff is exponential.

    :param fn: A zero-argument callable that performs the HTTP request.
    :param max_attempts: Maximum number of attempts before giving up.
    :param base_delay: Base delay in seconds for exponential backoff.
    :return: The successful ``requests.Response``.
    :raises requests.HTTPError: if all attempts fail, or immediately for
        other client errors such as 404.
    """
    attempt = 0
    while True:
        try:
            resp = fn()
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status not in (429, 500, 502, 503, 504) or attempt >= max_attempts - 1:
                raise
            # Use Retry-After header if provided, otherwise exponential backoff
            retry_after = e.response.headers.get("Retry-After")
            try:
                wait = float(retry_after) if retry_after else base_delay * (2 ** attempt)
            except ValueError:
                wait = base_delay * (2 ** attempt)
            sleep_fn(wait)
            attempt += 1
        except requests.RequestException:
            if attempt >= max_attempts - 1:
                raise
            sleep_fn(base_delay * (2 ** attempt))
            attempt += 1


def _rendered(value: Any) -> str:
    """Return the ``rendered`` member of a REST text object."""
    if isinstance(value, dict):
        return value.get("rendered") or ""
    return value or ""


class WordPressRestStore:
    """
    Records, attachments, size variants and custom fields fetched from the
    WordPress REST API.

    :param cfg: The ``wordpress`` section of the configuration, containing
        ``base_url`` and optionally ``username``, ``app_password``,
        ``uploads_dir``, ``acf``, ``rest_bases``, ``timeout`` and ``rpm``.
    :param session: Optional ``requests.Session`` (or compatible object).
    """

    def __init__(self, cfg: Dict[str, Any], *, session: Optional[requests.Session] = None,
                 limiter: Optional[RateLimiter] = None) -> None:
        if not cfg.get("base_url"):
            raise ValueError("WordPress base_url is required")
        self.cfg = cfg
        self.base_url = cfg["base_url"].rstrip("/")
        self.uploads_dir = cfg.get("uploads_dir") or ""
        self.rest_bases: Iterable[str] = cfg.get("rest_bases") or DEFAULT_REST_BASES
        self.timeout = cfg.get("timeout", 15)
        self.session = session or requests.Session()
        if cfg.get("username") and cfg.get("app_password"):
            self.session.auth = (cfg["username"], cfg["app_password"])
        self._limiter = limiter or RateLimiter(int(cfg.get("rpm", 180)))
        self._raw: Dict[int, Optional[Dict[str, Any]]] = {}

    def _get(self, path: str) -> Optional[Dict[str, Any]]:
        """GET ``path`` below ``/wp-json``.

        ``None`` when the object does not exist or is not visible to the
        current credentials (401, 403, 404, 410).
        """
        url = f"{self.base_url}/wp-json/{path.lstrip('/')}"

        def do_request() -> requests.Response:
            self._limiter.wait()
            return self.session.get(url, timeout=self.timeout)

        try:
            resp = with_retries(do_request)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status in NOT_VISIBLE_STATUSES:
                report_warning("REST_NOT_VISIBLE", {"url": url, "status": status})
                return None
            if status in ABSENT_STATUSES:
                return None
            report_error("REST_ERROR", {"url": url}, e)
            raise
        data = resp.json()
        return data if isinstance(data, dict) else None

    def fetch(self, record_id: int) -> Optional[Dict[str, Any]]:
        """Return the raw REST object for ``record_id`` from any known endpoint."""
        if not record_id or record_id < 1:
            return None
        if record_id not in self._raw:
            data = None
            for rest_base in self.rest_bases:
                data = self._get(f"wp/v2/{rest_base}/{record_id}")
                if data is not None:
                    break
            self._raw[record_id] = data
        return self._raw[record_id]

    ###########################################################################
    # Record store
    ###########################################################################

    def get_record(self, record_id: int) -> Optional[Record]:
        data = self.fetch(record_id)
        if data is None:
            return None
        return Record(
            id=data.get("id", record_id),
            type=data.get("type") or "",
            title=_rendered(data.get("title")),
            link=data.get("link") or "",
            content=_rendered(data.get("content")) or _rendered(data.get("description")),
            excerpt=_rendered(data.get("excerpt")) or _rendered(data.get("caption")),
            date=data.get("date") or None,
            featured_media=data.get("featured_media") or 0,
            fields=data.get("acf") or {},
        )

    def get_record_type(self, record_id: int) -> str:
        data = self.fetch(record_id)
        return (data or {}).get("type") or ""

    def get_featured_image_id(self, record_id: int) -> Optional[int]:
        data = self.fetch(record_id)
        if not data:
            return None
        return data.get("featured_media") or None

    ###########################################################################
    # Field store
    ###########################################################################

    def fields_available(self) -> bool:
        return bool(self.cfg.get("acf", True))

    def get_field_value(self, name: str, record_id: int) -> Any:
        data = self.fetch(record_id)
        fields = (data or {}).get("acf")
        if not isinstance(fields, dict):
            return None
        return fields.get(name)

    ###########################################################################
    # Attachment and size variant stores
    ###########################################################################

    def _media(self, attachment_id: int) -> Optional[Dict[str, Any]]:
        data = self.fetch(attachment_id)
        if not data or data.get("type") != "attachment":
            return None
        return data

    def get_attachment_meta(self, attachment_id: int) -> Optional[AttachmentMeta]:
        data = self._media(attachment_id)
        if data is None:
            return None
        details = data.get("media_details") or {}
        file = details.get("file") or ""
        file_path = os.path.join(self.uploads_dir, file) if (self.uploads_dir and file) else file
        return AttachmentMeta(
            file_path=file_path,
            mime_type=data.get("mime_type"),
            title=strip_tags(_rendered(data.get("title"))),
            alt_text=data.get("alt_text"),
            caption=strip_tags(_rendered(data.get("caption"))),
            description=_rendered(data.get("description")),
        )

    def get_sized_variant(self, attachment_id: int, size: str) -> Optional[SizeVariant]:
        data = self._media(attachment_id)
        if data is None:
            return None
        details = data.get("media_details") or {}
        sizes = details.get("sizes") or {}
        variant = sizes.get(size)
        if variant and variant.get("source_url"):
            return SizeVariant(url=variant["source_url"], width=variant.get("width"), height=variant.get("height"))
        if size == "full" and data.get("source_url"):
            return SizeVariant(url=data["source_url"], width=details.get("width"), height=details.get("height"))
        return None
