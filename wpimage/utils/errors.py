"""
Structured logging helpers for image resolution events.

The :mod:`wpimage.utils.errors` module centralizes the reporting of the
non-fatal conditions met while resolving images (missing records, unusable
custom fields) and of the fatal ones raised to callers.
Every event is written to the ``wpimage`` logger.  When a reports
directory has been configured with :func:`configure_reports`, each entry
is also appended to a JSON Lines file so that a rendering run can be
reviewed afterwards.

Two public functions are provided:

``report_warning``
    Record a condition that degraded a lookup to "no image".

``report_error``
    Record a failure that is propagated to the caller.  An optional
    exception can be supplied and will be serialized to the log.

The ``EVENTS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger("wpimage")

# Mapping of event codes used throughout the package to descriptive messages.
EVENTS: Dict[str, str] = {
    "FIELDS_UNAVAILABLE": "Custom field functions not available",
    "FIELD_NOT_AN_IMAGE": "Custom field value is not an image reference",
    "RECORD_NOT_FOUND": "Record not found",
    "ATTACHMENT_NOT_FOUND": "Attachment not found",
    "FILE_UNREADABLE": "Image file could not be read",
    "REST_NOT_VISIBLE": "WordPress REST API object not visible to these credentials",
    "REST_ERROR": "WordPress REST API request failed",
}

_report_dir: Optional[str] = None


def configure_reports(path: Optional[str]) -> None:
    """Enable JSON Lines reports under ``path``, or disable them with ``None``."""
    global _report_dir
    _report_dir = path or None


def _write_jsonl(name: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``name``."""
    if not _report_dir:
        return
    os.makedirs(_report_dir, exist_ok=True)
    with open(os.path.join(_report_dir, name), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, default=str)
        f.write("\n")


def _entry(code: str, context: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"code": code, "message": EVENTS.get(code, code)}
    if context:
        entry.update(context)
    return entry


def _describe(context: Optional[Dict[str, Any]]) -> str:
    if not context:
        return ""
    return " - " + ", ".join(f"{k}={v}" for k, v in context.items())


def report_warning(code: str, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Log a non-fatal event.

    Parameters
    ----------
    code:
        A key identifying the type of event.  If ``code`` is present in
        :data:`EVENTS` its value will be used as the message.
    context:
        Optional key/value information about the lookup (field name,
        record id, size name) merged into the log entry.

    Returns
    -------
    dict
        The entry that was logged.
    """
    entry = _entry(code, context)
    logger.warning("%s%s", entry["message"], _describe(context))
    _write_jsonl("warnings.jsonl", entry)
    return entry


def report_error(
    code: str, context: Optional[Dict[str, Any]] = None, exc: Optional[BaseException] = None
) -> Dict[str, Any]:
    """Log an error event.

    Parameters
    ----------
    code:
        A key identifying the type of error.
    context:
        Optional key/value information merged into the log entry.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the log entry.
    """
    entry = _entry(code, context)
    if exc is not None:
        entry["error"] = str(exc)
    logger.error("%s%s", entry["message"], _describe(context))
    _write_jsonl("errors.jsonl", entry)
    return entry
