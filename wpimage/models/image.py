from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _blank_if_none(v: Any) -> Any:
    return "" if v is None else v


class ImageMeta(BaseModel):
    """Meta data of a resolved attachment.

    Exactly eight string fields.  Unknown keys are dropped and missing ones
    default to an empty string.
    """

    model_config = ConfigDict(extra="ignore")

    url: str = ""
    file_name: str = ""
    file_path: str = ""
    mime_type: str = ""
    title: str = ""
    alt: str = ""
    caption: str = ""
    description: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> Any:
        v = _blank_if_none(v)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def empty(cls) -> "ImageMeta":
        return cls()


class SizeVariant(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class AttachmentMeta(BaseModel):
    """Raw attachment details as returned by an attachment store."""

    model_config = ConfigDict(extra="ignore")

    file_path: str = ""
    mime_type: str = ""
    title: str = ""
    alt_text: str = ""
    caption: str = ""
    description: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> Any:
        return _blank_if_none(v)
