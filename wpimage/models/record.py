from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Record(BaseModel):
    """A content record (post, page, attachment or custom type)."""

    model_config = ConfigDict(
        extra="allow",
    )

    id: int = Field(..., ge=1)
    type: str = "post"
    title: str = ""
    link: str = ""
    content: str = ""
    excerpt: str = ""
    date: Optional[datetime] = None
    featured_media: int = 0
    fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "link", "content", "excerpt", "type", mode="before")
    @classmethod
    def _blank_if_none(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("featured_media", mode="before")
    @classmethod
    def _zero_if_none(cls, v: Any) -> Any:
        return 0 if v in (None, "", False) else v

    @field_validator("fields", mode="before")
    @classmethod
    def _empty_fields(cls, v: Any) -> Any:
        # The REST API reports a site without field groups as an empty list.
        return v if isinstance(v, dict) else {}
