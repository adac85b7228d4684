"""Post aggregate root.

Posts are the blog articles managed by the site admin. Their content is
rich-text HTML that has already been through the allow-list sanitizer.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from folio.domain.model.common import DomainModel
from folio.domain.value import PostId, Slug


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    slug: Slug
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    image_url: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Accept empty, site-relative or absolute http(s) image URLs."""
        if not v:
            return None
        if v.startswith("/") or v.startswith("http://") or v.startswith("https://"):
            return v
        raise ValueError("Invalid image URL")
