"""Post input and response items shared by the post use cases."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from folio.application.usecase.base import ApiModel
from folio.domain.model.post import Post


class PostItem(ApiModel):
    """Post in responses."""

    id: int
    slug: str
    title: str
    content: str
    image_url: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostItem":
        return cls(
            id=post.id,
            slug=post.slug.root,
            title=post.title,
            content=post.content,
            image_url=post.image_url,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostInput(BaseModel):
    """Untrusted post form input from the admin editor."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("title_required", "Title is required")
        return v

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Accept empty, site-relative or absolute http(s) URLs."""
        if not v:
            return None
        if v.startswith("/") or v.startswith("http://") or v.startswith("https://"):
            return v
        raise PydanticCustomError("image_url_invalid", "Invalid image URL")
