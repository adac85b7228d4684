"""Post domain service."""

import re
from abc import ABC, abstractmethod

import logfire

from folio.domain.error import NotFoundError, ValidationError
from folio.domain.model.post import Post
from folio.domain.repository import PostRepository
from folio.domain.value import Slug

from .base import Service

_MAX_SLUG_BASE = 180


class HtmlSanitizer(ABC):
    """Allow-list HTML filter for rich-text post content."""

    @abstractmethod
    def clean(self, html: str) -> str:
        """Strip everything outside the allow-list.

        Args:
            html: Untrusted HTML from the editor

        Returns:
            Sanitized HTML
        """
        pass


def slugify(title: str) -> str:
    """Derive the base slug for a title.

    Lowercases, drops anything but letters, digits, whitespace and dashes,
    turns whitespace runs into dashes and collapses repeated dashes.
    Falls back to "post" when nothing usable is left.
    """
    base = title.lower().strip()
    base = re.sub(r"[^a-z0-9\s-]", "", base)
    base = re.sub(r"\s+", "-", base)
    base = re.sub(r"-+", "-", base)
    base = base[:_MAX_SLUG_BASE].strip("-")
    return base or "post"


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository, sanitizer: HtmlSanitizer) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            sanitizer: HTML allow-list sanitizer applied to post content
        """
        self.post_repository = post_repository
        self.sanitizer = sanitizer

    async def list_posts(self, page: int, page_size: int) -> tuple[list[Post], int]:
        """Get one page of posts, newest first.

        Args:
            page: 1-based page number
            page_size: Posts per page

        Returns:
            Tuple of (posts on the page, total number of posts)
        """
        with logfire.span("post_service.list_posts", page=page, page_size=page_size):
            offset = (page - 1) * page_size
            posts = await self.post_repository.find_all(limit=page_size, offset=offset)
            total = await self.post_repository.count()
            logfire.info("Posts listed", page=page, count=len(posts), total=total)
            return posts, total

    async def get_by_slug(self, slug: str) -> Post | None:
        """Get a post by slug.

        Returns None for unknown or malformed slugs.
        """
        with logfire.span("post_service.get_by_slug", slug=slug):
            try:
                value = Slug(slug)
            except ValueError:
                logfire.info("Malformed slug requested", slug=slug)
                return None
            return await self.post_repository.find_by_slug(value)

    async def require_by_slug(self, slug: str) -> Post:
        """Get a post by slug.

        Raises:
            NotFoundError: If no post has this slug
        """
        post = await self.get_by_slug(slug)
        if post is None:
            raise NotFoundError("post", slug)
        return post

    async def generate_unique_slug(self, title: str) -> Slug:
        """Slugify a title and append -2, -3, ... until the slug is free."""
        base = slugify(title)
        candidate = base
        suffix = 1
        while await self.post_repository.slug_exists(Slug(candidate)):
            suffix += 1
            candidate = f"{base}-{suffix}"
        return Slug(candidate)

    async def create_post(self, title: str, content: str, image_url: str | None) -> Post:
        """Create a post with a unique slug and sanitized content.

        Raises:
            ValidationError: If the content is empty after sanitizing
        """
        with logfire.span("post_service.create_post", title_length=len(title)):
            cleaned = self._clean_content(content)
            slug = await self.generate_unique_slug(title)
            post = await self.post_repository.create(
                slug=slug,
                title=title,
                content=cleaned,
                image_url=image_url or None,
            )
            logfire.info("Post created", post_id=post.id, slug=post.slug.root)
            return post

    async def update_post(
        self, slug: str, title: str, content: str, image_url: str | None
    ) -> Post:
        """Replace a post's title, content and image. The slug is kept.

        Raises:
            NotFoundError: If no post has this slug
            ValidationError: If the content is empty after sanitizing
        """
        with logfire.span("post_service.update_post", slug=slug):
            post = await self.require_by_slug(slug)
            cleaned = self._clean_content(content)
            updated = await self.post_repository.update(
                post.model_copy(
                    update={"title": title, "content": cleaned, "image_url": image_url or None}
                )
            )
            if updated is None:
                raise NotFoundError("post", slug)
            logfire.info("Post updated", post_id=updated.id, slug=slug)
            return updated

    async def delete_post(self, slug: str) -> None:
        """Delete a post and its comments.

        Raises:
            NotFoundError: If no post has this slug
        """
        with logfire.span("post_service.delete_post", slug=slug):
            post = await self.require_by_slug(slug)
            if not await self.post_repository.delete(post.id):
                raise NotFoundError("post", slug)
            logfire.info("Post deleted", post_id=post.id, slug=slug)

    def _clean_content(self, content: str) -> str:
        cleaned = self.sanitizer.clean(content).strip()
        if not cleaned:
            raise ValidationError({"content": ["Content is required"]})
        return cleaned
