"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import field_validator

from folio.domain.value.common import RootValueObject


class ImageKind(str, Enum):
    """Where an uploaded image is used; selects its byte budget."""

    COVER = "cover"
    INLINE = "inline"

    @classmethod
    def parse(cls, value: str | None) -> "ImageKind":
        """Parse a query parameter, defaulting to COVER for anything unknown."""
        if value == cls.INLINE.value:
            return cls.INLINE
        return cls.COVER


class CompressionOutcome(str, Enum):
    """How well a processed image met its byte budget."""

    WITHIN_TARGET = "within_target"  # <= target size
    WITHIN_LIMIT = "within_limit"  # > target, <= hard maximum
    OVER_LIMIT = "over_limit"  # best effort only, still above the hard maximum

    @property
    def fits_budget(self) -> bool:
        """Whether the result is within the hard maximum."""
        return self is not CompressionOutcome.OVER_LIMIT


class Slug(RootValueObject[str]):
    """URL-safe slug for posts.

    Lowercase alphanumeric words separated by single hyphens.
    Examples: 'hello-world', 'notes-on-reading-2'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 200:
            raise ValueError("Slug must be 1-200 characters")
        return v
