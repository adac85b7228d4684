"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Carries per-field messages so the interface layer can render a
    structured report.
    """

    def __init__(self, issues: dict[str, list[str]]):
        self.issues = issues
        fields = ", ".join(sorted(issues))
        super().__init__(f"Validation failed for: {fields}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ParentNotFoundError(DomainError):
    """Raised when a reply references a comment missing from the same post."""

    def __init__(self, parent_id: int, post_id: int):
        self.parent_id = parent_id
        self.post_id = post_id
        super().__init__(f"Parent comment {parent_id} not found on post {post_id}")


class RateLimitedError(DomainError):
    """Raised when a client exceeded its request budget."""

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded, retry after {retry_after}s")


class ImageProcessingError(DomainError):
    """Raised when an image cannot be processed."""

    pass


class ImageDecodeError(ImageProcessingError):
    """Raised when input bytes are not a decodable raster image."""

    pass


class StoragePathError(DomainError):
    """Raised when a requested stored-file path is not allowed."""

    def __init__(self, reason: str, path: str):
        self.reason = reason
        self.path = path
        super().__init__(f"{reason}: {path}")


class UploadRejectedError(DomainError):
    """Raised when an upload request is refused before processing."""

    def __init__(self, reason: str, **extra):
        self.reason = reason
        self.extra = extra
        super().__init__(reason)
