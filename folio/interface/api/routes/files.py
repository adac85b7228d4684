"""Serving of stored upload files."""

from pathlib import Path

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import FileResponse

from folio.domain.error import StoragePathError
from folio.domain.service import ImageStorage
from folio.interface.error import ApiError

router = APIRouter(prefix="/api/uploads", tags=["uploads"], route_class=DishkaRoute)

CONTENT_TYPES = {
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}


@router.get("/{path:path}")
async def serve_upload(path: str, storage: FromDishka[ImageStorage]) -> FileResponse:
    """Serve a stored image with long-lived caching."""
    try:
        file_path = storage.locate(path)
    except StoragePathError as e:
        raise ApiError(400, e.reason)

    if file_path is None:
        raise ApiError(404, "file not found")

    return FileResponse(
        file_path,
        media_type=CONTENT_TYPES.get(Path(file_path).suffix.lower(), "application/octet-stream"),
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
