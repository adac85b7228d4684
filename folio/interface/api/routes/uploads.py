"""Admin image upload routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Query, Request, UploadFile

from folio.adapter.error import RemoteFetchError
from folio.application.usecase.upload import (
    UploadFromUrlRequest,
    UploadFromUrlUseCase,
    UploadImageRequest,
    UploadImageResponse,
    UploadImageUseCase,
)
from folio.config import Settings
from folio.domain.error import ImageProcessingError, UploadRejectedError
from folio.domain.service import JWTService
from folio.domain.value import ImageKind
from folio.interface.api.dependencies import read_json, require_admin
from folio.interface.error import ApiError

router = APIRouter(prefix="/api/admin", tags=["uploads"], route_class=DishkaRoute)


@router.post("/upload", response_model=UploadImageResponse)
async def upload_image(
    request: Request,
    upload_image_use_case: FromDishka[UploadImageUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    file: UploadFile | None = File(default=None),
    kind: str | None = Query(default=None, alias="type"),
) -> UploadImageResponse:
    """Upload an image file (multipart field "file").

    The image is re-encoded as WebP within the byte budget of its kind
    (?type=cover or ?type=inline, cover by default).
    """
    require_admin(request, jwt_service)

    data = None
    content_type = None
    if file is not None:
        # One byte past the limit is enough to know it is too large
        data = await file.read(settings.uploads.max_upload_bytes + 1)
        content_type = file.content_type

    try:
        return await upload_image_use_case.execute(
            UploadImageRequest(
                data=data, content_type=content_type, kind=ImageKind.parse(kind)
            )
        )
    except UploadRejectedError as e:
        raise ApiError(400, e.reason, **e.extra)
    except ImageProcessingError as e:
        raise ApiError(400, "upload failed", details=str(e))
    except Exception as e:
        logfire.exception("Image upload failed")
        raise ApiError(500, "upload failed", details=str(e))


@router.post("/upload-url", response_model=UploadImageResponse)
async def upload_image_from_url(
    request: Request,
    upload_from_url_use_case: FromDishka[UploadFromUrlUseCase],
    jwt_service: FromDishka[JWTService],
    kind: str | None = Query(default=None, alias="type"),
) -> UploadImageResponse:
    """Import an image from a remote URL. Body: {url}."""
    require_admin(request, jwt_service)

    try:
        return await upload_from_url_use_case.execute(
            UploadFromUrlRequest(payload=await read_json(request), kind=ImageKind.parse(kind))
        )
    except UploadRejectedError as e:
        raise ApiError(400, e.reason, **e.extra)
    except RemoteFetchError as e:
        raise ApiError(e.status_code, e.reason, **e.extra)
    except ImageProcessingError as e:
        raise ApiError(400, "upload failed", details=str(e))
    except Exception as e:
        logfire.exception("Image upload from URL failed")
        raise ApiError(500, "upload failed", details=str(e))
