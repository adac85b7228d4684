"""Unit tests for the upload use cases."""

import pytest

from folio.adapter.error import BlockedHostError, NotAnImageError
from folio.application.usecase.upload import (
    UploadFromUrlRequest,
    UploadFromUrlUseCase,
    UploadImageRequest,
    UploadImageUseCase,
)
from folio.domain.error import ImageDecodeError, UploadRejectedError
from folio.domain.service import ImageStorage
from folio.domain.value import CompressionOutcome, ImageKind
from tests.harness import create_env_fixture
from tests.images import make_jpeg, make_png

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestUploadImage:
    """Tests for multipart uploads."""

    @pytest.mark.asyncio
    async def test_cover_upload_is_stored_as_webp(self, unit_env):
        use_case = await unit_env.get(UploadImageUseCase)
        storage = await unit_env.get(ImageStorage)

        response = await use_case.execute(
            UploadImageRequest(
                data=make_jpeg(2000, 1500), content_type="image/jpeg", kind=ImageKind.COVER
            )
        )

        assert response.ok is True
        assert response.url.startswith("/api/uploads/blog/")
        assert response.url.endswith(".webp")
        assert response.width <= 1200
        assert response.size_bytes <= 450 * 1024
        assert response.outcome is not CompressionOutcome.OVER_LIMIT
        stored = storage.locate(response.url.removeprefix("/api/uploads/"))
        assert stored is not None
        assert stored.stat().st_size == response.size_bytes

    @pytest.mark.asyncio
    async def test_missing_file(self, unit_env):
        use_case = await unit_env.get(UploadImageUseCase)

        with pytest.raises(UploadRejectedError) as exc_info:
            await use_case.execute(UploadImageRequest(data=None))

        assert exc_info.value.reason == "no file provided"

    @pytest.mark.asyncio
    async def test_too_large(self, unit_env):
        use_case = await unit_env.get(UploadImageUseCase)

        with pytest.raises(UploadRejectedError) as exc_info:
            await use_case.execute(
                UploadImageRequest(data=b"x" * (5 * 1024 * 1024 + 1), content_type="image/png")
            )

        assert exc_info.value.reason == "file too large"
        assert exc_info.value.extra == {"maxSize": 5 * 1024 * 1024}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content_type", [None, "text/plain", "image/gif", "image/svg+xml"])
    async def test_unaccepted_type(self, unit_env, content_type):
        use_case = await unit_env.get(UploadImageUseCase)

        with pytest.raises(UploadRejectedError) as exc_info:
            await use_case.execute(
                UploadImageRequest(data=make_png(10, 10), content_type=content_type)
            )

        assert exc_info.value.reason == "invalid file type"
        assert "image/webp" in exc_info.value.extra["allowed"]

    @pytest.mark.asyncio
    async def test_undecodable_bytes(self, unit_env):
        use_case = await unit_env.get(UploadImageUseCase)

        with pytest.raises(ImageDecodeError):
            await use_case.execute(UploadImageRequest(data=b"garbage", content_type="image/png"))


class TestUploadFromUrl:
    """Tests for URL imports."""

    @pytest.mark.asyncio
    async def test_remote_image_is_imported(self, unit_env):
        use_case = await unit_env.get(UploadFromUrlUseCase)

        response = await use_case.execute(
            UploadFromUrlRequest(
                payload={"url": "https://images.example.com/photo.png"},
                kind=ImageKind.INLINE,
            )
        )

        assert (response.width, response.height) == (800, 600)
        assert response.url.endswith(".webp")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, {}, {"url": ""}, {"url": 42}, ["url"]])
    async def test_url_is_required(self, unit_env, payload):
        use_case = await unit_env.get(UploadFromUrlUseCase)

        with pytest.raises(UploadRejectedError) as exc_info:
            await use_case.execute(UploadFromUrlRequest(payload=payload))

        assert exc_info.value.reason == "url is required"

    @pytest.mark.asyncio
    async def test_internal_url_is_blocked(self, unit_env):
        use_case = await unit_env.get(UploadFromUrlUseCase)

        with pytest.raises(BlockedHostError):
            await use_case.execute(
                UploadFromUrlRequest(payload={"url": "http://169.254.169.254/latest"})
            )

    @pytest.mark.asyncio
    async def test_non_image_is_rejected(self, unit_env):
        use_case = await unit_env.get(UploadFromUrlUseCase)

        with pytest.raises(NotAnImageError):
            await use_case.execute(
                UploadFromUrlRequest(payload={"url": "https://images.example.com/page.html"})
            )
