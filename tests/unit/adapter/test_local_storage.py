"""Unit tests for LocalImageStorage."""

import re
from datetime import datetime, timezone

import pytest

from folio.adapter.storage import LocalImageStorage
from folio.config import UploadSettings
from folio.domain.error import StoragePathError
from folio.domain.service import ImageStorage


@pytest.fixture
def storage(tmp_path):
    return LocalImageStorage(UploadSettings(root_dir=tmp_path))


class TestSave:
    """Tests for writing images."""

    def test_relative_path_is_partitioned_by_utc_month(self, tmp_path):
        moment = datetime(2025, 3, 31, 23, 30, tzinfo=timezone.utc).timestamp()
        storage = LocalImageStorage(UploadSettings(root_dir=tmp_path), clock=lambda: moment)

        path = storage.generate_relative_path("webp")

        assert re.fullmatch(r"blog/2025/03/\d+-[0-9a-f]{12}\.webp", path)
        assert path.split("/")[-1].startswith(str(int(moment * 1000)))

    def test_generated_names_do_not_collide(self, storage):
        paths = {storage.generate_relative_path("webp") for _ in range(50)}

        assert len(paths) == 50

    @pytest.mark.asyncio
    async def test_save_writes_file_and_returns_public_url(self, storage, tmp_path):
        stored = await storage.save(b"RIFF....WEBP", "webp")

        relative = stored.url.removeprefix("/api/uploads/")
        assert stored.url.startswith("/api/uploads/blog/")
        assert (tmp_path / relative).read_bytes() == b"RIFF....WEBP"
        assert stored.filename == relative.split("/")[-1]


class TestLocate:
    """Tests for mapping public paths back to files."""

    @pytest.mark.asyncio
    async def test_saved_file_can_be_located(self, storage):
        stored = await storage.save(b"data", "webp")

        path = storage.locate(stored.url.removeprefix("/api/uploads/"))

        assert path is not None
        assert path.read_bytes() == b"data"

    def test_missing_file_returns_none(self, storage):
        assert storage.locate("blog/2025/01/nothing.webp") is None

    @pytest.mark.parametrize(
        "path",
        [
            "../secret.webp",
            "blog/../../etc/x.png",
            "blog\\..\\x.webp",
            "blog/x\x00.webp",
        ],
    )
    def test_traversal_is_rejected(self, storage, path):
        with pytest.raises(StoragePathError) as exc_info:
            storage.locate(path)

        assert exc_info.value.reason == "invalid path"

    @pytest.mark.parametrize("path", ["blog/2025/01/x.svg", "blog/script.js", "blog/noext"])
    def test_disallowed_extension_is_rejected(self, storage, path):
        with pytest.raises(StoragePathError) as exc_info:
            storage.locate(path)

        assert exc_info.value.reason == "invalid file type"

    def test_empty_path_is_rejected(self, storage):
        with pytest.raises(StoragePathError) as exc_info:
            storage.locate("")

        assert exc_info.value.reason == "path required"

    def test_symlink_out_of_root_is_rejected(self, tmp_path):
        root = tmp_path / "uploads"
        outside = tmp_path / "outside"
        root.mkdir()
        outside.mkdir()
        (outside / "x.png").write_bytes(b"secret")
        (root / "link").symlink_to(outside, target_is_directory=True)
        storage = LocalImageStorage(UploadSettings(root_dir=root))

        with pytest.raises(StoragePathError):
            storage.locate("link/x.png")


class TestImageStorageInterface:
    """Tests for the ImageStorage interface."""

    def test_local_storage_implements_interface(self, storage):
        assert isinstance(storage, ImageStorage)

    def test_storage_without_locate_cannot_be_created(self):
        class WriteOnly(ImageStorage):
            async def save(self, buffer, extension):
                raise AssertionError("not called")

        with pytest.raises(TypeError):
            WriteOnly()
