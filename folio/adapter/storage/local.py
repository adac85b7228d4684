"""Filesystem storage for processed images."""

import asyncio
import secrets
import time
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import logfire

from folio.config import UploadSettings
from folio.domain.error import StoragePathError
from folio.domain.model.image import StoredImage
from folio.domain.service.upload_service import ImageStorage

UPLOAD_NAMESPACE = "blog"


class LocalImageStorage(ImageStorage):
    """Stores images under <root>/blog/<YYYY>/<MM>/<ms-timestamp>-<hex>.<ext>.

    The public URL mirrors the relative path below the root, prefixed with
    the configured URL prefix.
    """

    def __init__(
        self,
        upload_settings: UploadSettings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize local image storage.

        Args:
            upload_settings: Upload settings (root directory, URL prefix)
            clock: Source of the current time in seconds
        """
        self.root = Path(upload_settings.root_dir)
        self.url_prefix = upload_settings.url_prefix.rstrip("/")
        self.served_extensions = {ext.lower() for ext in upload_settings.served_extensions}
        self._clock = clock

    def generate_relative_path(self, extension: str) -> str:
        """Build a fresh date-partitioned path for a new file."""
        now = self._clock()
        moment = datetime.fromtimestamp(now, tz=timezone.utc)
        filename = f"{int(now * 1000)}-{secrets.token_hex(6)}.{extension}"
        return f"{UPLOAD_NAMESPACE}/{moment:%Y}/{moment:%m}/{filename}"

    async def save(self, buffer: bytes, extension: str) -> StoredImage:
        """Write an image and return its public URL."""
        relative = self.generate_relative_path(extension)
        path = self.root / relative

        with logfire.span("local_storage.save", path=relative, size_bytes=len(buffer)):
            await asyncio.to_thread(self._write, path, buffer)
            logfire.info("Image written", path=relative, size_bytes=len(buffer))

        return StoredImage(url=f"{self.url_prefix}/{relative}", filename=path.name)

    @staticmethod
    def _write(path: Path, buffer: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(buffer)

    def locate(self, relative_path: str) -> Path | None:
        """Map a relative path to a stored file, refusing anything unsafe."""
        if not relative_path:
            raise StoragePathError("path required", relative_path)

        extension = Path(relative_path).suffix.lower()
        if extension not in self.served_extensions:
            self._log_rejected(relative_path, "disallowed extension")
            raise StoragePathError("invalid file type", relative_path)

        if ".." in relative_path or "\\" in relative_path or "\x00" in relative_path:
            self._log_rejected(relative_path, "traversal sequence")
            raise StoragePathError("invalid path", relative_path)

        root = self.root.resolve()
        path = (root / relative_path.lstrip("/")).resolve()
        if not path.is_relative_to(root):
            self._log_rejected(relative_path, "outside uploads root")
            raise StoragePathError("invalid path", relative_path)

        if not path.is_file():
            return None
        return path

    @staticmethod
    def _log_rejected(relative_path: str, detail: str) -> None:
        logfire.warn(
            "Upload path rejected",
            path=relative_path,
            detail=detail,
            security_event="path_rejected",
        )
