"""Image storage infrastructure providers."""

from dishka import Scope, provide

from folio.adapter.storage import LocalImageStorage
from folio.config import UploadSettings
from folio.domain.service import ImageStorage
from folio.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider writing below the configured uploads root."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_image_storage(self, upload_settings: UploadSettings) -> ImageStorage:
        """Provide local filesystem image storage."""
        return LocalImageStorage(upload_settings=upload_settings)
