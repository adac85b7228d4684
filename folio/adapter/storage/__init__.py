"""Local filesystem storage."""

from folio.adapter.storage.local import LocalImageStorage

__all__ = ["LocalImageStorage"]
