"""Application services."""

from rau.services.upload import AssetUploadService, UploadOutputs
from rau.services.upload_errors import UploadError

__all__ = ["AssetUploadService", "UploadError", "UploadOutputs"]
