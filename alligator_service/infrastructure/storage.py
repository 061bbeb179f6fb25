"""
Storage management for uploaded media on local disk
"""
import logging
import os
import shutil
import time
from typing import BinaryIO, Optional

from ..errors import StorageError

logger = logging.getLogger(__name__)


class MediaStorage:
    """Store uploaded files in the public media directory"""

    def __init__(self, media_dir: str, url_prefix: str = "/images"):
        self.media_dir = media_dir
        self.url_prefix = url_prefix.rstrip("/")
        os.makedirs(self.media_dir, exist_ok=True)

    @staticmethod
    def generate_filename(original_filename: Optional[str], timestamp_ms: Optional[int] = None) -> str:
        """
        Build the stored name "<epoch ms>-<original name>"

        Only the base name of the client supplied filename is kept.
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        base_name = os.path.basename((original_filename or "").replace("\\", "/"))
        return f"{timestamp_ms}-{base_name or 'upload'}"

    def save(self, file_data: BinaryIO, original_filename: Optional[str]) -> str:
        """
        Write an uploaded file and return its servable URL path

        Raises:
            StorageError: If the file cannot be written
        """
        filename = self.generate_filename(original_filename)
        file_path = os.path.join(self.media_dir, filename)

        try:
            with open(file_path, "wb") as buffer:
                shutil.copyfileobj(file_data, buffer)
        except OSError as e:
            logger.error(f"Failed to store {filename}: {e}")
            raise StorageError("Failed to store uploaded file") from e

        logger.info(f"Stored upload {filename}")
        return self.url_for(filename)

    def url_for(self, filename: str) -> str:
        """Relative URL a stored file is served under"""
        return f"{self.url_prefix}/{filename}"
