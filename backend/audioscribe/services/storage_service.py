import time
from typing import Optional
from urllib.parse import quote

import httpx
from loguru import logger

from audioscribe.core.config import Settings
from audioscribe.core.exceptions import StorageError


def generate_object_key(original_filename: str, now: Optional[float] = None) -> str:
    """
    Build the storage key for an uploaded audio file

    Args:
        original_filename: Filename sent by the client
        now: Timestamp override in seconds

    Returns:
        ``audio/<epoch-millis>_<original_filename>``
    """
    millis = int((time.time() if now is None else now) * 1000)
    return f"audio/{millis}_{original_filename}"


class StorageService:
    """Service for storing audio blobs in a Supabase Storage bucket"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.client = client
        self.api_key = settings.SUPABASE_KEY
        self.bucket = settings.SUPABASE_BUCKET
        self.object_base = f"{settings.SUPABASE_URL}/storage/v1/object/{self.bucket}"
        self.public_base = settings.storage_public_base

    def public_url(self, key: str) -> str:
        return f"{self.public_base}/{quote(key)}"

    async def store(self, data: bytes, original_filename: str, mimetype: Optional[str] = None) -> str:
        """
        Upload bytes to the bucket

        Args:
            data: File content
            original_filename: Filename sent by the client
            mimetype: Content type stored with the object

        Returns:
            Public URL of the stored object

        Raises:
            StorageError: If the upload fails
        """
        key = generate_object_key(original_filename)
        logger.info(f"Uploading {key} to bucket {self.bucket}")
        try:
            response = await self.client.post(
                f"{self.object_base}/{quote(key)}",
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": mimetype or "application/octet-stream",
                    "x-upsert": "false",
                },
                content=data,
            )
        except httpx.HTTPError as e:
            logger.error(f"Storage request failed: {e}")
            raise StorageError(str(e))

        if response.is_error:
            try:
                body = response.json()
                message = body.get("message") or body.get("error") or response.text
            except (ValueError, AttributeError):
                message = response.text or f"HTTP {response.status_code}"
            logger.error(f"Storage upload failed with {response.status_code}: {message}")
            raise StorageError(message)

        url = self.public_url(key)
        logger.info(f"File uploaded successfully: {url}")
        return url
