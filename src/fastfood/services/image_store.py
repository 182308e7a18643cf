"""Image store — uploads to Cloudinary, returns the public HTTPS URL.

Learn: Uploads go in as a base64 data URI, so nothing touches local disk.
Credentials are passed per call instead of through cloudinary.config(),
which keeps the SDK's global state untouched (and tests simple).
"""

import base64
from typing import Optional

import cloudinary.exceptions
import cloudinary.uploader
import structlog
from starlette.concurrency import run_in_threadpool

from fastfood.config import settings

logger = structlog.get_logger()


class ImageUploadError(Exception):
    """Raised when image storage is unconfigured or the upload fails."""
    pass


class ImageStore:
    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
    ):
        self.cloud_name = cloud_name or settings.cloudinary_cloud_name
        self.api_key = api_key or settings.cloudinary_api_key
        self.api_secret = api_secret or settings.cloudinary_api_secret

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    async def upload(self, content: bytes, content_type: str, folder: str) -> str:
        """Upload image bytes into `folder` and return the secure URL."""
        if not self.configured:
            raise ImageUploadError("Image storage is not configured")

        data_uri = f"data:{content_type};base64,{base64.b64encode(content).decode()}"
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                data_uri,
                folder=folder,
                resource_type="image",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        except cloudinary.exceptions.Error as e:
            logger.warning("image.upload_failed", folder=folder, error=str(e))
            raise ImageUploadError(str(e)) from e

        logger.info("image.uploaded", folder=folder, public_id=result.get("public_id"))
        return result["secure_url"]


def get_image_store() -> ImageStore:
    return ImageStore()
