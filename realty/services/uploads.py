"""
Image upload service.
Validates every file (declared type, size, magic bytes, full decode), produces a WebP
rendition and stores both on disk or returns them inline as data URLs.
"""

import base64
import logging
from pathlib import Path
from typing import List

from fastapi import UploadFile
from PIL import Image

from realty.config import Settings
from realty.schemas.admin import UploadedImage
from realty.utils.exceptions import FileUploadError, NotFoundError
from realty.utils.file_utils import FILENAME_PATTERN, FileStorage, FileValidator, ImageProcessor

logger = logging.getLogger(__name__)


def data_url(content_type: str, content: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(content).decode('ascii')}"


class UploadService:
    """Service for image uploads and deletions."""

    def __init__(self, settings: Settings):
        self.mode = settings.resolved_upload_mode
        self.max_file_size = settings.max_file_size
        self.max_files = settings.max_upload_files
        self.file_storage = FileStorage(Path(settings.upload_dir))

    async def upload_images(self, files: List[UploadFile]) -> List[UploadedImage]:
        """
        Process a batch of uploads. Either every file is accepted or none is kept.

        Args:
            files: Files from the ``images`` multipart field

        Returns:
            One entry per stored image

        Raises:
            FileUploadError: If any file is rejected; files already written are removed
        """
        if not files:
            raise FileUploadError("No images uploaded")
        if len(files) > self.max_files:
            raise FileUploadError(f"Too many files. Maximum is {self.max_files} images per upload")

        written: List[Path] = []
        try:
            results = []
            for upload in files:
                results.append(await self._process_file(upload, written))
        except FileUploadError:
            self._cleanup(written)
            raise
        except Exception as e:
            self._cleanup(written)
            logger.error(f"Failed to store uploaded images: {e}")
            raise FileUploadError("Failed to upload images") from e

        logger.info(f"Uploaded {len(results)} image(s) in {self.mode} mode")
        return results

    async def _process_file(self, upload: UploadFile, written: List[Path]) -> UploadedImage:
        name = upload.filename or "unnamed"
        extension = FileValidator.validate_declared_type(name, upload.content_type)
        # One byte past the limit is enough to reject the file
        content = await upload.read(self.max_file_size + 1)
        size = FileValidator.validate_file_size(name, content, self.max_file_size)

        if not FileValidator.has_image_signature(content):
            logger.warning(f"Rejected upload {name}: signature does not match an image")
            raise FileUploadError(
                f"File {name} failed magic bytes validation. Invalid or potentially malicious file."
            )

        img = FileValidator.decode_image(name, content)
        width, height = img.size
        original_type = Image.MIME.get(img.format, upload.content_type)
        webp_content = ImageProcessor.to_webp(img)

        filename = self.file_storage.generate_filename(extension)
        webp_filename = self.file_storage.webp_name(filename)

        if self.mode == "inline":
            url = data_url(original_type, content)
            webp_url = data_url("image/webp", webp_content)
        else:
            written.append(await self.file_storage.save_bytes(filename, content))
            # A WebP original is replaced by its re-encoded rendition
            written.append(await self.file_storage.save_bytes(webp_filename, webp_content))
            url = self.file_storage.public_url(filename)
            webp_url = self.file_storage.public_url(webp_filename)

        return UploadedImage(
            filename=filename,
            original_name=name,
            url=url,
            webp_url=webp_url,
            size=size,
            width=width,
            height=height,
        )

    def _cleanup(self, written: List[Path]) -> None:
        for path in written:
            if self.file_storage.delete_file(path):
                logger.info(f"Removed {path.name} after failed upload")

    async def delete_image(self, filename: str) -> None:
        """
        Delete a stored image and its WebP rendition.

        Raises:
            FileUploadError: If the filename is not one this service produces
            NotFoundError: If the image does not exist
        """
        if not FILENAME_PATTERN.match(filename):
            raise FileUploadError("Invalid filename format")

        if self.mode == "inline":
            # Inline images live in the records themselves
            return

        path = self.file_storage.resolve(filename)
        if not self.file_storage.delete_file(path):
            raise NotFoundError("Image", filename)

        webp_path = self.file_storage.resolve(self.file_storage.webp_name(filename))
        if webp_path != path:
            self.file_storage.delete_file(webp_path)
        logger.info(f"Deleted image {filename}")
