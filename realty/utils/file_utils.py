"""
File upload utilities for image validation, conversion and storage.
Provides the checks every upload goes through and safe file naming under the upload dir.
"""

import io
import re
import secrets
import time
from pathlib import Path
from typing import Optional
from PIL import Image, UnidentifiedImageError
import aiofiles

from realty.utils.exceptions import (
    FileSizeExceededError,
    FileUploadError,
    UnsupportedFileTypeError,
)

# Filenames produced by FileStorage.generate_filename
FILENAME_PATTERN = re.compile(r"^image-\d+-\d+\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


class FileValidator:
    """Utility class for upload validation operations."""

    # Declared MIME types and the extensions they may carry
    SUPPORTED_FORMATS = {
        "image/jpeg": [".jpg", ".jpeg"],
        "image/jpg": [".jpg", ".jpeg"],
        "image/png": [".png"],
        "image/gif": [".gif"],
        "image/webp": [".webp"],
    }

    # Formats Pillow must report after decoding
    DECODED_FORMATS = {"jpeg", "png", "gif", "webp"}

    MIN_DIMENSION = 1
    MAX_DIMENSION = 20000

    @classmethod
    def validate_declared_type(cls, filename: str, content_type: Optional[str]) -> str:
        """
        Validate the MIME type and extension sent by the client.

        Returns:
            Lowercase file extension
        """
        if content_type not in cls.SUPPORTED_FORMATS:
            raise UnsupportedFileTypeError(content_type or "unknown", ["JPEG", "PNG", "GIF", "WebP"])

        extension = Path(filename or "").suffix.lower()
        if extension not in cls.SUPPORTED_FORMATS[content_type]:
            raise FileUploadError(
                f"File extension '{extension or 'none'}' doesn't match MIME type '{content_type}'"
            )
        return extension

    @staticmethod
    def validate_file_size(filename: str, content: bytes, max_size: int) -> int:
        if not content:
            raise FileUploadError(f"File {filename} is empty")
        if len(content) > max_size:
            raise FileSizeExceededError(filename, max_size)
        return len(content)

    @staticmethod
    def has_image_signature(content: bytes) -> bool:
        """
        Check the leading bytes against the JPEG, PNG, GIF and WebP signatures.
        """
        if content[:3] == b"\xff\xd8\xff":
            return True
        if content[:8] == b"\x89PNG\r\n\x1a\n":
            return True
        if content[:4] == b"GIF8":
            return True
        return content[:4] == b"RIFF" and content[8:12] == b"WEBP"

    @classmethod
    def decode_image(cls, filename: str, content: bytes) -> Image.Image:
        """
        Fully decode the image and check its format and dimensions.

        Returns:
            Loaded PIL image

        Raises:
            FileUploadError: If the bytes are not a usable image
        """
        try:
            img = Image.open(io.BytesIO(content))
            img.load()
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            raise FileUploadError(
                f"File {filename} failed image validation. Corrupted or invalid image format."
            ) from e

        pil_format = (img.format or "").lower()
        if pil_format not in cls.DECODED_FORMATS:
            raise FileUploadError(f"File {filename} has unsupported image format '{pil_format}'")

        width, height = img.size
        for dimension in (width, height):
            if dimension < cls.MIN_DIMENSION or dimension > cls.MAX_DIMENSION:
                raise FileUploadError(
                    f"Image {filename} dimensions {width}x{height} are outside the allowed range"
                )
        return img


class ImageProcessor:
    """Utility class for image conversion operations."""

    MAX_WIDTH = 1920
    WEBP_QUALITY = 80

    @classmethod
    def to_webp(cls, img: Image.Image) -> bytes:
        """
        Re-encode an image as WebP, shrinking it to MAX_WIDTH if wider.
        Smaller images are never enlarged.
        """
        if img.mode not in ("RGB", "RGBA"):
            has_alpha = img.mode in ("LA", "PA") or "transparency" in img.info
            img = img.convert("RGBA" if has_alpha else "RGB")

        width, height = img.size
        if width > cls.MAX_WIDTH:
            new_height = max(1, round(height * cls.MAX_WIDTH / width))
            img = img.resize((cls.MAX_WIDTH, new_height), Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format="WEBP", quality=cls.WEBP_QUALITY, method=6)
        return buffer.getvalue()


class FileStorage:
    """Utility class for upload files on disk."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self.images_dir = self.base_dir / "images"

    @staticmethod
    def generate_filename(extension: str) -> str:
        """Build ``image-<ms>-<random><ext>``."""
        return f"image-{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{extension}"

    @staticmethod
    def webp_name(filename: str) -> str:
        return f"{Path(filename).stem}.webp"

    @staticmethod
    def public_url(filename: str) -> str:
        return f"/uploads/images/{filename}"

    def resolve(self, filename: str) -> Path:
        """
        Path of a stored image, refusing names that escape the images directory.
        """
        root = self.images_dir.resolve()
        path = (root / filename).resolve()
        if path.parent != root:
            raise FileUploadError("Invalid file path")
        return path

    async def save_bytes(self, filename: str, content: bytes) -> Path:
        """Write bytes to the images directory and return the path."""
        self.images_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.resolve(filename)
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)
        return file_path

    @staticmethod
    def delete_file(file_path: Path) -> bool:
        """
        Delete a file from disk.

        Returns:
            True if file was deleted, False if it did not exist
        """
        try:
            file_path.unlink()
            return True
        except FileNotFoundError:
            return False
