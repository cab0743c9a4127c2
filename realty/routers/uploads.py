"""
Image upload endpoints for the admin back office.
"""

from fastapi import APIRouter, Depends, File, Path, UploadFile, status
from typing import List

from realty.config import Settings
from realty.schemas.admin import UploadResponse
from realty.schemas.error import get_error_responses
from realty.services.uploads import UploadService
from realty.utils.dependencies import get_app_settings, require_session_user

router = APIRouter(
    prefix="/upload",
    tags=["Uploads"],
    dependencies=[Depends(require_session_user)]
)


def get_upload_service(settings: Settings = Depends(get_app_settings)) -> UploadService:
    return UploadService(settings)


@router.post(
    "/images",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload images",
    description="Upload up to 10 JPEG, PNG, GIF or WebP images (5MB each). Each gets a WebP rendition.",
    responses=get_error_responses(400, 401)
)
async def upload_images(
    images: List[UploadFile] = File(..., description="Image files"),
    upload_service: UploadService = Depends(get_upload_service)
) -> UploadResponse:
    """
    Validate and store uploaded images.

    Raises:
        FileUploadError: If any file is rejected; nothing from the request is kept
    """
    stored = await upload_service.upload_images(images)
    return UploadResponse(
        success=True,
        message=f"{len(stored)} image(s) uploaded successfully",
        files=stored,
    )


@router.delete(
    "/images/{filename}",
    response_model=UploadResponse,
    summary="Delete an uploaded image",
    responses=get_error_responses(400, 401, 404)
)
async def delete_image(
    filename: str = Path(..., description="Stored filename, e.g. image-1700000000000-123456789.jpg"),
    upload_service: UploadService = Depends(get_upload_service)
) -> UploadResponse:
    await upload_service.delete_image(filename)
    return UploadResponse(success=True, message="Image deleted successfully")
