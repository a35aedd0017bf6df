"""
API endpoints for object storage.

Uploads go to ``/api/v1/storage/{bucket}`` and are stored under the caller's
own prefix. Stored objects are public: ``public_router`` serves them at
``/storage/{bucket}/{path}`` without authentication.
"""

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import FileResponse

from mindful_heaven.core.models.io import UploadResult
from mindful_heaven.server.services.deps import CurrentUserDep, ObjectStorageDep
from mindful_heaven.server.services.object_storage import served_media_type

router = APIRouter(tags=["storage"])
public_router = APIRouter(tags=["storage"])


@router.post(
    "/{bucket}",
    response_model=UploadResult,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Object",
    description="Upload a JPEG, PNG, GIF, WebP or HEIC image (avatars, message_images) or a video (message_images). "
    "Images are limited to 5 MB and videos to 50 MB.",
    response_description="Bucket, object path and public URL.",
    responses={
        201: {"description": "Object stored"},
        400: {"description": "Unsupported file type or file too large"},
        500: {"description": "The object could not be written"},
    },
)
async def upload_object(
    bucket: str,
    storage: ObjectStorageDep,
    user: CurrentUserDep,
    file: UploadFile = File(...),
) -> UploadResult:
    """
    Upload a file.

    - **bucket**: ``avatars`` or ``message_images``.
    - **file**: The image or video, sent as multipart form data.
    """
    data = await file.read()
    stored = await storage.upload(bucket, user.id, data, file.content_type)
    return UploadResult(bucket=stored.bucket, path=stored.path, url=stored.url)


@public_router.get(
    "/storage/{bucket}/{path:path}",
    summary="Download Object",
    description="Serve a stored object.",
    responses={404: {"description": "Object not found"}},
)
async def download_object(bucket: str, path: str, storage: ObjectStorageDep) -> FileResponse:
    return FileResponse(
        storage.locate(bucket, path),
        media_type=served_media_type(path),
        headers={"X-Content-Type-Options": "nosniff"},
    )
