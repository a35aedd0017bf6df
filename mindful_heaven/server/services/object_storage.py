"""
Object storage on the local filesystem.

Objects live under ``<root_dir>/<bucket>/<user_id>/<epoch_ms>.<ext>`` and are
served back publicly by the storage router. Only images and videos are
accepted; videos only in the message media bucket.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

from mindful_heaven.core.errors import NotFound, ServiceError, ValidationFailed
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.server.core.config import settings
from mindful_heaven.server.core.constant import AVATARS_BUCKET, MESSAGE_MEDIA_BUCKET, STORAGE_BUCKETS

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoredObject:
    bucket: str
    path: str
    url: str


MEDIA_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/heic": "heic",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/quicktime": "mov",
    "video/ogg": "ogv",
}
SERVED_MEDIA_TYPES = {ext: mime for mime, ext in MEDIA_EXTENSIONS.items()}


def _mime(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def media_kind(content_type: Optional[str]) -> Optional[str]:
    """``"image"`` or ``"video"`` for the accepted MIME types, otherwise None."""
    mime = _mime(content_type)
    if mime not in MEDIA_EXTENSIONS:
        return None
    return mime.split("/", 1)[0]


def file_extension(content_type: Optional[str]) -> str:
    """Stored extension for an accepted MIME type. The client's filename is never used."""
    return MEDIA_EXTENSIONS[_mime(content_type)]


def served_media_type(path: str) -> str:
    """Content type an object is served with, derived from its stored extension."""
    ext = PurePosixPath(path).suffix.lstrip(".").lower()
    return SERVED_MEDIA_TYPES.get(ext, "application/octet-stream")


class ObjectStorage:
    """Bucketed file store with per-user object prefixes."""

    def __init__(
        self,
        root_dir: str | Path,
        public_base_url: str,
        max_image_bytes: int = 5 * 1024 * 1024,
        max_video_bytes: int = 50 * 1024 * 1024,
    ) -> None:
        self.root = Path(root_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.max_image_bytes = max_image_bytes
        self.max_video_bytes = max_video_bytes

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.public_base_url}/storage/{bucket}/{path}"

    def resolve(self, bucket: str, path: str) -> Path:
        """
        Filesystem location of an object.

        Raises:
            NotFound: unknown bucket, or a path escaping the bucket
        """
        if bucket not in STORAGE_BUCKETS:
            raise NotFound("Bucket not found")
        bucket_dir = (self.root / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise NotFound("Object not found")
        return target

    def _limit_for(self, kind: str) -> int:
        return self.max_video_bytes if kind == "video" else self.max_image_bytes

    async def upload(
        self,
        bucket: str,
        user_id: str,
        data: bytes,
        content_type: Optional[str],
    ) -> StoredObject:
        """
        Store an uploaded image or video.

        Raises:
            ValidationFailed: unsupported media type or "File too large"
            ServiceError: the object could not be written
        """
        kind = media_kind(content_type)
        if kind is None or (bucket == AVATARS_BUCKET and kind != "image"):
            raise ValidationFailed("Unsupported file type")
        if bucket not in (AVATARS_BUCKET, MESSAGE_MEDIA_BUCKET):
            raise ValidationFailed("Unknown bucket")
        if len(data) > self._limit_for(kind):
            raise ValidationFailed("File too large")

        ext = file_extension(content_type)
        stamp = int(time.time() * 1000)
        target = self.resolve(bucket, f"{user_id}/{stamp}.{ext}")
        while target.exists():
            stamp += 1
            target = self.resolve(bucket, f"{user_id}/{stamp}.{ext}")
        path = f"{user_id}/{stamp}.{ext}"

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_bytes, data)
        except OSError as e:
            logger.error(f"Failed to store object {bucket}/{path}: {e}", exc_info=True)
            raise ServiceError(f"Failed to upload {kind}", status_code=500) from e

        logger.info(f"Stored {kind} {bucket}/{path} ({len(data)} bytes)")
        return StoredObject(bucket=bucket, path=path, url=self.public_url(bucket, path))

    def locate(self, bucket: str, path: str) -> Path:
        """Existing file for an object, or NotFound."""
        target = self.resolve(bucket, path)
        if not target.is_file():
            raise NotFound("Object not found")
        return target


def get_object_storage() -> ObjectStorage:
    return ObjectStorage(
        root_dir=settings.storage.root_dir,
        public_base_url=settings.storage.public_base_url,
        max_image_bytes=settings.storage.max_image_bytes,
        max_video_bytes=settings.storage.max_video_bytes,
    )
