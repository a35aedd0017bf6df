"""Unit tests for the filesystem object storage."""

import re

import pytest

from mindful_heaven.core.errors import NotFound, ValidationFailed
from mindful_heaven.server.services.object_storage import ObjectStorage, file_extension, media_kind, served_media_type

pytestmark = pytest.mark.asyncio

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class TestHelpers:
    async def test_media_kind(self):
        assert media_kind("image/png") == "image"
        assert media_kind("video/mp4") == "video"
        assert media_kind("application/pdf") is None
        assert media_kind(None) is None

    async def test_scriptable_image_types_rejected(self):
        assert media_kind("image/svg+xml") is None
        assert media_kind("text/html") is None

    async def test_media_kind_ignores_parameters(self):
        assert media_kind("Image/PNG; name=me.png") == "image"

    async def test_file_extension_from_content_type(self):
        assert file_extension("image/jpeg") == "jpg"
        assert file_extension("video/quicktime") == "mov"

    async def test_served_media_type(self):
        assert served_media_type("user-1/1.png") == "image/png"
        assert served_media_type("user-1/1.mp4") == "video/mp4"
        assert served_media_type("user-1/1.html") == "application/octet-stream"


class TestUpload:
    async def test_path_layout(self, object_storage):
        stored = await object_storage.upload("avatars", "user-1", PNG, "image/png")

        assert stored.bucket == "avatars"
        assert re.fullmatch(r"user-1/\d+\.png", stored.path)
        assert stored.url == f"http://localhost/storage/avatars/{stored.path}"
        assert object_storage.locate("avatars", stored.path).read_bytes() == PNG

    async def test_same_millisecond_uploads_do_not_collide(self, object_storage):
        first = await object_storage.upload("message_images", "user-1", PNG, "image/png")
        second = await object_storage.upload("message_images", "user-1", PNG, "image/png")

        assert first.path != second.path

    async def test_video_accepted_for_messages(self, object_storage):
        stored = await object_storage.upload("message_images", "user-1", b"\x00" * 32, "video/mp4")
        assert stored.path.endswith(".mp4")

    async def test_video_rejected_for_avatars(self, object_storage):
        with pytest.raises(ValidationFailed, match="Unsupported file type"):
            await object_storage.upload("avatars", "user-1", b"\x00", "video/mp4")

    async def test_non_media_rejected(self, object_storage):
        with pytest.raises(ValidationFailed, match="Unsupported file type"):
            await object_storage.upload("message_images", "user-1", b"%PDF", "application/pdf")

    async def test_image_size_limit(self, tmp_path):
        storage = ObjectStorage(tmp_path, "http://localhost", max_image_bytes=10, max_video_bytes=100)

        with pytest.raises(ValidationFailed, match="File too large"):
            await storage.upload("avatars", "user-1", b"\x00" * 11, "image/png")

    async def test_video_uses_its_own_limit(self, tmp_path):
        storage = ObjectStorage(tmp_path, "http://localhost", max_image_bytes=10, max_video_bytes=100)

        stored = await storage.upload("message_images", "user-1", b"\x00" * 50, "video/mp4")
        assert stored.path.endswith(".mp4")


class TestResolve:
    async def test_unknown_bucket(self, object_storage):
        with pytest.raises(NotFound):
            object_storage.resolve("secrets")

    async def test_path_traversal_rejected(self, object_storage):
        with pytest.raises(NotFound):
            object_storage.resolve("avatars", "../message_images/user-1/a.png")

    async def test_missing_object(self, object_storage):
        with pytest.raises(NotFound):
            object_storage.locate("avatars", "user-1/missing.png")
