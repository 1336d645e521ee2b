"""
Unit tests for services.avatar.
"""
import io

import pytest
from PIL import Image

from taskmanager.core.errors import ValidationError
from taskmanager.services.avatar import check_upload, process_avatar, resize_avatar


def _jpeg_bytes(width: int = 400, height: int = 300) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buf, format="JPEG")
    return buf.getvalue()


class TestCheckUpload:

    @pytest.mark.parametrize("name", ["me.jpg", "me.jpeg", "me.png", "ME.PNG"])
    def test_accepts_images(self, name):
        check_upload(name, 10, 1000)

    @pytest.mark.parametrize("name", ["me.gif", "me.pdf", "me.png.exe", "", None])
    def test_rejects_other_files(self, name):
        with pytest.raises(ValidationError, match="Please upload an image."):
            check_upload(name, 10, 1000)

    def test_rejects_large_files(self):
        with pytest.raises(ValidationError):
            check_upload("me.png", 1001, 1000)


class TestResize:

    def test_resizes_to_square_png(self):
        out = resize_avatar(_jpeg_bytes(), 250)
        with Image.open(io.BytesIO(out)) as img:
            assert img.format == "PNG"
            assert img.size == (250, 250)

    def test_rejects_non_image_bytes(self):
        with pytest.raises(ValidationError):
            resize_avatar(b"definitely not an image", 250)

    @pytest.mark.asyncio
    async def test_process_avatar_runs_off_loop(self):
        out = await process_avatar(_jpeg_bytes(50, 80), 32)
        with Image.open(io.BytesIO(out)) as img:
            assert img.size == (32, 32)

    def test_rejects_oversized_dimensions(self):
        # Small on disk, but far past Pillow's pixel limit once decoded
        buf = io.BytesIO()
        Image.new("1", (14000, 14000)).save(buf, format="PNG")
        data = buf.getvalue()
        check_upload("huge.png", len(data), 1_000_000)

        with pytest.raises(ValidationError) as exc_info:
            resize_avatar(data, 250)
        assert exc_info.value.code == "INVALID_IMAGE"
