"""
Avatar normalization: any accepted upload is resized to a square PNG.
"""
import asyncio
import io
import re

from PIL import Image, UnidentifiedImageError

from taskmanager.core.errors import ValidationError

ALLOWED_FILENAME = re.compile(r"\.(jpg|jpeg|png)$", re.IGNORECASE)


def check_upload(filename: str | None, size: int, max_bytes: int) -> None:
    """
    Validate an uploaded avatar before decoding it.

    Raises:
        ValidationError: Wrong extension or file too large
    """
    if not filename or not ALLOWED_FILENAME.search(filename):
        raise ValidationError("Please upload an image.", code="INVALID_IMAGE")
    if size > max_bytes:
        raise ValidationError("File too large", code="FILE_TOO_LARGE")


def resize_avatar(data: bytes, size: int) -> bytes:
    """Resize image bytes to size x size and encode as PNG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = img.convert("RGBA").resize((size, size))
            out = io.BytesIO()
            img.save(out, format="PNG")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ValidationError("Please upload an image.", code="INVALID_IMAGE") from exc
    return out.getvalue()


async def process_avatar(data: bytes, size: int) -> bytes:
    # CPU-bound: run off the event loop so other requests keep flowing
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, resize_avatar, data, size)
