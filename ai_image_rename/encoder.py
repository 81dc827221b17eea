"""Image encoding for transport to the description service."""

import asyncio
import base64
from pathlib import Path

from .core import EncodedImage, ReadError


def media_type_for(path: Path) -> str:
    """Return the image media type derived from the file extension."""
    extension = path.suffix.lower().lstrip(".")
    if extension == "jpg":
        extension = "jpeg"
    return f"image/{extension}"


def encode_image(path: Path) -> EncodedImage:
    """Read the whole file and base64-encode it.

    Raises ReadError if the file cannot be read, e.g. it was removed or
    its permissions changed after validation.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ReadError(f"Cannot read {path}: {e}") from e

    return EncodedImage(
        media_type=media_type_for(path),
        data=base64.b64encode(raw).decode("ascii"),
    )


async def encode_image_async(path: Path) -> EncodedImage:
    """Encode an image without blocking the event loop."""
    return await asyncio.to_thread(encode_image, path)
