"""
Image Intake

Reads screenshots into the data-URI payload the analysis client takes,
refusing files that are not images or are too large to send.
"""

import base64
import mimetypes
from pathlib import Path

from .errors import ImageRejected


MAX_IMAGE_BYTES = 10 * 1024 * 1024


def encode_image(data: bytes, mime_type: str = "image/png") -> str:
    """Wrap raw image bytes as a ``data:<mime>;base64,...`` string"""
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def load_image(path: Path) -> str:
    """
    Load an image file as a data URI.

    Args:
        path: Image file on disk

    Returns:
        Data URI with the file's MIME type

    Raises:
        ImageRejected: If the file is missing, not an image type, or larger
                       than 10 MiB
    """
    path = Path(path)
    if not path.is_file():
        raise ImageRejected(f"Image not found: {path}")

    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ImageRejected(f"Not an image file: {path.name}")

    size = path.stat().st_size
    if size > MAX_IMAGE_BYTES:
        raise ImageRejected(
            f"Image is {size / (1024 * 1024):.1f} MiB, the limit is 10 MiB: {path.name}"
        )

    return encode_image(path.read_bytes(), mime_type)
