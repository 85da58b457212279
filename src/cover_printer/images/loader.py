"""
Module: images.loader

Purpose:
    Decode raw image bytes or files into ImageRefs.

    A failed decode raises ImageDecodeError and produces no ImageRef;
    nothing here retries. Non-image files are filtered by extension
    before decoding so dropped documents are ignored quietly.

Key Functions:
    - decode_image(): Bytes -> ImageRef
    - load_image_file(): Path -> ImageRef
    - is_image_path(): Extension filter for drops and file dialogs

Key Classes:
    - ImageDecodeError: Exception for unreadable images

Dependencies:
    - PIL: Decoding, EXIF orientation

Used By:
    - gui.workers: Background decoding
    - gui.main_window: Open-file action
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from cover_printer.core.models import ImageRef

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp",
})

# Pillow modes drawn without conversion
_DISPLAY_MODES = ("RGB", "RGBA")


class ImageDecodeError(Exception):
    """Image bytes could not be decoded."""
    pass


def is_image_path(path: Union[str, Path]) -> bool:
    """Check if a path has a supported image extension."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def file_dialog_filter() -> str:
    """Name filter string for Qt file dialogs."""
    patterns = " ".join(f"*{ext}" for ext in sorted(IMAGE_EXTENSIONS))
    return f"Images ({patterns})"


def decode_image(data: bytes, source: Optional[str] = None) -> ImageRef:
    """
    Decode image bytes.

    Applies EXIF orientation so the natural size matches what the user
    sees, and converts palette/greyscale/CMYK images to RGB(A).

    Args:
        data: Encoded image bytes
        source: Origin for log messages (usually the file name)

    Returns:
        ImageRef whose handle is a fully loaded PIL image

    Raises:
        ImageDecodeError: If the bytes are not a readable image

    Example:
        >>> ref = decode_image(Path("photo.jpg").read_bytes(), "photo.jpg")
        >>> ref.natural_width, ref.natural_height
        (4000, 3000)
    """
    label = source or "<bytes>"
    if not data:
        raise ImageDecodeError(f"Empty image data: {label}")

    try:
        with Image.open(io.BytesIO(data)) as raw:
            raw.load()
            image = ImageOps.exif_transpose(raw)
            if image.mode not in _DISPLAY_MODES:
                has_alpha = "A" in image.getbands() or "transparency" in image.info
                image = image.convert("RGBA" if has_alpha else "RGB")
            elif image is raw:
                image = raw.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Not a readable image: {label}: {e}") from e
    except (OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode {label}: {e}") from e

    width, height = image.size
    try:
        ref = ImageRef(image, width, height, source=source)
    except ValueError as e:
        raise ImageDecodeError(f"Invalid image size for {label}: {e}") from e

    logger.debug(f"Decoded {label}: {width}x{height} {image.mode}")
    return ref


def load_image_file(path: Union[str, Path]) -> ImageRef:
    """
    Read and decode an image file.

    Raises:
        ImageDecodeError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageDecodeError(f"Cannot read {path}: {e}") from e
    return decode_image(data, source=path.name)
