"""
Module: images

Purpose:
    Turn files and raw bytes into ImageRefs for placeholders.

Key Functions:
    - decode_image(), load_image_file(), is_image_path()

Key Classes:
    - ImageDecodeError

Dependencies:
    - PIL: Image decoding

Used By:
    - gui: Drag-and-drop and file dialogs
"""

from .loader import (
    IMAGE_EXTENSIONS,
    ImageDecodeError,
    decode_image,
    file_dialog_filter,
    is_image_path,
    load_image_file,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "ImageDecodeError",
    "decode_image",
    "file_dialog_filter",
    "is_image_path",
    "load_image_file",
]
