"""
Tests for images.loader

Test Coverage:
- Decoding files and bytes into ImageRefs
- Mode normalisation and EXIF orientation
- Rejection of non-images
"""
import io

import pytest
from PIL import Image

from cover_printer.images import (
    ImageDecodeError,
    decode_image,
    file_dialog_filter,
    is_image_path,
    load_image_file,
)


def _encode(image: Image.Image, fmt: str = "PNG", **kwargs) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


class TestLoadImageFile:
    def test_loads_natural_size(self, sample_image):
        ref = load_image_file(sample_image)

        assert (ref.natural_width, ref.natural_height) == (200, 100)
        assert ref.source == "sample.png"
        assert ref.handle.size == (200, 100)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            load_image_file(tmp_path / "missing.png")

    def test_text_file_raises(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        with pytest.raises(ImageDecodeError):
            load_image_file(path)


class TestDecodeImage:
    def test_empty_bytes_raise(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"")

    def test_palette_image_converted_to_rgb(self):
        ref = decode_image(_encode(Image.new("P", (8, 4))))
        assert ref.handle.mode == "RGB"

    def test_greyscale_alpha_keeps_alpha(self):
        ref = decode_image(_encode(Image.new("LA", (8, 4))))
        assert ref.handle.mode == "RGBA"

    def test_exif_orientation_swaps_natural_size(self):
        """Orientation 6 (rotate 90° CW) turns a 40x20 JPEG into 20x40."""
        image = Image.new("RGB", (40, 20), "blue")
        exif = Image.Exif()
        exif[0x0112] = 6
        ref = decode_image(_encode(image, "JPEG", exif=exif.tobytes()))

        assert (ref.natural_width, ref.natural_height) == (20, 40)


@pytest.mark.parametrize(
    "name, expected",
    [("photo.JPG", True), ("scan.tiff", True), ("a.webp", True), ("doc.pdf", False), ("README", False)],
)
def test_is_image_path(name, expected):
    assert is_image_path(name) is expected


def test_file_dialog_filter_lists_extensions():
    text = file_dialog_filter()
    assert text.startswith("Images (")
    assert "*.png" in text and "*.jpeg" in text
