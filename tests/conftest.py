import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import cover_printer
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

# GUI tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from cover_printer.core.models import ImageRef  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_image_ref():
    """Factory for ImageRefs backed by solid-colour PIL images."""
    def _create(width: int = 100, height: int = 200, color="red", mode: str = "RGB", source=None):
        image = Image.new(mode, (width, height), color=color)
        return ImageRef(handle=image, natural_width=width, natural_height=height, source=source)
    return _create


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
