"""
Background workers for the GUI.
"""
from pathlib import Path

from PySide6.QtCore import QThread, Signal

from cover_printer.images import ImageDecodeError, load_image_file


class ImageLoadWorker(QThread):
    """
    Decode one image file off the UI thread.

    Signals:
        loaded(int, object): Placeholder id and the decoded ImageRef
        failed(int, str): Placeholder id and the error message
    """

    loaded = Signal(int, object)
    failed = Signal(int, str)

    def __init__(self, placeholder_id: int, path: Path, parent=None):
        super().__init__(parent)
        self.placeholder_id = placeholder_id
        self.path = Path(path)

    def run(self):
        try:
            image = load_image_file(self.path)
        except ImageDecodeError as e:
            self.failed.emit(self.placeholder_id, str(e))
            return
        self.loaded.emit(self.placeholder_id, image)
