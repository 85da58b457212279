"""
Main Window for the Cover Printer GUI.
"""
import logging
import queue
from pathlib import Path
from typing import List, Optional, Set

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QSplitter, QScrollArea,
    QStatusBar, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QAction, QKeySequence

from cover_printer import __version__
from cover_printer.core.models import PAPER_SIZES, GridParameters, ImageRef, PaperSize
from cover_printer.gui.models.settings import SettingsStore
from cover_printer.gui.styles.theme import Colors
from cover_printer.gui.utils.icons import MaterialIcons
from cover_printer.gui.utils.logging_utils import PACKAGE_LOGGER, attach_queue_handler, detach_queue_handler
from cover_printer.gui.utils.paths import get_pictures_dir, get_settings_path
from cover_printer.gui.widgets.console_widget import ConsoleWidget
from cover_printer.gui.widgets.parameter_panel import ParameterPanel
from cover_printer.gui.widgets.sheet_canvas import SheetCanvas
from cover_printer.gui.workers import ImageLoadWorker
from cover_printer.images import file_dialog_filter
from cover_printer.output import ExportError, render_sheet_to_pdf, save_sheet_image
from cover_printer.sheet import SheetController

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[SettingsStore] = None):
        super().__init__()

        self.setWindowTitle("Cover Printer")
        self.resize(1100, 800)

        self.settings = settings if settings is not None else SettingsStore(get_settings_path())
        self._workers: Set[ImageLoadWorker] = set()

        # Initialize Logging
        self.log_queue = queue.Queue()
        self.log_handler = attach_queue_handler(self.log_queue)
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

        # --- Sheet ---
        paper_index = self.settings.get_paper_index()
        params = self.settings.get_grid_parameters()
        self.controller = SheetController(
            paper=PAPER_SIZES[paper_index],
            params=params,
            config=self.settings.get_sheet_config(),
        )

        # --- Menu Bar ---
        self._build_menus()

        # --- Central Widget ---
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.splitter = QSplitter(Qt.Orientation.Vertical)
        self.splitter.setChildrenCollapsible(False)

        top = QWidget()
        top_layout = QHBoxLayout(top)
        top_layout.setContentsMargins(12, 12, 12, 12)

        self.parameter_panel = ParameterPanel(params, paper_index)
        self.parameter_panel.setFixedWidth(260)
        self.parameter_panel.paperChanged.connect(self._on_paper_changed)
        self.parameter_panel.parametersChanged.connect(self._on_parameters_changed)
        top_layout.addWidget(self.parameter_panel, alignment=Qt.AlignmentFlag.AlignTop)

        self.canvas = SheetCanvas(self.controller)
        self.canvas.sheetChanged.connect(self._update_status)
        self.canvas.sheetChanged.connect(self._refresh_actions)
        self.canvas.selectionChanged.connect(self._on_selection_changed)
        self.canvas.imagesDropped.connect(self._on_images_dropped)
        self.canvas.openRequested.connect(self._open_image_into)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.canvas)
        top_layout.addWidget(scroll, stretch=1)

        self.console = ConsoleWidget()
        self.console.debugToggled.connect(self._on_debug_toggled)

        self.splitter.addWidget(top)
        self.splitter.addWidget(self.console)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 0)
        self.splitter.setSizes([99999, 120])
        main_layout.addWidget(self.splitter)

        # --- Status Bar ---
        self.status_bar = QStatusBar()
        self.status_bar.setStyleSheet(f"background-color: {Colors.SURFACE}; color: {Colors.TEXT_SECONDARY};")
        self.setStatusBar(self.status_bar)

        geometry = self.settings.get_window_geometry()
        if geometry:
            try:
                self.restoreGeometry(bytes.fromhex(geometry))
            except ValueError:
                logger.debug("Ignoring malformed window geometry")

        self._on_selection_changed(-1)
        self._update_status()
        logger.info(f"Cover Printer {__version__} ready")

    def _build_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction(MaterialIcons.image_open(), "Open Image...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_action.triggered.connect(self._open_image)
        file_menu.addAction(self.open_action)

        file_menu.addSeparator()

        self.export_pdf_action = QAction(MaterialIcons.file_pdf(), "Export PDF...", self)
        self.export_pdf_action.setShortcut(QKeySequence("Ctrl+E"))
        self.export_pdf_action.triggered.connect(self._export_pdf)
        file_menu.addAction(self.export_pdf_action)

        self.export_png_action = QAction(MaterialIcons.file_image(), "Export PNG...", self)
        self.export_png_action.triggered.connect(self._export_png)
        file_menu.addAction(self.export_png_action)

        file_menu.addSeparator()

        exit_action = QAction("Quit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = self.menuBar().addMenu("Edit")

        self.refit_action = QAction(MaterialIcons.fit(), "Reset Fit", self)
        self.refit_action.triggered.connect(self._refit_selected)
        edit_menu.addAction(self.refit_action)

        self.clear_action = QAction(MaterialIcons.delete(), "Clear Images", self)
        self.clear_action.triggered.connect(self._clear_images)
        edit_menu.addAction(self.clear_action)

        settings_menu = self.menuBar().addMenu("Settings")

        self.outlines_action = QAction("Cut Guides in PDF", self)
        self.outlines_action.setCheckable(True)
        settings_menu.addAction(self.outlines_action)

        help_menu = self.menuBar().addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    # ─────────────────────────────────────────────────────────────────────────
    # Parameters
    # ─────────────────────────────────────────────────────────────────────────

    @Slot(object)
    def _on_paper_changed(self, paper: PaperSize):
        if self.controller.set_paper(paper):
            self.settings.set_paper_index(PAPER_SIZES.index(paper))
            self.canvas.sheet_regenerated()
            self._refresh_actions()
            self._update_status()

    @Slot(object)
    def _on_parameters_changed(self, params: GridParameters):
        if self.controller.set_parameters(params):
            self.settings.set_grid_parameters(params)
            self.canvas.sheet_regenerated()
            self._refresh_actions()
            self._update_status()

    # ─────────────────────────────────────────────────────────────────────────
    # Images
    # ─────────────────────────────────────────────────────────────────────────

    def _refresh_actions(self):
        selected = self.canvas.selected_id
        self._on_selection_changed(-1 if selected is None else selected)

    @Slot(int)
    def _on_selection_changed(self, placeholder_id: int):
        has_selection = placeholder_id >= 0
        self.open_action.setEnabled(has_selection)
        self.refit_action.setEnabled(
            has_selection and self.controller.placeholder(placeholder_id).is_filled
        )

    def _open_image(self):
        placeholder_id = self.canvas.selected_id
        if placeholder_id is None:
            self.status_bar.showMessage("Select a placeholder first", 3000)
            return
        self._open_image_into(placeholder_id)

    @Slot(int)
    def _open_image_into(self, placeholder_id: int):
        start_dir = self.settings.get_last_directory("images") or str(get_pictures_dir())
        filename, _ = QFileDialog.getOpenFileName(self, "Open Image", start_dir, file_dialog_filter())
        if not filename:
            return
        self.settings.set_last_directory("images", str(Path(filename).parent))
        self._load_images(placeholder_id, [filename])

    @Slot(int, list)
    def _on_images_dropped(self, placeholder_id: int, paths: List[str]):
        self._load_images(placeholder_id, paths)

    def _drop_targets(self, placeholder_id: int, count: int) -> List[int]:
        """placeholder_id, then the next empty placeholders in grid order, up to count ids."""
        targets = [placeholder_id]
        for placeholder in self.controller.placeholders:
            if len(targets) >= count:
                break
            if placeholder.id > placeholder_id and not placeholder.is_filled:
                targets.append(placeholder.id)
        return targets

    def _load_images(self, placeholder_id: int, paths: List[str]):
        """
        Decode files in the background.

        The first path goes to placeholder_id, further paths to the next
        empty placeholders in grid order. Extra files are skipped.
        """
        targets = self._drop_targets(placeholder_id, len(paths))
        if len(paths) > len(targets):
            logger.warning(f"No empty placeholder for {len(paths) - len(targets)} dropped image(s)")

        for target, path in zip(targets, paths):
            worker = ImageLoadWorker(target, Path(path), self)
            worker.loaded.connect(self._on_image_loaded)
            worker.failed.connect(self._on_image_failed)
            worker.finished.connect(lambda w=worker: self._on_worker_finished(w))
            self._workers.add(worker)
            worker.start()

    @Slot(int, object)
    def _on_image_loaded(self, placeholder_id: int, image: ImageRef):
        if self.controller.assign_image(placeholder_id, image):
            self.canvas.update()
            self._refresh_actions()
            self._update_status()

    @Slot(int, str)
    def _on_image_failed(self, placeholder_id: int, message: str):
        logger.error(message)
        QMessageBox.warning(self, "Could not open image", message)

    def _on_worker_finished(self, worker: ImageLoadWorker):
        self._workers.discard(worker)
        worker.deleteLater()

    def _refit_selected(self):
        placeholder_id = self.canvas.selected_id
        if placeholder_id is not None and self.controller.refit(placeholder_id):
            self.canvas.update()

    def _clear_images(self):
        removed = self.controller.clear_all()
        if removed:
            logger.info(f"Cleared {removed} image(s)")
        self.canvas.update()
        self._refresh_actions()
        self._update_status()

    # ─────────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────────

    def _ask_export_path(self, title: str, suffix: str, file_filter: str) -> Optional[Path]:
        start_dir = self.settings.get_last_directory("export") or str(Path.home())
        default = str(Path(start_dir) / f"covers_{self.controller.paper.width_cm:g}x{self.controller.paper.height_cm:g}{suffix}")
        filename, _ = QFileDialog.getSaveFileName(self, title, default, file_filter)
        if not filename:
            return None
        path = Path(filename)
        if not path.suffix:
            path = path.with_suffix(suffix)
        self.settings.set_last_directory("export", str(path.parent))
        return path

    def _export_pdf(self):
        path = self._ask_export_path("Export PDF", ".pdf", "PDF Files (*.pdf)")
        if path is None:
            return
        try:
            render_sheet_to_pdf(self.controller, path, draw_outlines=self.outlines_action.isChecked())
        except ExportError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Export failed", str(e))
            return
        self.status_bar.showMessage(f"Exported {path.name}", 5000)

    def _export_png(self):
        path = self._ask_export_path("Export PNG", ".png", "PNG Images (*.png)")
        if path is None:
            return
        try:
            save_sheet_image(self.controller, path)
        except ExportError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Export failed", str(e))
            return
        self.status_bar.showMessage(f"Exported {path.name}", 5000)

    # ─────────────────────────────────────────────────────────────────────────
    # Misc
    # ─────────────────────────────────────────────────────────────────────────

    def _update_status(self):
        summary = self.controller.summary()
        if summary["warnings"]:
            text = "; ".join(summary["warnings"])
        else:
            text = (
                f"{summary['paper']}: {summary['columns']} x {summary['rows']} placeholders, "
                f"{summary['filled']} filled"
            )
        self.status_bar.showMessage(text)

    def _drain_log_queue(self):
        while True:
            try:
                msg = self.log_queue.get_nowait()
                if isinstance(msg, tuple) and len(msg) == 3:
                    text, level, source = msg
                    self.console.append_log(level, text, source)
                else:
                    self.console.append_log("INFO", str(msg))
                self.log_queue.task_done()
            except queue.Empty:
                break

    @Slot(bool)
    def _on_debug_toggled(self, enabled: bool):
        package = logging.getLogger(PACKAGE_LOGGER)
        if enabled and package.getEffectiveLevel() > logging.DEBUG:
            package.setLevel(logging.DEBUG)

    def _show_about(self):
        QMessageBox.about(
            self,
            "About Cover Printer",
            f"Cover Printer {__version__}\n\n"
            "Lay out pictures on 10×15 and 13×18 cm photo paper and export "
            "them at print resolution.",
        )

    def closeEvent(self, event):
        """Save UI state on close."""
        self.canvas.shutdown()
        for worker in list(self._workers):
            worker.wait()
        self.log_timer.stop()
        detach_queue_handler(self.log_handler)
        self.settings.set_window_geometry(self.saveGeometry().toHex().data().decode())
        super().closeEvent(event)
