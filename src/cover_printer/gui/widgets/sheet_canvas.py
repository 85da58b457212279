"""
Sheet canvas: draws the paper with its placeholders and turns mouse, wheel
and drop events into SheetController calls.

The paper is drawn 1:1 in canonical screen pixels and centred in the widget.
Drags keep following the pointer outside the widget: move and release
events are taken from an application-wide event filter that is installed
through a PointerSubscription when the canvas is built and removed when it
closes or is destroyed.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from PySide6.QtWidgets import QWidget, QMenu, QApplication, QSizePolicy
from PySide6.QtGui import QPainter, QPen, QColor, QImage, QPixmap, QBrush
from PySide6.QtCore import Qt, QObject, QEvent, QPointF, QRectF, QUrl, Signal

from cover_printer.core.models import ImageRef
from cover_printer.core.units import mm_to_screen_px
from cover_printer.gui.styles.theme import Colors
from cover_printer.gui.utils.icons import MaterialIcons
from cover_printer.images import is_image_path
from cover_printer.sheet import PointerSubscription, SheetController

logger = logging.getLogger(__name__)

PAGE_PADDING = 24


def image_paths_from_urls(urls: Iterable[QUrl]) -> List[str]:
    """Local image files among dropped URLs, in drop order."""
    paths = []
    for url in urls:
        if not url.isLocalFile():
            continue
        path = url.toLocalFile()
        if is_image_path(path):
            paths.append(path)
        else:
            logger.debug(f"Ignoring non-image drop: {path}")
    return paths


def pil_to_pixmap(image: ImageRef) -> QPixmap:
    """Convert a decoded image to a QPixmap for painting."""
    pil = image.handle
    if pil.mode != "RGBA":
        pil = pil.convert("RGBA")
    data = pil.tobytes("raw", "RGBA")
    qimage = QImage(data, pil.width, pil.height, pil.width * 4, QImage.Format.Format_RGBA8888)
    # QImage does not own `data`
    return QPixmap.fromImage(qimage.copy())


class GlobalPointerFilter(QObject):
    """
    Application event filter forwarding mouse moves and left releases to a
    PointerSubscription, in the canvas's page coordinates.
    """

    def __init__(self, canvas: "SheetCanvas"):
        super().__init__()
        self._canvas = canvas
        self._subscription: Optional[PointerSubscription] = None

    def install(self, subscription: PointerSubscription):
        """Attach to the running QApplication. Returns the detach callable."""
        self._subscription = subscription
        app = QApplication.instance()
        app.installEventFilter(self)

        def detach():
            app.removeEventFilter(self)
            self._subscription = None

        return detach

    def eventFilter(self, watched, event):
        subscription = self._subscription
        if subscription is None:
            return False
        kind = event.type()
        if kind == QEvent.Type.MouseMove:
            x, y = self._canvas.page_point_from_global(event.globalPosition())
            if subscription.dispatch_move(x, y):
                self._canvas.update()
        elif kind == QEvent.Type.MouseButtonRelease and event.button() == Qt.MouseButton.LeftButton:
            if subscription.dispatch_up():
                self._canvas.update()
                self._canvas.sheetChanged.emit()
        return False


class SheetCanvas(QWidget):
    """
    Interactive view of one SheetController.

    Signals:
        sheetChanged(): Images or transforms changed
        selectionChanged(int): Selected placeholder id (-1 for none)
        imagesDropped(int, list): Image paths dropped on a placeholder
        openRequested(int): Context menu asked to open an image
    """

    sheetChanged = Signal()
    selectionChanged = Signal(int)
    imagesDropped = Signal(int, list)
    openRequested = Signal(int)

    def __init__(self, controller: SheetController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self._selected: Optional[int] = None
        self._pixmaps: Dict[int, Tuple[ImageRef, QPixmap]] = {}

        self.setAcceptDrops(True)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        page_w, page_h = controller.page_size_px
        self.setMinimumSize(int(page_w) + PAGE_PADDING * 2, int(page_h) + PAGE_PADDING * 2)

        self._pointer_filter = GlobalPointerFilter(self)
        self.subscription = PointerSubscription.acquire(controller, self._pointer_filter.install)
        self.destroyed.connect(self.subscription.release)

    # ─────────────────────────────────────────────────────────────────────────
    # Coordinates
    # ─────────────────────────────────────────────────────────────────────────

    def page_origin(self) -> QPointF:
        """Widget position of the paper's top-left corner."""
        page_w, page_h = self.controller.page_size_px
        return QPointF(
            max(PAGE_PADDING, (self.width() - page_w) / 2),
            max(PAGE_PADDING, (self.height() - page_h) / 2),
        )

    def page_point(self, widget_pos: QPointF) -> Tuple[float, float]:
        origin = self.page_origin()
        return widget_pos.x() - origin.x(), widget_pos.y() - origin.y()

    def page_point_from_global(self, global_pos: QPointF) -> Tuple[float, float]:
        return self.page_point(QPointF(self.mapFromGlobal(global_pos.toPoint())))

    @property
    def selected_id(self) -> Optional[int]:
        if self._selected is not None and self._selected >= len(self.controller.placeholders):
            self._selected = None
        return self._selected

    def select(self, placeholder_id: Optional[int]) -> None:
        if placeholder_id == self._selected:
            return
        self._selected = placeholder_id
        self.selectionChanged.emit(-1 if placeholder_id is None else placeholder_id)
        self.update()

    def sheet_regenerated(self) -> None:
        """Refresh after the controller rebuilt its grid."""
        page_w, page_h = self.controller.page_size_px
        self.setMinimumSize(int(page_w) + PAGE_PADDING * 2, int(page_h) + PAGE_PADDING * 2)
        if self._selected is not None and self._selected >= len(self.controller.placeholders):
            self.select(None)
        self.update()

    # ─────────────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        x, y = self.page_point(event.position())
        self.select(self.controller.placeholder_at(x, y))
        if self.controller.pointer_down(x, y):
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        event.accept()

    def mouseReleaseEvent(self, event):
        # The drag itself is ended by the global filter
        self.unsetCursor()
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event):
        delta = event.angleDelta().y()
        if delta == 0:
            delta = event.angleDelta().x()
        x, y = self.page_point(event.position())
        if self.controller.wheel(x, y, delta):
            self.update()
            self.sheetChanged.emit()
            event.accept()
        else:
            event.ignore()

    def contextMenuEvent(self, event):
        x, y = self.page_point(QPointF(event.pos()))
        placeholder_id = self.controller.placeholder_at(x, y)
        if placeholder_id is None:
            return
        self.select(placeholder_id)
        filled = self.controller.placeholder(placeholder_id).is_filled

        menu = QMenu(self)
        open_action = menu.addAction(MaterialIcons.image_open(), "Open Image...")
        fit_action = menu.addAction(MaterialIcons.fit(), "Reset Fit")
        fit_action.setEnabled(filled)
        menu.addSeparator()
        clear_action = menu.addAction(MaterialIcons.delete(), "Clear")
        clear_action.setEnabled(filled)

        action = menu.exec(event.globalPos())
        if action == open_action:
            self.openRequested.emit(placeholder_id)
        elif action == fit_action:
            if self.controller.refit(placeholder_id):
                self.update()
                self.sheetChanged.emit()
        elif action == clear_action:
            if self.controller.clear_image(placeholder_id):
                self.update()
                self.sheetChanged.emit()

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls() and image_paths_from_urls(event.mimeData().urls()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        x, y = self.page_point(event.position())
        if self.controller.placeholder_at(x, y) is None:
            event.ignore()
        else:
            event.acceptProposedAction()

    def dropEvent(self, event):
        paths = image_paths_from_urls(event.mimeData().urls()) if event.mimeData().hasUrls() else []
        x, y = self.page_point(event.position())
        placeholder_id = self.controller.placeholder_at(x, y)
        if not paths or placeholder_id is None:
            event.ignore()
            return
        self.select(placeholder_id)
        self.imagesDropped.emit(placeholder_id, paths)
        event.acceptProposedAction()

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def shutdown(self) -> None:
        """Release the global pointer subscription."""
        self.subscription.release()
        self._pixmaps.clear()

    def closeEvent(self, event):
        self.shutdown()
        super().closeEvent(event)

    # ─────────────────────────────────────────────────────────────────────────
    # Painting
    # ─────────────────────────────────────────────────────────────────────────

    def _pixmap_for(self, image: ImageRef) -> QPixmap:
        cached = self._pixmaps.get(id(image))
        if cached is not None and cached[0] is image:
            return cached[1]
        pixmap = pil_to_pixmap(image)
        self._pixmaps[id(image)] = (image, pixmap)
        return pixmap

    def _prune_pixmaps(self) -> None:
        live = {id(ph.image) for ph in self.controller.placeholders if ph.image is not None}
        for key in list(self._pixmaps):
            if key not in live:
                del self._pixmaps[key]

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor(Colors.WORKSPACE))

        origin = self.page_origin()
        page_w, page_h = self.controller.page_size_px
        painter.translate(origin)

        painter.fillRect(QRectF(0, 0, page_w, page_h), QColor(Colors.PAPER))
        self._paint_margin_guide(painter, page_w, page_h)

        self._prune_pixmaps()
        drag_target = self.controller.drag.target_id
        for placeholder in self.controller.placeholders:
            x, y, w, h = self.controller.slot_rect_px(placeholder.id)
            rect = QRectF(x, y, w, h)
            image = placeholder.image
            if image is None:
                painter.fillRect(rect, QColor(Colors.PLACEHOLDER_FILL))
            else:
                transform = placeholder.transform
                scaled_w, scaled_h = transform.scaled_size(image)
                pixmap = self._pixmap_for(image)
                painter.save()
                painter.setClipRect(rect)
                painter.drawPixmap(
                    QRectF(x + transform.offset_x, y + transform.offset_y, scaled_w, scaled_h),
                    pixmap,
                    QRectF(pixmap.rect()),
                )
                painter.restore()

            active = placeholder.id in (drag_target, self.selected_id)
            pen = QPen(QColor(Colors.PLACEHOLDER_ACTIVE if active else Colors.PLACEHOLDER_OUTLINE))
            pen.setWidthF(2.0 if active else 1.0)
            pen.setCosmetic(True)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(rect)

        if self.controller.layout.is_empty:
            self._paint_warnings(painter, page_w, page_h)

        painter.end()

    def _paint_margin_guide(self, painter: QPainter, page_w: float, page_h: float) -> None:
        margin = mm_to_screen_px(self.controller.params.margin_mm)
        if margin <= 0 or 2 * margin >= min(page_w, page_h):
            return
        pen = QPen(QColor(Colors.MARGIN_GUIDE))
        pen.setStyle(Qt.PenStyle.DashLine)
        pen.setCosmetic(True)
        painter.setPen(pen)
        painter.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        painter.drawRect(QRectF(margin, margin, page_w - 2 * margin, page_h - 2 * margin))

    def _paint_warnings(self, painter: QPainter, page_w: float, page_h: float) -> None:
        text = "\n".join(self.controller.layout.warnings) or "No placeholders fit on this paper"
        painter.setPen(QColor(Colors.WARNING))
        painter.drawText(
            QRectF(8, 8, page_w - 16, page_h - 16),
            Qt.AlignmentFlag.AlignCenter | Qt.TextFlag.TextWordWrap,
            text,
        )
