"""
Console widget for the package log.

Module: console_widget
Purpose: Show grid regeneration, placement, zoom and export records as
    they happen, tagged with the area that logged them.

Key Functions:
- ConsoleWidget.append_log: Record one log entry and show it if visible
- ConsoleWidget.set_show_debug: Reveal or hide DEBUG entries (history included)
- color_for: Text colour for a level/source pair

Dependencies: PySide6, qtawesome (via MaterialIcons)
Used By: gui.main_window
"""
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Deque, List

from PySide6.QtWidgets import (
    QGroupBox, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QMenu, QApplication,
    QSizePolicy, QToolButton, QLabel
)
from PySide6.QtGui import QFont, QTextCursor, QColor, QTextCharFormat
from PySide6.QtCore import Qt, Signal, Slot

from cover_printer.gui.styles.theme import Colors, Fonts
from cover_printer.gui.utils.icons import MaterialIcons

MAX_ENTRIES = 1000

# INFO records from these areas get their own colour: exports finished
# and sheet changes (grid regenerated, image placed).
SOURCE_COLORS = {
    "output": Colors.SUCCESS,
    "sheet": Colors.PLACEHOLDER_ACTIVE,
}


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    source: str
    message: str

    @property
    def is_debug(self) -> bool:
        return self.level == "DEBUG"

    def render(self) -> str:
        return f"[{self.timestamp}] [{self.level}] {self.source}: {self.message}"


def color_for(level: str, source: str) -> str:
    level = level.upper()
    if level in ("ERROR", "CRITICAL"):
        return Colors.ERROR
    if level == "WARNING":
        return Colors.WARNING
    if level == "DEBUG":
        return Colors.TEXT_SECONDARY
    return SOURCE_COLORS.get(source, Colors.TEXT_PRIMARY)


class ConsoleWidget(QGroupBox):
    """Log console with a debug toggle. DEBUG entries are kept while hidden."""

    debugToggled = Signal(bool)

    def __init__(self, parent=None):
        super().__init__("Console Log", parent)

        self._entries: Deque[LogEntry] = deque(maxlen=MAX_ENTRIES)
        self._show_debug = False

        # Keep the title bar visible when the splitter collapses it
        self.setMinimumHeight(40)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = QHBoxLayout()
        header.setContentsMargins(8, 2, 8, 2)
        self.count_label = QLabel("")
        self.count_label.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
        header.addWidget(self.count_label)
        header.addStretch(1)

        self.debug_button = QToolButton()
        self.debug_button.setIcon(MaterialIcons.debug())
        self.debug_button.setText("Show debug")
        self.debug_button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        self.debug_button.setCheckable(True)
        self.debug_button.toggled.connect(self.set_show_debug)
        header.addWidget(self.debug_button)

        self.clear_button = QToolButton()
        self.clear_button.setIcon(MaterialIcons.delete())
        self.clear_button.setToolTip("Clear log")
        self.clear_button.clicked.connect(self.clear)
        header.addWidget(self.clear_button)
        layout.addLayout(header)

        self.text_edit = QPlainTextEdit()
        self.text_edit.setReadOnly(True)
        self.text_edit.setMaximumBlockCount(MAX_ENTRIES)
        self.text_edit.setStyleSheet(f"QPlainTextEdit {{ border: none; background-color: {Colors.SURFACE}; }}")

        font = QFont(Fonts.MONO_FONT.split(',')[0])
        font.setPointSize(int(Fonts.CONSOLE.replace("pt", "")))
        self.text_edit.setFont(font)
        layout.addWidget(self.text_edit)

        self._update_count()

    # ─── Entries ───

    @Slot(str, str, str)
    def append_log(self, level: str, message: str, source: str = "app"):
        entry = LogEntry(datetime.now().strftime("%H:%M:%S"), level.upper(), source, message)
        self._entries.append(entry)
        if self._is_visible(entry):
            self._insert(entry)
        self._update_count()

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def visible_entries(self) -> List[LogEntry]:
        return [e for e in self._entries if self._is_visible(e)]

    def plain_text(self) -> str:
        return self.text_edit.toPlainText()

    def clear(self):
        self._entries.clear()
        self.text_edit.clear()
        self._update_count()

    # ─── Debug toggle ───

    @property
    def show_debug(self) -> bool:
        return self._show_debug

    @Slot(bool)
    def set_show_debug(self, enabled: bool):
        if enabled == self._show_debug:
            return
        self._show_debug = enabled
        if self.debug_button.isChecked() != enabled:
            self.debug_button.setChecked(enabled)
        self._rebuild()
        self.debugToggled.emit(enabled)

    # ─── Rendering ───

    def _is_visible(self, entry: LogEntry) -> bool:
        return self._show_debug or not entry.is_debug

    def _insert(self, entry: LogEntry):
        fmt = QTextCharFormat()
        fmt.setForeground(QColor(color_for(entry.level, entry.source)))

        cursor = self.text_edit.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        if not self.text_edit.document().isEmpty():
            cursor.insertBlock()
        cursor.insertText(entry.render(), fmt)
        self.text_edit.setTextCursor(cursor)
        self.text_edit.ensureCursorVisible()

    def _rebuild(self):
        self.text_edit.clear()
        for entry in self.visible_entries():
            self._insert(entry)

    def _update_count(self):
        hidden = len(self._entries) - len(self.visible_entries())
        self.count_label.setText(f"{hidden} debug hidden" if hidden else "")

    def contextMenuEvent(self, event):
        menu = QMenu(self)
        copy_action = menu.addAction(MaterialIcons.content_copy(), "Copy All")
        debug_action = menu.addAction("Show debug")
        debug_action.setCheckable(True)
        debug_action.setChecked(self._show_debug)
        menu.addSeparator()
        clear_action = menu.addAction(MaterialIcons.delete(), "Clear")

        action = menu.exec(event.globalPos())

        if action == copy_action:
            QApplication.clipboard().setText(self.plain_text())
        elif action == debug_action:
            self.set_show_debug(debug_action.isChecked())
        elif action == clear_action:
            self.clear()
