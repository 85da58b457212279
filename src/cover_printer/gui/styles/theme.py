"""
Theme definitions for the Cover Printer GUI.
"""


class Colors:
    # Backgrounds
    BACKGROUND = "#f5f5f5"
    SURFACE = "#ffffff"
    WORKSPACE = "#d9d9d9"  # Around the paper
    PAPER = "#ffffff"

    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"

    # Borders & Dividers
    BORDER = "#e0e0e0"
    BORDER_FOCUS = "#28A8EA"

    # Placeholders
    PLACEHOLDER_FILL = "#f0f4f8"
    PLACEHOLDER_OUTLINE = "#9aa5b1"
    PLACEHOLDER_ACTIVE = "#28A8EA"  # Dragged or hovered
    MARGIN_GUIDE = "#c8d6e5"

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"
    WARNING = "#f57c00"


class Fonts:
    # Font Families
    UI_FONT = "-apple-system, 'SF Pro Text', 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"
    MONO_FONT = "Consolas, Monaco, Menlo, 'Courier New', monospace"

    # Sizes
    BODY = "13pt"
    CONSOLE = "11pt"


GLOBAL_STYLESHEET = f"""
QMainWindow {{
    background-color: {Colors.BACKGROUND};
}}
QGroupBox {{
    background-color: {Colors.SURFACE};
    border: 1px solid {Colors.BORDER};
    border-radius: 4px;
    margin-top: 20px;
    padding: 8px;
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    left: 8px;
    padding: 0 4px;
    color: {Colors.TEXT_PRIMARY};
}}
QDoubleSpinBox:focus, QComboBox:focus {{
    border: 1px solid {Colors.BORDER_FOCUS};
}}
QStatusBar {{
    color: {Colors.TEXT_SECONDARY};
}}
"""


def apply_global_stylesheet(app) -> None:
    """
    Apply the shared stylesheet and default font to the QApplication.
    """
    from PySide6.QtGui import QFont

    font = QFont()
    font.setFamily(Fonts.UI_FONT.split(",")[0].strip(" '\""))
    try:
        font.setPointSize(int(Fonts.BODY.replace("pt", "")))
    except ValueError:
        pass
    app.setFont(font)

    app.setStyleSheet(GLOBAL_STYLESHEET)
