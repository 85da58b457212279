"""
Entry point for the PySide6 GUI.
"""
import logging
import sys


def run():
    """
    Main entry point for the GUI application.
    """
    from PySide6.QtWidgets import QApplication, QMessageBox
    from cover_printer.gui.main_window import MainWindow
    from cover_printer.gui.models.settings import SettingsStore
    from cover_printer.gui.styles.theme import apply_global_stylesheet
    from cover_printer.gui.utils.logging_utils import configure_logging
    from cover_printer.gui.utils.paths import get_settings_path

    configure_logging(logging.DEBUG if "--debug" in sys.argv else logging.INFO)

    app = QApplication(sys.argv)
    app.setApplicationName("Cover Printer")
    app.setApplicationDisplayName("Cover Printer")
    app.setOrganizationName("Cover Printer")

    apply_global_stylesheet(app)

    settings = SettingsStore(get_settings_path())
    if settings.load_error:
        # Defaults are used; the bad file is overwritten on the next save
        QMessageBox.warning(None, "Settings reset", f"{settings.load_error}\n\nDefaults will be used.")

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
