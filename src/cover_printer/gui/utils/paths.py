"""
Path utilities for per-user application files.
"""
from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QStandardPaths

SETTINGS_FILENAME = "settings.json"

# Overrides the settings location (used by tests and portable installs)
SETTINGS_ENV_VAR = "COVER_PRINTER_SETTINGS"


def get_app_data_dir() -> Path:
    """
    Get the application data directory.

    ~/Library/Application Support/Cover Printer (macOS),
    %LOCALAPPDATA%/Cover Printer (Windows), ~/.local/share/Cover Printer (Linux)
    """
    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppLocalDataLocation
    )
    if not location:
        return Path.home() / ".cover_printer"
    return Path(location)


def get_settings_path() -> Path:
    """Path of the JSON settings file."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return get_app_data_dir() / SETTINGS_FILENAME


def get_pictures_dir() -> Path:
    """Default directory for image dialogs."""
    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.PicturesLocation
    )
    return Path(location) if location else Path.home()
