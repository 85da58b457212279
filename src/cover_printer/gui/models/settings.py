"""
Settings persistence model for the GUI.

Stores user preferences (last paper, grid parameters, reconciliation
behaviour, window geometry). Placed images and their transforms are
never persisted. Any malformed data falls back to defaults.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal

from cover_printer.core.models import PAPER_SIZES, GridParameters
from cover_printer.sheet import ReconcilePolicy, SheetConfig

logger = logging.getLogger(__name__)

_DEFAULT_PARAMS = GridParameters()


class SettingsStore(QObject):
    """Lightweight JSON-backed store for persisting GUI preferences."""

    settingsChanged = Signal()
    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path
        self.data: Dict[str, object] = {}
        self._load_error: Optional[str] = None

        if self.path.exists():
            try:
                self.data = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                self._load_error = f"Settings file is corrupted:\n{e}"
                self.data = {}
            except OSError as e:
                self._load_error = f"Failed to read settings:\n{e}"
                self.data = {}

        if not isinstance(self.data, dict):
            self._load_error = "Settings file does not contain an object"
            self.data = {}

        if "version" not in self.data:
            self.data["version"] = self.CURRENT_VERSION

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    # ─────────────────────────────────────────────────────────────────────────
    # Sheet
    # ─────────────────────────────────────────────────────────────────────────

    def get_paper_index(self) -> int:
        sheet = self._section("sheet")
        index = self._safe_int(sheet.get("paper_index"), 0)
        if not 0 <= index < len(PAPER_SIZES):
            return 0
        return index

    def set_paper_index(self, index: int) -> None:
        self._section("sheet")["paper_index"] = int(index)
        self._save()

    def get_grid_parameters(self) -> GridParameters:
        sheet = self._section("sheet")
        return GridParameters(
            picture_width_mm=self._safe_float(sheet.get("picture_width_mm"), _DEFAULT_PARAMS.picture_width_mm),
            picture_height_mm=self._safe_float(sheet.get("picture_height_mm"), _DEFAULT_PARAMS.picture_height_mm),
            margin_mm=self._safe_float(sheet.get("margin_mm"), _DEFAULT_PARAMS.margin_mm),
            spacing_mm=self._safe_float(sheet.get("spacing_mm"), _DEFAULT_PARAMS.spacing_mm),
            allow_whitespace=bool(sheet.get("allow_whitespace", _DEFAULT_PARAMS.allow_whitespace)),
        )

    def set_grid_parameters(self, params: GridParameters) -> None:
        sheet = self._section("sheet")
        sheet["picture_width_mm"] = params.picture_width_mm
        sheet["picture_height_mm"] = params.picture_height_mm
        sheet["margin_mm"] = params.margin_mm
        sheet["spacing_mm"] = params.spacing_mm
        sheet["allow_whitespace"] = params.allow_whitespace
        self._save()

    def get_sheet_config(self) -> SheetConfig:
        behaviour = self._section("behaviour")
        try:
            policy = ReconcilePolicy(behaviour.get("reconcile_policy", ReconcilePolicy.RESET.value))
        except ValueError:
            logger.warning(f"Unknown reconcile policy {behaviour.get('reconcile_policy')!r}, using reset")
            policy = ReconcilePolicy.RESET
        return SheetConfig(
            reconcile_policy=policy,
            refit_on_change=bool(behaviour.get("refit_on_change", True)),
        )

    def set_sheet_config(self, config: SheetConfig) -> None:
        behaviour = self._section("behaviour")
        behaviour["reconcile_policy"] = config.reconcile_policy.value
        behaviour["refit_on_change"] = config.refit_on_change
        self._save()

    # ─────────────────────────────────────────────────────────────────────────
    # UI
    # ─────────────────────────────────────────────────────────────────────────

    def get_window_geometry(self) -> Optional[str]:
        """Hex-encoded QByteArray from saveGeometry(), if any."""
        geo = self._section("ui").get("window_geometry")
        return geo if isinstance(geo, str) else None

    def set_window_geometry(self, geometry: str) -> None:
        self._section("ui")["window_geometry"] = geometry
        self._save()

    def get_last_directory(self, kind: str) -> Optional[str]:
        """Last directory used for `kind` ("images" or "export")."""
        value = self._section("ui").get(f"last_{kind}_dir")
        return value if isinstance(value, str) else None

    def set_last_directory(self, kind: str, directory: str) -> None:
        self._section("ui")[f"last_{kind}_dir"] = directory
        self._save()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name)
        if not isinstance(section, dict):
            section = {}
            self.data[name] = section
        return section

    def _safe_int(self, value: Any, default: int) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _safe_float(self, value: Any, default: float) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _save(self) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            temp_path = self.path.with_suffix('.tmp')
            temp_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")

            # Atomic rename (overwrites existing)
            temp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")
            if temp_path:
                try:
                    if temp_path.exists():
                        temp_path.unlink()
                except OSError:
                    pass
            return
        self.settingsChanged.emit()
