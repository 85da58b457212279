"""
Unit tests for GUI settings persistence.
"""
import json

import pytest

from cover_printer.core.models import GridParameters
from cover_printer.gui.models.settings import SettingsStore
from cover_printer.sheet import ReconcilePolicy, SheetConfig


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


class TestSettingsStore:
    def test_defaults_when_file_missing(self, settings_path):
        store = SettingsStore(settings_path)

        assert store.load_error is None
        assert store.get_paper_index() == 0
        assert store.get_grid_parameters() == GridParameters()
        assert store.get_sheet_config() == SheetConfig()

    def test_grid_parameters_round_trip(self, settings_path):
        params = GridParameters(30, 40, 5, 3, allow_whitespace=True)
        SettingsStore(settings_path).set_grid_parameters(params)

        assert SettingsStore(settings_path).get_grid_parameters() == params

    def test_sheet_config_round_trip(self, settings_path):
        config = SheetConfig(ReconcilePolicy.PRESERVE_BY_INDEX, refit_on_change=False)
        SettingsStore(settings_path).set_sheet_config(config)

        assert SettingsStore(settings_path).get_sheet_config() == config

    def test_paper_index_out_of_range_falls_back(self, settings_path):
        settings_path.write_text(json.dumps({"sheet": {"paper_index": 7}}))
        assert SettingsStore(settings_path).get_paper_index() == 0

    def test_corrupted_file_reports_error_and_uses_defaults(self, settings_path):
        settings_path.write_text("{not json")
        store = SettingsStore(settings_path)

        assert store.load_error is not None
        assert store.get_grid_parameters() == GridParameters()

    def test_unknown_policy_falls_back_to_reset(self, settings_path):
        settings_path.write_text(json.dumps({"behaviour": {"reconcile_policy": "merge"}}))
        assert SettingsStore(settings_path).get_sheet_config().reconcile_policy is ReconcilePolicy.RESET

    def test_save_emits_settings_changed(self, settings_path, qtbot):
        store = SettingsStore(settings_path)
        with qtbot.waitSignal(store.settingsChanged, timeout=1000):
            store.set_last_directory("images", "/tmp/pictures")

        assert SettingsStore(settings_path).get_last_directory("images") == "/tmp/pictures"
        assert not settings_path.with_suffix(".tmp").exists()
