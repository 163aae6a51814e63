"""Tests for SettingsStore."""

import json

import pytest

from phoneorder.errors import (
    CorruptDataFileError,
    InvalidSchemaVersionError,
    InvalidSettingError,
    SettingsNotFoundError,
)
from phoneorder.models import AppSettings
from phoneorder.settings_store import SettingsStore, coerce_setting, get_data_dir


class TestSettingsStore:
    """Tests for SettingsStore class."""

    def test_load_defaults_when_missing(self, temp_dir):
        store = SettingsStore(temp_dir)
        settings = store.load()

        assert not store.exists()
        assert settings.default_shipping_fee == 880
        assert settings.free_shipping_threshold == 5000
        assert settings.early_price_deadline == "2025-11-28T23:59:59+09:00"

    def test_load_strict_raises_when_missing(self, temp_dir):
        store = SettingsStore(temp_dir)

        with pytest.raises(SettingsNotFoundError):
            store.load(strict=True)

    def test_save_and_load(self, temp_dir):
        store = SettingsStore(temp_dir)
        store.save(AppSettings(default_shipping_fee=990, free_shipping_threshold=8000))

        loaded = store.load(strict=True)
        assert loaded.default_shipping_fee == 990
        assert loaded.free_shipping_threshold == 8000
        assert loaded.updated_at

    def test_save_writes_schema_version(self, temp_dir):
        store = SettingsStore(temp_dir)
        store.save(AppSettings())

        data = json.loads(store.config_path.read_text())
        assert data["schema_version"] == 1
        assert data["settings"]["default_shipping_fee"] == 880

    def test_save_leaves_no_temp_files(self, temp_dir):
        store = SettingsStore(temp_dir)
        store.save(AppSettings())

        assert [p.name for p in temp_dir.iterdir()] == ["settings.json"]

    def test_unsupported_schema_version(self, temp_dir):
        (temp_dir / "settings.json").write_text(json.dumps({"schema_version": 99, "settings": {}}))

        with pytest.raises(InvalidSchemaVersionError):
            SettingsStore(temp_dir).load()

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_corrupt_file(self, temp_dir, content):
        (temp_dir / "settings.json").write_text(content)

        with pytest.raises(CorruptDataFileError, match="settings.json"):
            SettingsStore(temp_dir).load()

    def test_update_partial(self, temp_dir):
        store = SettingsStore(temp_dir)
        settings = store.update({"free_shipping_threshold": "10000"})

        assert settings.free_shipping_threshold == 10000
        assert settings.default_shipping_fee == 880
        assert store.load().free_shipping_threshold == 10000

    def test_update_ignores_unknown_keys(self, temp_dir):
        store = SettingsStore(temp_dir)
        settings = store.update({"default_shipping_fee": 1000, "theme": "dark"})

        assert settings.default_shipping_fee == 1000
        assert "theme" not in json.loads(store.config_path.read_text())["settings"]

    def test_update_rejects_bad_value_without_writing(self, temp_dir):
        store = SettingsStore(temp_dir)

        with pytest.raises(InvalidSettingError):
            store.update({"default_shipping_fee": 1000, "free_shipping_threshold": "lots"})
        assert not store.exists()

    def test_set_rejects_unknown_key(self, temp_dir):
        with pytest.raises(InvalidSettingError):
            SettingsStore(temp_dir).set("theme", "dark")

    def test_shipping_settings(self, temp_dir):
        store = SettingsStore(temp_dir)
        store.update({"default_shipping_fee": 700, "free_shipping_threshold": 3000})

        settings = store.load()
        assert settings.default_shipping_fee == 700
        assert settings.free_shipping_threshold == 3000

    def test_data_dir_from_environment(self, temp_dir, monkeypatch):
        monkeypatch.setenv("PHONEORDER_DATA_DIR", str(temp_dir))

        assert get_data_dir() == temp_dir
        assert SettingsStore().config_path == temp_dir / "settings.json"


class TestCoerceSetting:
    def test_integer_from_string(self):
        assert coerce_setting("default_shipping_fee", " 880 ") == 880

    @pytest.mark.parametrize("value", ["-1", -5, "abc", "8.5", True])
    def test_bad_integers(self, value):
        with pytest.raises(InvalidSettingError):
            coerce_setting("free_shipping_threshold", value)

    def test_zero_allowed(self):
        assert coerce_setting("free_shipping_threshold", 0) == 0

    def test_deadline(self):
        assert coerce_setting("early_price_deadline", "2026-01-31T23:59:59+09:00") == (
            "2026-01-31T23:59:59+09:00"
        )

    def test_bad_deadline(self):
        with pytest.raises(InvalidSettingError):
            coerce_setting("early_price_deadline", "end of november")
