"""Application settings storage for phoneorder."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .errors import (
    CorruptDataFileError,
    InvalidSchemaVersionError,
    InvalidSettingError,
    SettingsNotFoundError,
)
from .models import AppSettings, _utc_now
from .pricing import parse_deadline

logger = logging.getLogger("phoneorder")

SCHEMA_VERSION = 1

# Can be overridden via PHONEORDER_DATA_DIR environment variable
_default_data_dir = Path(__file__).parent.parent.parent / "data"
SETTINGS_FILE = "settings.json"

INTEGER_KEYS = ("default_shipping_fee", "free_shipping_threshold")
ALLOWED_KEYS = INTEGER_KEYS + ("early_price_deadline",)


def get_data_dir() -> Path:
    """Return the data directory, honouring PHONEORDER_DATA_DIR."""
    return Path(os.environ.get("PHONEORDER_DATA_DIR", _default_data_dir))


def coerce_setting(key: str, value: Any) -> Any:
    """
    Validate a single setting value and convert it to its stored type.

    Values arrive as strings from the CLI and as JSON scalars from the API.

    Raises:
        InvalidSettingError: If the key is unknown or the value is unusable.
    """
    if key not in ALLOWED_KEYS:
        raise InvalidSettingError(key, value, f"unknown key, expected one of {', '.join(ALLOWED_KEYS)}")

    if key in INTEGER_KEYS:
        if isinstance(value, bool):
            raise InvalidSettingError(key, value, "expected an integer")
        try:
            number = int(str(value).strip())
        except ValueError:
            raise InvalidSettingError(key, value, "expected an integer") from None
        if number < 0:
            raise InvalidSettingError(key, value, "must be zero or greater")
        return number

    text = str(value).strip()
    parse_deadline(text)
    return text


class SettingsStore:
    """Manages reading and writing the application settings."""

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize SettingsStore.

        Args:
            config_dir: Override data directory (for testing).
        """
        self.config_dir = config_dir or get_data_dir()
        self.config_path = self.config_dir / SETTINGS_FILE

    def exists(self) -> bool:
        """Check if settings file exists."""
        return self.config_path.exists()

    def load(self, strict: bool = False) -> AppSettings:
        """
        Load settings from disk.

        Missing keys fall back to their defaults, and so does a missing file
        unless ``strict`` is set.

        Raises:
            SettingsNotFoundError: If strict and the file doesn't exist.
            InvalidSchemaVersionError: If schema version is unsupported.
            CorruptDataFileError: If the file is not a JSON object.
        """
        if not self.exists():
            if strict:
                raise SettingsNotFoundError(str(self.config_path))
            return AppSettings()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptDataFileError(str(self.config_path), f"not valid JSON ({e.msg})") from None
        if not isinstance(data, dict):
            raise CorruptDataFileError(str(self.config_path), "expected a JSON object")

        version = data.get("schema_version", 0)
        if version != SCHEMA_VERSION:
            raise InvalidSchemaVersionError(version, SCHEMA_VERSION)

        return AppSettings.from_dict(data.get("settings", {}))

    def save(self, settings: AppSettings) -> None:
        """
        Save settings to disk atomically.

        Uses write-to-temp-then-rename for atomicity.
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        settings.updated_at = _utc_now()

        data = {"schema_version": SCHEMA_VERSION, "settings": settings.to_dict()}
        fd, temp_path = tempfile.mkstemp(
            dir=self.config_dir, prefix=".settings_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.write("\n")
            os.replace(temp_path, self.config_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        logger.info("Saved settings to %s", self.config_path)

    def update(self, values: dict[str, Any]) -> AppSettings:
        """
        Apply a partial update and save.

        Keys outside ALLOWED_KEYS are ignored. Every value is validated before
        anything is written.

        Raises:
            InvalidSettingError: If a value is rejected.
        """
        changes = {
            key: coerce_setting(key, value)
            for key, value in values.items()
            if key in ALLOWED_KEYS
        }
        ignored = sorted(set(values) - set(ALLOWED_KEYS))
        if ignored:
            logger.debug("Ignoring unknown settings keys: %s", ", ".join(ignored))

        settings = self.load()
        for key, value in changes.items():
            setattr(settings, key, value)
        self.save(settings)
        return settings

    def set(self, key: str, value: Any) -> AppSettings:
        """
        Set a single key.

        Unlike update(), an unknown key is an error.

        Raises:
            InvalidSettingError: If the key or value is rejected.
        """
        coerce_setting(key, value)
        return self.update({key: value})
