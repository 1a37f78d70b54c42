"""User settings with JSON persistence.

Settings live in ``~/.typist/settings.json`` (or ``$TYPIST_DIR``).
Command-line overrides sit on top of the file for one run and are never
written back.  Saves re-read the file first and write only the fields
changed in this process, so edits made elsewhere are preserved.
"""

from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any

from typist.trainer.core.config import (
    DEFAULT_TEST_MODE,
    Config,
    Difficulty,
    TestMode,
    mode_from_dict,
    mode_to_dict,
)
from typist.trainer.core.themes import DEFAULT_THEME, THEMES

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".typist"
SETTINGS_FILE_NAME = "settings.json"


def _settings_defaults() -> dict[str, Any]:
    """Default settings values."""
    return {
        "testMode": mode_to_dict(DEFAULT_TEST_MODE),
        "difficulty": Difficulty.MEDIUM.value,
        "repeatTest": False,
        "endOnFirstError": False,
        "theme": DEFAULT_THEME,
        "customText": None,
        "customWords": None,
    }


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- SettingsManager ---


class SettingsManager:
    """Manages user settings with JSON file persistence.

    Use factory methods (create, in_memory) instead of calling constructor directly.
    """

    def __init__(
        self,
        *,
        settings_path: str | None,
        initial_settings: dict[str, Any],
        persist: bool = True,
        load_error: Exception | None = None,
    ) -> None:
        self._settings_path = settings_path
        self._file_settings = dict(initial_settings)
        self._overrides: dict[str, Any] = {}
        self._persist = persist
        self._load_error = load_error
        self._modified_fields: set[str] = set()
        self._settings = self._merged()

    # --- Factory methods ---

    @classmethod
    def create(cls, config_dir: str | None = None) -> SettingsManager:
        """Create a settings manager backed by ``<config_dir>/settings.json``."""
        cdir = config_dir or default_config_dir()
        settings_path = os.path.join(cdir, SETTINGS_FILE_NAME)
        settings, error = _load_from_file(settings_path)
        if error is not None:
            logger.error("could not read %s (%s); using defaults", settings_path, error)
        return cls(
            settings_path=settings_path,
            initial_settings=settings,
            persist=True,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create an in-memory settings manager for testing."""
        return cls(
            settings_path=None,
            initial_settings=settings or {},
            persist=False,
        )

    # --- Core operations ---

    def _merged(self) -> dict[str, Any]:
        merged = deep_merge_settings(_settings_defaults(), self._file_settings)
        return deep_merge_settings(merged, self._overrides)

    def reload(self) -> None:
        """Reload settings from disk."""
        if self._settings_path:
            self._file_settings, self._load_error = _load_from_file(self._settings_path)
        self._modified_fields.clear()
        self._settings = self._merged()

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply run-only overrides on top of the file settings."""
        self._overrides = deep_merge_settings(self._overrides, overrides)
        self._settings = self._merged()

    @property
    def settings(self) -> dict[str, Any]:
        """Current merged settings (read-only view)."""
        return self._settings

    @property
    def settings_path(self) -> str | None:
        return self._settings_path

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    def get_file_settings(self) -> dict[str, Any]:
        """Get a deep copy of the settings as loaded from the file."""
        return deepcopy(self._file_settings)

    # --- Modification tracking ---

    def _set(self, field_name: str, value: Any) -> None:
        self._file_settings[field_name] = value
        # An explicit change replaces any override of the same field
        self._overrides.pop(field_name, None)
        self._modified_fields.add(field_name)
        self._save()

    # --- Persistence ---

    def _save(self) -> None:
        """Write only modified fields to the settings file, preserving external changes."""
        if self._persist and self._settings_path:
            # Don't overwrite corrupted files
            if self._load_error:
                logger.warning("not saving settings: %s could not be read", self._settings_path)
            else:
                # Re-read to capture external changes
                current_file, _ = _load_from_file(self._settings_path)
                merged: dict[str, Any] = dict(current_file)
                for field_name in self._modified_fields:
                    merged[field_name] = self._file_settings.get(field_name)

                # Remove None values at top level
                merged = {k: v for k, v in merged.items() if v is not None}

                try:
                    os.makedirs(os.path.dirname(self._settings_path), exist_ok=True)
                    Path(self._settings_path).write_text(
                        json.dumps(merged, indent=2, ensure_ascii=False) + "\n",
                        encoding="utf-8",
                    )
                except OSError as e:
                    logger.error("could not write %s: %s", self._settings_path, e)
                else:
                    logger.debug("saved settings fields %s", sorted(self._modified_fields))

        self._settings = self._merged()

    # --- Getters ---

    def get_test_mode(self) -> TestMode:
        mode = mode_from_dict(self._settings.get("testMode"))
        if mode is None:
            logger.warning("invalid testMode %r, using default", self._settings.get("testMode"))
            return DEFAULT_TEST_MODE
        return mode

    def get_difficulty(self) -> Difficulty:
        value = self._settings.get("difficulty")
        try:
            return Difficulty(str(value).lower())
        except ValueError:
            logger.warning("invalid difficulty %r, using medium", value)
            return Difficulty.MEDIUM

    def get_repeat_test(self) -> bool:
        return bool(self._settings.get("repeatTest", False))

    def get_end_on_first_error(self) -> bool:
        return bool(self._settings.get("endOnFirstError", False))

    def get_theme(self) -> str:
        value = self._settings.get("theme")
        if isinstance(value, str):
            for name in THEMES:
                if name.lower() == value.lower():
                    return name
        logger.warning("invalid theme %r, using %s", value, DEFAULT_THEME)
        return DEFAULT_THEME

    def get_custom_text(self) -> str | None:
        value = self._settings.get("customText")
        return value if isinstance(value, str) and value.strip() else None

    def get_custom_words(self) -> list[str]:
        value = self._settings.get("customWords")
        if not isinstance(value, list):
            return []
        return [w for w in value if isinstance(w, str) and w.strip()]

    # --- Setters ---

    def set_test_mode(self, mode: TestMode) -> None:
        self._set("testMode", mode_to_dict(mode))

    def set_difficulty(self, difficulty: Difficulty) -> None:
        self._set("difficulty", difficulty.value)

    def set_repeat_test(self, enabled: bool) -> None:
        self._set("repeatTest", enabled)

    def set_end_on_first_error(self, enabled: bool) -> None:
        self._set("endOnFirstError", enabled)

    def set_theme(self, name: str) -> None:
        self._set("theme", name)

    # --- Config bridge ---

    def load_config(self) -> Config:
        """Build the session's mutable config from the merged settings."""
        return Config(
            test_mode=self.get_test_mode(),
            difficulty=self.get_difficulty(),
            repeat_test=self.get_repeat_test(),
            end_on_first_error=self.get_end_on_first_error(),
            theme=self.get_theme(),
            custom_text=self.get_custom_text(),
            custom_words=self.get_custom_words(),
        )


# --- File I/O helpers ---


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(settings, dict):
        return {}, ValueError(f"{path}: expected a JSON object")
    return settings, None


def default_config_dir() -> str:
    """Default data directory ($TYPIST_DIR or ~/.typist)."""
    env_dir = os.environ.get("TYPIST_DIR")
    if env_dir:
        return os.path.expanduser(env_dir)
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
