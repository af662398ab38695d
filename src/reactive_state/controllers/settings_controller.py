"""
Settings Controller - manages application settings.

Handles loading, saving and validation of settings, and publishes the
values other components react to as ReactiveCells:

    settings = SettingsController()
    history = RefHistory(document, capacity=settings.history_capacity)
    themes = ThemeController(settings.theme)
"""

import logging
from typing import Any, Optional
from PySide6.QtCore import QObject, Signal

from ..models.config.app_settings import AppSettings
from ..models.domain.reactive_cell import ReactiveCell
from ..services.history.capacity import UNBOUNDED, validate_capacity
from ..services.serialization import SettingsManager
from ..views.styles import get_theme_colors

logger = logging.getLogger(__name__)


class SettingsController(QObject):
    """Controller for application settings."""

    # Signals
    settings_loaded = Signal(object)           # AppSettings
    settings_saved = Signal()
    settings_changed = Signal(str, object)     # Individual setting changed (key, value)
    validation_error = Signal(str, str)        # Validation error (field, message)

    def __init__(self, settings_manager: Optional[SettingsManager] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)

        self.settings = AppSettings()
        self.settings_manager = settings_manager or SettingsManager()
        self.original_settings: Optional[AppSettings] = None

        self.history_capacity = ReactiveCell(self.settings.history_capacity, self)
        self.theme = ReactiveCell(self.settings.theme, self)

    def load_settings(self) -> bool:
        """Load settings from storage, falling back to defaults."""
        loaded = self.settings_manager.load_settings()
        if loaded is not None:
            try:
                get_theme_colors(loaded.theme)
            except ValueError as e:
                self.validation_error.emit('theme', str(e))
                return False

        self._replace(loaded or AppSettings())
        self.original_settings = AppSettings.from_dict(self.settings.to_dict())
        self.settings_loaded.emit(self.settings)
        return loaded is not None

    def save_settings(self) -> bool:
        """Save current settings to storage."""
        success = self.settings_manager.save_settings(self.settings)
        if success:
            self.original_settings = AppSettings.from_dict(self.settings.to_dict())
            self.settings_saved.emit()
        return success

    def reset_to_defaults(self) -> None:
        """Reset settings to application defaults."""
        self._replace(AppSettings())
        self.settings_changed.emit("*", self.settings)

    def has_unsaved_changes(self) -> bool:
        if self.original_settings is None:
            return True
        return self.settings.to_dict() != self.original_settings.to_dict()

    # History settings
    def set_history_capacity(self, capacity: Any) -> bool:
        """Set undo capacity; None means unbounded."""
        try:
            validated = validate_capacity(capacity)
        except ValueError as e:
            self.validation_error.emit('history_capacity', str(e))
            return False

        value = None if validated == UNBOUNDED else validated
        self.settings.history_capacity = value
        self.history_capacity.value = value
        self.settings_changed.emit('history_capacity', value)
        return True

    def get_history_capacity(self) -> Optional[int]:
        return self.settings.history_capacity

    # Appearance settings
    def set_theme(self, theme: str) -> bool:
        try:
            get_theme_colors(theme)
        except ValueError as e:
            self.validation_error.emit('theme', str(e))
            return False

        self.settings.theme = theme
        self.theme.value = theme
        self.settings_changed.emit('theme', theme)
        return True

    def get_theme(self) -> str:
        return self.settings.theme

    def _replace(self, settings: AppSettings) -> None:
        self.settings = settings
        self.history_capacity.value = settings.history_capacity
        self.theme.value = settings.theme
        logger.debug("Settings applied: %s", settings.to_dict())
