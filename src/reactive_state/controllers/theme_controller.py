"""
Theme Controller - reactive theme name applied to the running application.

The theme is stored as the "theme" dynamic property of the application
object, and for widget applications the matching stylesheet is installed.
"""

import logging
from typing import Optional, Union
from PySide6.QtCore import QCoreApplication, QObject, Signal
from PySide6.QtWidgets import QApplication

from ..models.domain.reactive_cell import ReactiveCell
from ..views.styles import get_application_stylesheet, get_theme_colors

logger = logging.getLogger(__name__)


class ThemeController(QObject):
    """Holds the active theme and applies it whenever it changes."""

    theme_changed = Signal(str)

    def __init__(self, theme: Union[str, ReactiveCell] = "light", parent: Optional[QObject] = None):
        super().__init__(parent)

        # A shared cell (e.g. from SettingsController) keeps the theme in sync with config
        self._theme = theme if isinstance(theme, ReactiveCell) else ReactiveCell(theme, self)
        get_theme_colors(self._theme.value)
        self._theme.value_changed.connect(self._on_theme_changed)

        # Apply immediately, not only on the first change
        self._apply(self._theme.value)

    @property
    def cell(self) -> ReactiveCell:
        return self._theme

    @property
    def theme(self) -> str:
        return self._theme.value

    @theme.setter
    def theme(self, name: str) -> None:
        get_theme_colors(name)
        self._theme.value = name

    def toggle(self) -> str:
        """Switch between light and dark; returns the new theme."""
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme

    def _on_theme_changed(self, new_theme: str, old_theme: str) -> None:
        self._apply(new_theme)
        self.theme_changed.emit(new_theme)

    def _apply(self, theme: str) -> None:
        app = QCoreApplication.instance()
        if app is None:
            logger.debug("No application instance, theme %r not applied", theme)
            return
        app.setProperty("theme", theme)
        if isinstance(app, QApplication):
            app.setStyleSheet(get_application_stylesheet(theme))
