"""Controllers - reactive helpers built on top of ReactiveCell."""

from .cycle_list import CycleList
from .theme_controller import ThemeController
from .settings_controller import SettingsController

__all__ = [
    'CycleList',
    'ThemeController',
    'SettingsController',
]
