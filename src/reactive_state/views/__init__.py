"""Views - theme palettes and stylesheets."""

from .styles import THEMES, ThemeColors, get_application_stylesheet, get_theme_colors

__all__ = ['THEMES', 'ThemeColors', 'get_application_stylesheet', 'get_theme_colors']
