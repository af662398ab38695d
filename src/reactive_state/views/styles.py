"""
Styles module for reactive_state applications.
Provides theme palettes and the application-wide stylesheet.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ThemeColors:
    """Color set for one theme."""

    background: str
    element_bg: str
    text: str
    accent: str
    border: str
    disabled_text: str


THEMES: Dict[str, ThemeColors] = {
    "light": ThemeColors(
        background="#f5f5f5",
        element_bg="#ffffff",
        text="#1e1e1e",
        accent="#2f6fb0",
        border="#c8c8c8",
        disabled_text="#9a9a9a",
    ),
    "dark": ThemeColors(
        background="#2a2a2a",
        element_bg="#333333",
        text="#ffffff",
        accent="#1a4d7a",
        border="#444444",
        disabled_text="#888888",
    ),
}


def get_theme_colors(theme: str) -> ThemeColors:
    try:
        return THEMES[theme]
    except KeyError:
        raise ValueError(f"Unknown theme: {theme!r} (expected one of {sorted(THEMES)})") from None


def get_application_stylesheet(theme: str = "light") -> str:
    """Return the global application stylesheet for a theme.

    Returns:
        QSS stylesheet string
    """
    c = get_theme_colors(theme)
    return f"""
    /* Main application widgets */
    QMainWindow, QWidget {{
        background-color: {c.background};
        color: {c.text};
    }}

    QHeaderView::section {{
        background-color: {c.element_bg};
        color: {c.text};
        padding: 6px;
        border: 1px solid {c.border};
        font-weight: bold;
    }}

    /* Push buttons - flat design with rounded corners */
    QPushButton {{
        background-color: {c.element_bg};
        color: {c.text};
        border: 1px solid {c.border};
        padding: 8px 16px;
        border-radius: 6px;
    }}

    QPushButton:hover {{
        background-color: {c.accent};
        border-color: {c.accent};
    }}

    QPushButton:disabled {{
        background-color: {c.background};
        color: {c.disabled_text};
        border-color: {c.border};
    }}
    """
