"""Themes for the deptui TUI, built on Textual's theme system."""

from __future__ import annotations

from textual.app import App
from textual.theme import Theme

from .config import DEFAULT_THEME

THEMES: list[Theme] = [
    # Slate background, teal accents; red stays free for missing packages
    Theme(
        name="deptui-dark",
        primary="#4fb3a9",
        secondary="#9aa7b8",
        accent="#e6b450",
        warning="#e6b450",
        error="#e5534b",
        success="#6cc07a",
        foreground="#d3dae3",
        background="#161b22",
        surface="#1f2630",
        panel="#2b3441",
        dark=True,
    ),
    Theme(
        name="deptui-light",
        primary="#1f7a72",
        secondary="#5b6878",
        accent="#a86b00",
        warning="#a86b00",
        error="#c0362c",
        success="#2f7d3b",
        foreground="#1f2630",
        background="#f7f5ef",
        surface="#ebe7dc",
        panel="#ddd7c8",
        dark=False,
    ),
]

THEME_NAMES = [theme.name for theme in THEMES]


def register_themes(app: App, selected: str | None = None) -> str:
    """Register the deptui themes on app and activate selected.

    Unknown names fall back to the default theme. Returns the active name.
    """
    for theme in THEMES:
        app.register_theme(theme)
    name = selected if selected in app.available_themes else DEFAULT_THEME
    app.theme = name
    return name
