"""UI theme definitions and selection helpers.

Themes are 16-colour ANSI palettes for pane text, the gutter, the separator
and the selection. Response bodies are never syntax highlighted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the compositor."""

    name: str
    reset: str
    gutter: str
    text_active: str
    text_inactive: str
    separator: str
    selection: str
    status: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    gutter="\033[90m",
    text_active="\033[37m",
    text_inactive="\033[90m",
    separator="\033[36m",
    selection="\033[47m\033[30m",
    status="\033[0m",
    status_error="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    gutter="\033[34m",
    text_active="\033[97m",
    text_inactive="\033[34m",
    separator="\033[94m",
    selection="\033[46m\033[30m",
    status="\033[96m",
    status_error="\033[91m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    gutter="",
    text_active="",
    text_inactive="",
    separator="",
    selection="\033[7m",
    status="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
