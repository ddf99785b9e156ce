"""Color themes for the calendar renderer.

Themes are immutable and handed to the renderer explicitly; there is no
process-wide current theme.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class ThemeColors:
    """Theme color definitions - all semantic color slots."""

    # === Tracks ===
    human: str = "cyan"
    agent: str = "yellow"

    # === Ghost Day cells ===
    ghost_human: str = "dim"
    ghost_agent: str = "bold yellow"

    # === Text ===
    title: str = "bold cyan"
    heading: str = "bold"
    muted: str = "dim"
    rule: str = "default"

    # === Summary figures ===
    both_count: str = "bold cyan"
    ghost_count: str = "bold yellow"
    ghost_banner: str = "bold yellow"


@dataclass(frozen=True)
class Theme:
    """Complete theme definition."""

    name: str
    display_name: str
    description: str
    colors: ThemeColors = field(default_factory=ThemeColors)


# === Predefined themes ===

THEME_DARK = Theme(
    name="dark",
    display_name="Dark",
    description="Cyan for you, yellow for the agent",
    colors=ThemeColors(),
)

THEME_LIGHT = Theme(
    name="light",
    display_name="Light",
    description="Darker tones for bright terminals",
    colors=ThemeColors(
        human="blue",
        agent="dark_orange3",
        ghost_human="grey62",
        ghost_agent="bold dark_orange3",
        title="bold blue",
        muted="grey50",
        both_count="bold blue",
        ghost_count="bold dark_orange3",
        ghost_banner="bold dark_orange3",
    ),
)

THEME_MONO = Theme(
    name="mono",
    display_name="Monochrome",
    description="No colors; Ghost Days stay bold",
    colors=ThemeColors(
        human="default",
        agent="default",
        ghost_human="dim",
        ghost_agent="bold",
        title="bold",
        both_count="bold",
        ghost_count="bold",
        ghost_banner="bold",
    ),
)

BUILTIN_THEMES: Dict[str, Theme] = {
    "dark": THEME_DARK,
    "light": THEME_LIGHT,
    "mono": THEME_MONO,
}


def list_themes() -> List[str]:
    """List all available theme names."""
    return list(BUILTIN_THEMES.keys())


def get_theme(name: str) -> Theme:
    """Look up a builtin theme by name."""
    theme = BUILTIN_THEMES.get(name.strip().lower())
    if theme is None:
        raise KeyError(f"Unknown theme {name!r}; available: {', '.join(list_themes())}")
    return theme


__all__ = [
    "BUILTIN_THEMES",
    "THEME_DARK",
    "THEME_LIGHT",
    "THEME_MONO",
    "Theme",
    "ThemeColors",
    "get_theme",
    "list_themes",
]
