"""Theme palettes and curses color-pair setup."""

from __future__ import annotations

import curses
from dataclasses import dataclass

from pomodoro import Phase

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    work: RGB
    short_break: RGB
    long_break: RGB
    border: RGB
    accent: RGB


THEME_PALETTES: dict[str, Theme] = {
    "default": Theme((100, 181, 246), (255, 0, 100), (0, 255, 150), (0, 200, 255), (255, 100, 0)),
    "nord": Theme((136, 192, 255), (255, 20, 60), (0, 255, 100), (100, 200, 255), (255, 100, 255)),
    "dracula": Theme((189, 147, 249), (255, 0, 85), (0, 255, 0), (200, 100, 255), (255, 0, 255)),
    "gruvbox": Theme((254, 128, 25), (255, 50, 0), (255, 255, 0), (255, 200, 100), (255, 150, 0)),
    "solarized": Theme((42, 161, 152), (255, 0, 0), (150, 255, 0), (100, 200, 255), (255, 200, 0)),
}

# Color pair IDs
PAIR_WORK = 1
PAIR_SHORT_BREAK = 2
PAIR_LONG_BREAK = 3
PAIR_BORDER = 4
PAIR_ACCENT = 5
PAIR_MUTED = 6
PAIR_WARN = 7
PAIR_OK = 8
PAIR_SELECTED = 9

_PHASE_PAIRS = {
    Phase.WORK: PAIR_WORK,
    Phase.SHORT_BREAK: PAIR_SHORT_BREAK,
    Phase.LONG_BREAK: PAIR_LONG_BREAK,
}

_FALLBACK_COLORS = {
    PAIR_WORK: curses.COLOR_BLUE,
    PAIR_SHORT_BREAK: curses.COLOR_RED,
    PAIR_LONG_BREAK: curses.COLOR_GREEN,
    PAIR_BORDER: curses.COLOR_CYAN,
    PAIR_ACCENT: curses.COLOR_MAGENTA,
}

_FIRST_CUSTOM_COLOR = 20


def palette(name: str) -> Theme:
    return THEME_PALETTES.get(name.lower(), THEME_PALETTES["default"])


def phase_pair(phase: Phase) -> int:
    return _PHASE_PAIRS[phase]


def init_theme(name: str) -> None:
    """Initialize color pairs for the theme, using true color when available."""
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()

    theme = palette(name)
    roles = {
        PAIR_WORK: theme.work,
        PAIR_SHORT_BREAK: theme.short_break,
        PAIR_LONG_BREAK: theme.long_break,
        PAIR_BORDER: theme.border,
        PAIR_ACCENT: theme.accent,
    }
    if curses.can_change_color() and curses.COLORS > _FIRST_CUSTOM_COLOR + len(roles):
        # curses uses 0-1000 scale
        for offset, (pair_id, (r, g, b)) in enumerate(roles.items()):
            color_id = _FIRST_CUSTOM_COLOR + offset
            curses.init_color(color_id, r * 1000 // 255, g * 1000 // 255, b * 1000 // 255)
            curses.init_pair(pair_id, color_id, -1)
    else:
        for pair_id, color in _FALLBACK_COLORS.items():
            curses.init_pair(pair_id, color, -1)

    curses.init_pair(PAIR_MUTED, curses.COLOR_WHITE, -1)
    curses.init_pair(PAIR_WARN, curses.COLOR_YELLOW, -1)
    curses.init_pair(PAIR_OK, curses.COLOR_GREEN, -1)
    curses.init_pair(PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)
