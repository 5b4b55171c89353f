from .terminal import CursesTerminal, translate_key
from .themes import THEME_PALETTES, init_theme, palette

__all__ = ["CursesTerminal", "THEME_PALETTES", "init_theme", "palette", "translate_key"]
