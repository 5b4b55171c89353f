"""Terminal-independent key events consumed by the input dispatcher."""

from __future__ import annotations

from dataclasses import dataclass

KEY_ENTER = "enter"
KEY_ESCAPE = "esc"
KEY_BACKSPACE = "backspace"
KEY_TAB = "tab"
KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_PAGE_UP = "pageup"
KEY_PAGE_DOWN = "pagedown"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press; `code` is either one character or a named key."""
    code: str
    ctrl: bool = False

    @property
    def char(self) -> str | None:
        if len(self.code) == 1 and not self.ctrl:
            return self.code
        return None

    def is_char(self, *chars: str) -> bool:
        return self.char is not None and self.char in chars
