from __future__ import annotations

from typing import Optional, Protocol

from .keys import KeyEvent
from .state import AppState


class RendererLike(Protocol):
    def render(self, state: AppState) -> None:
        ...


class InputSourceLike(Protocol):
    def poll(self, timeout_seconds: float) -> Optional[KeyEvent]:
        ...
