"""Per-tick processing for the countdown and the renderer's animation."""

from __future__ import annotations

from .state import AppState


class TickProcessor:
    """Advances the phase engine by exactly one fixed tick."""
    def __init__(self, state: AppState, tick_seconds: float):
        self._state = state
        self._tick_seconds = tick_seconds

    @property
    def tick_seconds(self) -> float:
        return self._tick_seconds

    def advance(self) -> None:
        self._state.engine.tick(self._tick_seconds)
        self._state.advance_animation()
