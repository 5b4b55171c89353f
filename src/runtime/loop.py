"""Session orchestrator: fixed-rate ticks, input dispatch, and autosave."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .autosave import StatsAutosave
from .contracts import InputSourceLike, RendererLike
from .dispatch import InputDispatcher
from .state import AppState
from .ticks import TickProcessor


class SessionOrchestrator:
    """Single-threaded control loop that owns all state mutation."""
    def __init__(
        self,
        state: AppState,
        *,
        renderer: RendererLike,
        input_source: InputSourceLike,
        tick_seconds: float = 0.05,
        autosave_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self._state = state
        self._renderer = renderer
        self._input_source = input_source
        self._clock = clock
        self._logger = logger or logging.getLogger("runtime")

        self._dispatcher = InputDispatcher(state)
        self._ticks = TickProcessor(state, tick_seconds)
        self._autosave = StatsAutosave(
            state.ledger,
            state.store,
            interval_seconds=autosave_seconds,
            clock=clock,
        )

    def run(self) -> int:
        tick_seconds = self._ticks.tick_seconds
        last_tick = self._clock()
        self._logger.info("Control loop started (tick=%.3fs)", tick_seconds)
        try:
            while True:
                self._renderer.render(self._state)
                self._autosave.maybe_save()

                timeout = max(0.0, tick_seconds - (self._clock() - last_tick))
                key = self._input_source.poll(timeout)
                if key is not None and self._dispatcher.handle(key):
                    self._logger.info("Quit requested")
                    return 0

                if self._clock() - last_tick >= tick_seconds:
                    self._ticks.advance()
                    last_tick = self._clock()
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _shutdown(self) -> None:
        state = self._state
        self._autosave.save_now()
        state.store.save_timer_state(state.engine.to_timer_state())
        self._logger.info("State saved on exit")
