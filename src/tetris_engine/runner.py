"""Headless driver for the engine.

:class:`GameRunner` plays the role a UI front-end normally has: it owns the
gravity timer, speeds it up as lines are cleared, pauses and restarts the
game and forwards player input.  Time is pushed in by the caller through
:meth:`GameRunner.advance`, so the runner can be driven by any event loop,
a ``threading.Timer`` or a test.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .config import GameConfig
from .game_state import GameState
from .utils import tick_interval_ms


LOGGER = logging.getLogger(__name__)


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(
        self,
        state: Optional[GameState] = None,
        *,
        config: Optional[GameConfig] = None,
        on_game_over: Optional[Callable[[GameState], None]] = None,
    ) -> None:
        if state is not None and config is not None:
            raise ValueError("Pass either state or config, not both")
        self.state = state if state is not None else GameState(config)
        self.on_game_over = on_game_over
        self._lock = threading.RLock()
        self._running = False
        self._paused = False
        self._drop_accum = 0.0
        self._game_over_reported = False
        self.interval_ms = self._current_interval()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    def _current_interval(self) -> int:
        return tick_interval_ms(
            self.state.lines_cleared, self.state.config.base_interval_ms
        )

    def _after_update(self) -> None:
        self.interval_ms = self._current_interval()
        if self.state.is_game_over() and not self._game_over_reported:
            self._game_over_reported = True
            LOGGER.debug("Gravity halted after game over")
            if self.on_game_over is not None:
                self.on_game_over(self.state)

    # Lifecycle --------------------------------------------------------
    def start(self) -> None:
        with self._lock:
            if self._running:
                LOGGER.debug("Start ignored: already running")
                return
            self._running = True
            self._paused = False
            self._drop_accum = 0.0
            LOGGER.info("Game started")

    def pause(self) -> None:
        with self._lock:
            if not self._running:
                LOGGER.debug("Pause ignored: not running")
                return
            self._paused = True
            LOGGER.info("Paused")

    def resume(self) -> None:
        with self._lock:
            if not self._running:
                LOGGER.debug("Resume ignored: not running")
                return
            self._paused = False
            LOGGER.info("Resumed")

    def toggle_pause(self) -> bool:
        """Flip between paused and running; return the new paused flag."""

        with self._lock:
            if self._paused:
                self.resume()
            else:
                self.pause()
            return self._paused

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                LOGGER.debug("Stop ignored: not running")
                return
            self._running = False
            self._paused = False
            LOGGER.info("Game stopped")

    def restart(self) -> None:
        """Reset the engine and start a fresh game at the base speed."""

        with self._lock:
            self.state.reset()
            self._drop_accum = 0.0
            self._game_over_reported = False
            self.interval_ms = self._current_interval()
            self._running = True
            self._paused = False
            LOGGER.info("Game restarted")

    # Timing -----------------------------------------------------------
    def advance(self, elapsed_ms: float) -> int:
        """Account for ``elapsed_ms`` of wall time and run due ticks.

        Returns the number of :meth:`GameState.tick` calls made.
        """

        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must not be negative, got {elapsed_ms}")
        with self._lock:
            if not self._running or self._paused or self.state.is_game_over():
                return 0
            self._drop_accum += elapsed_ms
            ticks = 0
            while self._drop_accum >= self.interval_ms and not self.state.is_game_over():
                self._drop_accum -= self.interval_ms
                self.state.tick()
                ticks += 1
                self._after_update()
            if self.state.is_game_over():
                self._drop_accum = 0.0
            return ticks

    # Input ------------------------------------------------------------
    def _forward(self, action: Callable[[], object], default: object = False):
        with self._lock:
            if not self._running or self._paused:
                return default
            result = action()
            self._after_update()
            return result

    def move_left(self) -> bool:
        return self._forward(self.state.move_left)

    def move_right(self) -> bool:
        return self._forward(self.state.move_right)

    def move_down(self) -> bool:
        return self._forward(self.state.move_down)

    def rotate(self) -> bool:
        return self._forward(self.state.rotate)

    def hard_drop(self) -> int:
        return self._forward(self.state.hard_drop, 0)
