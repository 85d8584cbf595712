"""High level game engine.

:class:`GameState` owns the board, the falling piece and the session
counters.  It advances one step per :meth:`GameState.tick` and accepts
movement requests in between; it never sleeps, spawns threads or draws.
Callers that share an instance between threads must serialise access
themselves (see :class:`tetris_engine.runner.GameRunner`).
"""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from .board import Board, Grid
from .config import GameConfig
from .scoring import ScoringRules
from .tetromino import ActivePiece, random_piece
from .utils import can_place


LOGGER = logging.getLogger(__name__)

Listener = Callable[[str], None]


class Phase(str, Enum):
    """Where the engine is in its spawn/fall/lock cycle."""

    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    LINE_CLEARING = "line_clearing"
    GAME_OVER = "game_over"


class GameState:
    """Mutable state for a Tetris game session.

    Parameters
    ----------
    config:
        Board dimensions and seed.  Defaults to a standard 20x10 board.
    rng:
        Source of piece randomness.  Anything with a ``randrange`` method
        works; when omitted a :class:`random.Random` seeded from
        ``config.seed`` is used.
    rules:
        Line-clear scoring.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng=None,
        rules: Optional[ScoringRules] = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.board = Board(self.config.rows, self.config.cols)
        self.active: Optional[ActivePiece] = None
        self.score = 0
        self.lines_cleared = 0
        self.game_over = False
        self.phase = Phase.SPAWNING
        self._listeners: List[Listener] = []
        self._pending: Optional[List[str]] = None
        self.spawn_new_piece()

    # Listeners --------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        """Register ``listener`` to be called after each visible change."""

        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self, event: str) -> None:
        if self._pending is not None:
            self._pending.append(event)
            return
        for listener in list(self._listeners):
            listener(event)

    @contextmanager
    def _batched_events(self) -> Iterator[None]:
        """Hold listener events until the enclosed transition has finished.

        Listeners then only ever observe a consistent state, and one that
        raises cannot interrupt a lock or reset half way.
        """

        self._pending = []
        try:
            yield
        finally:
            events, self._pending = self._pending, None
        for event in events:
            self._notify(event)

    # Queries ----------------------------------------------------------
    def is_game_over(self) -> bool:
        return self.game_over

    def cell_at(self, row: int, col: int) -> int:
        return self.board.cell_at(row, col)

    def active_piece_cells(self) -> List[Tuple[int, int, int]]:
        """Return ``(row, col, type_id)`` for each cell of the falling piece.

        Rows above the top of the board are included; renderers clip them.
        """

        if self.active is None:
            return []
        type_id = int(self.active.type)
        return [(row, col, type_id) for row, col in self.active.cells()]

    def board_snapshot(self) -> Grid:
        return self.board.snapshot()

    # Mutations --------------------------------------------------------
    def spawn_new_piece(self) -> bool:
        """Spawn a random piece at the top centre of the board.

        When the spawn position is blocked the game ends and the previous
        active piece is left untouched.  Returns ``True`` on success.
        """

        if self.game_over:
            return False
        self.phase = Phase.SPAWNING
        piece = ActivePiece(random_piece(self.rng), self.board.cols // 2 - 1, 0)
        if can_place(self.board, piece.shape, piece.x, piece.y):
            self.active = piece
            self.phase = Phase.FALLING
            LOGGER.debug("Spawned %s at column %d", piece.type.name, piece.x)
            self._notify("spawn")
            return True

        self.game_over = True
        self.phase = Phase.GAME_OVER
        LOGGER.info(
            "Game over. Score: %d, lines: %d", self.score, self.lines_cleared
        )
        self._notify("game_over")
        return False

    def _try_replace(self, candidate: ActivePiece, event: str) -> bool:
        if self.game_over or self.active is None:
            return False
        if not can_place(self.board, candidate.shape, candidate.x, candidate.y):
            return False
        self.active = candidate
        self._notify(event)
        return True

    def move_left(self) -> bool:
        if self.active is None:
            return False
        return self._try_replace(self.active.moved(-1, 0), "move")

    def move_right(self) -> bool:
        if self.active is None:
            return False
        return self._try_replace(self.active.moved(1, 0), "move")

    def move_down(self) -> bool:
        """Move the piece one row down; ``False`` means it has landed."""

        if self.active is None:
            return False
        return self._try_replace(self.active.moved(0, 1), "move")

    def rotate(self) -> bool:
        """Rotate the piece clockwise in place.

        Only the current origin is tried.  A rotation blocked by a wall or the
        stack is rejected even if a shifted position would fit.
        """

        if self.active is None:
            return False
        return self._try_replace(self.active.rotated(), "rotate")

    def _lock_and_continue(self) -> int:
        """Lock the active piece, clear rows, score and spawn the next piece."""

        if self.active is None:
            return 0
        with self._batched_events():
            return self._lock_clear_spawn(self.active)

    def _lock_clear_spawn(self, piece: ActivePiece) -> int:
        self.phase = Phase.LOCKING
        self.board.lock(piece.shape, piece.x, piece.y, int(piece.type))
        self._notify("lock")

        self.phase = Phase.LINE_CLEARING
        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines_cleared += cleared
            self.score += self.rules.score_for_lines(cleared)
            LOGGER.info(
                "Cleared %d row(s). Score: %d, lines: %d",
                cleared,
                self.score,
                self.lines_cleared,
            )
            self._notify("clear")

        self.spawn_new_piece()
        return cleared

    def tick(self) -> int:
        """Advance the game by one gravity step.

        Returns the number of rows cleared by this step, which is ``0`` unless
        the piece landed and completed rows.
        """

        if self.game_over or self.active is None:
            return 0
        if self.move_down():
            return 0
        return self._lock_and_continue()

    update = tick

    def hard_drop(self) -> int:
        """Drop the piece as far as it goes and lock it immediately."""

        if self.game_over or self.active is None:
            return 0
        while self.move_down():
            pass
        return self._lock_and_continue()

    def reset(self) -> None:
        """Reset the entire game state for a new game."""

        self.board.reset()
        self.score = 0
        self.lines_cleared = 0
        self.game_over = False
        self.active = None
        self.phase = Phase.SPAWNING
        LOGGER.debug("Game reset")
        with self._batched_events():
            self._notify("reset")
            self.spawn_new_piece()
