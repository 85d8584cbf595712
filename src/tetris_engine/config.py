"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import HEIGHT, WIDTH
from .utils import BASE_INTERVAL_MS

# Smallest board on which every spawn-orientation piece fits at the spawn
# column ``cols // 2 - 1``; the I piece is the limiting case.
MIN_COLS = 5
MIN_ROWS = 2


@dataclass(frozen=True)
class GameConfig:
    """Board size, random seed and base gravity interval for a session."""

    rows: int = HEIGHT
    cols: int = WIDTH
    seed: Optional[int] = None
    base_interval_ms: int = BASE_INTERVAL_MS

    def validate(self) -> "GameConfig":
        """Return ``self`` or raise :class:`ValueError` for unusable values."""

        if self.rows < MIN_ROWS or self.cols < MIN_COLS:
            raise ValueError(
                f"Board must be at least {MIN_ROWS}x{MIN_COLS}, got {self.rows}x{self.cols}"
            )
        if self.base_interval_ms <= 0:
            raise ValueError(f"base_interval_ms must be positive, got {self.base_interval_ms}")
        return self
