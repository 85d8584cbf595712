"""Line-clear scoring."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded when rows are cleared by a single lock."""

    line_score: int = 100
    clear_bonus: int = 50

    def score_for_lines(self, lines: int) -> int:
        # Every cleared row earns line_score plus the per-row bonus: 150 * k.
        if lines <= 0:
            return 0
        return lines * self.line_score + lines * self.clear_bonus
