"""Deterministic game-state engine for a falling-block puzzle game."""

from .board import Board, CellOutOfRange
from .tetromino import ActivePiece, Piece, TetrominoType, all_shapes, random_piece, rotate
from .config import GameConfig
from .scoring import ScoringRules
from .game_state import GameState, Phase
from .runner import GameRunner
from .utils import can_place, render_grid, tick_interval_ms

__all__ = [
    "ActivePiece",
    "Board",
    "CellOutOfRange",
    "GameConfig",
    "GameRunner",
    "GameState",
    "Phase",
    "Piece",
    "ScoringRules",
    "TetrominoType",
    "all_shapes",
    "can_place",
    "random_piece",
    "render_grid",
    "rotate",
    "tick_interval_ms",
]
