"""Block Blast puzzle engine: board, piece catalog, scoring and drag input."""

from .board import Board, Cell, PlacementError
from .pieces import Color, PieceInstance, PieceKey, random_piece, shape_blocks, shape_of
from .config import GameConfig
from .scoring import ClearResult, clear_lines, line_clear_points
from .timers import ScheduledTask, Scheduler
from .game_state import GameState, MoveResult
from .drag import DragController, DropPreview, pixel_to_cell
from .placement_env import Placement, PlacementEnv
from .utils import can_place, display_grid, is_game_over, legal_anchors, render_ascii

__all__ = [
    "Board",
    "Cell",
    "PlacementError",
    "Color",
    "PieceInstance",
    "PieceKey",
    "GameConfig",
    "ClearResult",
    "GameState",
    "MoveResult",
    "DragController",
    "DropPreview",
    "Placement",
    "PlacementEnv",
    "ScheduledTask",
    "Scheduler",
    "can_place",
    "clear_lines",
    "display_grid",
    "is_game_over",
    "legal_anchors",
    "line_clear_points",
    "pixel_to_cell",
    "random_piece",
    "render_ascii",
    "shape_blocks",
    "shape_of",
]
