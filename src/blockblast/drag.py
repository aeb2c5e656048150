"""Pointer-driven drag and drop of tray pieces onto the board.

A gesture is ``press`` on a tray slot, any number of ``move`` events and a
``release``.  While dragging, the controller keeps a :class:`DropPreview`
describing the cell under the pointer and whether the piece fits there.  The
board is only changed on release, through :meth:`GameState.commit_placement`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import math

from .game_state import GameState, MoveResult
from .pieces import PieceInstance
from .utils import DisplayCell, can_place, display_grid


LOGGER = logging.getLogger(__name__)


def pixel_to_cell(offset_px: float, cell_px: float) -> int:
    """Map a pixel offset from the board edge to a cell index.

    This is ``round(offset_px / cell_px - 0.5)`` with halves rounding towards
    positive infinity, which reduces to a floor: the boundary between two
    cells belongs to the later one and offsets left of or above the board give
    negative indices.
    """

    return int(math.floor(offset_px / cell_px))


@dataclass
class DragItem:
    """The piece being dragged and where the pointer grabbed it."""

    piece: PieceInstance
    index: int
    x: float
    y: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    session: int = 0


@dataclass(frozen=True)
class DropPreview:
    row: int
    col: int
    can_place: bool
    piece: PieceInstance


class DragController:
    """Translate pointer events into previews and placements for ``state``."""

    def __init__(
        self,
        state: GameState,
        *,
        cell_px: Optional[float] = None,
        origin: Tuple[float, float] = (0.0, 0.0),
    ) -> None:
        self.state = state
        self.cell_px = cell_px if cell_px is not None else state.config.cell_px
        self.origin = origin
        self.dragging: Optional[DragItem] = None
        self.preview: Optional[DropPreview] = None

    @property
    def active(self) -> bool:
        return self.dragging is not None

    def cell_under(self, x: float, y: float) -> Tuple[int, int]:
        """Return the ``(row, col)`` under the pointer position ``(x, y)``."""

        ox, oy = self.origin
        return pixel_to_cell(y - oy, self.cell_px), pixel_to_cell(x - ox, self.cell_px)

    def _still_valid(self, item: DragItem) -> bool:
        """Return ``True`` while the grabbed piece is still the one in its slot."""

        state = self.state
        if state.game_over or item.session != state.session:
            return False
        return 0 <= item.index < len(state.tray) and state.tray[item.index] is item.piece

    def press(
        self, index: int, x: float, y: float, offset_x: float = 0.0, offset_y: float = 0.0
    ) -> bool:
        """Grab the piece in tray slot ``index``.

        Returns ``False`` when nothing can be grabbed: the game is over, the
        slot is empty or a drag is already in progress.
        """

        if self.dragging is not None and not self._still_valid(self.dragging):
            self.cancel()
        if self.state.game_over or self.dragging is not None:
            return False
        tray = self.state.tray
        piece = tray[index] if 0 <= index < len(tray) else None
        if piece is None:
            return False
        self.dragging = DragItem(piece, index, x, y, offset_x, offset_y, self.state.session)
        self.preview = None
        return True

    def move(self, x: float, y: float) -> Optional[DropPreview]:
        """Follow the pointer and refresh the drop preview."""

        if self.dragging is None:
            return None
        if not self._still_valid(self.dragging):
            self.cancel()
            return None
        self.dragging.x = x
        self.dragging.y = y
        row, col = self.cell_under(x, y)
        piece = self.dragging.piece
        self.preview = DropPreview(
            row=row,
            col=col,
            can_place=can_place(self.state.board, piece.key, row, col),
            piece=piece,
        )
        return self.preview

    def release(self) -> Optional[MoveResult]:
        """End the gesture, committing the piece if the preview is legal."""

        item, preview = self.dragging, self.preview
        self.dragging = None
        self.preview = None
        if item is None or preview is None or not preview.can_place:
            return None
        if not self._still_valid(item):
            LOGGER.debug("Drag of %s dropped: the tray changed", item.piece.key.value)
            return None
        if not can_place(self.state.board, item.piece.key, preview.row, preview.col):
            return None
        result = self.state.commit_placement(item.index, preview.row, preview.col)
        if result is not None:
            LOGGER.debug(
                "Placed %s at (%d, %d): +%d",
                item.piece.key.value,
                preview.row,
                preview.col,
                result.score_delta,
            )
        return result

    def cancel(self) -> None:
        self.dragging = None
        self.preview = None

    def floating_position(self) -> Optional[Tuple[float, float]]:
        """Top-left corner of the dragged piece, keeping the grab offset."""

        if self.dragging is None:
            return None
        return self.dragging.x - self.dragging.offset_x, self.dragging.y - self.dragging.offset_y

    def display_grid(self) -> List[List[Optional[DisplayCell]]]:
        preview = None
        if self.dragging is not None and self._still_valid(self.dragging):
            preview = self.preview
        return display_grid(self.state.board, preview)
