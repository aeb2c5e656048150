"""Utility helpers for the Block Blast engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from .board import Board
from .pieces import Color, PieceInstance, PieceKey, shape_blocks

if TYPE_CHECKING:  # pragma: no cover
    from .drag import DropPreview


def can_place(board: Board, key: PieceKey, row: int, col: int) -> bool:
    """Return ``True`` if piece ``key`` fits on ``board`` anchored at ``(row, col)``.

    Every occupied offset of the piece must land inside the board on an empty
    cell.  Cells flagged for clearing are still occupied.  The same predicate
    drives the drag preview, commit validation and game-over detection so the
    three can never disagree.
    """

    for dy, dx in shape_blocks(key):
        target_row = row + dy
        target_col = col + dx
        if not (0 <= target_row < board.height and 0 <= target_col < board.width):
            return False
        if not board.is_empty(target_row, target_col):
            return False
    return True


def legal_anchors(board: Board, key: PieceKey) -> List[Tuple[int, int]]:
    """Return every anchor where ``key`` can be placed, in raster order."""

    return [
        (r, c)
        for r in range(board.height)
        for c in range(board.width)
        if can_place(board, key, r, c)
    ]


def is_game_over(tray: Sequence[Optional[PieceInstance]], board: Board) -> bool:
    """Return ``True`` if no piece left in ``tray`` fits anywhere on ``board``.

    An empty tray is never terminal because a refill always follows it.
    """

    available = [piece for piece in tray if piece is not None]
    if not available:
        return False

    for piece in available:
        for r in range(board.height):
            for c in range(board.width):
                if can_place(board, piece.key, r, c):
                    return False
    return True


@dataclass(frozen=True)
class DisplayCell:
    """A cell of the render grid.

    ``preview`` marks cells contributed by the drop preview; for those
    ``legal`` tells renderers whether to use the piece colour or a warning tint.
    """

    key: PieceKey
    color: Color
    clearing: bool = False
    preview: bool = False
    legal: bool = True


def display_grid(
    board: Board, preview: Optional["DropPreview"] = None
) -> List[List[Optional[DisplayCell]]]:
    """Return the board cells with the drop preview overlaid.

    Preview cells are only drawn over empty in-bounds cells, so the overlay
    never hides a placed block.  The board itself is not modified.
    """

    grid: List[List[Optional[DisplayCell]]] = []
    for r in range(board.height):
        line: List[Optional[DisplayCell]] = []
        for c in range(board.width):
            cell = board.cell_at(r, c)
            line.append(
                None if cell is None else DisplayCell(cell.key, cell.color, cell.clearing)
            )
        grid.append(line)

    if preview is not None:
        piece = preview.piece
        for r, c in piece.blocks(preview.row, preview.col):
            if board.in_bounds(r, c) and grid[r][c] is None:
                grid[r][c] = DisplayCell(
                    piece.key, piece.color, preview=True, legal=preview.can_place
                )
    return grid


def render_ascii(board: Board, preview: Optional["DropPreview"] = None) -> str:
    """Return a text rendering of the display grid."""

    def _char(cell: Optional[DisplayCell]) -> str:
        if cell is None:
            return "."
        if cell.preview:
            return "+" if cell.legal else "x"
        return "*" if cell.clearing else "#"

    return "\n".join("".join(_char(cell) for cell in row) for row in display_grid(board, preview))
