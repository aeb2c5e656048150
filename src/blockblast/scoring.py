"""Line detection and scoring.

Full rows and full columns are found independently.  Their cells are flagged
as clearing rather than removed so the board can animate the clear; the
owner of the board empties them later with :meth:`Board.sweep`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .board import Board


POINTS_PER_LINE = 10
COMBO_POINTS = 5


@dataclass(frozen=True)
class ClearResult:
    board: Board
    points: int = 0
    lines: int = 0
    rows: List[int] = field(default_factory=list)
    columns: List[int] = field(default_factory=list)


def line_clear_points(lines: int) -> int:
    """Return the points for clearing ``lines`` rows and columns at once.

    Clearing more than one line adds a triangular bonus, so two lines score
    ``20 + 15`` and four lines ``40 + 50``.
    """

    if lines <= 0:
        return 0
    points = lines * POINTS_PER_LINE
    if lines > 1:
        points += (lines * (lines + 1) // 2) * COMBO_POINTS
    return points


def clear_lines(board: Board) -> ClearResult:
    """Flag full rows and columns of ``board`` and score them.

    When nothing is full the input board is returned as-is.  Otherwise a copy
    with the clearing flags set is returned.  A cell shared by a full row and
    a full column is flagged once, but both lines count towards the score.
    """

    rows = board.full_rows()
    columns = board.full_columns()
    lines = len(rows) + len(columns)
    if not lines:
        return ClearResult(board=board)

    flagged = board.copy()
    flagged.mark_clearing(rows, columns)
    return ClearResult(
        board=flagged,
        points=line_clear_points(lines),
        lines=lines,
        rows=rows,
        columns=columns,
    )
