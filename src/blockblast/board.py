"""Board representation for the Block Blast playfield."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .pieces import PALETTE, PIECE_KEYS, Color, PieceInstance, PieceKey


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 10

Grid = NDArray[np.uint8]

# Mapping from ``PieceKey`` to the integer stored in the key grid.  ``0``
# represents an empty cell.
PIECE_VALUES = {key: i + 1 for i, key in enumerate(PIECE_KEYS)}
COLOR_VALUES = {color: i for i, color in enumerate(PALETTE)}


class PlacementError(AssertionError):
    """Raised when a placement that was never legal is applied to a board."""


@dataclass(frozen=True)
class Cell:
    """Identity of the piece occupying a board cell."""

    key: PieceKey
    color: Color
    clearing: bool = False


def create_empty_grid(height: int = HEIGHT, width: int = WIDTH) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Fixed-size grid of placed cells.

    Three parallel arrays hold the state: ``keys`` (``0`` for empty, otherwise
    the piece value), ``colors`` (palette index) and ``clearing`` (cells staged
    for removal once the clear animation has played).
    """

    def __init__(self, height: int = HEIGHT, width: int = WIDTH) -> None:
        self.height = height
        self.width = width
        self.keys: Grid = create_empty_grid(height, width)
        self.colors: Grid = create_empty_grid(height, width)
        self.clearing: NDArray[np.bool_] = np.zeros((height, width), dtype=bool)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.keys.shape == other.keys.shape
            and np.array_equal(self.keys, other.keys)
            and np.array_equal(self.colors, other.colors)
            and np.array_equal(self.clearing, other.clearing)
        )

    def __repr__(self) -> str:
        return f"Board(height={self.height}, width={self.width}, occupied={self.occupied_count()})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        """Return the occupant of ``(row, col)`` or ``None`` when empty.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not self.in_bounds(row, col):
            raise IndexError("Cell out of bounds")
        value = int(self.keys[row, col])
        if value == 0:
            return None
        return Cell(
            key=PIECE_KEYS[value - 1],
            color=PALETTE[int(self.colors[row, col])],
            clearing=bool(self.clearing[row, col]),
        )

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.  Cells that
        are flagged for clearing still count as occupied until swept.
        """

        if self.in_bounds(row, col):
            return bool(self.keys[row, col] == 0)
        return False

    def set_cell(self, row: int, col: int, cell: Optional[Cell]) -> None:
        """Overwrite ``(row, col)`` with ``cell`` (``None`` empties it).

        Intended for building fixtures; gameplay goes through :meth:`place`.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not self.in_bounds(row, col):
            raise IndexError("Cell out of bounds")
        if cell is None:
            self.keys[row, col] = 0
            self.colors[row, col] = 0
            self.clearing[row, col] = False
        else:
            self.keys[row, col] = np.uint8(PIECE_VALUES[cell.key])
            self.colors[row, col] = np.uint8(COLOR_VALUES[cell.color])
            self.clearing[row, col] = cell.clearing

    def place(self, piece: PieceInstance, row: int, col: int) -> int:
        """Write ``piece`` into the grid anchored at ``(row, col)``.

        Legality is decided by :func:`blockblast.utils.can_place` before this
        is called.  A placement that leaves the board or overlaps an occupied
        cell is a caller bug and raises :class:`PlacementError` without
        modifying the board.  Returns the number of cells written.
        """

        coordinates = np.asarray(piece.blocks(row, col), dtype=np.int16)
        if coordinates.size == 0:
            return 0

        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise PlacementError(f"{piece.key.value} at ({row}, {col}) leaves the board")
        if np.any(self.keys[rows, cols] != 0):
            raise PlacementError(f"{piece.key.value} at ({row}, {col}) overlaps placed cells")

        self.keys[rows, cols] = np.uint8(PIECE_VALUES[piece.key])
        self.colors[rows, cols] = np.uint8(COLOR_VALUES[piece.color])
        self.clearing[rows, cols] = False
        return int(len(coordinates))

    def copy(self) -> "Board":
        """Return an independent snapshot of the board."""

        clone = Board.__new__(Board)
        clone.height = self.height
        clone.width = self.width
        clone.keys = self.keys.copy()
        clone.colors = self.colors.copy()
        clone.clearing = self.clearing.copy()
        return clone

    def occupancy(self) -> NDArray[np.bool_]:
        """Return a boolean mask of occupied cells."""

        return self.keys != 0

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.keys))

    def full_rows(self) -> List[int]:
        """Return indices of rows that are occupied and not already clearing."""

        settled = self.occupancy() & ~self.clearing
        return [int(r) for r in np.flatnonzero(np.all(settled, axis=1))]

    def full_columns(self) -> List[int]:
        """Return indices of columns that are occupied and not already clearing."""

        settled = self.occupancy() & ~self.clearing
        return [int(c) for c in np.flatnonzero(np.all(settled, axis=0))]

    def mark_clearing(self, rows: Iterable[int] = (), columns: Iterable[int] = ()) -> None:
        """Flag every occupied cell in ``rows`` and ``columns`` for clearing."""

        occupied = self.occupancy()
        for r in rows:
            self.clearing[r, :] |= occupied[r, :]
        for c in columns:
            self.clearing[:, c] |= occupied[:, c]

    def clearing_count(self) -> int:
        return int(np.count_nonzero(self.clearing))

    def sweep(self) -> int:
        """Empty every cell flagged for clearing and return how many were freed."""

        flagged = self.clearing
        freed = int(np.count_nonzero(flagged))
        if freed:
            self.keys[flagged] = 0
            self.colors[flagged] = 0
            self.clearing = np.zeros_like(self.clearing)
        return freed

    def swept(self) -> "Board":
        """Return a copy of the board as it will look after the pending sweep."""

        clone = self.copy()
        clone.sweep()
        return clone
