from __future__ import annotations

from blockblast.board import Board, Cell
from blockblast.pieces import Color, PieceInstance, PieceKey


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


FILLER = Cell(PieceKey.A1, Color.BLUE)


def fill(board: Board, cells) -> Board:
    for r, c in cells:
        board.set_cell(r, c, FILLER)
    return board


def fill_row(board: Board, row: int, skip=()) -> Board:
    return fill(board, [(row, c) for c in range(board.width) if c not in skip])


def fill_column(board: Board, col: int, skip=()) -> Board:
    return fill(board, [(r, col) for r in range(board.height) if r not in skip])


def piece(key: PieceKey, color: Color = Color.RED) -> PieceInstance:
    return PieceInstance(key, color)


