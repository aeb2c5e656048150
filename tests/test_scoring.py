import pytest

from blockblast.board import Board
from blockblast.scoring import clear_lines, line_clear_points

from helpers import fill, fill_column, fill_row


@pytest.mark.parametrize(
    "lines,points",
    [(0, 0), (1, 10), (2, 35), (3, 60), (4, 90)],
)
def test_line_clear_points(lines, points):
    assert line_clear_points(lines) == points


def test_no_full_line_returns_same_board():
    board = Board()
    fill_row(board, 2, skip={9})
    fill_column(board, 5, skip={0})
    before = board.copy()
    result = clear_lines(board)
    assert result.board is board
    assert result.board == before
    assert result.points == 0
    assert result.lines == 0


def test_single_full_row():
    board = Board()
    fill_row(board, 3)
    result = clear_lines(board)
    assert result.lines == 1
    assert result.points == 10
    assert result.rows == [3]
    assert result.columns == []
    assert all(result.board.cell_at(3, c).clearing for c in range(10))
    # The input board is left untouched.
    assert board.clearing_count() == 0

    result.board.sweep()
    assert all(result.board.cell_at(3, c) is None for c in range(10))


def test_cross_clear_counts_both_lines():
    board = Board()
    fill_row(board, 4)
    fill_column(board, 7)
    result = clear_lines(board)
    assert result.lines == 2
    assert result.points == 35
    assert result.rows == [4]
    assert result.columns == [7]
    # The shared cell is flagged once; 19 distinct cells in total.
    assert result.board.clearing_count() == 19


def test_lines_already_clearing_are_not_counted_again():
    board = Board()
    fill_row(board, 0)
    first = clear_lines(board)
    second = clear_lines(first.board)
    assert second.lines == 0
    assert second.board is first.board


def test_full_board_clears_every_line():
    board = Board()
    for r in range(10):
        fill_row(board, r)
    result = clear_lines(board)
    assert result.lines == 20
    assert result.points == line_clear_points(20)
    assert result.board.clearing_count() == 100
