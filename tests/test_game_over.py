from blockblast.board import Board
from blockblast.pieces import PieceKey
from blockblast.utils import is_game_over

from helpers import fill, piece


def _checkerboard() -> Board:
    # Every empty cell is isolated, so only a single block could fit.
    board = Board()
    fill(board, [(r, c) for r in range(10) for c in range(10) if (r + c) % 2 == 0])
    return board


def _full_board() -> Board:
    board = Board()
    fill(board, [(r, c) for r in range(10) for c in range(10)])
    return board


def test_empty_tray_is_never_game_over():
    assert is_game_over([], _full_board()) is False
    assert is_game_over([None, None, None], _full_board()) is False


def test_no_piece_fits_is_game_over():
    board = _checkerboard()
    tray = [piece(PieceKey.A2), piece(PieceKey.B1), piece(PieceKey.C1)]
    assert is_game_over(tray, board) is True


def test_one_piece_fitting_keeps_the_game_alive():
    board = _checkerboard()
    tray = [piece(PieceKey.A2), None, piece(PieceKey.A1)]
    assert is_game_over(tray, board) is False


def test_single_gap_admits_only_a_single_block():
    board = _full_board()
    board.set_cell(9, 9, None)
    tray = [piece(PieceKey.A5), piece(PieceKey.B4), piece(PieceKey.D1)]
    assert is_game_over(tray, board) is True
    tray[1] = piece(PieceKey.A1)
    assert is_game_over(tray, board) is False


def test_empty_slots_are_ignored():
    board = _checkerboard()
    assert is_game_over([None, piece(PieceKey.C2), None], board) is True
