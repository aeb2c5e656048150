import itertools
import random

from blockblast.board import Board
from blockblast.pieces import PieceKey, shape_blocks
from blockblast.utils import can_place, legal_anchors

from helpers import fill, piece


def test_fits_on_empty_board_within_bounds():
    board = Board()
    assert can_place(board, PieceKey.A5, 0, 5)
    assert not can_place(board, PieceKey.A5, 0, 6)
    assert can_place(board, PieceKey.B4, 5, 0)
    assert not can_place(board, PieceKey.B4, 6, 0)


def test_negative_or_far_anchor_is_illegal():
    board = Board()
    assert not can_place(board, PieceKey.A1, -1, 0)
    assert not can_place(board, PieceKey.A1, 0, -1)
    assert not can_place(board, PieceKey.A1, 100, 100)


def test_zero_cells_of_bitmask_may_cover_occupied_cells():
    board = Board()
    # D2 is ((0, 0, 1), (1, 1, 1)); its empty top-left cells can overlap blocks.
    fill(board, [(0, 0), (0, 1)])
    assert can_place(board, PieceKey.D2, 0, 0)
    fill(board, [(0, 2)])
    assert not can_place(board, PieceKey.D2, 0, 0)


def test_clearing_cells_still_block_placement():
    board = Board()
    fill(board, [(0, c) for c in range(10)])
    board.mark_clearing(rows=[0])
    assert not can_place(board, PieceKey.A1, 0, 0)
    assert can_place(board.swept(), PieceKey.A1, 0, 0)


def test_legality_matches_cell_by_cell_definition():
    rng = random.Random(3)
    board = Board()
    fill(board, [(r, c) for r, c in itertools.product(range(10), range(10)) if rng.random() < 0.3])
    for key in PieceKey:
        for r in range(-2, 11):
            for c in range(-2, 11):
                expected = all(
                    0 <= r + dy < 10 and 0 <= c + dx < 10 and board.cell_at(r + dy, c + dx) is None
                    for dy, dx in shape_blocks(key)
                )
                assert can_place(board, key, r, c) == expected, (key, r, c)


def test_legal_placement_then_place_occupies_exactly_the_piece_cells():
    board = Board()
    fill(board, [(4, 4), (7, 1)])
    before = board.copy()
    p = piece(PieceKey.E2)
    assert can_place(board, p.key, 3, 5)
    board.place(p, 3, 5)
    targets = set(p.blocks(3, 5))
    for r in range(10):
        for c in range(10):
            if (r, c) in targets:
                cell = board.cell_at(r, c)
                assert cell is not None and cell.key == p.key and cell.color == p.color
            else:
                assert board.cell_at(r, c) == before.cell_at(r, c)


def test_legal_anchors_raster_order():
    board = Board(height=2, width=2)
    assert legal_anchors(board, PieceKey.A2) == [(0, 0), (1, 0)]
    assert legal_anchors(board, PieceKey.C2) == []
