import random

import pytest

from blockblast.config import GameConfig
from blockblast.drag import DragController, pixel_to_cell
from blockblast.game_state import GameState
from blockblast.pieces import PieceKey

from helpers import fill, piece


CELL = 24


def _controller(origin=(0, 0)):
    state = GameState(config=GameConfig(cell_px=CELL), rng=random.Random(1))
    state.start_session()
    state.tray = [piece(PieceKey.A3), piece(PieceKey.C1), piece(PieceKey.A1)]
    return DragController(state, origin=origin), state


def _center(row, col, origin=(0, 0)):
    return origin[0] + col * CELL + CELL / 2, origin[1] + row * CELL + CELL / 2


@pytest.mark.parametrize(
    "offset,expected",
    [(0, 0), (11.9, 0), (12, 0), (23.9, 0), (24, 1), (239, 9), (240, 10), (-0.1, -1), (-24, -1)],
)
def test_pixel_to_cell(offset, expected):
    assert pixel_to_cell(offset, CELL) == expected


def test_press_move_release_commits_piece():
    controller, state = _controller()
    assert controller.press(0, 500, 500, offset_x=10, offset_y=5)
    preview = controller.move(*_center(4, 2))
    assert (preview.row, preview.col, preview.can_place) == (4, 2, True)
    assert controller.floating_position() == (_center(4, 2)[0] - 10, _center(4, 2)[1] - 5)

    result = controller.release()
    assert result is not None
    assert result.cells_placed == 3
    assert [state.board.cell_at(4, c) is not None for c in range(2, 5)] == [True] * 3
    assert state.tray[0] is None
    assert controller.dragging is None
    assert controller.preview is None


def test_release_over_illegal_cell_commits_nothing():
    controller, state = _controller()
    fill(state.board, [(4, 3)])
    controller.press(0, 0, 0)
    preview = controller.move(*_center(4, 2))
    assert preview.can_place is False
    assert controller.release() is None
    assert state.board.occupied_count() == 1
    assert state.tray[0] is not None
    assert controller.active is False


def test_release_off_board_commits_nothing():
    controller, state = _controller()
    controller.press(1, 0, 0)
    preview = controller.move(-30, 10)
    assert preview.col == -2
    assert preview.can_place is False
    assert controller.release() is None
    assert state.score == 0


def test_release_without_drag_is_noop():
    controller, _ = _controller()
    assert controller.release() is None
    assert controller.move(10, 10) is None


def test_press_rejects_empty_slot_game_over_and_second_drag():
    controller, state = _controller()
    state.tray[2] = None
    assert controller.press(2, 0, 0) is False
    assert controller.press(7, 0, 0) is False
    assert controller.press(0, 0, 0) is True
    assert controller.press(1, 0, 0) is False
    controller.cancel()
    state.game_over = True
    assert controller.press(1, 0, 0) is False


def test_origin_offsets_pointer_mapping():
    origin = (20, 60)
    controller, _ = _controller(origin=origin)
    controller.press(2, 0, 0)
    preview = controller.move(*_center(7, 8, origin))
    assert (preview.row, preview.col) == (7, 8)


def test_preview_uses_authoritative_board_with_clearing_cells():
    controller, state = _controller()
    fill(state.board, [(0, c) for c in range(10)])
    state.board.mark_clearing(rows=[0])
    controller.press(2, 0, 0)
    assert controller.move(*_center(0, 0)).can_place is False
    state.sweep_clearing()
    assert controller.move(*_center(0, 0)).can_place is True


def test_display_grid_shows_preview_only_while_dragging():
    controller, state = _controller()
    fill(state.board, [(3, 3)])
    controller.press(1, 0, 0)
    controller.move(*_center(2, 2))
    grid = controller.display_grid()
    assert grid[2][2].preview and grid[2][2].legal is False
    assert grid[3][3].preview is False
    controller.cancel()
    assert controller.display_grid()[2][2] is None


def test_new_session_during_drag_drops_the_gesture():
    controller, state = _controller()
    state.tray = [piece(PieceKey.A1), piece(PieceKey.A1), piece(PieceKey.A1)]
    controller.press(0, 0, 0)
    assert controller.move(*_center(9, 0)).can_place

    state.start_session()
    state.tray = [piece(PieceKey.B4), piece(PieceKey.A1), piece(PieceKey.A1)]

    assert controller.release() is None
    assert state.board.occupied_count() == 0
    assert state.tray[0].key == PieceKey.B4
    assert controller.active is False


def test_stale_drag_shows_no_preview_and_allows_new_press():
    controller, state = _controller()
    controller.press(0, 0, 0)
    controller.move(*_center(0, 0))
    state.start_session()

    assert all(cell is None for row in controller.display_grid() for cell in row)
    assert controller.move(*_center(1, 1)) is None
    assert controller.press(1, 0, 0) is True
    assert controller.dragging.piece is state.tray[1]


def test_replaced_slot_piece_is_not_committed():
    controller, state = _controller()
    controller.press(2, 0, 0)
    controller.move(*_center(5, 5))
    state.tray[2] = piece(PieceKey.C2)

    assert controller.release() is None
    assert state.board.occupied_count() == 0
    assert state.tray[2].key == PieceKey.C2


def test_game_over_during_drag_commits_nothing():
    controller, state = _controller()
    controller.press(0, 0, 0)
    controller.move(*_center(0, 0))
    state.game_over = True

    assert controller.release() is None
    assert state.score == 0
