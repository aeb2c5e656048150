"""Simple pygame front-end for the Block Blast engine.

The board is drawn on the left and the three-slot tray on the right.  Drag a
piece from the tray onto the board with the mouse; a translucent preview shows
where it would land, tinted red when it does not fit.  Press ``N`` (or ``R``)
for a new game and ``Esc`` to quit.
"""

from __future__ import annotations

import asyncio
import logging
import os
import random
from typing import Optional, Tuple

import pygame

from .config import GameConfig
from .drag import DragController
from .game_state import GameState
from .pieces import COLOR_RGB, PieceInstance, shape_blocks, shape_size

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60
MARGIN = 20
HEADER = 40
TRAY_WIDTH = 5 * CELL_SIZE + 20
SLOT_HEIGHT = 5 * CELL_SIZE + 10

BACKGROUND = (18, 18, 24)
EMPTY_CELL = (40, 40, 50)
GRID_LINE = (25, 25, 32)
CLEARING = (255, 255, 255)
WARNING = (125, 29, 29)
TEXT = (230, 230, 235)

LOGGER = logging.getLogger(__name__)


def board_origin() -> Tuple[int, int]:
    return MARGIN, MARGIN + HEADER


def slot_rect(config: GameConfig, index: int) -> pygame.Rect:
    """Screen rectangle of tray slot ``index``."""

    x = MARGIN * 2 + config.width * CELL_SIZE
    y = MARGIN + HEADER + index * SLOT_HEIGHT
    return pygame.Rect(x, y, TRAY_WIDTH, SLOT_HEIGHT)


def piece_origin(config: GameConfig, index: int, piece: PieceInstance) -> Tuple[int, int]:
    """Top-left pixel of ``piece`` centred inside tray slot ``index``."""

    rect = slot_rect(config, index)
    rows, cols = shape_size(piece.key)
    return rect.centerx - cols * CELL_SIZE // 2, rect.centery - rows * CELL_SIZE // 2


def _blend(color: Tuple[int, int, int], alpha: float) -> Tuple[int, int, int]:
    return tuple(int(b + (c - b) * alpha) for c, b in zip(color, EMPTY_CELL))  # type: ignore[return-value]


def draw_board(screen: pygame.Surface, controller: DragController) -> None:
    """Render the board with the drop preview overlaid."""

    ox, oy = board_origin()
    for r, line in enumerate(controller.display_grid()):
        for c, cell in enumerate(line):
            if cell is None:
                color = EMPTY_CELL
            elif cell.preview:
                color = _blend(COLOR_RGB[cell.color], 0.5) if cell.legal else _blend(WARNING, 0.3)
            elif cell.clearing:
                color = CLEARING
            else:
                color = COLOR_RGB[cell.color]
            rect = pygame.Rect(ox + c * CELL_SIZE, oy + r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_piece(screen: pygame.Surface, piece: PieceInstance, x: float, y: float) -> None:
    color = COLOR_RGB[piece.color]
    for dy, dx in shape_blocks(piece.key):
        rect = pygame.Rect(int(x) + dx * CELL_SIZE, int(y) + dy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_tray(screen: pygame.Surface, controller: DragController) -> None:
    state = controller.state
    dragged = controller.dragging.index if controller.dragging else None
    for index, piece in enumerate(state.tray):
        pygame.draw.rect(screen, EMPTY_CELL, slot_rect(state.config, index), 1)
        if piece is None or index == dragged:
            continue
        draw_piece(screen, piece, *piece_origin(state.config, index, piece))


def slot_at(config: GameConfig, pos: Tuple[int, int]) -> Optional[int]:
    for index in range(config.tray_size):
        if slot_rect(config, index).collidepoint(pos):
            return index
    return None


def handle_mouse(event: pygame.event.Event, controller: DragController) -> None:
    """Feed mouse events to the drag controller."""

    state = controller.state
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        index = slot_at(state.config, event.pos)
        if index is None or state.tray[index] is None:
            return
        px, py = piece_origin(state.config, index, state.tray[index])
        x, y = event.pos
        controller.press(index, x, y, x - px, y - py)
    elif event.type == pygame.MOUSEMOTION:
        controller.move(*event.pos)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        controller.release()


class GameRunner:
    """Manage the game loop with start/stop controls."""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None) -> None:
        self.config = config or GameConfig(cell_px=CELL_SIZE)
        self._seed = seed
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._clock: Optional[pygame.time.Clock] = None
        self.state: Optional[GameState] = None
        self.controller: Optional[DragController] = None

    @property
    def running(self) -> bool:
        return self._running

    def new_game(self) -> None:
        assert self.state is not None and self.controller is not None
        self.controller.cancel()
        self.state.start_session()

    def _draw(self) -> None:
        assert self._screen is not None and self.state is not None and self.controller is not None
        self._screen.fill(BACKGROUND)
        if self._font:
            label = f"Score: {self.state.score}"
            if self.state.game_over:
                label += "   Game Over! Press N to play again"
            self._screen.blit(self._font.render(label, True, TEXT), (MARGIN, MARGIN))
        draw_board(self._screen, self.controller)
        draw_tray(self._screen, self.controller)
        position = self.controller.floating_position()
        if position and self.controller.dragging:
            draw_piece(self._screen, self.controller.dragging.piece, *position)
        pygame.display.flip()

    async def _run_loop(self) -> None:
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        pygame.init()
        width = MARGIN * 3 + self.config.width * CELL_SIZE + TRAY_WIDTH
        height = MARGIN * 2 + HEADER + max(
            self.config.height * CELL_SIZE, self.config.tray_size * SLOT_HEIGHT
        )
        self._screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Block Blast")
        self._font = pygame.font.Font(None, 28)
        self._clock = pygame.time.Clock()

        self.state = GameState(config=self.config, rng=random.Random(self._seed))
        self.controller = DragController(
            self.state, cell_px=CELL_SIZE, origin=board_origin()
        )
        self.state.start_session()

        self._running = True
        while self._running:
            self._clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.key in (pygame.K_n, pygame.K_r):
                        self.new_game()
                elif event.type in (
                    pygame.MOUSEBUTTONDOWN,
                    pygame.MOUSEMOTION,
                    pygame.MOUSEBUTTONUP,
                ):
                    handle_mouse(event, self.controller)

            self.state.tick()
            self._draw()
            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped. Final score: %d", self.state.score)

    def start(self) -> None:
        asyncio.run(self._run_loop())

    def stop(self) -> None:
        self._running = False


def main(seed: Optional[int] = None) -> None:
    GameRunner(seed=seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
