"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
import logging
import random

from .board import Board, PlacementError
from .config import GameConfig
from .pieces import PieceInstance, random_piece
from .scoring import clear_lines
from .timers import ScheduledTask, Scheduler
from .utils import can_place, is_game_over


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a committed placement."""

    cells_placed: int
    points: int
    lines: int
    rows: List[int]
    columns: List[int]
    score: int
    game_over: bool
    tray_emptied: bool

    @property
    def score_delta(self) -> int:
        return self.cells_placed + self.points


@dataclass
class GameState:
    """Mutable state for a Block Blast session.

    The state owns the board, the tray and the score.  Everything else reads
    them and requests changes through :meth:`commit_placement`.  Deferred
    steps (emptying cleared lines, dealing a new tray) are scheduled on
    ``scheduler`` and are cancelled when a new session starts.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random)
    scheduler: Scheduler = field(default_factory=Scheduler)
    board: Board = field(init=False)
    tray: List[Optional[PieceInstance]] = field(default_factory=list)
    score: int = 0
    game_over: bool = False
    lines_cleared: int = 0
    moves: int = 0
    # Incremented by every start_session so holders of old state can tell.
    session: int = 0
    _tasks: List[ScheduledTask] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.board = Board(self.config.height, self.config.width)

    # Deferred steps ---------------------------------------------------
    def _schedule(self, delay_ms: float, callback, name: str) -> None:
        if delay_ms <= 0:
            callback()
            return
        self._tasks = [task for task in self._tasks if task.active]
        self._tasks.append(self.scheduler.call_later(delay_ms, callback, name=name))

    def cancel_pending(self) -> int:
        """Cancel this session's scheduled steps and return how many were dropped."""

        cancelled = sum(1 for task in self._tasks if self.scheduler.cancel(task))
        self._tasks = []
        return cancelled

    @property
    def has_pending_tasks(self) -> bool:
        return any(task.active for task in self._tasks)

    def tick(self, now: Optional[float] = None) -> int:
        """Run scheduled steps that are due; returns how many ran."""

        return self.scheduler.run_due(now)

    # Session ----------------------------------------------------------
    def start_session(self) -> None:
        """Discard the current game and start a new one with a fresh tray."""

        cancelled = self.cancel_pending()
        if cancelled:
            LOGGER.debug("Cancelled %d pending step(s) from the previous session", cancelled)
        self.board = Board(self.config.height, self.config.width)
        self.score = 0
        self.game_over = False
        self.lines_cleared = 0
        self.moves = 0
        self.session += 1
        self.tray = [None] * self.config.tray_size
        LOGGER.info("Session %d started", self.session)
        self.deal_tray()

    def deal_tray(self) -> List[Optional[PieceInstance]]:
        """Fill every tray slot with a random piece and check for game over."""

        self.tray = [random_piece(self.rng) for _ in range(self.config.tray_size)]
        LOGGER.debug("Dealt %s", ", ".join(piece.key.value for piece in self.tray if piece))
        self.check_game_over()
        return self.tray

    def remaining_pieces(self) -> List[PieceInstance]:
        return [piece for piece in self.tray if piece is not None]

    def check_game_over(self) -> bool:
        """Evaluate the tray against the board as it will be once swept."""

        if not self.game_over and is_game_over(self.tray, self.board.swept()):
            self.game_over = True
            LOGGER.info("Game over. Score: %d", self.score)
        return self.game_over

    def sweep_clearing(self) -> int:
        """Empty the cells of previously cleared lines."""

        return self.board.sweep()

    # Moves ------------------------------------------------------------
    def commit_placement(self, index: int, row: int, col: int) -> Optional[MoveResult]:
        """Place tray piece ``index`` at ``(row, col)``.

        Returns ``None`` without touching the state once the game is over.

        Raises:
            PlacementError: If the slot is empty or the placement is illegal.
        """

        if self.game_over:
            LOGGER.debug("Commit ignored: game over")
            return None
        piece = self.tray[index] if 0 <= index < len(self.tray) else None
        if piece is None:
            raise PlacementError(f"Tray slot {index} holds no piece")
        if not can_place(self.board, piece.key, row, col):
            raise PlacementError(f"{piece.key.value} cannot be placed at ({row}, {col})")

        cells = self.board.place(piece, row, col)
        self.score += cells

        cleared = clear_lines(self.board)
        self.board = cleared.board
        self.score += cleared.points
        self.lines_cleared += cleared.lines

        self.tray[index] = None
        self.moves += 1

        if cleared.lines:
            LOGGER.info(
                "Cleared %d line(s) for %d points. Score: %d",
                cleared.lines,
                cleared.points,
                self.score,
            )
            self._schedule(self.config.clear_delay_ms, self.sweep_clearing, "sweep")

        tray_emptied = not self.remaining_pieces()
        if tray_emptied:
            self._schedule(self.config.refill_delay_ms, self.deal_tray, "refill")
        else:
            self.check_game_over()

        return MoveResult(
            cells_placed=cells,
            points=cleared.points,
            lines=cleared.lines,
            rows=list(cleared.rows),
            columns=list(cleared.columns),
            score=self.score,
            game_over=self.game_over,
            tray_emptied=tray_emptied,
        )
