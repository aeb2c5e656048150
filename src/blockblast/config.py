"""Tunable settings for a game session."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .board import HEIGHT, WIDTH


TRAY_SIZE = 3
# Milliseconds between flagging cleared lines and emptying them.
CLEAR_DELAY_MS = 300
# Milliseconds between playing the last tray piece and dealing a new tray.
REFILL_DELAY_MS = 200
# Size of a board cell in pixels, used to map pointer positions to cells.
CELL_PX = 24


@dataclass(frozen=True)
class GameConfig:
    height: int = HEIGHT
    width: int = WIDTH
    tray_size: int = TRAY_SIZE
    clear_delay_ms: float = CLEAR_DELAY_MS
    refill_delay_ms: float = REFILL_DELAY_MS
    cell_px: float = CELL_PX

    def __post_init__(self) -> None:
        if self.height <= 0 or self.width <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.height}x{self.width}")
        if self.tray_size <= 0:
            raise ValueError(f"Tray size must be positive, got {self.tray_size}")
        if self.cell_px <= 0:
            raise ValueError(f"Cell size must be positive, got {self.cell_px}")

    @classmethod
    def headless(cls, **overrides) -> "GameConfig":
        """Return a config whose deferred steps run synchronously."""

        return replace(cls(clear_delay_ms=0, refill_delay_ms=0), **overrides)
