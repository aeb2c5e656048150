"""Piece catalog and colour palette.

Every placeable shape is a rectangular 0/1 bitmask whose occupied cells are
offsets from the top-left anchor.  Shapes never rotate; orientations that the
game offers are listed as separate catalog entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple
import random

Bitmask = Tuple[Tuple[int, ...], ...]
Offsets = List[Tuple[int, int]]


class PieceKey(str, Enum):
    """Enumeration of the catalog shapes."""

    # Horizontal runs
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    # Vertical runs
    B1 = "B1"
    B2 = "B2"
    B3 = "B3"
    B4 = "B4"
    # Squares
    C1 = "C1"
    C2 = "C2"
    # L shapes
    D1 = "D1"
    D2 = "D2"
    D3 = "D3"
    D4 = "D4"
    # Mirrored L shapes
    E1 = "E1"
    E2 = "E2"
    E3 = "E3"
    E4 = "E4"


class Color(str, Enum):
    """Rainbow palette a piece instance draws its colour from."""

    RED = "hsl(348, 83%, 61%)"
    ORANGE = "hsl(29, 95%, 63%)"
    YELLOW = "hsl(54, 100%, 62%)"
    GREEN = "hsl(145, 63%, 49%)"
    BLUE = "hsl(204, 70%, 53%)"
    INDIGO = "hsl(262.1, 83.3%, 57.8%)"
    VIOLET = "hsl(314, 79%, 60%)"


# RGB equivalents of the palette for renderers that cannot parse CSS colours.
COLOR_RGB: Dict[Color, Tuple[int, int, int]] = {
    Color.RED: (236, 88, 114),
    Color.ORANGE: (250, 156, 77),
    Color.YELLOW: (255, 234, 61),
    Color.GREEN: (46, 204, 113),
    Color.BLUE: (52, 152, 219),
    Color.INDIGO: (124, 58, 237),
    Color.VIOLET: (230, 80, 200),
}


PIECE_SHAPES: Dict[PieceKey, Bitmask] = {
    PieceKey.A1: ((1,),),
    PieceKey.A2: ((1, 1),),
    PieceKey.A3: ((1, 1, 1),),
    PieceKey.A4: ((1, 1, 1, 1),),
    PieceKey.A5: ((1, 1, 1, 1, 1),),
    PieceKey.B1: ((1,), (1,)),
    PieceKey.B2: ((1,), (1,), (1,)),
    PieceKey.B3: ((1,), (1,), (1,), (1,)),
    PieceKey.B4: ((1,), (1,), (1,), (1,), (1,)),
    PieceKey.C1: ((1, 1), (1, 1)),
    PieceKey.C2: ((1, 1, 1), (1, 1, 1), (1, 1, 1)),
    PieceKey.D1: ((1, 0), (1, 0), (1, 1)),
    PieceKey.D2: ((0, 0, 1), (1, 1, 1)),
    PieceKey.D3: ((1, 1), (0, 1), (0, 1)),
    PieceKey.D4: ((1, 1, 1), (1, 0, 0)),
    PieceKey.E1: ((0, 1), (0, 1), (1, 1)),
    PieceKey.E2: ((1, 1, 1), (0, 0, 1)),
    PieceKey.E3: ((1, 1), (1, 0), (1, 0)),
    PieceKey.E4: ((1, 0, 0), (1, 1, 1)),
}


def _offsets(mask: Bitmask) -> Offsets:
    """Return the occupied ``(row, col)`` offsets of ``mask`` in raster order."""

    return [(y, x) for y, row in enumerate(mask) for x, cell in enumerate(row) if cell]


_SHAPE_BLOCKS: Dict[PieceKey, Offsets] = {
    key: _offsets(mask) for key, mask in PIECE_SHAPES.items()
}

PIECE_KEYS: List[PieceKey] = list(PieceKey)
PALETTE: List[Color] = list(Color)


def shape_of(key: PieceKey) -> Bitmask:
    """Return the bitmask for ``key``."""

    return PIECE_SHAPES[PieceKey(key)]


def shape_blocks(key: PieceKey) -> Offsets:
    """Return the occupied offsets for ``key``.

    The list is shared; callers must not mutate it.
    """

    return _SHAPE_BLOCKS[PieceKey(key)]


def shape_size(key: PieceKey) -> Tuple[int, int]:
    """Return ``(height, width)`` of the bitmask for ``key``."""

    mask = shape_of(key)
    return len(mask), len(mask[0])


def cell_count(key: PieceKey) -> int:
    return len(shape_blocks(key))


@dataclass(frozen=True)
class PieceInstance:
    """A catalog shape paired with the colour it was dealt with."""

    key: PieceKey
    color: Color

    def blocks(self, row: int = 0, col: int = 0) -> Offsets:
        """Return the board coordinates covered when anchored at ``(row, col)``."""

        return [(row + dy, col + dx) for dy, dx in shape_blocks(self.key)]

    @property
    def cells(self) -> int:
        return cell_count(self.key)


def random_piece(rng: random.Random | None = None) -> PieceInstance:
    """Draw a piece with an independently chosen shape and colour."""

    rng = rng or random
    return PieceInstance(key=rng.choice(PIECE_KEYS), color=rng.choice(PALETTE))
