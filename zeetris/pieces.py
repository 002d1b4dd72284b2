"""Tetromino shapes, block types and game constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Point:
    """A coordinate stored as (y, x), with y = 0 at the bottom of the field."""

    y: float
    x: float

    def __iter__(self) -> Iterator[float]:
        yield self.y
        yield self.x

    def __add__(self, other: Iterable[float]) -> Point:
        dy, dx = other
        return Point(self.y + dy, self.x + dx)


@dataclass(frozen=True)
class Block:
    """Four cells plus the anchor the rotation system measures from."""

    points: tuple[Point, ...]
    anchor: Point = Point(0, 0)

    def translated(self, offset: Iterable[int]) -> Block:
        """Return a copy of the block shifted by ``offset`` (dy, dx)."""
        dy, dx = offset
        shift = Point(dy, dx)
        return Block(tuple(p + shift for p in self.points), self.anchor + shift)


class BlockType(IntEnum):
    UNKNOWN = -1
    NONE = 0
    I = 1  # noqa: E741
    J = 2
    L = 3
    O = 4  # noqa: E741
    S = 5
    Z = 6
    T = 7


class RotationState(IntEnum):
    """Orientation of a piece, or the direction of a rotation."""

    ZERO = 0
    RIGHT = 1
    TWO = 2
    LEFT = 3


class GameConfig:
    """Rendering and timing settings; delays are in 1/60 s logic frames."""

    block_size = 25.0
    down_delay = 60
    soft_down_delay = 30
    lock_delay = 90


PLAYABLE_TYPES = (
    BlockType.I,
    BlockType.J,
    BlockType.L,
    BlockType.O,
    BlockType.S,
    BlockType.Z,
    BlockType.T,
)

_SHAPES: dict[BlockType, tuple[tuple[int, int], ...]] = {
    BlockType.NONE: ((0, 0), (0, 0), (0, 0), (0, 0)),
    BlockType.I: ((0, 0), (0, 1), (0, 2), (0, 3)),
    BlockType.J: ((0, 0), (1, 0), (0, 1), (0, 2)),
    BlockType.L: ((0, 0), (0, 1), (0, 2), (1, 2)),
    BlockType.O: ((0, 1), (0, 2), (1, 1), (1, 2)),
    BlockType.S: ((0, 0), (0, 1), (1, 1), (1, 2)),
    BlockType.Z: ((1, 0), (1, 1), (0, 1), (0, 2)),
    BlockType.T: ((0, 0), (0, 1), (0, 2), (1, 1)),
}

BLOCK_COLORS: dict[BlockType, tuple[int, int, int, int]] = {
    BlockType.NONE: (0, 0, 0, 0),
    BlockType.I: (0, 255, 255, 255),
    BlockType.J: (0, 0, 255, 255),
    BlockType.L: (225, 127, 0, 255),
    BlockType.O: (255, 255, 0, 255),
    BlockType.S: (0, 255, 0, 255),
    BlockType.Z: (255, 0, 0, 255),
    BlockType.T: (128, 0, 128, 255),
}

ROTATING_CENTERS: dict[BlockType, Point] = {
    BlockType.NONE: Point(0.0, 0.0),
    BlockType.I: Point(-0.5, 1.5),
    BlockType.J: Point(0.0, 1.0),
    BlockType.L: Point(0.0, 1.0),
    BlockType.O: Point(0.5, 1.5),
    BlockType.S: Point(0.0, 1.0),
    BlockType.Z: Point(0.0, 1.0),
    BlockType.T: Point(0.0, 1.0),
}


def spawn_shape(block_type: BlockType) -> Block:
    """Return the preset shape of ``block_type`` with its anchor at the origin."""
    try:
        cells = _SHAPES[BlockType(block_type)]
    except (KeyError, ValueError):
        raise ValueError(f"no shape for block type {block_type!r}") from None
    return Block(tuple(Point(y, x) for y, x in cells))