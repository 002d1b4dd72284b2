"""Playfield state and the rules that act on it."""

from __future__ import annotations

import random
from collections import deque
from typing import Iterable

from .pieces import (
    PLAYABLE_TYPES,
    ROTATING_CENTERS,
    Block,
    BlockType,
    GameConfig,
    Point,
    RotationState,
    spawn_shape,
)

_SPAWN_OFFSET = Point(20, 3)
_DOWN = Point(-1, 0)


class EmptyQueueError(RuntimeError):
    """Raised when a new piece is needed but the preview queue is empty."""


class GameData:
    """The field, the falling piece, its shadow, the hold slot and the preview queue."""

    height = 22
    width = 10

    def __init__(self) -> None:
        empty = Block(tuple(Point(0, 0) for _ in range(4)))
        self.current_block: Block = empty
        self.shadow_block: Block = empty
        self.rotation_state = RotationState.ZERO
        self.current_block_type = BlockType.NONE
        self.hold_block_type = BlockType.NONE
        self.next_queue: deque[BlockType] = deque()
        self.matrix: list[list[BlockType]] = [
            [BlockType.NONE] * self.width for _ in range(self.height)
        ]
        self.can_exchange_hold = True
        self.on_land = False
        self.frame_stamp_lock = 0

    def check(self, block: Block) -> bool:
        """Whether every cell of ``block`` lies inside the field on an empty square."""
        return all(
            0 <= p.x < self.width
            and 0 <= p.y < self.height
            and self.matrix[int(p.y)][int(p.x)] == BlockType.NONE
            for p in block.points
        )

    def move(self, offset: Iterable[int], refresh_shadow: bool = True) -> bool:
        """Shift the current piece; return False and leave it unchanged if blocked."""
        candidate = self.current_block.translated(offset)
        if not self.check(candidate):
            return False
        self.current_block = candidate
        if refresh_shadow:
            self.refresh_shadow()
        return True

    def rotate(self, rotation: RotationState, refresh_shadow: bool = True) -> bool:
        """Turn the current piece left or right about its rotation centre."""
        if rotation not in (RotationState.LEFT, RotationState.RIGHT):
            raise ValueError("Invalid rotation type")
        offset = ROTATING_CENTERS.get(self.current_block_type, Point(0.0, 0.0))
        center_y = offset.y + self.current_block.anchor.y
        center_x = offset.x + self.current_block.anchor.x

        turned = []
        for p in self.current_block.points:
            rel_y = p.x - center_x
            rel_x = p.y - center_y
            if rotation is RotationState.LEFT:
                turned.append(Point(int(center_y + rel_y), int(center_x - rel_x)))
            else:
                turned.append(Point(int(center_y - rel_y), int(center_x + rel_x)))
        candidate = Block(tuple(turned), self.current_block.anchor)

        if not self.check(candidate):
            return False
        self.current_block = candidate
        if refresh_shadow:
            self.refresh_shadow()
        step = 3 if rotation is RotationState.LEFT else 1
        self.rotation_state = RotationState((self.rotation_state + step) % 4)
        return True

    def new_bag(self, rng: random.Random, bag_count: int = 1) -> None:
        """Append ``bag_count`` shuffled bags of all seven pieces to the queue."""
        for _ in range(bag_count):
            bag = list(PLAYABLE_TYPES)
            rng.shuffle(bag)
            self.next_queue.extend(bag)

    def new_block(self, block_type: BlockType = BlockType.NONE) -> None:
        """Spawn a piece of ``block_type``, or the next one in the queue if NONE."""
        if block_type == BlockType.NONE:
            if not self.next_queue:
                raise EmptyQueueError("the preview queue is empty")
            block_type = self.next_queue.popleft()
        self.current_block = spawn_shape(block_type).translated(_SPAWN_OFFSET)
        self.current_block_type = block_type
        self.rotation_state = RotationState.ZERO
        self.can_exchange_hold = True
        self.refresh_shadow()

    def exchange_hold(self) -> None:
        """Swap the current piece with the held one, once per spawned piece."""
        if not self.can_exchange_hold:
            return
        self.current_block_type, self.hold_block_type = (
            self.hold_block_type,
            self.current_block_type,
        )
        self.new_block(self.current_block_type)
        self.can_exchange_hold = False

    def refresh_shadow(self) -> None:
        """Recompute where the current piece would land if dropped."""
        shadow = self.current_block
        while self.check(lower := shadow.translated(_DOWN)):
            shadow = lower
        self.shadow_block = shadow

    def lock(self) -> None:
        """Write the current piece into the field and spawn the next one."""
        for p in self.current_block.points:
            self.matrix[int(p.y)][int(p.x)] = self.current_block_type
        self.new_block()

    def hard_drop(self) -> None:
        """Drop the current piece onto its shadow and lock it."""
        self.current_block = self.shadow_block
        self.lock()

    def clear_lines(self) -> int:
        """Remove full rows, let the rows above fall, and return how many went."""
        kept = [row for row in self.matrix if BlockType.NONE in row]
        cleared = self.height - len(kept)
        kept.extend([BlockType.NONE] * self.width for _ in range(cleared))
        self.matrix = kept
        return cleared

    def logic_frame(self, frame_count: int, rng: random.Random) -> None:
        """Advance the game by one logic frame numbered ``frame_count``."""
        landed = self.shadow_block == self.current_block
        if landed and not self.on_land:
            self.on_land = True
            self.frame_stamp_lock = frame_count
        elif (
            landed
            and self.on_land
            and frame_count == self.frame_stamp_lock + GameConfig.lock_delay
        ):
            self.lock()
        elif not landed and self.on_land:
            self.on_land = False

        if frame_count % GameConfig.down_delay == 0:
            self.move(_DOWN)

        self.clear_lines()

        if len(self.next_queue) == len(PLAYABLE_TYPES):
            self.new_bag(rng)