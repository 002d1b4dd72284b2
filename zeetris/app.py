"""The playable window: input handling, timing and rendering."""

from __future__ import annotations

import argparse
import random
import time
from pathlib import Path
from typing import Callable, Sequence

import pygame

from .board import GameData
from .pieces import (
    BLOCK_COLORS,
    ROTATING_CENTERS,
    BlockType,
    GameConfig,
    Point,
    RotationState,
)

WINDOW_SIZE = (1366, 768)
WINDOW_TITLE = "Zeetris 2"
FRAMERATE_LIMIT = 120
LOGIC_RATE = 60
DEFAULT_FONT = "assets/unifont-16.0.02.otf"
FONT_SIZE = 24

_BACKGROUND = (0, 0, 0)
_OUTLINE_COLOR = (255, 255, 255)
_TEXT_COLOR = (255, 255, 255)
_MARKER_HALF = 5.0


def cell_rect(y: int, x: int) -> tuple[float, float, float, float]:
    """Screen rectangle (left, top, width, height) of field cell (y, x)."""
    size = GameConfig.block_size
    return (x * size, (GameData.height - y - 1) * size, size, size)


def rotation_center_outline(
    block_type: BlockType, anchor: Point
) -> list[tuple[float, float]]:
    """Closed square of screen points (x, y) marking the piece's rotation centre."""
    offset = ROTATING_CENTERS.get(block_type, Point(0.0, 0.0))
    center_y = offset.y + anchor.y - 0.5
    center_x = offset.x + anchor.x + 0.5
    screen_y = (GameData.height - center_y - 1.0) * GameConfig.block_size
    screen_x = center_x * GameConfig.block_size
    h = _MARKER_HALF
    return [
        (screen_x - h, screen_y - h),
        (screen_x - h, screen_y + h),
        (screen_x + h, screen_y + h),
        (screen_x + h, screen_y - h),
        (screen_x - h, screen_y - h),
    ]


def _to_rect(area: tuple[float, float, float, float]) -> pygame.Rect:
    return pygame.Rect(*(round(v) for v in area))


class Game:
    """Owns the game state and drives it from a pygame window."""

    def __init__(
        self,
        window: pygame.Surface,
        font: pygame.font.Font | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.window = window
        self.font = font
        self.rng = rng if rng is not None else random.Random()
        self.data = GameData()
        self.frame_count = 0
        self.logical_frame_count = 0
        self._fps_label = "Unknown fps"
        self.data.new_bag(self.rng, 2)
        self.data.new_block()

        data = self.data
        self._actions: dict[int, Callable[[], object]] = {
            pygame.K_LEFT: lambda: data.move((0, -1)),
            pygame.K_RIGHT: lambda: data.move((0, 1)),
            pygame.K_z: lambda: data.rotate(RotationState.LEFT),
            pygame.K_x: lambda: data.rotate(RotationState.RIGHT),
            pygame.K_SPACE: data.hard_drop,
            pygame.K_LSHIFT: data.exchange_hold,
        }

    def handle_key(self, key: int) -> None:
        """Apply the action bound to a pressed key; other keys are ignored."""
        action = self._actions.get(key)
        if action is not None:
            action()

    def step_logic(self) -> None:
        """Run one 1/60 s logic frame and advance the logic frame counter."""
        self.data.logic_frame(self.logical_frame_count, self.rng)
        self.logical_frame_count += 1

    def _status_lines(self) -> list[str]:
        return [
            self._fps_label,
            f"frame_count_: {self.frame_count}",
            f"logical_frame_count_: {self.logical_frame_count}",
            f"rotation: {int(self.data.rotation_state)}",
        ]

    def draw(self, surface: pygame.Surface) -> None:
        """Render the field, the falling piece, its rotation centre and the status text."""
        surface.fill(_BACKGROUND)
        for y, row in enumerate(self.data.matrix):
            for x, cell in enumerate(row):
                if cell != BlockType.NONE:
                    pygame.draw.rect(surface, BLOCK_COLORS[cell], _to_rect(cell_rect(y, x)))

        color = BLOCK_COLORS.get(self.data.current_block_type, BLOCK_COLORS[BlockType.NONE])
        if self.data.current_block_type != BlockType.NONE:
            for p in self.data.current_block.points:
                pygame.draw.rect(surface, color, _to_rect(cell_rect(int(p.y), int(p.x))))

        outline = rotation_center_outline(
            self.data.current_block_type, self.data.current_block.anchor
        )
        pygame.draw.lines(surface, _OUTLINE_COLOR, False, outline)

        if self.font is not None:
            top = 0
            for line in self._status_lines():
                text = self.font.render(line, True, _TEXT_COLOR)
                surface.blit(text, (0, top))
                top += text.get_height()

    def run(self) -> None:
        """Play until the window is closed."""
        clock = pygame.time.Clock()
        logic_period = 1.0 / LOGIC_RATE
        next_logic = time.perf_counter() + logic_period
        while True:
            start = time.perf_counter()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            now = time.perf_counter()
            while now >= next_logic:
                self.step_logic()
                next_logic += logic_period

            self.draw(self.window)
            pygame.display.flip()
            self.frame_count += 1
            clock.tick(FRAMERATE_LIMIT)

            elapsed = time.perf_counter() - start
            if elapsed > 0:
                self._fps_label = f"{int(1.0 / elapsed)} fps"


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play."""
    parser = argparse.ArgumentParser(prog="zeetris", description="Falling-block puzzle game.")
    parser.add_argument("--font", default=DEFAULT_FONT, help="path of the font file")
    args = parser.parse_args(argv)

    print("Hello Zeetris 2!")
    print("Loading fonts...")
    font_path = Path(args.font)
    if not font_path.is_file():
        raise RuntimeError("Failed to load unifont")
    pygame.font.init()
    try:
        font = pygame.font.Font(str(font_path), FONT_SIZE)
    except (OSError, pygame.error) as exc:
        raise RuntimeError("Failed to load unifont") from exc

    print("Creating window...")
    pygame.init()
    try:
        window = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        Game(window, font).run()
    finally:
        pygame.quit()
    return 0