"""Minimap and weapon overlay drawn on top of the 3D view."""

from __future__ import annotations

import struct
from collections.abc import Sequence

from raycub.image import Image
from raycub.player import Player

MINIMAP_SCALE = 8
MINIMAP_OFFSET = 5
WEAPON_SCALE = 4
WEAPON_LIFT = 650

RED = 0xFF0000
GREEN = 0x00FF00
BLUE = 0x0000FF
WALL_COLOR = 0x222222
FLOOR_COLOR = 0xDDDDDD
WEAPON_BACKGROUND = 0xFFFFFF

_CELL_COLORS = {"1": WALL_COLOR, "0": FLOOR_COLOR, "C": RED, "O": GREEN}
_RAY_LENGTH = 5.0


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_RAY_STEP = _f32(0.05)


def _plot(frame: Image, x: int, y: int, color: int) -> None:
    if 0 <= x < frame.width and 0 <= y < frame.height:
        frame.put_pixel(x, y, color)


def draw_square(frame: Image, x: int, y: int, color: int, size: int = MINIMAP_SCALE) -> None:
    """Fill a ``size`` by ``size`` square whose top-left corner is (x, y).

    Pixels that fall outside the frame are left out.
    """
    for dy in range(size):
        for dx in range(size):
            _plot(frame, x + dx, y + dy, color)


def _minimap_point(value: float) -> int:
    return int((value + MINIMAP_OFFSET) * MINIMAP_SCALE)


def draw_minimap(frame: Image, grid: Sequence[Sequence[str]]) -> None:
    """Draw walls, floor and doors of ``grid`` in the top-left corner of ``frame``."""
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            color = _CELL_COLORS.get(cell)
            if color is None:
                continue
            draw_square(
                frame,
                (x + MINIMAP_OFFSET) * MINIMAP_SCALE,
                (y + MINIMAP_OFFSET) * MINIMAP_SCALE,
                color,
            )


def draw_player_marker(frame: Image, player: Player) -> None:
    """Mark the player's position on the minimap."""
    px = _minimap_point(player.pos_x)
    py = _minimap_point(player.pos_y)
    draw_square(frame, px - 1, py - 1, RED)


def draw_direction_ray(frame: Image, player: Player, grid: Sequence[Sequence[str]]) -> None:
    """Trace the view direction on the minimap up to a wall or closed door.

    The trace is at most five cells long; the player marker is drawn on top.
    """
    ray_x = _f32(player.pos_x)
    ray_y = _f32(player.pos_y)
    for _ in range(int(_RAY_LENGTH / _RAY_STEP)):
        ray_x = _f32(ray_x + player.dir_x * _RAY_STEP)
        ray_y = _f32(ray_y + player.dir_y * _RAY_STEP)
        map_x = int(ray_x)
        map_y = int(ray_y)
        if map_x < 0 or map_y < 0 or map_y >= len(grid) or map_x >= len(grid[map_y]):
            break
        if grid[map_y][map_x] in ("1", "C"):
            break
        draw_square(frame, _minimap_point(ray_x) - 1, _minimap_point(ray_y) - 1, BLUE)
    draw_player_marker(frame, player)


def weapon_paths(directory: str = "texture/item") -> list[str]:
    """Return the paths of the four weapon animation frames."""
    return [f"{directory}/{number}.xpm" for number in range(1, 5)]


class WeaponAnimation:
    """A shooting animation that steps to the next frame every second tick."""

    def __init__(self, frames: Sequence[Image]) -> None:
        self.frames = list(frames)
        if not self.frames:
            raise ValueError("a weapon needs at least one frame")
        self.shooting = False
        self.frame = 0
        self.timer = 0

    def trigger(self) -> None:
        """Start shooting unless a shot is already under way."""
        if not self.shooting:
            self.shooting = True
            self.frame = 0
            self.timer = 0

    def advance(self) -> int:
        """Move the animation on by one tick and return the frame to show."""
        if not self.shooting:
            return 0
        self.timer += 1
        if self.timer >= 2:
            self.frame += 1
            self.timer = 0
        if self.frame >= len(self.frames):
            self.frame = 0
            self.shooting = False
        return self.frame

    def draw(self, frame: Image) -> int:
        """Advance the animation and draw the current frame, scaled up, on ``frame``.

        White texels are treated as background. Returns the frame index drawn.
        """
        index = self.advance()
        sprite = self.frames[index]
        base = self.frames[0]
        base_x = frame.width // 2 - base.width // 2
        base_y = frame.height - base.height - WEAPON_LIFT
        for ty in range(sprite.height):
            for tx in range(sprite.width):
                color = sprite.get_pixel(tx, ty)
                if color != WEAPON_BACKGROUND:
                    draw_square(
                        frame,
                        base_x + tx * WEAPON_SCALE,
                        base_y + ty * WEAPON_SCALE,
                        color,
                        WEAPON_SCALE,
                    )
        return index