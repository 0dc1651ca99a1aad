"""Grid ray casting and textured wall columns."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from raycub.image import Image
from raycub.player import Player

_MAX_LINE_HEIGHT = 2**31 - 1


class Side(IntEnum):
    """Which face a ray struck; the value indexes the texture list."""

    EAST = 0
    WEST = 1
    SOUTH = 2
    NORTH = 3
    DOOR_X = 4
    DOOR_Y = 5


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall or closed door."""

    side: Side
    map_x: int
    map_y: int
    step_x: int
    step_y: int
    ray_dir_x: float
    ray_dir_y: float
    perp_wall_dist: float
    wall_x: float


def _delta(along: float, across: float) -> float:
    square = along * along
    if square == 0:
        return math.inf
    return math.sqrt(1 + (across * across) / square)


def cast_ray(player: Player, grid: Sequence[Sequence[str]], camera_x: float) -> RayHit:
    """Follow a ray through the grid until it hits a wall or closed door.

    ``camera_x`` runs from -1 (left edge of the view) to 1 (right edge).
    """
    ray_x = player.dir_x + player.plane_x * camera_x
    ray_y = player.dir_y + player.plane_y * camera_x
    map_x = int(player.pos_x)
    map_y = int(player.pos_y)
    delta_x = _delta(ray_x, ray_y)
    delta_y = _delta(ray_y, ray_x)

    if ray_x < 0:
        step_x = -1
        near_x = (player.pos_x - map_x) * delta_x
    else:
        step_x = 1
        near_x = (map_x + 1.0 - player.pos_x) * delta_x
    if ray_y < 0:
        step_y = -1
        near_y = (player.pos_y - map_y) * delta_y
    else:
        step_y = 1
        near_y = (map_y + 1.0 - player.pos_y) * delta_y

    while True:
        if near_x < near_y:
            near_x += delta_x
            map_x += step_x
            side = Side.EAST if step_x == 1 else Side.WEST
        else:
            near_y += delta_y
            map_y += step_y
            side = Side.SOUTH if step_y == 1 else Side.NORTH
        if not (0 <= map_y < len(grid) and 0 <= map_x < len(grid[map_y])):
            raise ValueError("ray left the map")
        cell = grid[map_y][map_x]
        if cell in ("1", "C"):
            if cell == "C":
                side = Side.DOOR_X if side in (Side.EAST, Side.WEST) else Side.DOOR_Y
            break

    if side in (Side.EAST, Side.WEST, Side.DOOR_X):
        perp = (map_x - player.pos_x + (1 - step_x) // 2) / ray_x
        wall_x = player.pos_y + perp * ray_y
    else:
        perp = (map_y - player.pos_y + (1 - step_y) // 2) / ray_y
        wall_x = player.pos_x + perp * ray_x
    wall_x -= math.floor(wall_x)
    return RayHit(side, map_x, map_y, step_x, step_y, ray_x, ray_y, perp, wall_x)


def wall_column(hit: RayHit, texture: Image, screen_height: int) -> tuple[int, list[int]]:
    """Return the first screen row of a wall slice and its texture colours.

    The colours cover rows from the returned start down to the bottom of
    the slice, both included.
    """
    tex_x = int(hit.wall_x * texture.width)
    if hit.side in (Side.WEST, Side.SOUTH):
        tex_x = texture.width - tex_x - 1
    tex_x = min(max(tex_x, 0), texture.width - 1)

    if hit.perp_wall_dist > 0:
        line_height = int(min(screen_height / hit.perp_wall_dist, _MAX_LINE_HEIGHT))
    else:
        line_height = _MAX_LINE_HEIGHT
    line_height = max(line_height, 1)
    half = screen_height // 2
    draw_start = max(-(line_height // 2) + half, 0)
    draw_end = min(line_height // 2 + half, screen_height - 1)
    step = texture.height / line_height
    tex_pos = (draw_start - half + line_height // 2) * step

    colors = []
    for _ in range(draw_start, draw_end + 1):
        tex_y = min(max(int(tex_pos), 0), texture.height - 1)
        tex_pos += step
        colors.append(texture.get_pixel(tex_x, tex_y))
    return draw_start, colors


def render_frame(
    frame: Image,
    player: Player,
    grid: Sequence[Sequence[str]],
    textures: Sequence[Image],
    ceiling: int,
    floor: int,
) -> None:
    """Draw the walls, ceiling and floor seen by ``player`` into ``frame``."""
    width = frame.width
    height = frame.height
    for x in range(width):
        camera_x = 2 * x / width - 1
        hit = cast_ray(player, grid, camera_x)
        start, colors = wall_column(hit, textures[hit.side], height)
        for y, color in enumerate(colors, start):
            frame.put_pixel(x, y, color)
        for y in range(start):
            frame.put_pixel(x, y, ceiling)
        for y in range(start + len(colors) - 1, height):
            frame.put_pixel(x, y, floor)