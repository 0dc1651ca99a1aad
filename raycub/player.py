"""Player position, facing and movement on a scene grid."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass

MOVE_SPEED = 0.02
ROTATION_SPEED = 0.02
BLOCKING = frozenset("1C")

# Facing for each spawn letter: (dir_x, dir_y, plane_x, plane_y).
_SPAWN_FACING = {
    "N": (0.0, -1.00001, 0.66, 0.0),
    "S": (0.0, 1.00001, -0.66, 0.0),
    "E": (1.00001, 0.0, 0.0, 0.66),
    "W": (-1.00001, 0.0, 0.0, -0.66),
}


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def spawn(cls, grid: Sequence[MutableSequence[str]]) -> Player:
        """Place a player on the spawn letter of ``grid``.

        The player stands in the centre of the cell, facing the way the
        letter says, and the cell becomes floor (``"0"``).
        """
        player: Player | None = None
        for y, row in enumerate(grid):
            for x, cell in enumerate(row):
                facing = _SPAWN_FACING.get(cell)
                if facing is None:
                    continue
                player = cls(x + 0.5, y + 0.5, *facing)
                row[x] = "0"
        if player is None:
            raise ValueError("no player start in map")
        return player

    def _step(self, grid: Sequence[Sequence[str]], dy: float, dx: float) -> None:
        next_y = int(self.pos_y + dy)
        next_x = int(self.pos_x + dx)
        if grid[next_y][int(self.pos_x)] not in BLOCKING:
            self.pos_y += dy
        if grid[int(self.pos_y)][next_x] not in BLOCKING:
            self.pos_x += dx

    def move_forward(self, grid: Sequence[Sequence[str]]) -> None:
        """Step along the view direction unless a wall or closed door is in the way."""
        self._step(grid, self.dir_y * MOVE_SPEED, self.dir_x * MOVE_SPEED)

    def move_backward(self, grid: Sequence[Sequence[str]]) -> None:
        """Step against the view direction."""
        self._step(grid, -self.dir_y * MOVE_SPEED, -self.dir_x * MOVE_SPEED)

    def move_left(self, grid: Sequence[Sequence[str]]) -> None:
        """Strafe to the left of the view direction."""
        self._step(grid, -self.dir_x * MOVE_SPEED, self.dir_y * MOVE_SPEED)

    def move_right(self, grid: Sequence[Sequence[str]]) -> None:
        """Strafe to the right of the view direction."""
        self._step(grid, self.dir_x * MOVE_SPEED, -self.dir_y * MOVE_SPEED)

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        old_dir_x = self.dir_x
        old_plane_x = self.plane_x
        self.dir_x = self.dir_x * cos_a - self.dir_y * sin_a
        self.dir_y = old_dir_x * sin_a + self.dir_y * cos_a
        self.plane_x = self.plane_x * cos_a - self.plane_y * sin_a
        self.plane_y = old_plane_x * sin_a + self.plane_y * cos_a

    def rotate_left(self) -> None:
        """Turn one keyboard step to the left."""
        self.rotate(-ROTATION_SPEED)

    def rotate_right(self) -> None:
        """Turn one keyboard step to the right."""
        self.rotate(ROTATION_SPEED)


def open_door(grid: Sequence[MutableSequence[str]], player: Player) -> bool:
    """Open the first closed door on or next to the player's cell.

    Cells are tried in the order: own cell, below, right, above, left.
    Returns whether a door was opened.
    """
    x = int(player.pos_x)
    y = int(player.pos_y)
    for cy, cx in ((y, x), (y + 1, x), (y, x + 1), (y - 1, x), (y, x - 1)):
        if grid[cy][cx] == "C":
            grid[cy][cx] = "O"
            return True
    return False


def close_door(grid: Sequence[MutableSequence[str]], player: Player) -> bool:
    """Close the first open door next to the player's cell.

    Cells are tried in the order: below, right, above, left; the cell the
    player stands in is never closed. Returns whether a door was closed.
    """
    x = int(player.pos_x)
    y = int(player.pos_y)
    for cy, cx in ((y + 1, x), (y, x + 1), (y - 1, x), (y, x - 1)):
        if grid[cy][cx] == "O":
            grid[cy][cx] = "C"
            return True
    return False