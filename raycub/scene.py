"""Reading and validating ``.cub`` scene descriptions."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from os import PathLike

WALL_KEYS = ("EA", "WE", "SO", "NO")
PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset("NSEW01 C")
WALKABLE = frozenset("0NSEWC")
VOID = "2"

_LEADING_INT = re.compile(r"[\t\n\v\f\r ]*([+-]?[0-9]*)")


class CubError(ValueError):
    """Raised when a scene file or one of its values is invalid."""


@dataclass
class Scene:
    """A parsed scene: the map grid, texture paths and colour specifications.

    ``textures`` holds the wall textures in the order east, west, south,
    north, followed in bonus mode by the two door textures. Every row of
    ``grid`` has the same length; empty cells are ``"2"``.
    """

    grid: list[list[str]]
    textures: tuple[str, ...]
    floor: str
    ceiling: str
    bonus: bool = field(default=False)

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def floor_color(self) -> int:
        return parse_color(self.floor)

    @property
    def ceiling_color(self) -> int:
        return parse_color(self.ceiling)


def check_extension(path: str | PathLike[str]) -> None:
    """Raise CubError unless the text after the last dot of ``path`` is ``.cub``."""
    text = os.fspath(path)
    dot = text.rfind(".")
    if dot == -1:
        raise CubError("Map invalid - no extension")
    if text[dot:] != ".cub":
        raise CubError("Map invalid - wrong extension")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    digits = match.group(1) if match else ""
    if digits in ("", "+", "-"):
        return 0
    return int(digits)


def parse_color(text: str) -> int:
    """Turn ``"R,G,B"`` into 0xRRGGBB.

    Fewer than three components give 0; letters in a component or a value
    outside 0..255 raise CubError. Components past the third are ignored.
    """
    parts = [part for part in text.split(",") if part]
    if len(parts) < 3:
        return 0
    components = parts[:3]
    for part in components:
        if any(ch.isascii() and ch.isalpha() for ch in part):
            raise CubError("Invalid color value")
    red, green, blue = (_atoi(part) for part in components)
    if not all(0 <= value <= 255 for value in (red, green, blue)):
        raise CubError("Invalid color value")
    return ((red & 0xFF) << 16) | ((green & 0xFF) << 8) | (blue & 0xFF)


def _slot_for(key: str, bonus: bool) -> int | None:
    for index, prefix in enumerate(WALL_KEYS):
        if key.startswith(prefix):
            return index
    if bonus:
        extra = (("DON", 4), ("DOE", 5), ("F", 6), ("C", 7))
    else:
        extra = (("F", 4), ("C", 5))
    for prefix, index in extra:
        if key.startswith(prefix):
            return index
    return None


def _parse_key_line(line: str, slots: list[str | None], bonus: bool) -> int:
    """Record a texture or colour line; return 1 if a slot was filled."""
    words = [word for word in line.split(" ") if word]
    if not words:
        return 0
    if len(words) > 2:
        raise CubError("Invalid texture format")
    slot = _slot_for(words[0], bonus)
    if slot is None:
        return 0
    if len(words) < 2:
        raise CubError("Invalid texture format")
    if slots[slot] is not None:
        raise CubError("Invalid texture key")
    # The value is taken without its last character, the line ending.
    slots[slot] = words[1][:-1]
    return 1


def _map_row(line: str, width: int, bonus: bool, players: int) -> tuple[list[str], int]:
    row = [VOID] * width
    for x, ch in enumerate(line):
        if ch == "\n":
            break
        if ch not in MAP_CHARS or (ch == "C" and not bonus):
            raise CubError("Invalid character in map")
        if ch in PLAYER_CHARS:
            players += 1
            if players > 1:
                raise CubError("Too many players in map")
        row[x] = VOID if ch == " " else ch
    return row, players


def check_closed(grid: Sequence[Sequence[str]]) -> None:
    """Raise CubError if a walkable cell touches the border or an empty cell."""
    height = len(grid)
    width = max((len(row) for row in grid), default=0)

    def cell(y: int, x: int) -> str:
        row = grid[y]
        return row[x] if x < len(row) else VOID

    for y, row in enumerate(grid):
        for x, ch in enumerate(row):
            if ch not in WALKABLE:
                continue
            if y <= 0 or y >= height - 1 or x <= 0 or x >= width - 1:
                raise CubError("Map not closed (border reached)")
            neighbours = (cell(y + 1, x), cell(y - 1, x), cell(y, x + 1), cell(y, x - 1))
            if VOID in neighbours:
                raise CubError("Map not closed (void space)")


def parse_lines(lines: Iterable[str], bonus: bool) -> Scene:
    """Build a Scene from the lines of a scene file, line endings kept."""
    lines = list(lines)
    needed = (7 if bonus else 5) + 1
    slots: list[str | None] = [None] * 8
    parsed = 0
    started = False
    map_start = 0
    height = 0
    width = 0
    for line in lines:
        if parsed == needed and line[:1] != "\n":
            started = True
            width = max(width, len(line))
            height += 1
        else:
            if line[:1] != "\n":
                parsed += _parse_key_line(line, slots, bonus)
            if not started:
                map_start += 1

    remaining = iter(lines[map_start:])
    grid: list[list[str]] = []
    players = 0
    for _ in range(height):
        row, players = _map_row(next(remaining), width, bonus, players)
        grid.append(row)
    if players == 0:
        raise CubError("No player in map")
    check_closed(grid)
    for line in remaining:
        if line[:1] != "\n":
            raise CubError("Map invalid - content after map")

    count = needed - 1
    textures = tuple(path for path in slots[:count - 1] if path is not None)
    return Scene(
        grid=grid,
        textures=textures,
        floor=slots[count - 1] or "",
        ceiling=slots[count] or "",
        bonus=bonus,
    )


def _split_keep_ends(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path: str | PathLike[str]) -> Scene:
    """Read and validate a ``.cub`` file; bonus features follow from its name."""
    check_extension(path)
    name = os.fspath(path)
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("Map invalid - no permission") from exc
    return parse_lines(_split_keep_ends(text), bonus="bonus" in name)