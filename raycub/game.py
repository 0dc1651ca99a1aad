"""The game state, its input handling and the window loop."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence
from enum import IntEnum

from raycub.hud import (
    WeaponAnimation,
    draw_direction_ray,
    draw_minimap,
    draw_player_marker,
    weapon_paths,
)
from raycub.image import Image
from raycub.player import Player, close_door, open_door
from raycub.raycaster import render_frame
from raycub.scene import CubError, Scene, load_scene
from raycub.xpm import XpmError, load_xpm

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 960
WINDOW_TITLE = "CUB3D"
MOUSE_SENSITIVITY = 0.0005
_KEY_LIMIT = 70000


class Key(IntEnum):
    """Key symbols the game reacts to."""

    SPACE = 0x20
    A = 0x61
    D = 0x64
    E = 0x65
    R = 0x72
    S = 0x73
    W = 0x77
    ESC = 0xFF1B
    LEFT = 0xFF51
    RIGHT = 0xFF53


_TRACKED = frozenset(
    {Key.W, Key.A, Key.S, Key.D, Key.LEFT, Key.RIGHT, Key.E, Key.R, Key.SPACE}
)


class Game:
    """Everything needed to update and draw one frame."""

    def __init__(
        self,
        scene: Scene,
        textures: Sequence[Image],
        weapon: WeaponAnimation | None = None,
    ) -> None:
        self.scene = scene
        self.grid = scene.grid
        self.bonus = scene.bonus
        self.textures = list(textures)
        self.weapon = weapon
        self.ceiling = scene.ceiling_color
        self.floor = scene.floor_color
        self.player = Player.spawn(self.grid)
        self.keys: set[int] = set()
        self.running = True
        self.width = WINDOW_WIDTH
        self.height = WINDOW_HEIGHT

    def key_press(self, key: int) -> None:
        """Record a pressed key; Escape stops the game."""
        if key == Key.ESC:
            self.running = False
            return
        if key in _TRACKED:
            self.keys.add(int(key))

    def key_release(self, key: int) -> None:
        """Forget a released key."""
        if 0 <= key < _KEY_LIMIT:
            self.keys.discard(int(key))

    def mouse_move(self, x: int) -> tuple[int, int]:
        """Turn by the pointer's horizontal distance from the window centre.

        Returns the point the pointer should be moved back to.
        """
        centre_x = self.width // 2
        delta = x - centre_x
        if delta != 0:
            self.player.rotate(delta * MOUSE_SENSITIVITY)
        return centre_x, self.height // 2

    def update(self) -> None:
        """Apply the held keys to the player, the doors and the weapon."""
        keys = self.keys
        player = self.player
        if Key.W in keys:
            player.move_forward(self.grid)
        if Key.S in keys:
            player.move_backward(self.grid)
        if Key.A in keys:
            player.move_left(self.grid)
        if Key.D in keys:
            player.move_right(self.grid)
        if Key.LEFT in keys:
            player.rotate_left()
        if Key.RIGHT in keys:
            player.rotate_right()
        if Key.E in keys:
            open_door(self.grid, player)
        if Key.R in keys:
            close_door(self.grid, player)
        if Key.SPACE in keys and self.weapon is not None:
            self.weapon.trigger()

    def render(self) -> Image:
        """Draw a fresh frame of the current view and return it."""
        frame = Image(self.width, self.height)
        render_frame(frame, self.player, self.grid, self.textures, self.ceiling, self.floor)
        if self.bonus:
            draw_minimap(frame, self.grid)
            if self.weapon is not None:
                self.weapon.draw(frame)
            draw_player_marker(frame, self.player)
            draw_direction_ray(frame, self.player, self.grid)
        return frame


def load_textures(scene: Scene) -> list[Image]:
    """Load the wall (and, in bonus mode, door) textures named by ``scene``."""
    needed = 6 if scene.bonus else 4
    if len(scene.textures) < needed:
        raise CubError("Texture loading failed")
    try:
        return [load_xpm(path) for path in scene.textures[:needed]]
    except XpmError as exc:
        raise CubError("Texture loading failed") from exc


def _load_weapon() -> WeaponAnimation:
    try:
        return WeaponAnimation([load_xpm(path) for path in weapon_paths()])
    except XpmError as exc:
        raise CubError("weapon loading failed") from exc


def _report(message: str) -> None:
    sys.stderr.write(f"Error\n{message}\n")


def _frame_surface(pygame, frame: Image):
    data = array("I", ((p & 0xFFFFFF) | 0xFF000000 for p in frame.pixels))
    fmt = "BGRA" if sys.byteorder == "little" else "ARGB"
    return pygame.image.frombuffer(data.tobytes(), (frame.width, frame.height), fmt)


def _run(game: Game) -> None:
    import pygame

    special = {pygame.K_ESCAPE: Key.ESC, pygame.K_LEFT: Key.LEFT, pygame.K_RIGHT: Key.RIGHT}
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption(WINDOW_TITLE)
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    game.key_press(special.get(event.key, event.key))
                elif event.type == pygame.KEYUP:
                    game.key_release(special.get(event.key, event.key))
                elif event.type == pygame.MOUSEMOTION and game.bonus:
                    pygame.mouse.set_pos(game.mouse_move(event.pos[0]))
            if not game.running:
                break
            game.update()
            screen.blit(_frame_surface(pygame, game.render()), (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        _report("Wrong number of arguments")
        return 1
    try:
        scene = load_scene(args[0])
        textures = load_textures(scene)
        weapon = _load_weapon()
        game = Game(scene, textures, weapon)
    except CubError as exc:
        _report(str(exc))
        return 1
    _run(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())