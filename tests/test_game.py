import dataclasses
import math

import pytest

from raycub.game import Game, Key, load_textures, main
from raycub.hud import WeaponAnimation
from raycub.image import Image
from raycub.scene import CubError, Scene, parse_lines

KEYS = ["NO n.xpm\n", "SO s.xpm\n", "WE w.xpm\n", "EA e.xpm\n",
        "F 10,20,30\n", "C 40,50,60\n", "\n"]
MAP = ["111\n", "101\n", "101\n", "101\n", "101\n", "1N1\n", "111\n"]
COLORS = [0x110000, 0x001100, 0x000011, 0x111111]

XPM = '/* XPM */\nstatic char *x[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"\n};\n'


def _textures():
    images = []
    for color in COLORS:
        image = Image(4, 4)
        image.fill(color)
        images.append(image)
    return images


def _game(weapon=None):
    scene = parse_lines(KEYS + MAP, bonus=False)
    return Game(scene, _textures(), weapon)


def test_spawn_and_colours():
    game = _game()
    assert game.player.pos_x == 1.5
    assert game.player.pos_y == 5.5
    assert game.grid[5][1] == "0"
    assert game.ceiling == game.scene.ceiling_color
    assert game.floor == game.scene.floor_color


def test_key_press_and_release():
    game = _game()
    game.key_press(Key.W)
    assert Key.W in game.keys
    game.key_release(Key.W)
    assert Key.W not in game.keys


def test_untracked_key_ignored():
    game = _game()
    game.key_press(ord("q"))
    game.key_release(100000)
    assert game.keys == set()


def test_escape_stops():
    game = _game()
    game.key_press(Key.ESC)
    assert game.running is False


def test_forward_moves_north():
    game = _game()
    game.key_press(Key.W)
    game.update()
    assert game.player.pos_y < 5.5
    assert game.player.pos_x == 1.5


def test_rotation_keeps_length():
    game = _game()
    before = math.hypot(game.player.dir_x, game.player.dir_y)
    game.key_press(Key.LEFT)
    game.update()
    assert game.player.dir_x != 0.0
    assert math.hypot(game.player.dir_x, game.player.dir_y) == pytest.approx(before)


def test_space_triggers_weapon():
    weapon = WeaponAnimation([Image(1, 1) for _ in range(4)])
    game = _game(weapon)
    game.key_press(Key.SPACE)
    game.update()
    assert weapon.shooting is True


def test_mouse_move_rotates():
    game = _game()
    game.width = 100
    expected = dataclasses.replace(game.player)
    expected.rotate(10 * 0.0005)
    assert game.mouse_move(60) == (50, game.height // 2)
    assert game.player.dir_x == pytest.approx(expected.dir_x)
    assert game.player.dir_y == pytest.approx(expected.dir_y)


def test_mouse_at_centre_does_nothing():
    game = _game()
    game.width = 100
    before = dataclasses.replace(game.player)
    game.mouse_move(50)
    assert game.player == before


def test_render_column():
    game = _game()
    game.width = 16
    game.height = 12
    frame = game.render()
    assert (frame.width, frame.height) == (16, 12)
    assert frame.get_pixel(8, 0) == game.scene.ceiling_color
    assert frame.get_pixel(8, 11) == game.scene.floor_color
    assert frame.get_pixel(8, 6) == COLORS[3]


def test_load_textures(tmp_path):
    paths = []
    for name in ("e", "w", "s", "n"):
        path = tmp_path / f"{name}.xpm"
        path.write_text(XPM)
        paths.append(str(path))
    scene = Scene(grid=[["1"]], textures=tuple(paths), floor="0,0,0", ceiling="0,0,0")
    images = load_textures(scene)
    assert len(images) == 4
    assert all(img.get_pixel(1, 1) == 0xFF0000 for img in images)


def test_load_textures_missing_file(tmp_path):
    paths = tuple(str(tmp_path / f"{n}.xpm") for n in "abcd")
    scene = Scene(grid=[["1"]], textures=paths, floor="0,0,0", ceiling="0,0,0")
    with pytest.raises(CubError):
        load_textures(scene)


def test_load_textures_too_few():
    scene = Scene(grid=[["1"]], textures=("a", "b"), floor="0,0,0", ceiling="0,0,0")
    with pytest.raises(CubError):
        load_textures(scene)


def test_main_wrong_argument_count(capsys):
    assert main([]) == 1
    assert "Wrong number of arguments" in capsys.readouterr().err


def test_main_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "wrong extension" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.cub")]) == 1
    assert "no permission" in capsys.readouterr().err