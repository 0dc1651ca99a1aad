import pytest

from raycub.hud import (
    BLUE,
    FLOOR_COLOR,
    GREEN,
    MINIMAP_OFFSET,
    MINIMAP_SCALE,
    RED,
    WALL_COLOR,
    WEAPON_SCALE,
    WeaponAnimation,
    draw_direction_ray,
    draw_minimap,
    draw_player_marker,
    draw_square,
    weapon_paths,
)
from raycub.image import Image
from raycub.player import Player


def _count(frame, color):
    return sum(1 for p in frame.pixels if p == color)


def _corridor():
    return [list(row) for row in ("111", "101", "101", "101", "101", "101", "111")]


def test_draw_square_fills_area():
    frame = Image(5, 5)
    draw_square(frame, 1, 1, 0x123456, 2)
    assert frame.get_pixel(1, 1) == 0x123456
    assert frame.get_pixel(2, 2) == 0x123456
    assert frame.get_pixel(3, 3) == 0
    assert _count(frame, 0x123456) == 4


def test_draw_square_clips_at_edges():
    frame = Image(3, 3)
    draw_square(frame, -1, -1, 0xABCDEF, 2)
    assert _count(frame, 0xABCDEF) == 1
    assert frame.get_pixel(0, 0) == 0xABCDEF


def test_draw_minimap_colours_cells():
    frame = Image(80, 80)
    grid = [["1", "0"], ["C", "O"], ["2", "2"]]
    draw_minimap(frame, grid)
    origin = MINIMAP_OFFSET * MINIMAP_SCALE
    assert frame.get_pixel(origin, origin) == WALL_COLOR
    assert frame.get_pixel(origin + MINIMAP_SCALE, origin) == FLOOR_COLOR
    assert frame.get_pixel(origin, origin + MINIMAP_SCALE) == RED
    assert frame.get_pixel(origin + MINIMAP_SCALE, origin + MINIMAP_SCALE) == GREEN
    assert frame.get_pixel(origin, origin + 2 * MINIMAP_SCALE) == 0


def test_player_marker_is_one_square():
    frame = Image(100, 100)
    player = Player(1.5, 1.5, 0.0, -1.0, 0.66, 0.0)
    draw_player_marker(frame, player)
    assert _count(frame, RED) == MINIMAP_SCALE * MINIMAP_SCALE


def test_direction_ray_draws_until_wall():
    frame = Image(100, 100)
    player = Player(1.5, 5.5, 0.0, -1.00001, 0.66, 0.0)
    draw_direction_ray(frame, player, _corridor())
    assert _count(frame, BLUE) > 0
    assert _count(frame, RED) > 0


def test_direction_ray_blocked_immediately():
    frame = Image(100, 100)
    player = Player(1.5, 1.01, 0.0, -1.00001, 0.66, 0.0)
    draw_direction_ray(frame, player, _corridor())
    assert _count(frame, BLUE) == 0
    assert _count(frame, RED) == MINIMAP_SCALE * MINIMAP_SCALE


def test_weapon_paths():
    assert weapon_paths("texture/item") == [
        "texture/item/1.xpm",
        "texture/item/2.xpm",
        "texture/item/3.xpm",
        "texture/item/4.xpm",
    ]


def test_weapon_idle_shows_first_frame():
    weapon = WeaponAnimation([Image(1, 1) for _ in range(4)])
    assert weapon.advance() == 0
    assert weapon.shooting is False


def test_weapon_animation_sequence():
    weapon = WeaponAnimation([Image(1, 1) for _ in range(4)])
    weapon.trigger()
    assert weapon.shooting is True
    frames = [weapon.advance() for _ in range(8)]
    assert frames == [0, 1, 1, 2, 2, 3, 3, 0]
    assert weapon.shooting is False


def test_trigger_while_shooting_does_not_restart():
    weapon = WeaponAnimation([Image(1, 1) for _ in range(4)])
    weapon.trigger()
    weapon.advance()
    first = weapon.advance()
    weapon.trigger()
    assert weapon.advance() == first


def test_empty_weapon_rejected():
    with pytest.raises(ValueError):
        WeaponAnimation([])


def test_weapon_draw_skips_white():
    sprite = Image(2, 1)
    sprite.put_pixel(0, 0, 0x123456)
    sprite.put_pixel(1, 0, 0xFFFFFF)
    weapon = WeaponAnimation([sprite] * 4)
    frame = Image(20, 700)
    assert weapon.draw(frame) == 0
    assert _count(frame, 0x123456) == WEAPON_SCALE * WEAPON_SCALE
    assert _count(frame, 0xFFFFFF) == 0