import pytest

from raycub.image import Image
from raycub.player import Player
from raycub.raycaster import Side, cast_ray, render_frame, wall_column

ROOM = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


def make_grid(rows):
    return [list(row) for row in rows]


def spawn(rows):
    grid = make_grid(rows)
    return grid, Player.spawn(grid)


def striped_texture(size=8):
    texture = Image(size, size)
    for y in range(size):
        for x in range(size):
            texture.put_pixel(x, y, y + 1)
    return texture


def test_straight_ray_north_hits_top_wall():
    grid, player = spawn(ROOM)
    hit = cast_ray(player, grid, 0.0)
    assert hit.side == Side.NORTH
    assert (hit.map_x, hit.map_y) == (2, 0)
    assert hit.perp_wall_dist == pytest.approx(1.5, rel=1e-4)
    assert 0.0 <= hit.wall_x < 1.0


@pytest.mark.parametrize(
    "letter, side, cell",
    [
        ("S", Side.SOUTH, (2, 4)),
        ("E", Side.EAST, (4, 2)),
        ("W", Side.WEST, (0, 2)),
    ],
)
def test_straight_rays_other_directions(letter, side, cell):
    grid, player = spawn([row.replace("N", letter) for row in ROOM])
    hit = cast_ray(player, grid, 0.0)
    assert hit.side == side
    assert (hit.map_x, hit.map_y) == cell


def test_ray_hits_closed_door():
    rows = ["11111", "10C01", "10N01", "10001", "11111"]
    grid, player = spawn(rows)
    hit = cast_ray(player, grid, 0.0)
    assert hit.side == Side.DOOR_Y
    assert (hit.map_x, hit.map_y) == (2, 1)


def test_ray_passes_open_door():
    rows = ["11111", "10O01", "10N01", "10001", "11111"]
    grid, player = spawn(rows)
    hit = cast_ray(player, grid, 0.0)
    assert hit.side == Side.NORTH
    assert hit.map_y == 0


def test_ray_hits_door_from_the_side():
    rows = ["11111", "10001", "1E0C1", "10001", "11111"]
    grid, player = spawn(rows)
    hit = cast_ray(player, grid, 0.0)
    assert hit.side == Side.DOOR_X
    assert (hit.map_x, hit.map_y) == (3, 2)


def test_edge_rays_stay_in_fraction_range():
    grid, player = spawn(ROOM)
    for camera_x in (-1.0, -0.5, 0.5, 0.99):
        hit = cast_ray(player, grid, camera_x)
        assert 0.0 <= hit.wall_x < 1.0
        assert hit.perp_wall_dist > 0


def test_wall_column_is_centred():
    grid, player = spawn(ROOM)
    hit = cast_ray(player, grid, 0.0)
    start, colors = wall_column(hit, striped_texture(), 60)
    end = start + len(colors) - 1
    assert start > 0
    assert end < 59
    assert start + end == 60


def test_wall_column_reads_texture_top_to_bottom():
    grid, player = spawn(ROOM)
    texture = striped_texture()
    hit = cast_ray(player, grid, 0.0)
    _, colors = wall_column(hit, texture, 60)
    assert colors == sorted(colors)
    assert set(colors) <= set(range(1, 9))
    assert colors[0] == 1


def test_close_wall_fills_whole_column():
    rows = ["11111", "1N001", "10001", "10001", "11111"]
    grid, player = spawn(rows)
    hit = cast_ray(player, grid, 0.0)
    start, colors = wall_column(hit, striped_texture(), 40)
    assert start == 0
    assert len(colors) == 40


def test_render_frame_draws_ceiling_floor_and_wall():
    grid, player = spawn(ROOM)
    textures = []
    for index in range(6):
        texture = Image(4, 4)
        texture.fill(0x100 + index)
        textures.append(texture)
    frame = Image(20, 30)
    render_frame(frame, player, grid, textures, 0x0000FF, 0x00FF00)
    assert frame.row(0) == [0x0000FF] * 20
    assert frame.row(29) == [0x00FF00] * 20
    assert frame.get_pixel(10, 15) == 0x100 + Side.NORTH
    assert frame.get_pixel(10, 15) in {texture.get_pixel(0, 0) for texture in textures}