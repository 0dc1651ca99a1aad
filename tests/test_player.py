import math

import pytest

from raycub.player import Player, close_door, open_door

ROOM = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


def make_grid(rows):
    return [list(row) for row in rows]


def test_spawn_north_sets_facing_and_clears_cell():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    assert (player.pos_x, player.pos_y) == (2.5, 2.5)
    assert (player.dir_x, player.dir_y) == (0.0, -1.00001)
    assert (player.plane_x, player.plane_y) == (0.66, 0.0)
    assert grid[2][2] == "0"


@pytest.mark.parametrize(
    "letter, facing",
    [
        ("S", (0.0, 1.00001, -0.66, 0.0)),
        ("E", (1.00001, 0.0, 0.0, 0.66)),
        ("W", (-1.00001, 0.0, 0.0, -0.66)),
    ],
)
def test_spawn_other_letters(letter, facing):
    grid = make_grid([row.replace("N", letter) for row in ROOM])
    player = Player.spawn(grid)
    assert (player.dir_x, player.dir_y, player.plane_x, player.plane_y) == facing
    assert all(letter not in row for row in grid)


def test_spawn_without_player_raises():
    grid = make_grid([row.replace("N", "0") for row in ROOM])
    with pytest.raises(ValueError):
        Player.spawn(grid)


def test_forward_then_backward_returns_to_start():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    player.move_forward(grid)
    assert player.pos_y < 2.5
    player.move_backward(grid)
    assert player.pos_y == pytest.approx(2.5)
    assert player.pos_x == pytest.approx(2.5)


def test_left_then_right_returns_to_start():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    player.move_left(grid)
    assert player.pos_x < 2.5
    player.move_right(grid)
    assert player.pos_x == pytest.approx(2.5)
    assert player.pos_y == pytest.approx(2.5)


def test_wall_blocks_forward_movement():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    for _ in range(200):
        player.move_forward(grid)
    assert int(player.pos_y) == 1
    assert player.pos_y >= 1.0


def test_closed_door_blocks_and_open_door_lets_through():
    rows = ["11111", "11C11", "10N01", "10001", "11111"]
    grid = make_grid(rows)
    player = Player.spawn(grid)
    for _ in range(100):
        player.move_forward(grid)
    assert int(player.pos_y) == 2
    assert open_door(grid, player) is True
    assert grid[1][2] == "O"
    for _ in range(100):
        player.move_forward(grid)
    assert int(player.pos_y) == 1


def test_rotation_round_trip_and_length():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    start = (player.dir_x, player.dir_y, player.plane_x, player.plane_y)
    player.rotate_left()
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.00001)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(0.66)
    player.rotate_right()
    assert (player.dir_x, player.dir_y, player.plane_x, player.plane_y) == pytest.approx(start)


def test_half_turn_faces_south():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    player.rotate(math.pi)
    assert player.dir_y == pytest.approx(1.00001)
    assert player.plane_x == pytest.approx(-0.66)


def test_open_door_prefers_cell_below():
    rows = ["11111", "10C01", "10N01", "10C01", "11111"]
    grid = make_grid(rows)
    player = Player.spawn(grid)
    assert open_door(grid, player) is True
    assert grid[3][2] == "O"
    assert grid[1][2] == "C"


def test_open_door_with_nothing_nearby():
    grid = make_grid(ROOM)
    player = Player.spawn(grid)
    assert open_door(grid, player) is False
    assert grid == make_grid([row.replace("N", "0") for row in ROOM])


def test_close_door_ignores_own_cell():
    rows = ["11111", "10001", "10N01", "10001", "11111"]
    grid = make_grid(rows)
    player = Player.spawn(grid)
    grid[2][2] = "O"
    assert close_door(grid, player) is False
    assert grid[2][2] == "O"
    grid[2][3] = "O"
    assert close_door(grid, player) is True
    assert grid[2][3] == "C"