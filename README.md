# raycub

A small first-person raycasting engine. It reads a `.cub` scene file that
names wall textures, gives floor and ceiling colours and lays out a grid map,
then shows the scene in a 1280×960 window (drawn with pygame) with textured
walls.

Scenes whose file name contains `bonus` switch on the extra features: doors
that open and close, a minimap with the view ray, mouse look, and an animated
weapon.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
raycub maps/level.cub
```

The command takes exactly one argument, and the path must end in `.cub`.
Any error in the scene or its textures is written to standard error after a
line reading `Error`, and the command exits with status 1.

The weapon frames are read from `texture/item/1.xpm` to `texture/item/4.xpm`,
relative to the current directory, for every scene; the game does not start
without them.

### Controls

| Key          | Action                                  |
|--------------|-----------------------------------------|
| W / S        | move forward / backward                 |
| A / D        | strafe left / right                     |
| Left / Right | turn                                    |
| E            | open a closed door on or next to you    |
| R            | close an open door next to you          |
| Space        | fire the weapon (shown in bonus scenes) |
| Escape       | quit                                    |

Closing the window also quits. In bonus scenes, moving the mouse
horizontally turns the view, and the pointer is put back in the middle of
the window.

## Scene format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100101
1000N1
111111
```

* `NO`, `SO`, `WE`, `EA` name XPM wall textures. Each key may appear once.
* `F` and `C` give floor and ceiling colours as `R,G,B`, each 0–255; letters
  in a component or a value out of range are errors.
* Bonus scenes also take `DON` and `DOE`, the textures for closed doors hit
  on their east/west and north/south faces.
* A key line holds the key and one value, separated by spaces.
* The map starts with the first non-blank line after all keys are given.
  Its cells are `1` (wall), `0` (floor), a space (void), `C` (a closed door,
  bonus scenes only) and exactly one of `N`, `S`, `E`, `W` for the player's
  start and facing. Every walkable cell must be closed off from the border
  and from void cells; nothing but blank lines may follow the map.

## Using it as a library

```python
from raycub.scene import load_scene
from raycub.player import Player

scene = load_scene("maps/level.cub")
player = Player.spawn(scene.grid)   # the start letter becomes "0"
player.move_forward(scene.grid)
```

* `raycub.scene` — `load_scene`, `parse_lines`, `parse_color`,
  `check_closed`, `check_extension`, the `Scene` dataclass and `CubError`.
* `raycub.player` — `Player` with movement and rotation, plus `open_door`
  and `close_door`.
* `raycub.raycaster` — `cast_ray`, `wall_column` and `render_frame`, which
  draws walls, ceiling and floor into an image.
* `raycub.hud` — minimap drawing and `WeaponAnimation`.
* `raycub.image` — `Image`, a grid of 32-bit pixels, and `convert_color`.
* `raycub.xpm` — `load_xpm`, `xpm_from_data` and `parse_xpm` read XPM
  pixmaps into `Image` objects; `raycub.colors.text_to_rgb` resolves XPM
  colour names.
* `raycub.game` — `Game` ties input, movement and drawing together;
  `load_textures` loads a scene's textures and `main` is the `raycub`
  command.

## Limits

There are no sprites, enemies or sound: the weapon animation is purely
visual, and the only things that change in a scene are the player and the
doors. Textures must be XPM files.