"""Grid-map raycasting engine with .cub scenes and XPM textures."""

__version__ = "0.1.0"
__all__ = ["colors", "image", "xpm", "scene", "player", "raycaster", "hud", "game"]