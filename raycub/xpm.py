"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from os import PathLike

from raycub.colors import text_to_rgb
from raycub.image import Image

_TRANSPARENT = 0xFF000000
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str, keep_closer: bool) -> str:
    chars = list(text)
    in_quote = False
    pos = 0
    while pos < len(chars):
        ch = chars[pos]
        if ch == '"':
            in_quote = not in_quote
            pos += 1
            continue
        if not in_quote and text.startswith(opener, pos):
            end = text.find(closer, pos + len(opener))
            stop = len(chars) if end == -1 else end + (len(closer) if keep_closer else 0)
            chars[pos:stop] = " " * (stop - pos)
            pos = stop
            continue
        pos += 1
    return "".join(chars)


def strip_comments(text: str) -> str:
    """Blank out C comments that lie outside double quotes.

    Every character of a comment becomes a space, so the text keeps its
    length. A line comment takes its closing newline with it.
    """
    text = _blank_comments(text, "/*", "*/", keep_closer=True)
    return _blank_comments(text, "//", "\n", keep_closer=True)


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in ``text``."""
    for match in _QUOTED.finditer(text):
        yield match.group(1)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"invalid XPM header {line!r}")
    width, height, colors, chars_per_pixel = (_atoi(word) for word in words[:4])
    if min(width, height, colors, chars_per_pixel) <= 0:
        raise XpmError(f"invalid XPM header {line!r}")
    return width, height, colors, chars_per_pixel


def _color_of(line: str, chars_per_pixel: int) -> int:
    words = split_words(line[chars_per_pixel:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"no colour key in {line!r}") from None
    if index >= len(words):
        raise XpmError(f"no colour value in {line!r}")
    suffix = words[index + 1] if index + 1 < len(words) else None
    return text_to_rgb(words[index], suffix)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the quoted strings of an XPM document.

    The first string is the header, then one string per colour, then one
    per row of pixels. Transparent pixels (colour ``None``) come out as
    0xFF000000 and characters with no colour entry as black.
    """
    rows = iter(lines)
    width, height, n_colors, cpp = _parse_header(_next_line(rows, "header"))
    # One or two characters per pixel: a later entry overrides an earlier one.
    # Longer keys: the first entry for a key is the one used.
    last_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(n_colors):
        line = _next_line(rows, "colour entry")
        key = line[:cpp]
        color = _color_of(line, cpp)
        if last_wins:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    image = Image(width, height)
    for y in range(height):
        line = _next_line(rows, "pixel row")
        for x in range(width):
            color = palette.get(line[cpp * x:cpp * (x + 1)], 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_from_data(data: Sequence[str]) -> Image:
    """Build an image from XPM strings already split one per element."""
    return parse_xpm(data)


def load_xpm(path: str | PathLike[str]) -> Image:
    """Read an XPM file and return its image."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(quoted_lines(strip_comments(text)))