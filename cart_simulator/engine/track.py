import logging

from cart_simulator.core.errors import InvalidTrackCharacter, MalformedGrid
from cart_simulator.core.state import Cart, Track
from cart_simulator.core.types import CART_GLYPHS, SEGMENT_GLYPHS, Position, Segment

logger = logging.getLogger("cart_simulator.track")


def parse_track(
    text: str,
    *,
    strict: bool = False,
) -> tuple[Track, dict[Position, Cart]]:
    """
    Turn track text into a rail grid plus the carts standing on it.

    Cart glyphs sit on top of a straight rail: `<` and `>` on a horizontal
    one, `^` and `v` on a vertical one. Short rows are read as if padded
    with empty cells unless `strict` is set, in which case every row must
    have the same length.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and not lines[-1]:
        lines.pop()

    if strict and lines:
        expected = len(lines[0])
        for y, line in enumerate(lines):
            if len(line) != expected:
                raise MalformedGrid(row=y, expected=expected, actual=len(line))

    carts: dict[Position, Cart] = {}
    rows: list[tuple[Segment, ...]] = []
    for y, line in enumerate(lines):
        row: list[Segment] = []
        for x, char in enumerate(line):
            if (segment := SEGMENT_GLYPHS.get(char)) is not None:
                row.append(segment)
            elif char in CART_GLYPHS:
                direction, underlying = CART_GLYPHS[char]
                carts[(x, y)] = Cart(direction)
                row.append(underlying)
            else:
                raise InvalidTrackCharacter(char, x, y)
        rows.append(tuple(row))

    track = Track(tuple(rows))
    logger.debug(
        "Parsed track %dx%d with %d carts", track.width, track.height, len(carts)
    )
    return track, carts
