from __future__ import annotations

from enum import Enum
from typing import Literal

Position = tuple[int, int]  # (x, y)

StopMode = Literal[
    "last_cart",  # run until at most one cart is left
    "first_crash",  # run until the first collision
]


class Segment(Enum):
    HORIZONTAL = "-"
    VERTICAL = "|"
    CURVE_RIGHT = "/"
    CURVE_LEFT = "\\"
    INTERSECTION = "+"
    EMPTY = " "

    @property
    def glyph(self) -> str:
        return self.value


class Turn(Enum):
    LEFT = "left"
    STRAIGHT = "straight"
    RIGHT = "right"

    def next(self) -> Turn:
        return _TURN_CYCLE[self]


_TURN_CYCLE: dict[Turn, Turn] = {
    Turn.LEFT: Turn.STRAIGHT,
    Turn.STRAIGHT: Turn.RIGHT,
    Turn.RIGHT: Turn.LEFT,
}


class Direction(Enum):
    LEFT = "<"
    RIGHT = ">"
    UP = "^"
    DOWN = "v"

    @property
    def glyph(self) -> str:
        return self.value

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    def turned_left(self) -> Direction:
        """Counter-clockwise quarter turn."""
        return _COUNTER_CLOCKWISE[self]

    def turned_right(self) -> Direction:
        """Clockwise quarter turn."""
        return _CLOCKWISE[self]

    def turned(self, turn: Turn) -> Direction:
        match turn:
            case Turn.LEFT:
                return self.turned_left()
            case Turn.STRAIGHT:
                return self
            case Turn.RIGHT:
                return self.turned_right()


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}

_COUNTER_CLOCKWISE: dict[Direction, Direction] = {
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
    Direction.UP: Direction.LEFT,
}
_CLOCKWISE: dict[Direction, Direction] = {
    after: before for before, after in _COUNTER_CLOCKWISE.items()
}

# Characters that place a cart, with the rail hidden underneath it
CART_GLYPHS: dict[str, tuple[Direction, Segment]] = {
    ">": (Direction.RIGHT, Segment.HORIZONTAL),
    "<": (Direction.LEFT, Segment.HORIZONTAL),
    "^": (Direction.UP, Segment.VERTICAL),
    "v": (Direction.DOWN, Segment.VERTICAL),
}

SEGMENT_GLYPHS: dict[str, Segment] = {segment.glyph: segment for segment in Segment}

CRASH_GLYPH = "X"
