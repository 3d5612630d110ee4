from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cart_simulator.core.types import Direction, Position


class CartSimulatorError(Exception):
    """Base class for every error raised by the simulator."""


class TrackParseError(CartSimulatorError, ValueError):
    """The track text could not be turned into a grid."""


class InvalidTrackCharacter(TrackParseError):
    def __init__(self, character: str, x: int, y: int) -> None:
        self.character: str = character
        self.x: int = x
        self.y: int = y
        super().__init__(f"Invalid track character {character!r} at ({x}, {y})")


class MalformedGrid(TrackParseError):
    """Raised in strict mode when the rows are not all the same length."""

    def __init__(self, row: int, expected: int, actual: int) -> None:
        self.row: int = row
        self.expected: int = expected
        self.actual: int = actual
        super().__init__(
            f"Row {row} has {actual} columns, expected {expected}",
        )


class DerailmentError(CartSimulatorError, RuntimeError):
    """
    A cart left the rails.

    A well-formed track never produces this, so the simulation state is
    meaningless afterwards and must not be ticked again.
    """

    def __init__(
        self,
        origin: Position,
        destination: Position,
        direction: Direction,
    ) -> None:
        self.origin: Position = origin
        self.destination: Position = destination
        self.direction: Direction = direction
        super().__init__(
            f"Cart at {origin} heading {direction.name} derailed onto {destination}",
        )
