from dataclasses import dataclass

from cart_simulator.core.types import Direction, Position


@dataclass(frozen=True, slots=True)
class CollisionEvent:
    """Two carts met on `position` during tick `tick` (1-based)."""

    tick: int
    position: Position
    mover_direction: Direction
    victim_direction: Direction
