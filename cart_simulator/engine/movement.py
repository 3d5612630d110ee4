from __future__ import annotations

from typing import TYPE_CHECKING

from cart_simulator.core.errors import DerailmentError
from cart_simulator.core.events import CollisionEvent
from cart_simulator.core.types import Direction, Position, Segment, Turn

if TYPE_CHECKING:
    from cart_simulator.engine.simulation import Simulation

_CURVE_RIGHT: dict[Direction, Direction] = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
}
_CURVE_LEFT: dict[Direction, Direction] = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.UP,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
}


def step(position: Position, direction: Direction) -> Position:
    dx, dy = direction.delta
    return (position[0] + dx, position[1] + dy)


def resolve_heading(
    segment: Segment,
    direction: Direction,
    next_turn: Turn,
) -> tuple[Direction, Turn]:
    """Heading and pending turn of a cart that has just entered `segment`."""
    match segment:
        case Segment.HORIZONTAL | Segment.VERTICAL:
            return direction, next_turn
        case Segment.CURVE_RIGHT:
            return _CURVE_RIGHT[direction], next_turn
        case Segment.CURVE_LEFT:
            return _CURVE_LEFT[direction], next_turn
        case Segment.INTERSECTION:
            return direction.turned(next_turn), next_turn.next()
        case Segment.EMPTY:
            msg = "An empty cell has no heading"
            raise ValueError(msg)


def move_cart(engine: Simulation, position: Position) -> CollisionEvent | None:
    """
    Move the cart on `position` one cell forward.

    Carts already removed earlier in the same tick are skipped. Returns the
    collision when the cart runs into another one.
    """
    carts = engine.state.carts
    cart = carts.get(position)
    if cart is None:
        return None

    engine.log_context.current_cart_repr = f"{position[0]},{position[1]}"

    destination = step(position, cart.direction)
    segment = engine.state.track.segment_at(destination)
    if segment is Segment.EMPTY:
        engine.log_error(
            f"Derail: cart {position}->{destination} heading {cart.direction.name}",
        )
        raise DerailmentError(position, destination, cart.direction)

    moved = cart.copy()
    moved.direction, moved.next_turn = resolve_heading(
        segment,
        cart.direction,
        cart.next_turn,
    )
    if segment is Segment.INTERSECTION:
        engine.log_debug(
            f"Turn: {cart.next_turn.name} at {destination}, "
            f"{cart.direction.name}->{moved.direction.name}",
        )

    # Collision resolves on the destination cell, both carts are gone.
    if (victim := carts.get(destination)) is not None:
        del carts[position]
        del carts[destination]
        engine.state.crashed.add(destination)
        collision = CollisionEvent(
            tick=engine.state.tick_count,
            position=destination,
            mover_direction=moved.direction,
            victim_direction=victim.direction,
        )
        engine.log_info(
            f"Crash: cart from {position} hit cart on {destination} "
            f"({len(carts)} left)",
        )
        return collision

    del carts[position]
    carts[destination] = moved
    engine.log_debug(f"Move: {position}->{destination} {moved.direction.name}")
    return None
