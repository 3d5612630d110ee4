from __future__ import annotations

from dataclasses import dataclass, field

from cart_simulator.core.types import Direction, Position, Segment, Turn


@dataclass(slots=True)
class Cart:
    direction: Direction
    next_turn: Turn = Turn.LEFT

    @property
    def glyph(self) -> str:
        return self.direction.glyph

    def copy(self) -> Cart:
        return Cart(self.direction, self.next_turn)


@dataclass(frozen=True, slots=True)
class Track:
    """Read-only rail grid, indexed ``rows[y][x]``."""

    rows: tuple[tuple[Segment, ...], ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def segment_at(self, position: Position) -> Segment:
        """Anything off the grid, or past the end of a short row, is empty."""
        x, y = position
        if y < 0 or x < 0 or y >= len(self.rows):
            return Segment.EMPTY
        row = self.rows[y]
        if x >= len(row):
            return Segment.EMPTY
        return row[x]


@dataclass(slots=True)
class LogContext:
    engine_id: int
    tick: int = 0
    tick_log_count: int = 0
    current_cart_repr: str = "_"

    def start_tick(self, tick: int) -> None:
        self.tick = tick
        self.tick_log_count = 0
        self.current_cart_repr = "_"

    def inc_log_count(self) -> None:
        self.tick_log_count += 1


@dataclass(slots=True)
class SimulationState:
    track: Track
    carts: dict[Position, Cart]
    crashed: set[Position] = field(default_factory=set)
    tick_count: int = 0

    def get_state_key(self) -> frozenset[tuple[Position, Direction, Turn]]:
        """Everything that decides the future of the run."""
        return frozenset(
            (pos, cart.direction, cart.next_turn) for pos, cart in self.carts.items()
        )
