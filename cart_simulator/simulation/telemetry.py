from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cart_simulator.core.types import Direction, Position
    from cart_simulator.engine.simulation import Simulation


@dataclass(frozen=True, slots=True)
class SnapshotPolicy:
    snapshot_each_tick: bool = False
    snapshot_on_crash: bool = True
    tick_event_name: str = "Tick"
    crash_event_name: str = "Crash"


@dataclass(frozen=True, slots=True)
class TickSnapshot:
    global_step_index: int
    tick: int
    event_name: str

    carts: dict[Position, Direction]
    crashed: frozenset[Position]
    rows: list[str]


@dataclass(slots=True)
class SnapshotRecorder:
    """Captures rendered snapshots of a simulation as it is ticked."""

    policy: SnapshotPolicy = field(default_factory=SnapshotPolicy)
    step_history: list[TickSnapshot] = field(default_factory=list)

    _seen_collisions: int = 0

    def on_tick_end(self, engine: Simulation) -> None:
        crashed_this_tick = len(engine.collisions) > self._seen_collisions
        self._seen_collisions = len(engine.collisions)

        if crashed_this_tick and self.policy.snapshot_on_crash:
            self.capture(engine, self.policy.crash_event_name)
        elif self.policy.snapshot_each_tick:
            self.capture(engine, self.policy.tick_event_name)

    def capture(self, engine: Simulation, event_name: str) -> None:
        self.step_history.append(
            TickSnapshot(
                global_step_index=len(self.step_history),
                tick=engine.tick_count,
                event_name=event_name,
                carts=engine.cart_headings(),
                crashed=frozenset(engine.crashed),
                rows=engine.render_rows(),
            ),
        )


@dataclass(slots=True)
class CrashCounter:
    """Counts collisions per tick."""

    counts: dict[int, int] = field(default_factory=dict)
    _seen_collisions: int = 0

    def on_tick_end(self, engine: Simulation) -> None:
        new = engine.collisions[self._seen_collisions :]
        self._seen_collisions = len(engine.collisions)
        for collision in new:
            self.counts[collision.tick] = self.counts.get(collision.tick, 0) + 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())
