from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing_extensions import override

from cart_simulator.core.events import CollisionEvent
from cart_simulator.core.state import Cart, LogContext, SimulationState, Track
from cart_simulator.core.types import CRASH_GLYPH, Direction, Position, StopMode
from cart_simulator.engine import ENGINE_ID_COUNTER
from cart_simulator.engine.logging import ContextAdapter
from cart_simulator.engine.loop_detection import LoopDetectionState, check_for_loops
from cart_simulator.engine.movement import move_cart
from cart_simulator.engine.track import parse_track

logger = logging.getLogger("cart_simulator.engine")

TickCallback = Callable[["Simulation"], None]


@dataclass(frozen=True, slots=True)
class SimulationReport:
    ticks: int
    stop_mode: StopMode
    collisions: tuple[CollisionEvent, ...]
    crashed: frozenset[Position]
    survivors: dict[Position, Direction] = field(hash=False)
    aborted: bool = False
    abort_reason: str | None = None

    @property
    def first_crash(self) -> Position | None:
        return self.collisions[0].position if self.collisions else None

    @property
    def last_cart(self) -> Position | None:
        if len(self.survivors) != 1:
            return None
        return next(iter(self.survivors))


@dataclass
class Simulation:
    """
    Carts on a rail grid, advanced one tick at a time.

    Live carts are keyed by their position; a cart has no identity beyond
    the cell it stands on.
    """

    state: SimulationState
    log_context: LogContext = field(
        default_factory=lambda: LogContext(engine_id=next(ENGINE_ID_COUNTER)),
    )
    collisions: list[CollisionEvent] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._logger: ContextAdapter = ContextAdapter(logger, self)

    @classmethod
    def from_text(cls, text: str, *, strict: bool = False) -> Simulation:
        track, carts = parse_track(text, strict=strict)
        return cls(SimulationState(track=track, carts=carts))

    @classmethod
    def from_file(cls, path: str | Path, *, strict: bool = False) -> Simulation:
        return cls.from_text(Path(path).read_text(encoding="utf-8"), strict=strict)

    # -- accessors -----------------------------------------------------------

    @property
    def track(self) -> Track:
        return self.state.track

    @property
    def carts(self) -> dict[Position, Cart]:
        return self.state.carts

    @property
    def crashed(self) -> set[Position]:
        return self.state.crashed

    @property
    def tick_count(self) -> int:
        return self.state.tick_count

    @property
    def height(self) -> int:
        return self.state.track.height

    @property
    def width(self) -> int:
        return self.state.track.width

    @property
    def display_size(self) -> int:
        """Number of lines a rendered snapshot takes."""
        return self.state.track.height

    def cart_headings(self) -> dict[Position, Direction]:
        return {pos: cart.direction for pos, cart in self.state.carts.items()}

    def is_finished(self, stop_mode: StopMode = "last_cart") -> bool:
        if len(self.state.carts) <= 1:
            return True
        return stop_mode == "first_crash" and bool(self.collisions)

    # -- logging -------------------------------------------------------------

    def log_debug(self, msg: str) -> None:
        self._logger.debug(msg)

    def log_info(self, msg: str) -> None:
        self._logger.info(msg)

    def log_warning(self, msg: str) -> None:
        self._logger.warning(msg)

    def log_error(self, msg: str) -> None:
        self._logger.error(msg)

    # -- simulation ----------------------------------------------------------

    def tick(self) -> None:
        """Move every live cart one cell, top row first, left to right."""
        self.state.tick_count += 1
        self.log_context.start_tick(self.state.tick_count)

        # Which carts move is fixed up front; where they are is looked up live,
        # so later carts see earlier carts' new positions.
        order = sorted(self.state.carts, key=lambda pos: (pos[1], pos[0]))
        for position in order:
            collision = move_cart(self, position)
            if collision is not None:
                self.collisions.append(collision)

        self.log_context.current_cart_repr = "_"

    def run(
        self,
        stop_mode: StopMode = "last_cart",
        *,
        max_ticks: int | None = None,
        detect_loops: bool = True,
        on_tick: TickCallback | None = None,
    ) -> SimulationReport:
        """
        Tick until `stop_mode` is satisfied.

        `last_cart` stops once at most one cart is left, `first_crash` once
        any collision happened (or no collision is possible anymore). Runs
        longer than `max_ticks` ticks, or runs caught in a cycle without
        a collision in `first_crash` mode, end with ``aborted=True``.
        """
        loop_state = LoopDetectionState()
        ticks_run = 0
        abort_reason: str | None = None

        while not self.is_finished(stop_mode):
            if max_ticks is not None and ticks_run >= max_ticks:
                abort_reason = f"Reached the limit of {max_ticks} ticks"
                break

            self.tick()
            ticks_run += 1
            if on_tick is not None:
                on_tick(self)

            if detect_loops and stop_mode == "first_crash" and not self.collisions:
                looped, reason = check_for_loops(loop_state, self.state)
                if looped:
                    abort_reason = reason
                    break

        if abort_reason is not None:
            self.log_warning(f"Run aborted: {abort_reason}")

        return SimulationReport(
            ticks=self.state.tick_count,
            stop_mode=stop_mode,
            collisions=tuple(self.collisions),
            crashed=frozenset(self.state.crashed),
            survivors=self.cart_headings(),
            aborted=abort_reason is not None,
            abort_reason=abort_reason,
        )

    # -- rendering -----------------------------------------------------------

    def render_rows(self) -> list[str]:
        """Crash sites first, then carts, then the rail underneath."""
        lines: list[str] = []
        for y, row in enumerate(self.state.track.rows):
            chars: list[str] = []
            for x, segment in enumerate(row):
                if (x, y) in self.state.crashed:
                    chars.append(CRASH_GLYPH)
                elif (cart := self.state.carts.get((x, y))) is not None:
                    chars.append(cart.glyph)
                else:
                    chars.append(segment.glyph)
            lines.append("".join(chars))
        return lines

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self.render_rows())

    @override
    def __str__(self) -> str:
        return self.render()
