from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cart_simulator.core.state import SimulationState


@dataclass
class LoopDetectionState:
    """
    Remembers every state seen after a tick.

    The simulation is deterministic, so once a state repeats the run is in a
    cycle and nothing new (in particular no collision) will ever happen.
    """

    # Maps state key -> tick it was first seen after
    state_history: dict[frozenset, int] = field(default_factory=dict)


def check_for_loops(
    loop_state: LoopDetectionState,
    state: SimulationState,
) -> tuple[bool, str | None]:
    """
    Returns (True, reason) if the current state was already seen.
    Returns (False, None) otherwise and records the state.
    """
    state_key = state.get_state_key()
    first_seen = loop_state.state_history.get(state_key)
    if first_seen is not None:
        return (
            True,
            f"State after tick {state.tick_count} repeats tick {first_seen}",
        )

    loop_state.state_history[state_key] = state.tick_count
    return False, None
