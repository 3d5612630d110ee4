"""Configuration schema for simulation runs using msgspec."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import msgspec

from cart_simulator.core.types import StopMode  # noqa: TC001

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SimulationConfig(msgspec.Struct, forbid_unknown_fields=True):
    """TOML-backed configuration for a simulation run."""

    # "last_cart" runs until one cart is left, "first_crash" stops at the
    # first collision.
    stop_mode: StopMode = "last_cart"

    # Execution limits
    max_ticks: int = 100_000
    detect_loops: bool = True

    # Reject tracks whose rows differ in length instead of padding them
    strict_grid: bool = False

    # Telemetry
    snapshot_each_tick: bool = False

    log_level: LogLevel = "INFO"

    @classmethod
    def from_toml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)
