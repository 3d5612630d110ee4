"""Command-line interface for running a track to completion."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import cappa
from tqdm import tqdm

from cart_simulator.core.errors import DerailmentError, TrackParseError
from cart_simulator.core.types import StopMode
from cart_simulator.engine.logging import configure_logging
from cart_simulator.engine.simulation import Simulation, SimulationReport
from cart_simulator.simulation.config import SimulationConfig
from cart_simulator.simulation.telemetry import SnapshotPolicy, SnapshotRecorder


@dataclass
class Args:
    """Run carts around a track until one is left (or the first crash)."""

    track: Path
    """Path to the track text file"""

    config: Annotated[Path | None, cappa.Arg(long=True)] = None
    """Path to TOML configuration file"""

    mode: Annotated[StopMode | None, cappa.Arg(long=True)] = None
    """Override: stop at the first crash or when one cart is left"""

    max_ticks: Annotated[int | None, cappa.Arg(long=True)] = None
    """Override: abort runs exceeding this many ticks"""

    strict: Annotated[bool, cappa.Arg(long=True)] = False
    """Reject tracks with rows of differing length"""

    show: Annotated[bool, cappa.Arg(long=True)] = False
    """Print the track at every crash and at the end"""

    verbose: Annotated[bool, cappa.Arg(short=True, long=True)] = False
    """Log every cart move"""

    def __call__(self) -> int:
        """Load the track, run it and print the outcome."""

        if not self.track.exists():
            print(f"Error: Track file not found: {self.track}", file=sys.stderr)
            return 1

        if self.config is not None:
            if not self.config.exists():
                print(f"Error: Config file not found: {self.config}", file=sys.stderr)
                return 1
            config = SimulationConfig.from_toml(self.config)
        else:
            config = SimulationConfig()

        # CLI overrides
        stop_mode = config.stop_mode if self.mode is None else self.mode
        max_ticks = config.max_ticks if self.max_ticks is None else self.max_ticks
        strict = self.strict or config.strict_grid

        configure_logging(logging.DEBUG if self.verbose else config.log_level)

        try:
            simulation = Simulation.from_file(self.track, strict=strict)
        except TrackParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"Track: {simulation.width}x{simulation.height}")
        print(f"Carts: {len(simulation.carts)}")
        print(f"Stop mode: {stop_mode}")
        print()

        recorder = SnapshotRecorder(
            SnapshotPolicy(snapshot_each_tick=config.snapshot_each_tick),
        )

        with tqdm(desc="Simulating", unit="tick", total=max_ticks) as pbar:

            def on_tick(sim: Simulation) -> None:
                recorder.on_tick_end(sim)
                pbar.update(1)

            try:
                report = simulation.run(
                    stop_mode,
                    max_ticks=max_ticks,
                    detect_loops=config.detect_loops,
                    on_tick=on_tick,
                )
            except DerailmentError as e:
                tqdm.write(f"Error: {e}", file=sys.stderr)
                return 2

        if self.show:
            for snapshot in recorder.step_history:
                print(f"{snapshot.event_name} at tick {snapshot.tick}:")
                print("\n".join(snapshot.rows))
            print(f"Final state at tick {simulation.tick_count}:")
            print(simulation.render())

        _print_report(report)
        return 1 if report.aborted else 0


def _print_report(report: SimulationReport) -> None:
    status = "ABORTED" if report.aborted else "COMPLETED"
    print(f"{status} after {report.ticks} ticks")
    if report.abort_reason:
        print(f"Reason: {report.abort_reason}")

    first = report.first_crash
    print(f"First crash: {_fmt(first) if first else 'none'}")
    print(f"Crashed carts: {len(report.collisions) * 2}")
    for collision in report.collisions:
        print(f"  tick {collision.tick}: {_fmt(collision.position)}")

    if report.survivors:
        for position, direction in sorted(report.survivors.items()):
            print(f"Cart left: {_fmt(position)} heading {direction.name}")
    else:
        print("Cart left: none")


def _fmt(position: tuple[int, int]) -> str:
    return f"{position[0]},{position[1]}"


def main() -> int:
    """Entry point for CLI."""
    return cappa.invoke(Args)


if __name__ == "__main__":
    sys.exit(main())
