from typing import Callable

import pytest

from tests.test_utils import TrackScenario

# Two carts driving at each other on the top edge of a loop
HEAD_ON_LOOP = [
    "/->-<-\\",
    "|     |",
    "\\-----/",
]

# Nine carts on a figure of loops; one is left after a few ticks
MANY_CARTS = [
    "/>-<\\  ",
    "|   |  ",
    "| /<+-\\",
    "| | | v",
    "\\>+</ |",
    "  |   ^",
    "  \\<->/",
]


@pytest.fixture
def scenario() -> Callable[..., TrackScenario]:
    """Factory fixture to create scenarios."""

    def _builder(lines: list[str], *, strict: bool = False) -> TrackScenario:
        return TrackScenario(lines, strict=strict)

    return _builder
