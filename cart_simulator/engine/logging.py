from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

from typing_extensions import override

from rich.logging import RichHandler

if TYPE_CHECKING:
    from cart_simulator.core.state import LogContext
    from cart_simulator.engine.simulation import Simulation


# Precompiled regex patterns for highlighting
POSITION_PATTERN = re.compile(r"\(\d+, \d+\)")
KEYWORD_PATTERN = re.compile(r"\b(Move|Turn):")


# Simple color theme for Rich
COLOR = {
    "move": "bold green",
    "crash": "bold magenta",
    "warning": "bold red",
    "position": "cyan",
    "prefix": "dim",
}


class ContextAdapter(logging.LoggerAdapter):
    """Inject per-simulation runtime context into every log record."""

    def __init__(self, logger: logging.Logger, engine: Simulation) -> None:
        super().__init__(logger)
        self.engine: Simulation = engine

    @override
    def process(
        self,
        msg: Any,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[Any, MutableMapping[str, Any]]:
        logctx: LogContext = self.engine.log_context
        kwargs["extra"] = {
            "tick": logctx.tick,
            "tick_log_count": logctx.tick_log_count,
            "cart_repr": logctx.current_cart_repr,
            "engine_id": logctx.engine_id,
        }
        logctx.inc_log_count()
        return msg, kwargs


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        tick = getattr(record, "tick", 0)
        tick_log_count = getattr(record, "tick_log_count", 0)
        cart_repr = getattr(record, "cart_repr", "_")
        engine_id = getattr(record, "engine_id", "-")
        prefix = f"{engine_id} {tick}.{cart_repr}.{tick_log_count}"

        styled = record.getMessage()

        styled = KEYWORD_PATTERN.sub(
            rf"[{COLOR['move']}]\1[/{COLOR['move']}]:", styled
        )
        styled = re.sub(
            r"\bCrash:", f"[{COLOR['crash']}]Crash[/{COLOR['crash']}]:", styled
        )
        styled = POSITION_PATTERN.sub(
            rf"[{COLOR['position']}]\g<0>[/{COLOR['position']}]", styled
        )

        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['warning']}]{styled}[/{COLOR['warning']}]"

        return f"[{COLOR['prefix']}]{prefix}[/{COLOR['prefix']}]  {styled}"


def configure_logging(level: int | str = logging.INFO) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
