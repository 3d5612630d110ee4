import logging

from cart_simulator.core.state import LogContext
from cart_simulator.engine.logging import RichMarkupFormatter


def _record(msg: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("cart_simulator.engine.0", level, __file__, 1, msg, None, None)


def test_formatter_prefix_and_highlighting():
    record = _record("Crash: cart from (2, 0) hit cart on (3, 0) (0 left)")
    record.engine_id = 4
    record.tick = 12
    record.cart_repr = "2,0"
    record.tick_log_count = 3

    out = RichMarkupFormatter().format(record)

    assert out.startswith("[dim]4 12.2,0.3[/dim]  ")
    assert "[bold magenta]Crash[/bold magenta]:" in out
    assert "[cyan](2, 0)[/cyan]" in out


def test_formatter_without_context():
    out = RichMarkupFormatter().format(_record("Move: (1, 1)->(2, 1) RIGHT"))
    assert out.startswith("[dim]- 0._.0[/dim]")
    assert "[bold green]Move[/bold green]:" in out


def test_warnings_are_highlighted():
    out = RichMarkupFormatter().format(_record("Run aborted", logging.WARNING))
    assert "[bold red]Run aborted[/bold red]" in out


def test_log_context_resets_per_tick():
    ctx = LogContext(engine_id=1)
    ctx.inc_log_count()
    ctx.current_cart_repr = "3,4"

    ctx.start_tick(5)
    assert (ctx.tick, ctx.tick_log_count, ctx.current_cart_repr) == (5, 0, "_")
