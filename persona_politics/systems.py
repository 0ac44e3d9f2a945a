"""System factories for the per-tick behaviour of a term."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from persona_politics.poll import poll_time_drift
from persona_politics.signals import SignalBus

if TYPE_CHECKING:
    from persona_politics.state import GameState
    from persona_politics.types import TickContext


def make_term_system(
    stop_when_over: bool = True,
) -> Callable[[GameState, TickContext], None]:
    """Count the term down one second per tick.

    With ``stop_when_over`` the engine is asked to stop once the term is
    over, whether by timeout or by a decided game.
    """

    def term_system(state: GameState, ctx: TickContext) -> None:
        state.tick_term()
        if stop_when_over and state.term.over:
            ctx.request_stop()

    return term_system


def make_poll_drift_system(
    interval: int | None = None,
) -> Callable[[GameState, TickContext], None]:
    """Apply background exit-poll drift every ``interval`` ticks of a running term."""

    def poll_drift_system(state: GameState, ctx: TickContext) -> None:
        every = interval if interval is not None else state.config.poll_drift_interval
        if not state.term.started or ctx.tick_number % every != 0:
            return
        shift = poll_time_drift(state.stats.approval, ctx.random)
        state.poll.apply_shift(shift, state.elapsed, ctx.random)

    return poll_drift_system


def make_signal_system(bus: SignalBus) -> Callable[[GameState, TickContext], None]:
    def signal_system(state: GameState, ctx: TickContext) -> None:
        bus.flush()

    return signal_system
