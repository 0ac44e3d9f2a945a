"""Engine - tick loop, pacing, and lifecycle hooks driving a GameState."""

import time
from typing import Callable

from persona_politics.state import GameState
from persona_politics.types import System, TickContext

Hook = Callable[[GameState, TickContext], None]


class TickClock:
    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number


class Engine:
    """Runs registered systems against one ``GameState``.

    The state owns the random generator; every ``TickContext`` carries it.
    """

    def __init__(self, state: GameState, tps: int | None = None) -> None:
        self._state = state
        self._clock = TickClock(tps if tps is not None else state.config.tps)
        self._systems: list[System] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def clock(self) -> TickClock:
        return self._clock

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> TickContext:
        n = self._clock.tick_number
        return TickContext(
            tick_number=n,
            dt=self._clock.dt,
            elapsed=n * self._clock.dt,
            request_stop=self._request_stop,
            random=self._state.random,
        )

    def _tick(self) -> None:
        self._clock.advance()
        ctx = self._context()
        for system in self._systems:
            system(self._state, ctx)
            if self._stop_requested:
                break

    def _run_hooks(self, hooks: list[Hook]) -> None:
        ctx = self._context()
        for hook in hooks:
            hook(self._state, ctx)

    def step(self) -> None:
        self._stop_requested = False
        self._tick()

    def run(self, n: int) -> None:
        self._stop_requested = False
        self._run_hooks(self._start_hooks)
        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break
        self._run_hooks(self._stop_hooks)

    def run_forever(self) -> None:
        """Tick in real time until a system requests a stop.

        Ticks are scheduled against absolute deadlines, so a slow tick
        shortens the following sleep instead of shifting every later tick.
        A tick that overruns by more than one period moves the schedule
        forward rather than running catch-up ticks back to back.
        """
        self._stop_requested = False
        self._run_hooks(self._start_hooks)

        dt = self._clock.dt
        deadline = time.monotonic() + dt
        while not self._stop_requested:
            self._tick()
            if self._stop_requested:
                break
            now = time.monotonic()
            if now < deadline:
                time.sleep(deadline - now)
                deadline += dt
            else:
                deadline = now + dt

        self._run_hooks(self._stop_hooks)
