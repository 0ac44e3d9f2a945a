"""Term countdown clock with an idle/running/over lifecycle."""

from __future__ import annotations

from persona_politics.fsm import FSM, term_fsm

DEFAULT_TERM_SECONDS = 120


class TermClock:
    def __init__(self, seconds_total: int = DEFAULT_TERM_SECONDS) -> None:
        if seconds_total <= 0:
            raise ValueError("seconds_total must be positive")
        self._seconds_total = seconds_total
        self._seconds_left = seconds_total
        self._fsm: FSM = term_fsm()
        self._generation = 0

    @property
    def seconds_total(self) -> int:
        return self._seconds_total

    @property
    def seconds_left(self) -> int:
        return self._seconds_left

    @property
    def elapsed(self) -> int:
        return self._seconds_total - self._seconds_left

    @property
    def state(self) -> str:
        return self._fsm.state

    @property
    def started(self) -> bool:
        return self._fsm.state == "running"

    @property
    def over(self) -> bool:
        return self._fsm.state == "over"

    @property
    def generation(self) -> int:
        """Bumped on every start and reset; lets callers detect a changed term."""
        return self._generation

    def start(self) -> bool:
        if not self._fsm.fire("start"):
            return False
        self._generation += 1
        return True

    def tick(self) -> bool:
        """Decrement one second. Returns True when this tick expired the term."""
        if not self.started:
            return False
        self._seconds_left = max(0, self._seconds_left - 1)
        if self._seconds_left == 0:
            return self._fsm.fire("expire")
        return False

    def end(self) -> bool:
        return self._fsm.fire("end")

    def reset(self, seconds_total: int | None = None) -> None:
        if seconds_total is not None:
            if seconds_total <= 0:
                raise ValueError("seconds_total must be positive")
            self._seconds_total = seconds_total
        self._seconds_left = self._seconds_total
        self._fsm.fire("reset")
        self._generation += 1

    def snapshot(self) -> dict[str, object]:
        return {
            "seconds_total": self._seconds_total,
            "seconds_left": self._seconds_left,
            "started": self.started,
            "over": self.over,
        }
