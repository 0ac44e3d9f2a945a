"""Trigger-driven finite state machine used by the term and cabinet lifecycles."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

TransitionHook = Callable[[str, str, str], None]


@dataclass
class FSM:
    """Finite state machine. Transition table maps states to trigger/target pairs.

    ``transitions`` is ``{state: [[trigger, target], ...]}``. A trigger that has
    no edge out of the current state is refused and leaves the state untouched.
    The wildcard state ``"*"`` supplies edges valid from every state and acts as
    a fallback when the current state has no matching edge.
    """

    state: str
    transitions: dict[str, list[list[str]]]
    history: list[str] = field(default_factory=list)

    def can(self, trigger: str) -> bool:
        return self._target(trigger) is not None

    def fire(self, trigger: str, on_transition: TransitionHook | None = None) -> bool:
        """Apply ``trigger``. Returns True if a transition happened."""
        target = self._target(trigger)
        if target is None:
            return False
        old = self.state
        self.history.append(old)
        self.state = target
        if on_transition is not None:
            on_transition(old, trigger, target)
        return True

    def _target(self, trigger: str) -> str | None:
        for source in (self.state, "*"):
            for name, target in self.transitions.get(source, ()):
                if name == trigger:
                    return target
        return None


def term_fsm() -> FSM:
    return FSM(
        state="idle",
        transitions={
            "idle": [["start", "running"]],
            "running": [["expire", "over"], ["end", "over"]],
            "*": [["reset", "idle"]],
        },
    )


def minister_fsm(state: str = "active") -> FSM:
    return FSM(
        state=state,
        transitions={
            "active": [["resign", "resigned"]],
            "resigned": [["appoint", "active"]],
        },
    )
