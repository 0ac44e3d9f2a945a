"""Cabinet loyalty: four minister slots, resignation and shuffle.

A minister whose loyalty drops below ``RESIGN_BELOW`` resigns and queues a
shuffle notice. While resigned, loyalty is frozen. ``Cabinet.shuffle``
acknowledges the oldest notice and seats a new appointee.
"""
from __future__ import annotations

import random as _random_mod
from collections import deque
from dataclasses import dataclass, field
from typing import Literal

from persona_politics.fsm import FSM, minister_fsm
from persona_politics.types import Decision, Result, UnknownKeyError, clamp

MinisterKey = Literal["defense", "finance", "justice", "foreign"]

MINISTER_NAMES: dict[str, str] = {
    "defense": "Sec. R. Hayes",
    "finance": "Min. V. Patel",
    "justice": "AG L. Romero",
    "foreign": "FM A. Chen",
}

LOYALTY_SEED = 60
RESIGN_BELOW = 40
APPOINTEE_LOYALTY = (58, 66)  # half-open
APPOINTEE_REASON = "New appointee"
TREND_LIMIT = 40


@dataclass
class Minister:
    name: str
    loyalty: float = LOYALTY_SEED
    trend: deque[float] = field(
        default_factory=lambda: deque([LOYALTY_SEED], maxlen=TREND_LIMIT)
    )
    last_reason: str | None = None
    fsm: FSM = field(default_factory=minister_fsm)

    @property
    def status(self) -> str:
        return self.fsm.state

    @property
    def active(self) -> bool:
        return self.fsm.state == "active"


@dataclass(frozen=True)
class ShuffleNotice:
    key: str
    name: str


class Cabinet:
    def __init__(self) -> None:
        self.ministers: dict[str, Minister] = {}
        self.pending: deque[ShuffleNotice] = deque()
        self.reset()

    def reset(self) -> None:
        self.ministers = {key: Minister(name=name) for key, name in MINISTER_NAMES.items()}
        self.pending.clear()

    def __getitem__(self, key: str) -> Minister:
        try:
            return self.ministers[key]
        except KeyError:
            raise UnknownKeyError("minister", key) from None

    def bump_loyalty(self, key: str, delta: float, reason: str | None = None) -> bool:
        """Shift loyalty. Returns False (and changes nothing) while resigned."""
        m = self[key]
        if not m.active:
            return False
        m.loyalty = clamp(m.loyalty + delta, 0, 100)
        m.trend.append(m.loyalty)
        if reason:
            m.last_reason = reason
        return True

    def maybe_resign(self, key: str) -> ShuffleNotice | None:
        m = self[key]
        if m.loyalty >= RESIGN_BELOW or not m.fsm.fire("resign"):
            return None
        notice = ShuffleNotice(key=key, name=m.name)
        self.pending.append(notice)
        return notice

    @property
    def shuffle_pending(self) -> ShuffleNotice | None:
        return self.pending[0] if self.pending else None

    def shuffle(self, rng: _random_mod.Random) -> Minister | None:
        """Replace the minister named in the oldest pending notice."""
        if not self.pending:
            return None
        notice = self.pending.popleft()
        m = self.ministers[notice.key]
        m.loyalty = rng.randrange(*APPOINTEE_LOYALTY)
        m.trend.append(m.loyalty)
        m.last_reason = APPOINTEE_REASON
        m.fsm.fire("appoint")
        return m

    def snapshot(self) -> dict[str, object]:
        return {
            "ministers": {
                key: {
                    "name": m.name,
                    "loyalty": m.loyalty,
                    "trend": list(m.trend),
                    "status": m.status,
                    "last_reason": m.last_reason,
                }
                for key, m in self.ministers.items()
            },
            "pending": [notice.key for notice in self.pending],
        }


# --- Heuristic ---------------------------------------------------------------

@dataclass(frozen=True)
class CabinetDelta:
    key: str
    delta: int
    reason: str


@dataclass(frozen=True)
class CabinetContext:
    defense_approvals_in_row: int = 0


def cabinet_deltas(
    policy_id: str,
    decision: Decision,
    result: Result,
    context: CabinetContext,
    rng: _random_mod.Random,
) -> list[CabinetDelta]:
    deltas: list[CabinetDelta] = []
    lost = result == "loss"
    approved = decision == "approve"

    def add(key: str, base: int, reason: str) -> None:
        final = base // 2 if lost and base > 0 else base
        deltas.append(CabinetDelta(key, final, reason))

    if policy_id == "infrastructure":
        if approved:
            add("finance", rng.randint(3, 6), "Infrastructure spending approved")
            add("justice", rng.randint(1, 2), "Public welfare investment")
        else:
            add("finance", -rng.randint(4, 6), "Infrastructure deal rejected")
            add("justice", -rng.randint(1, 2), "Missed public investment")

    elif policy_id == "military":
        if approved:
            add("defense", rng.randint(4, 7), "Defense budget increased")
            add("foreign", rng.randint(1, 3), "Military strength signaled")
            if context.defense_approvals_in_row >= 2:
                add("justice", -rng.randint(2, 3), "Militarization concerns")
        else:
            add("defense", -rng.randint(5, 7), "Defense budget cut")

    elif policy_id == "justice":
        if approved:
            add("justice", rng.randint(4, 6), "Reform championed")
            add("foreign", rng.randint(1, 2), "International praise for reform")
        else:
            add("justice", -rng.randint(4, 5), "Reform blocked")

    return deltas
