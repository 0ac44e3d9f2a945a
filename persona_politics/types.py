"""Shared type aliases, records and errors for the simulation core."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Literal

Difficulty = Literal["easy", "medium", "hard"]
Decision = Literal["approve", "reject"]
Result = Literal["win", "loss"]
Urgency = Literal["low", "medium", "high"]
GameResult = Literal["win", "loss"]

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


@dataclass(frozen=True)
class StatDelta:
    approval: int = 0
    power: int = 0
    standing: int = 0

    @property
    def total(self) -> int:
        return self.approval + self.power + self.standing

    def as_dict(self) -> dict[str, int]:
        return {"approval": self.approval, "power": self.power, "standing": self.standing}


@dataclass(frozen=True)
class MiniGameOutcome:
    """The only signal a mini-game hands back to the simulation."""

    approved: bool
    misses: int = 0
    rounds: int = 1

    def __post_init__(self) -> None:
        if self.misses < 0:
            raise ValueError(f"misses must be >= 0, got {self.misses}")
        if self.rounds < 1:
            raise ValueError(f"rounds must be >= 1, got {self.rounds}")

    @property
    def decision(self) -> Decision:
        return "approve" if self.approved else "reject"

    @property
    def result(self) -> Result:
        return "win" if self.approved else "loss"


@dataclass(frozen=True)
class PolicyLogEntry:
    id: str
    title: str
    decision: Decision
    result: Result
    delta: StatDelta = field(default_factory=StatDelta)
    time: int = 0


@dataclass(frozen=True)
class WorldEvent:
    id: str
    headline: str
    detail: str
    urgency: Urgency
    time: int


class UnknownKeyError(KeyError):
    """Raised when a bloc, minister or poll segment key is not recognised."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"Unknown {kind} {key!r}")


if TYPE_CHECKING:
    from persona_politics.state import GameState

System = Callable[["GameState", TickContext], None]
