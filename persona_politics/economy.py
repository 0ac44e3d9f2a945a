"""Economic model: five macro indicators with clamped deltas and rolling history.

Also holds the economic heuristic that turns a resolved policy into an
indicator delta.
"""
from __future__ import annotations

import random as _random_mod
from collections import deque
from dataclasses import asdict, dataclass

from persona_politics.types import Decision, Difficulty, Result, clamp

HISTORY_LIMIT = 60

# (min, max) per indicator.
BOUNDS: dict[str, tuple[float, float]] = {
    "gdp": (70.0, 140.0),
    "infl": (1.0, 15.0),
    "unemp": (2.0, 20.0),
    "market": (60.0, 160.0),
    "conf": (0.0, 100.0),
}

SEED: dict[str, float] = {"gdp": 100.0, "infl": 4.0, "unemp": 6.0, "market": 100.0, "conf": 50.0}

FIELDS = tuple(SEED)


@dataclass(frozen=True)
class EconDelta:
    gdp: float = 0.0
    infl: float = 0.0
    unemp: float = 0.0
    market: float = 0.0
    conf: float = 0.0

    def scaled(self, factor: float) -> EconDelta:
        return EconDelta(*(getattr(self, f) * factor for f in FIELDS))


@dataclass(frozen=True)
class EconPoint:
    t: int
    gdp: float
    infl: float
    unemp: float
    market: float
    conf: float


class Economy:
    gdp: float
    infl: float
    unemp: float
    market: float
    conf: float

    def __init__(self) -> None:
        self.history: deque[EconPoint] = deque(maxlen=HISTORY_LIMIT)
        self.reset()

    def reset(self) -> None:
        for name, value in SEED.items():
            setattr(self, name, value)
        self.history.clear()
        self.history.append(EconPoint(t=0, **SEED))

    def apply_delta(self, delta: EconDelta, t: int) -> EconPoint:
        """Add ``delta`` to every indicator, clamp, and record a history point."""
        for name in FIELDS:
            lo, hi = BOUNDS[name]
            setattr(self, name, clamp(getattr(self, name) + getattr(delta, name), lo, hi))
        point = EconPoint(t=t, **{name: getattr(self, name) for name in FIELDS})
        self.history.append(point)
        return point

    def snapshot(self) -> dict[str, object]:
        data: dict[str, object] = {name: getattr(self, name) for name in FIELDS}
        data["history"] = [asdict(p) for p in self.history]
        return data


# --- Heuristic ---------------------------------------------------------------

POLICY_EFFECTS: dict[str, dict[str, EconDelta]] = {
    "infrastructure": {
        "approve": EconDelta(gdp=2.0, infl=0.2, unemp=-0.3, market=1.5, conf=4.0),
        "reject": EconDelta(gdp=-1.0, market=-1.0, conf=-3.0),
    },
    "military": {
        "approve": EconDelta(gdp=1.2, infl=0.3, market=0.8, conf=1.0),
        "reject": EconDelta(market=-1.0, conf=-2.0),
    },
    "justice": {
        "approve": EconDelta(gdp=0.5, conf=2.0),
        "reject": EconDelta(conf=-2.0),
    },
}

DIFFICULTY_MULTIPLIER: dict[str, float] = {"easy": 0.75, "medium": 1.0, "hard": 1.25}

NOISE = 0.1
LOSS_DAMPING = 0.5


def _base_effect(policy_id: str, decision: Decision) -> EconDelta:
    return POLICY_EFFECTS.get(policy_id, {}).get(decision, EconDelta())


def predict_impact(policy_id: str, difficulty: Difficulty, decision: Decision) -> EconDelta:
    """Preview of the indicator delta before the mini-game is played."""
    return _base_effect(policy_id, decision).scaled(DIFFICULTY_MULTIPLIER.get(difficulty, 1.0))


def _dampen_loss(d: EconDelta) -> EconDelta:
    # Losing forfeits the upside; rising inflation and unemployment stay.
    return EconDelta(
        gdp=d.gdp * LOSS_DAMPING if d.gdp > 0 else d.gdp,
        infl=d.infl,
        unemp=d.unemp if d.unemp > 0 else d.unemp * LOSS_DAMPING,
        market=d.market * LOSS_DAMPING if d.market > 0 else d.market,
        conf=d.conf * LOSS_DAMPING if d.conf > 0 else d.conf,
    )


def realized_impact(
    policy_id: str,
    difficulty: Difficulty,
    decision: Decision,
    result: Result,
    rng: _random_mod.Random,
) -> EconDelta:
    adjusted = predict_impact(policy_id, difficulty, decision)
    if result == "loss":
        adjusted = _dampen_loss(adjusted)
    return EconDelta(*(getattr(adjusted, f) + rng.uniform(-NOISE, NOISE) for f in FIELDS))
