"""Exit poll model: demographic approval segments with trend history.

Each segment is an independent approval figure in [0, 100]; the segments
are not a partition and do not sum to anything in particular.
"""
from __future__ import annotations

import random as _random_mod
from collections import deque
from dataclasses import dataclass, field
from typing import Literal

from persona_politics.types import Decision, Difficulty, Result, UnknownKeyError, clamp

AgeKey = Literal["18_30", "31_60", "60_80", "80_plus"]
GenderKey = Literal["male", "female", "other"]

AGE_SEED: dict[str, float] = {"18_30": 48.0, "31_60": 52.0, "60_80": 54.0, "80_plus": 51.0}
GENDER_SEED: dict[str, float] = {"male": 50.0, "female": 51.0, "other": 49.0}
SCALAR_SEED: dict[str, float] = {"own_party": 55.0, "urban": 49.0, "rural": 53.0, "undecided": 18.0}
OVERALL_SEED = 50.0

SAMPLE_SIZE = 5000
MOE_BASE = 2.3
MOE_JITTER = 0.4
TREND_LIMIT = 40


def _trend(value: float) -> deque[tuple[int, float]]:
    return deque([(0, value)], maxlen=TREND_LIMIT)


@dataclass
class PollShift:
    """Signed changes to apply; absent keys and None fields are left alone."""

    age: dict[str, float] = field(default_factory=dict)
    gender: dict[str, float] = field(default_factory=dict)
    own_party: float | None = None
    urban: float | None = None
    rural: float | None = None
    undecided: float | None = None
    overall: float | None = None


class ExitPoll:
    def __init__(self) -> None:
        self.sample = SAMPLE_SIZE
        self.moe = MOE_BASE
        self.last_updated = 0
        self.age: dict[str, float] = {}
        self.gender: dict[str, float] = {}
        self.scalars: dict[str, float] = {}
        self.age_trends: dict[str, deque[tuple[int, float]]] = {}
        self.gender_trends: dict[str, deque[tuple[int, float]]] = {}
        self.scalar_trends: dict[str, deque[tuple[int, float]]] = {}
        self.overall_trend: deque[tuple[int, float]] = _trend(OVERALL_SEED)
        self.reset()

    def reset(self) -> None:
        self.sample = SAMPLE_SIZE
        self.moe = MOE_BASE
        self.last_updated = 0
        self.age = dict(AGE_SEED)
        self.gender = dict(GENDER_SEED)
        self.scalars = dict(SCALAR_SEED)
        self.age_trends = {k: _trend(v) for k, v in AGE_SEED.items()}
        self.gender_trends = {k: _trend(v) for k, v in GENDER_SEED.items()}
        self.scalar_trends = {k: _trend(v) for k, v in SCALAR_SEED.items()}
        self.overall_trend = _trend(OVERALL_SEED)

    @property
    def own_party(self) -> float:
        return self.scalars["own_party"]

    @property
    def urban(self) -> float:
        return self.scalars["urban"]

    @property
    def rural(self) -> float:
        return self.scalars["rural"]

    @property
    def undecided(self) -> float:
        return self.scalars["undecided"]

    @property
    def overall(self) -> float:
        return self.overall_trend[-1][1]

    def age_average(self) -> float:
        return sum(self.age.values()) / len(self.age)

    def apply_shift(self, shift: PollShift, t: int, rng: _random_mod.Random) -> None:
        for key, delta in shift.age.items():
            if key not in self.age:
                raise UnknownKeyError("age bucket", key)
            self.age[key] = clamp(self.age[key] + delta, 0.0, 100.0)
            self.age_trends[key].append((t, self.age[key]))

        for key, delta in shift.gender.items():
            if key not in self.gender:
                raise UnknownKeyError("gender", key)
            self.gender[key] = clamp(self.gender[key] + delta, 0.0, 100.0)
            self.gender_trends[key].append((t, self.gender[key]))

        for key in SCALAR_SEED:
            delta = getattr(shift, key)
            if delta is None:
                continue
            self.scalars[key] = clamp(self.scalars[key] + delta, 0.0, 100.0)
            self.scalar_trends[key].append((t, self.scalars[key]))

        if shift.overall is not None:
            overall = clamp(self.age_average() + shift.overall, 0.0, 100.0)
            self.overall_trend.append((t, overall))

        self.moe = MOE_BASE + rng.uniform(-MOE_JITTER, MOE_JITTER)
        self.last_updated = t

    def snapshot(self) -> dict[str, object]:
        return {
            "sample": self.sample,
            "moe": self.moe,
            "last_updated": self.last_updated,
            "age": dict(self.age),
            "gender": dict(self.gender),
            **self.scalars,
            "trends": {
                "overall": [list(p) for p in self.overall_trend],
                "age": {k: [list(p) for p in v] for k, v in self.age_trends.items()},
                "gender": {k: [list(p) for p in v] for k, v in self.gender_trends.items()},
                **{k: [list(p) for p in v] for k, v in self.scalar_trends.items()},
            },
        }


# --- Heuristic ---------------------------------------------------------------

@dataclass(frozen=True)
class PollContext:
    approval: float
    power: float
    standing: float
    gdp: float
    infl: float
    unemp: float
    conf: float
    policy_id: str
    decision: Decision
    result: Result
    difficulty: Difficulty


JITTER = 0.7
HARD_MULTIPLIER = 1.15
LOSS_MULTIPLIER = 0.6

# Per-policy base swings, applied with the decision's sign.
_POLICY_SWINGS: dict[str, dict[str, float]] = {
    "infrastructure": {
        "age.18_30": 2.6, "age.31_60": 1.8, "age.60_80": 0.8,
        "gender.female": 1.2, "urban": 1.5, "rural": 0.8,
    },
    "military": {
        "age.18_30": -0.6, "age.31_60": 1.0, "age.60_80": 1.6,
        "gender.male": 1.3, "gender.female": -0.4, "urban": 0.6,
    },
    "justice": {
        "gender.female": 1.8, "age.18_30": 1.4, "age.31_60": 0.9,
        "age.60_80": 0.5, "urban": 0.9,
    },
}

# Undecided voters shrink when a policy lands, grow when it is rejected.
_UNDECIDED_SWING: dict[str, float] = {"infrastructure": 0.9, "military": 0.5, "justice": 0.7}


def poll_shift(ctx: PollContext, rng: _random_mod.Random) -> PollShift:
    hard = HARD_MULTIPLIER if ctx.difficulty == "hard" else 1.0
    sign = 1 if ctx.decision == "approve" else -1
    won = ctx.result == "win"

    def jitter(n: float) -> float:
        return n + rng.uniform(-JITTER, JITTER)

    def scale(n: float) -> float:
        return jitter(n * hard * (1.0 if won else LOSS_MULTIPLIER))

    out = PollShift()
    for target, base in _POLICY_SWINGS.get(ctx.policy_id, {}).items():
        value = scale(base) * sign
        group, _, key = target.partition(".")
        if group == "age":
            out.age[key] = value
        elif group == "gender":
            out.gender[key] = value
        else:
            setattr(out, group, value)
    if ctx.policy_id in _UNDECIDED_SWING:
        out.undecided = -abs(scale(_UNDECIDED_SWING[ctx.policy_id])) * sign

    # Economy cross-effects.
    if ctx.unemp < 5.5:
        out.age["18_30"] = out.age.get("18_30", 0.0) + 0.6
    if ctx.infl > 8:
        out.age["60_80"] = out.age.get("60_80", 0.0) - 0.8

    out.own_party = jitter((ctx.approval - 50) * 0.06 + (0.8 if won else -0.8))
    out.overall = jitter((ctx.approval - 50) * 0.04)
    return out


def poll_time_drift(approval: float, rng: _random_mod.Random) -> PollShift:
    """Slow background drift applied on the clock, independent of decisions."""
    return PollShift(
        undecided=-0.6 if approval >= 60 else 0.6,
        overall=(approval - 50) * 0.02 + rng.uniform(-0.3, 0.3),
    )
