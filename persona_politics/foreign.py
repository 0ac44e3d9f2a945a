"""Foreign relations: per-bloc opinion scores, stance and the geo heuristic.

Stance is stored, not computed. Every score change is a two-step protocol:
``apply_delta`` moves the score, then ``recompute_stance`` re-derives the
stance from it. Until the second call the stance still reflects the old
score.
"""
from __future__ import annotations

import random as _random_mod
from collections import deque
from dataclasses import dataclass, field
from typing import Literal

from persona_politics.types import Decision, Difficulty, Result, UnknownKeyError, clamp

BlocKey = Literal["NATO", "EU", "BRICS", "OIC", "SCO"]
Stance = Literal["Supportive", "Neutral", "Critical"]

BLOCS: tuple[str, ...] = ("NATO", "EU", "BRICS", "OIC", "SCO")

SCORE_SEED = 50.0
HISTORY_LIMIT = 40
SUPPORTIVE_AT = 67
NEUTRAL_AT = 34


def stance_for(score: float) -> Stance:
    if score >= SUPPORTIVE_AT:
        return "Supportive"
    if score >= NEUTRAL_AT:
        return "Neutral"
    return "Critical"


@dataclass
class BlocOpinion:
    score: float = SCORE_SEED
    stance: Stance = "Neutral"
    reason: str = ""
    history: deque[tuple[int, float]] = field(
        default_factory=lambda: deque([(0, SCORE_SEED)], maxlen=HISTORY_LIMIT)
    )


class ForeignRelations:
    def __init__(self) -> None:
        self.blocs: dict[str, BlocOpinion] = {}
        self.reset()

    def reset(self) -> None:
        self.blocs = {key: BlocOpinion() for key in BLOCS}

    def __getitem__(self, bloc: str) -> BlocOpinion:
        try:
            return self.blocs[bloc]
        except KeyError:
            raise UnknownKeyError("bloc", bloc) from None

    def apply_delta(
        self, bloc: str, score: float = 0.0, reason: str | None = None, t: int = 0
    ) -> None:
        """Step one: move the score and record history. Stance is left as is."""
        op = self[bloc]
        op.score = clamp(op.score + score, 0.0, 100.0)
        if reason is not None:
            op.reason = reason
        op.history.append((t, op.score))

    def recompute_stance(self, bloc: str) -> Stance:
        """Step two: re-derive the stance from the current score."""
        op = self[bloc]
        op.stance = stance_for(op.score)
        return op.stance

    def snapshot(self) -> dict[str, object]:
        return {
            key: {
                "score": op.score,
                "stance": op.stance,
                "reason": op.reason,
                "history": [list(p) for p in op.history],
            }
            for key, op in self.blocs.items()
        }


# --- Heuristic ---------------------------------------------------------------

@dataclass(frozen=True)
class GeoImpact:
    bloc: str
    delta: float
    reason: str


@dataclass(frozen=True)
class GeoContext:
    """Decision history the caller derives from the policy log."""

    difficulty: Difficulty = "medium"
    consecutive_wins: int = 0
    consecutive_losses: int = 0
    defense_approvals_in_row: int = 0


DIFFICULTY_MULTIPLIER: dict[str, float] = {"easy": 0.85, "medium": 1.0, "hard": 1.25}

NOISE = 1.0
LOSS_DAMPING = 0.5


def realized_geo_impact(
    policy_id: str,
    decision: Decision,
    result: Result,
    context: GeoContext,
    rng: _random_mod.Random,
) -> list[GeoImpact]:
    impacts: list[GeoImpact] = []
    mult = DIFFICULTY_MULTIPLIER.get(context.difficulty, 1.0)
    lost = result == "loss"
    approved = decision == "approve"

    def add(bloc: str, delta: float, reason: str) -> None:
        impacts.append(GeoImpact(bloc, delta + rng.uniform(-NOISE, NOISE), reason))

    def gain(lo: float, hi: float, scaled: bool = True) -> float:
        delta = rng.uniform(lo, hi) * (mult if scaled else 1.0)
        return delta * LOSS_DAMPING if lost else delta

    # NATO: backs defense, wary of cuts and justice reform.
    if policy_id == "military":
        if approved:
            add("NATO", gain(4, 7), "Welcomes stronger defense posture.")
        else:
            add("NATO", -rng.uniform(4, 6), "Concerned about defense budget cuts.")
    elif policy_id == "infrastructure":
        add("NATO", gain(1, 2, scaled=False), "Neutral on infrastructure spending.")
    elif policy_id == "justice":
        add("NATO", -rng.uniform(1, 3), "Wary of justice reforms.")

    # EU: infrastructure and justice reform, cautious on heavy defense.
    if policy_id == "infrastructure":
        if approved:
            add("EU", gain(4, 6), "Applauds infrastructure investment.")
        else:
            add("EU", -rng.uniform(3, 5), "Disappointed by infrastructure rejection.")
    elif policy_id == "justice":
        if approved:
            add("EU", gain(3, 5), "Applauds social justice reforms.")
        else:
            add("EU", -rng.uniform(3, 5), "Regrets rejection of justice reforms.")
    elif policy_id == "military" and approved:
        add("EU", -rng.uniform(1, 3), "Cautious about military escalation.")

    # BRICS: sovereignty and large build-outs.
    if policy_id in ("military", "infrastructure"):
        if approved:
            reason = (
                "Backs defense sovereignty."
                if policy_id == "military"
                else "Backs major infrastructure build-out."
            )
            add("BRICS", gain(3, 6), reason)
        elif policy_id == "infrastructure":
            add("BRICS", -rng.uniform(3, 5), "Disappointed by infrastructure rejection.")

    # OIC: social reform; turns on repeated militarization.
    if policy_id == "justice":
        if approved:
            add("OIC", gain(4, 6), "Supports social justice initiatives.")
    elif context.defense_approvals_in_row >= 2:
        add("OIC", -rng.uniform(3, 5), "Concerns over escalating militarization.")

    # SCO: like BRICS but stability-minded.
    if policy_id == "military":
        if approved:
            add("SCO", gain(3, 5), "Appreciates defense commitment.")
    elif policy_id == "infrastructure":
        if approved:
            add("SCO", gain(2, 4), "Supports infrastructure development.")

    if context.consecutive_losses >= 2:
        add("SCO", -rng.uniform(3, 6), "Uneasy with recent instability.")

    return impacts
