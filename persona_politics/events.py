"""World event triggers and the generator that picks one per resolution."""
from __future__ import annotations

import random as _random_mod
from collections import deque
from dataclasses import dataclass
from typing import Callable, Sequence

from persona_politics.stats import Stats
from persona_politics.types import PolicyLogEntry, Urgency

HEADLINE_WINDOW = 15

Condition = Callable[[Stats, Sequence[PolicyLogEntry]], bool]


@dataclass(frozen=True)
class EventTrigger:
    """A rule: when ``condition`` holds, one of its headlines may run."""

    name: str
    condition: Condition
    headlines: tuple[str, ...]
    details: tuple[str, ...]
    urgency: Urgency = "low"


@dataclass(frozen=True)
class EventDraft:
    trigger: str
    headline: str
    detail: str
    urgency: Urgency


class TriggerRegistry:
    """Named trigger rules, evaluated in definition order."""

    def __init__(self, triggers: Sequence[EventTrigger] = ()) -> None:
        self._triggers: dict[str, EventTrigger] = {}
        for trigger in triggers:
            self.define(trigger)

    def define(self, trigger: EventTrigger) -> None:
        """Register a trigger. Overwrites if already registered."""
        if not trigger.headlines or not trigger.details:
            raise ValueError(f"Trigger {trigger.name!r} needs headlines and details")
        self._triggers[trigger.name] = trigger

    def get(self, name: str) -> EventTrigger | None:
        return self._triggers.get(name)

    def names(self) -> list[str]:
        return list(self._triggers)

    def matching(self, stats: Stats, log: Sequence[PolicyLogEntry]) -> list[EventTrigger]:
        return [t for t in self._triggers.values() if t.condition(stats, log)]


class HeadlineWindow:
    """Remembers the last ``size`` headlines to avoid immediate repeats."""

    def __init__(self, size: int = HEADLINE_WINDOW) -> None:
        self._recent: deque[str] = deque(maxlen=size)

    def mark(self, headline: str) -> None:
        self._recent.append(headline)

    def __contains__(self, headline: object) -> bool:
        return headline in self._recent

    def clear(self) -> None:
        self._recent.clear()

    def __len__(self) -> int:
        return len(self._recent)


def generate_world_event(
    registry: TriggerRegistry,
    stats: Stats,
    log: Sequence[PolicyLogEntry],
    rng: _random_mod.Random,
    is_used: Callable[[str], bool] | None = None,
) -> EventDraft | None:
    """Pick one matching trigger uniformly; None when no rule holds.

    Headlines still in the recent window are skipped unless that leaves
    none, in which case the whole pool is used again.
    """
    matching = registry.matching(stats, log)
    if not matching:
        return None
    trigger = rng.choice(matching)
    pool = list(trigger.headlines)
    if is_used is not None:
        fresh = [h for h in pool if not is_used(h)]
        if fresh:
            pool = fresh
    headline = rng.choice(pool)
    detail = rng.choice(trigger.details)
    return EventDraft(trigger.name, headline, detail, trigger.urgency)


# --- Stock triggers ----------------------------------------------------------

def _count(log: Sequence[PolicyLogEntry], **match: str) -> int:
    return sum(1 for e in log if all(getattr(e, k) == v for k, v in match.items()))


def _last_n_all(log: Sequence[PolicyLogEntry], n: int, result: str) -> bool:
    recent = log[-n:]
    return len(recent) >= n and all(e.result == result for e in recent)


def _first_decision(log: Sequence[PolicyLogEntry], policy_id: str) -> str | None:
    for e in log:
        if e.id == policy_id:
            return e.decision
    return None


def _all_moderate(stats: Stats) -> bool:
    return all(45 <= v <= 65 for v in stats.values())


STOCK_TRIGGERS: tuple[EventTrigger, ...] = (
    EventTrigger(
        name="cabinet_crisis",
        condition=lambda s, log: _count(log, decision="reject") >= 3,
        headlines=(
            "Emergency cabinet meeting after repeated reform failures",
            "Senior advisors express concern over policy gridlock",
            "Cabinet holds midnight briefing on stalled agenda",
        ),
        details=(
            "Key ministers are questioning the administration's direction.",
            "Internal tensions rise as reform efforts stall.",
            "Advisors urge decisive action to break the impasse.",
        ),
        urgency="medium",
    ),
    EventTrigger(
        name="public_unrest",
        condition=lambda s, log: s.approval < 40,
        headlines=(
            "Protests erupt in capital demanding new leadership",
            "Public approval plummets as citizens take to streets",
            "Mass demonstrations challenge presidential authority",
        ),
        details=(
            "Thousands gather outside government buildings.",
            "Opposition leaders call for immediate reforms.",
            "Social media campaigns gain momentum nationwide.",
        ),
        urgency="high",
    ),
    EventTrigger(
        name="global_influence",
        condition=lambda s, log: s.power > 80,
        headlines=(
            "Foreign envoys rush to secure new trade pacts",
            "International summit requests presidential keynote",
            "Global leaders seek alliance with administration",
        ),
        details=(
            "Your strong position attracts international attention.",
            "Diplomatic channels open across multiple continents.",
            "Economic partnerships are being fast-tracked.",
        ),
        urgency="low",
    ),
    EventTrigger(
        name="internal_friction",
        condition=lambda s, log: s.standing < 30,
        headlines=(
            "Rumors of impeachment circulate among senior party members",
            "Party leadership questions president's effectiveness",
            "Internal revolt threatens administration stability",
        ),
        details=(
            "Key allies are distancing themselves publicly.",
            "Backroom negotiations intensify as factions form.",
            "Your political survival is now in question.",
        ),
        urgency="high",
    ),
    EventTrigger(
        name="opposition_surge",
        condition=lambda s, log: _count(log, decision="approve") >= 3,
        headlines=(
            "Opposition alliance forms united front against government",
            "Rival parties unite to challenge presidential agenda",
            "Opposition leaders coordinate resistance strategy",
        ),
        details=(
            "Your aggressive policy push has unified your opponents.",
            "A coalition of critics is gaining public support.",
            "Political analysts predict a contentious period ahead.",
        ),
        urgency="medium",
    ),
    EventTrigger(
        name="economic_boom",
        condition=lambda s, log: _last_n_all(log, 5, "win"),
        headlines=(
            "Markets surge as president hailed for decisive leadership",
            "Economic indicators reach record highs under administration",
            "Business confidence soars following policy victories",
        ),
        details=(
            "Stock markets hit all-time highs.",
            "Consumer confidence reaches decade-best levels.",
            "International investors flood into domestic markets.",
        ),
        urgency="low",
    ),
    EventTrigger(
        name="diplomatic_fallout",
        condition=lambda s, log: _last_n_all(log, 3, "loss"),
        headlines=(
            "Neighbouring president criticizes unstable governance",
            "International allies express concern over leadership",
            "Diplomatic relations strain as failures mount",
        ),
        details=(
            "Foreign leaders are reconsidering partnerships.",
            "Trade negotiations are being put on hold.",
            "Your international reputation is suffering.",
        ),
        urgency="high",
    ),
    EventTrigger(
        name="military_tensions",
        condition=lambda s, log: _first_decision(log, "military") == "reject" and s.power < 50,
        headlines=(
            "Neighbouring country begins border military exercises",
            "Regional tensions rise following defense budget cuts",
            "Military analysts warn of security vulnerabilities",
        ),
        details=(
            "Defense cuts have emboldened potential adversaries.",
            "Military readiness is being questioned by experts.",
            "Border security concerns dominate national discourse.",
        ),
        urgency="high",
    ),
    EventTrigger(
        name="infrastructure_crisis",
        condition=lambda s, log: (
            _first_decision(log, "infrastructure") == "reject" and s.approval < 50
        ),
        headlines=(
            "Major bridge collapse highlights infrastructure neglect",
            "Transportation crisis deepens as repairs are delayed",
            "Engineers warn of cascading infrastructure failures",
        ),
        details=(
            "Public anger grows over deteriorating conditions.",
            "Economic costs of inaction are mounting rapidly.",
            "Opposition seizes on infrastructure failures.",
        ),
        urgency="medium",
    ),
    EventTrigger(
        name="justice_reform_impact",
        condition=lambda s, log: _first_decision(log, "justice") == "approve" and s.standing > 60,
        headlines=(
            "Criminal justice reform praised by civil rights groups",
            "Bipartisan support emerges for justice initiatives",
            "Reform advocates celebrate landmark policy victory",
        ),
        details=(
            "Your bold stance on justice is winning praise.",
            "Community leaders express renewed hope.",
            "The reform is being studied by other nations.",
        ),
        urgency="low",
    ),
    EventTrigger(
        name="balanced_leadership",
        condition=lambda s, log: _all_moderate(s),
        headlines=(
            "Political analysts praise measured approach to governance",
            "Centrist coalition emerges in support of administration",
            "Moderate policies attract broad-based support",
        ),
        details=(
            "Your balanced approach is resonating with voters.",
            "Cross-party dialogue is becoming more productive.",
            "Stability is valued in uncertain times.",
        ),
        urgency="low",
    ),
)


def default_registry() -> TriggerRegistry:
    return TriggerRegistry(STOCK_TRIGGERS)
