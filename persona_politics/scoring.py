"""End-of-term tier from the summed headline stats."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Tier = Literal["legendary", "good", "average", "poor", "bad"]

# (minimum total, tier), highest first.
TIER_THRESHOLDS: tuple[tuple[int, Tier], ...] = (
    (240, "legendary"),
    (200, "good"),
    (150, "average"),
    (100, "poor"),
)


@dataclass(frozen=True)
class TierCopy:
    title: str
    line: str


TIER_COPY: dict[str, TierCopy] = {
    "legendary": TierCopy("Legendary", "Re-elected in a landslide. History remembers you."),
    "good": TierCopy("Good", "Solid term with clear wins. The people approve."),
    "average": TierCopy("Average", "Some highs, some lows. Respectable, not remarkable."),
    "poor": TierCopy("Poor", "Missteps outweighed gains. Tough press conferences."),
    "bad": TierCopy("Bad", "One-Term Wonder. Time to write that memoir."),
}


def get_tier(total: int) -> Tier:
    for threshold, tier in TIER_THRESHOLDS:
        if total >= threshold:
            return tier
    return "bad"


def tier_copy(tier: str) -> TierCopy:
    return TIER_COPY.get(tier, TIER_COPY["bad"])
