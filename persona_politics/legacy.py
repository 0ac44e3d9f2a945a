"""Legacy index: a composite performance score with a persisted best.

The index itself is a pure function of the current stats and two economic
indicators. Only the best index and its title are persisted.
"""
from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import dataclass

from persona_politics.economy import BOUNDS
from persona_politics.storage import KeyValueStore, MemoryStore
from persona_politics.types import clamp

logger = logging.getLogger(__name__)

LEGACY_KEY = "pp_legacy_best"
HISTORY_LIMIT = 40

STAT_WEIGHT = 0.6
GDP_BONUS_MAX = 40.0
UNEMP_PENALTY_MAX = 20.0

# (threshold, title), highest first.
TITLES: tuple[tuple[float, str], ...] = (
    (85.0, "Visionary Leader"),
    (70.0, "Respected Statesman"),
    (50.0, "Pragmatic Politician"),
)
LOWEST_TITLE = "Disgraced Official"


def compute_legacy_index(
    approval: float, power: float, standing: float, gdp: float, unemp: float
) -> float:
    gdp_lo, gdp_hi = BOUNDS["gdp"]
    un_lo, un_hi = BOUNDS["unemp"]
    avg = (approval + power + standing) / 3
    gdp_bonus = (gdp - gdp_lo) / (gdp_hi - gdp_lo) * GDP_BONUS_MAX
    unemp_penalty = (unemp - un_lo) / (un_hi - un_lo) * UNEMP_PENALTY_MAX
    return clamp(avg * STAT_WEIGHT + gdp_bonus - unemp_penalty, 0.0, 100.0)


def legacy_title(index: float) -> str:
    for threshold, title in TITLES:
        if index >= threshold:
            return title
    return LOWEST_TITLE


@dataclass(frozen=True)
class LegacyRecord:
    best_index: float = 0.0
    best_title: str | None = None


class LegacyTracker:
    def __init__(self, store: KeyValueStore | None = None, key: str = LEGACY_KEY) -> None:
        self._store: KeyValueStore = store if store is not None else MemoryStore()
        self._key = key
        self.history: deque[tuple[int, float]] = deque(maxlen=HISTORY_LIMIT)
        self.best = self._load()

    @property
    def best_index(self) -> float:
        return self.best.best_index

    @property
    def best_title(self) -> str | None:
        return self.best.best_title

    def _load(self) -> LegacyRecord:
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return LegacyRecord()
            data = json.loads(raw)
            return LegacyRecord(
                best_index=float(data.get("bestIndex") or 0.0),
                best_title=data.get("bestTitle") or None,
            )
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.error("Failed to load legacy record %r: %s", self._key, exc)
            return LegacyRecord()

    def record(self, index: float, t: int) -> bool:
        """Log ``index`` and adopt it as the best if strictly higher.

        Returns True when a new best was set. A failed write is logged and
        the in-memory best is kept regardless.
        """
        self.history.append((t, index))
        if index <= self.best.best_index:
            return False
        title = legacy_title(index)
        self.best = LegacyRecord(best_index=index, best_title=title)
        payload = json.dumps({"bestIndex": index, "bestTitle": title})
        try:
            self._store.set(self._key, payload)
        except (OSError, ValueError) as exc:
            logger.error("Failed to save legacy record %r: %s", self._key, exc)
        else:
            logger.info("New best legacy %.1f (%s)", index, title)
        return True

    def snapshot(self) -> dict[str, object]:
        return {
            "best_index": self.best.best_index,
            "best_title": self.best.best_title,
            "history": [list(p) for p in self.history],
        }
