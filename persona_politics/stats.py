"""Headline stat ledger: approval, power and standing."""
from __future__ import annotations

from dataclasses import asdict, dataclass

from persona_politics.types import GameResult, StatDelta

STAT_MIN = 0
STAT_MAX = 100
STAT_SEED = 50
WIN_THRESHOLD = 70


@dataclass
class Stats:
    approval: int = STAT_SEED
    power: int = STAT_SEED
    standing: int = STAT_SEED

    def values(self) -> tuple[int, int, int]:
        return (self.approval, self.power, self.standing)


def _clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, value))


def terminal_result(stats: Stats) -> GameResult | None:
    """Evaluate the end condition. A zeroed stat is checked before the win rule."""
    values = stats.values()
    if any(v == STAT_MIN for v in values):
        return "loss"
    if all(v >= WIN_THRESHOLD for v in values):
        return "win"
    return None


class StatLedger:
    def __init__(self) -> None:
        self.stats = Stats()
        self._result: GameResult | None = None

    @property
    def game_over(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> GameResult | None:
        return self._result

    def apply(self, delta: StatDelta) -> bool:
        """Apply an additive delta, clamp, and evaluate the end condition.

        Returns True if the delta was applied. Once the game is decided the
        ledger is frozen and further deltas are ignored.
        """
        if self._result is not None:
            return False
        s = self.stats
        s.approval = _clamp_stat(s.approval + delta.approval)
        s.power = _clamp_stat(s.power + delta.power)
        s.standing = _clamp_stat(s.standing + delta.standing)
        self._result = terminal_result(s)
        return True

    def reset(self) -> None:
        self.stats = Stats()
        self._result = None

    def snapshot(self) -> dict[str, object]:
        return {"stats": asdict(self.stats), "result": self._result}
