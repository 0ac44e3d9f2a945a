"""Static policy effect table: (policy, difficulty, approved) -> stat delta.

The table is data. Swap it by passing a different ``EffectTable`` (built
from a mapping or a JSON file) to the resolver.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping

from persona_politics.types import StatDelta

# policy -> "<difficulty>-<approved|rejected>" -> (approval, power, standing)
DEFAULT_EFFECTS: dict[str, dict[str, tuple[int, int, int]]] = {
    "infrastructure": {
        "easy-approved": (5, -2, 4),
        "easy-rejected": (-3, 1, -2),
        "medium-approved": (7, -4, 6),
        "medium-rejected": (-5, 2, -4),
        "hard-approved": (10, -6, 8),
        "hard-rejected": (-8, 3, -6),
    },
    "military": {
        "easy-approved": (-2, 6, 3),
        "easy-rejected": (2, -4, -2),
        "medium-approved": (-4, 9, 5),
        "medium-rejected": (3, -6, -4),
        "hard-approved": (-6, 12, 8),
        "hard-rejected": (5, -9, -6),
    },
    "justice": {
        "easy-approved": (6, 1, 5),
        "easy-rejected": (-4, -1, -3),
        "medium-approved": (8, 2, 7),
        "medium-rejected": (-6, -2, -5),
        "hard-approved": (11, 3, 9),
        "hard-rejected": (-9, -3, -7),
    },
}


def effect_key(difficulty: str, approved: bool) -> str:
    return f"{difficulty}-{'approved' if approved else 'rejected'}"


class EffectTable:
    def __init__(self, table: Mapping[str, Mapping[str, object]] | None = None) -> None:
        self._table: dict[str, dict[str, StatDelta]] = {}
        for policy_id, rows in (table if table is not None else DEFAULT_EFFECTS).items():
            self._table[policy_id] = {key: _to_delta(value) for key, value in rows.items()}

    @classmethod
    def from_json(cls, path: str | os.PathLike[str]) -> EffectTable:
        """Load a table shaped like ``DEFAULT_EFFECTS``.

        Rows may be ``[approval, power, standing]`` lists or
        ``{"approval": .., "power": .., "standing": ..}`` objects.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")
        return cls(data)

    def lookup(self, policy_id: str, difficulty: str, approved: bool) -> StatDelta:
        """Unknown policies or keys resolve to a zero delta."""
        return self._table.get(policy_id, {}).get(effect_key(difficulty, approved), StatDelta())

    def policies(self) -> list[str]:
        return list(self._table)


def _to_delta(value: object) -> StatDelta:
    if isinstance(value, StatDelta):
        return value
    if isinstance(value, Mapping):
        return StatDelta(
            approval=int(value.get("approval", 0)),
            power=int(value.get("power", 0)),
            standing=int(value.get("standing", 0)),
        )
    if isinstance(value, (list, tuple)) and len(value) == 3:
        approval, power, standing = (int(v) for v in value)
        return StatDelta(approval, power, standing)
    raise ValueError(f"Cannot read stat delta from {value!r}")
