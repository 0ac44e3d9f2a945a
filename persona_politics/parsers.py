"""Response parsers for advisor output."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

# Pattern to match ```json ... ``` or ``` ... ``` code fences.
_CODE_FENCE_RE = re.compile(
    r"^\s*```(?:json)?\s*\n?(.*?)\n?\s*```\s*$",
    re.DOTALL,
)

_BRIEFING_STR_FIELDS = ("decision_effect", "advisor_comment")
_BRIEFING_INT_FIELDS = ("approval_change", "power_change", "standing_change")


@dataclass(frozen=True)
class AdvisorBriefing:
    decision_effect: str
    approval_change: int
    power_change: int
    standing_change: int
    advisor_comment: str


FALLBACK_BRIEFING = AdvisorBriefing(
    decision_effect="Outcome recorded.",
    approval_change=0,
    power_change=0,
    standing_change=0,
    advisor_comment="Keeping it steady for now.",
)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapping the text.

    Returns the inner content if fences are found, otherwise the original
    text unchanged.
    """
    match = _CODE_FENCE_RE.match(text)
    if match:
        return match.group(1)
    return text


def parse_briefing(response: str) -> AdvisorBriefing:
    """Parse a JSON briefing and validate its shape.

    Raises:
        ValueError: If the text is not JSON, not an object, or a field is
            missing or of the wrong type. ``json.JSONDecodeError`` is a
            ``ValueError`` subclass.
    """
    cleaned = strip_code_fences(response).strip()
    parsed: Any = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected JSON object, got {type(parsed).__name__}")
    for name in _BRIEFING_STR_FIELDS:
        if not isinstance(parsed.get(name), str):
            raise ValueError(f"Field {name!r} must be a string")
    for name in _BRIEFING_INT_FIELDS:
        value = parsed.get(name)
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Field {name!r} must be an integer")
    return AdvisorBriefing(**{n: parsed[n] for n in _BRIEFING_STR_FIELDS + _BRIEFING_INT_FIELDS})


def clean_comment(text: str, max_length: int) -> str | None:
    """Trimmed one-liner, or None when empty or ``max_length`` or longer."""
    comment = text.strip()
    if 0 < len(comment) < max_length:
        return comment
    return None
