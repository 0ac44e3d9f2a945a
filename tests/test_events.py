"""Tests for world event triggers and generation."""
import pytest

from persona_politics.events import (
    EventTrigger,
    HeadlineWindow,
    TriggerRegistry,
    default_registry,
    generate_world_event,
)
from persona_politics.stats import Stats
from persona_politics.types import PolicyLogEntry


def entry(result="loss", decision=None, policy_id="justice"):
    if decision is None:
        decision = "approve" if result == "win" else "reject"
    return PolicyLogEntry(id=policy_id, title=policy_id, decision=decision, result=result)


def names(stats, log):
    return [t.name for t in default_registry().matching(stats, log)]


class TestStockTriggers:
    def test_eleven_rules(self):
        assert len(default_registry().names()) == 11

    def test_three_losses_make_diplomatic_fallout_eligible(self):
        log = [entry("loss"), entry("loss"), entry("loss")]
        assert "diplomatic_fallout" in names(Stats(), log)

    def test_two_losses_are_not_enough(self):
        log = [entry("win"), entry("loss"), entry("loss")]
        assert "diplomatic_fallout" not in names(Stats(), log)

    def test_five_wins_make_economic_boom_eligible(self):
        log = [entry("win") for _ in range(5)]
        assert "economic_boom" in names(Stats(), log)
        assert "opposition_surge" in names(Stats(), log)

    def test_stat_thresholds(self):
        assert "public_unrest" in names(Stats(39, 50, 50), [])
        assert "public_unrest" not in names(Stats(40, 50, 50), [])
        assert "global_influence" in names(Stats(50, 81, 50), [])
        assert "internal_friction" in names(Stats(50, 50, 29), [])

    def test_military_tensions_uses_first_military_decision(self):
        log = [entry(policy_id="military", decision="reject", result="loss")]
        assert "military_tensions" in names(Stats(50, 49, 50), log)
        assert "military_tensions" not in names(Stats(50, 50, 50), log)

    def test_balanced_leadership(self):
        assert names(Stats(45, 65, 50), []) == ["balanced_leadership"]

    def test_nothing_matches(self):
        assert names(Stats(40, 70, 40), []) == []


class TestGenerate:
    def _registry(self):
        return TriggerRegistry([
            EventTrigger("always", lambda s, log: True, ("A", "B"), ("detail",), "medium"),
        ])

    def test_none_when_nothing_matches(self, stub_rng):
        assert generate_world_event(default_registry(), Stats(40, 70, 40), [], stub_rng) is None

    def test_picks_first_with_stub(self, stub_rng):
        draft = generate_world_event(self._registry(), Stats(), [], stub_rng)
        assert (draft.trigger, draft.headline, draft.detail, draft.urgency) == (
            "always", "A", "detail", "medium",
        )

    def test_skips_used_headlines(self, stub_rng):
        draft = generate_world_event(self._registry(), Stats(), [], stub_rng, lambda h: h == "A")
        assert draft.headline == "B"

    def test_falls_back_when_all_used(self, stub_rng):
        draft = generate_world_event(self._registry(), Stats(), [], stub_rng, lambda h: True)
        assert draft.headline == "A"


class TestRegistry:
    def test_define_requires_text(self):
        reg = TriggerRegistry()
        with pytest.raises(ValueError):
            reg.define(EventTrigger("empty", lambda s, log: True, (), ("d",)))

    def test_define_overwrites(self):
        reg = TriggerRegistry()
        reg.define(EventTrigger("x", lambda s, log: True, ("a",), ("d",)))
        reg.define(EventTrigger("x", lambda s, log: False, ("b",), ("d",)))
        assert reg.names() == ["x"]
        assert reg.get("x").headlines == ("b",)
        assert reg.get("missing") is None


class TestHeadlineWindow:
    def test_forgets_oldest(self):
        window = HeadlineWindow(size=2)
        for h in ("a", "b", "c"):
            window.mark(h)
        assert "a" not in window
        assert "b" in window and "c" in window
        assert len(window) == 2

    def test_clear(self):
        window = HeadlineWindow()
        window.mark("a")
        window.clear()
        assert len(window) == 0
