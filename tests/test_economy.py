"""Tests for the economic model and heuristic."""
import random

import pytest

from persona_politics.economy import (
    BOUNDS,
    FIELDS,
    HISTORY_LIMIT,
    EconDelta,
    Economy,
    predict_impact,
    realized_impact,
)


class TestEconomy:
    def test_seed(self):
        econ = Economy()
        assert (econ.gdp, econ.infl, econ.unemp, econ.market, econ.conf) == (100, 4.0, 6.0, 100, 50)
        assert len(econ.history) == 1
        assert econ.history[0].t == 0

    def test_apply_delta_clamps(self):
        econ = Economy()
        point = econ.apply_delta(EconDelta(gdp=100, infl=-100, unemp=100, market=-100, conf=100), t=7)
        assert (econ.gdp, econ.infl, econ.unemp, econ.market, econ.conf) == (140, 1, 20, 60, 100)
        assert point.t == 7
        assert econ.history[-1] == point

    def test_history_is_capped(self):
        econ = Economy()
        for t in range(1, 71):
            econ.apply_delta(EconDelta(gdp=0.1), t)
        assert len(econ.history) == HISTORY_LIMIT
        assert econ.history[-1].t == 70

    def test_reset(self):
        econ = Economy()
        econ.apply_delta(EconDelta(gdp=5), 1)
        econ.reset()
        assert econ.gdp == 100
        assert len(econ.history) == 1

    def test_bounds_under_random_deltas(self):
        rng = random.Random(3)
        econ = Economy()
        for t in range(300):
            econ.apply_delta(EconDelta(*(rng.uniform(-20, 20) for _ in FIELDS)), t)
            for name in FIELDS:
                lo, hi = BOUNDS[name]
                assert lo <= getattr(econ, name) <= hi


class TestHeuristic:
    def test_predict_scales_by_difficulty(self):
        d = predict_impact("infrastructure", "hard", "approve")
        assert d.gdp == pytest.approx(2.5)
        assert d.unemp == pytest.approx(-0.375)
        assert predict_impact("infrastructure", "easy", "approve").gdp == pytest.approx(1.5)

    def test_realized_win_adds_noise(self, stub_rng):
        d = realized_impact("infrastructure", "hard", "approve", "win", stub_rng)
        assert d.gdp == pytest.approx(2.4)
        assert d.conf == pytest.approx(4.9)

    def test_loss_dampens_upside_only(self, stub_rng):
        d = realized_impact("infrastructure", "medium", "approve", "loss", stub_rng)
        assert d.gdp == pytest.approx(0.9)
        assert d.infl == pytest.approx(0.1)
        assert d.unemp == pytest.approx(-0.25)

    def test_adverse_moves_survive_loss(self, stub_rng):
        d = realized_impact("infrastructure", "medium", "reject", "loss", stub_rng)
        assert d.gdp == pytest.approx(-1.1)
        assert d.conf == pytest.approx(-3.1)

    def test_unknown_policy_is_noise_only(self, stub_rng):
        d = realized_impact("nonexistent", "medium", "approve", "win", stub_rng)
        assert all(getattr(d, f) == pytest.approx(-0.1) for f in FIELDS)

    def test_noise_is_bounded(self):
        rng = random.Random(9)
        base = predict_impact("justice", "medium", "approve")
        for _ in range(100):
            d = realized_impact("justice", "medium", "approve", "win", rng)
            for f in FIELDS:
                assert abs(getattr(d, f) - getattr(base, f)) <= 0.1 + 1e-9
