"""Tests for the stat ledger and the terminal rule."""
import random

from persona_politics.stats import StatLedger, Stats, terminal_result
from persona_politics.types import StatDelta


class TestTerminalResult:
    """Test win/loss evaluation."""

    def test_seed_is_undecided(self):
        assert terminal_result(Stats()) is None

    def test_all_at_threshold_wins(self):
        assert terminal_result(Stats(70, 70, 70)) == "win"

    def test_one_below_threshold_is_undecided(self):
        assert terminal_result(Stats(70, 70, 69)) is None

    def test_zero_stat_loses(self):
        assert terminal_result(Stats(0, 50, 50)) == "loss"

    def test_loss_takes_precedence(self):
        """A zeroed stat loses even if the other rule could also hold."""
        assert terminal_result(Stats(0, 100, 100)) == "loss"


class TestStatLedger:
    """Test delta application, clamping and freezing."""

    def test_defaults(self):
        ledger = StatLedger()
        assert ledger.stats.values() == (50, 50, 50)
        assert not ledger.game_over
        assert ledger.result is None

    def test_apply_adds_and_clamps(self):
        ledger = StatLedger()
        ledger.apply(StatDelta(approval=80, power=-10))
        assert ledger.stats.values() == (100, 40, 50)

    def test_clamp_to_zero_is_a_loss(self):
        ledger = StatLedger()
        assert ledger.apply(StatDelta(power=-80))
        assert ledger.stats.power == 0
        assert ledger.result == "loss"

    def test_terminal_is_idempotent(self):
        """Once decided, later deltas are ignored."""
        ledger = StatLedger()
        ledger.apply(StatDelta(20, 20, 20))
        assert ledger.result == "win"
        assert not ledger.apply(StatDelta(-50, -50, -50))
        assert ledger.stats.values() == (70, 70, 70)
        assert ledger.result == "win"

    def test_reset(self):
        ledger = StatLedger()
        ledger.apply(StatDelta(standing=-60))
        ledger.reset()
        assert ledger.stats.values() == (50, 50, 50)
        assert not ledger.game_over

    def test_bounds_under_random_deltas(self):
        rng = random.Random(1)
        ledger = StatLedger()
        for _ in range(500):
            ledger.apply(StatDelta(*(rng.randint(-30, 30) for _ in range(3))))
            assert all(0 <= v <= 100 for v in ledger.stats.values())
            if ledger.game_over:
                ledger.reset()

    def test_snapshot(self):
        ledger = StatLedger()
        snap = ledger.snapshot()
        assert snap == {"stats": {"approval": 50, "power": 50, "standing": 50}, "result": None}
