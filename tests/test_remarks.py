"""Tests for secretary remarks."""
import random

import pytest

from persona_politics.remarks import SECRETARY_REMARKS, pick_secretary_remark, remark_category


@pytest.mark.parametrize("total, category", [
    (20, "positive"),
    (6, "positive"),
    (5, "small_positive"),
    (1, "small_positive"),
    (0, "small_negative"),
    (-5, "small_negative"),
    (-6, "negative"),
    (-30, "negative"),
])
def test_category_thresholds(total, category):
    assert remark_category(total) == category


def test_pick_with_stub(stub_rng):
    remark = pick_secretary_remark(14, stub_rng)
    assert remark.tone == "surprised"
    assert remark.text == "I... didn't expect that to work. Nicely played."


def test_negative_tones():
    rng = random.Random(4)
    tones = {pick_secretary_remark(-10, rng).tone for _ in range(100)}
    assert tones == {"roast", "concerned"}


def test_small_swings_are_neutral():
    rng = random.Random(4)
    assert {pick_secretary_remark(d, rng).tone for d in (-3, 0, 3)} == {"neutral"}


def test_every_option_has_lines():
    for options in SECRETARY_REMARKS.values():
        for option in options:
            assert option.lines
            assert all(line.strip() for line in option.lines)
