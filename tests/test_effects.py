"""Tests for the policy effect table."""
import json

import pytest

from persona_politics.effects import EffectTable, effect_key
from persona_politics.types import StatDelta


def test_effect_key():
    assert effect_key("hard", True) == "hard-approved"
    assert effect_key("easy", False) == "easy-rejected"


def test_default_hard_military_approval():
    assert EffectTable().lookup("military", "hard", True) == StatDelta(-6, 12, 8)


def test_default_table_covers_all_rows():
    table = EffectTable()
    assert table.policies() == ["infrastructure", "military", "justice"]
    for policy in table.policies():
        for difficulty in ("easy", "medium", "hard"):
            assert table.lookup(policy, difficulty, True).total != 0


def test_unknown_keys_yield_zero():
    table = EffectTable()
    assert table.lookup("moon_base", "hard", True) == StatDelta()
    assert table.lookup("military", "extreme", True) == StatDelta()


def test_custom_mapping():
    table = EffectTable({"tax": {"medium-approved": {"approval": -3, "power": 2}}})
    assert table.lookup("tax", "medium", True) == StatDelta(-3, 2, 0)
    assert table.lookup("military", "hard", True) == StatDelta()


def test_from_json(tmp_path):
    path = tmp_path / "effects.json"
    path.write_text(json.dumps({
        "stimulus": {
            "easy-approved": [4, -1, 2],
            "easy-rejected": {"approval": -2, "power": 1, "standing": -1},
        },
    }))
    table = EffectTable.from_json(path)
    assert table.lookup("stimulus", "easy", True) == StatDelta(4, -1, 2)
    assert table.lookup("stimulus", "easy", False) == StatDelta(-2, 1, -1)


def test_from_json_rejects_non_object(tmp_path):
    path = tmp_path / "effects.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        EffectTable.from_json(path)


def test_bad_row_raises():
    with pytest.raises(ValueError):
        EffectTable({"x": {"easy-approved": [1, 2]}})
