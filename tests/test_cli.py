"""Tests for the headless term runner."""
import json

import pytest

from persona_politics.__main__ import main, parse_args
from persona_politics.legacy import LEGACY_KEY


@pytest.fixture(autouse=True)
def no_advisor(monkeypatch):
    monkeypatch.delenv("OLLAMA_URL", raising=False)


def test_defaults():
    args = parse_args([])
    assert args.seconds == 120
    assert args.every == 8
    assert args.win_rate == 0.6
    assert args.legacy_file is None
    assert not args.realtime


@pytest.mark.parametrize("argv", [["--seconds", "0"], ["--every", "-1"], ["--win-rate", "1.5"]])
def test_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_plays_a_term(capsys):
    main(["--seed", "3", "--seconds", "20", "--every", "4"])
    out = capsys.readouterr().out
    assert "PERSONA POLITICS - seed 3, 20s term" in out
    assert "Final stats" in out
    assert "Tier:" in out
    assert "Best legacy" in out


def test_same_seed_same_output(capsys):
    main(["--seed", "11", "--seconds", "16", "--every", "2"])
    first = capsys.readouterr().out
    main(["--seed", "11", "--seconds", "16", "--every", "2"])
    assert capsys.readouterr().out == first


def test_persists_best_legacy(tmp_path, capsys):
    path = tmp_path / "legacy.json"
    main(["--seed", "5", "--seconds", "10", "--every", "3", "--legacy-file", str(path)])
    capsys.readouterr()
    record = json.loads(json.loads(path.read_text())[LEGACY_KEY])
    assert record["bestIndex"] > 0
    assert record["bestTitle"]
