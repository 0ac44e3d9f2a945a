"""Headless term runner.

Plays one term with simulated mini-game outcomes and prints what happens.

Run:
    python -m persona_politics --seed 7
    python -m persona_politics --seconds 60 --every 5 --win-rate 0.7
    python -m persona_politics --legacy-file legacy.json --realtime
"""
from __future__ import annotations

import argparse
import logging
from typing import Any, Callable

from persona_politics.advisor import Advisor
from persona_politics.config import AdvisorConfig, GameConfig
from persona_politics.engine import Engine
from persona_politics.pipeline import resolve
from persona_politics.policies import PolicyCard, initial_cards, next_card
from persona_politics.scoring import get_tier, tier_copy
from persona_politics.state import GameState
from persona_politics.storage import JsonFileStore, MemoryStore
from persona_politics.systems import make_poll_drift_system, make_signal_system, make_term_system
from persona_politics.types import MiniGameOutcome, TickContext

logger = logging.getLogger("persona_politics")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Persona Politics - headless term runner")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--seconds", type=int, default=120, help="Term length (default: 120)")
    p.add_argument("--every", type=int, default=8,
                   help="Seconds between policy decisions (default: 8)")
    p.add_argument("--win-rate", type=float, default=0.6,
                   help="Chance a simulated mini-game is won (default: 0.6)")
    p.add_argument("--legacy-file", type=str, default=None, metavar="FILE",
                   help="Persist the best legacy record in FILE")
    p.add_argument("--realtime", action="store_true", help="Tick once per wall-clock second")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)
    if args.seconds <= 0 or args.every <= 0:
        p.error("--seconds and --every must be positive")
    if not 0.0 <= args.win_rate <= 1.0:
        p.error("--win-rate must be between 0 and 1")
    return args


def make_player_system(
    every: int, win_rate: float, advisor: Advisor
) -> Callable[[GameState, TickContext], None]:
    """Plays the deck: one simulated decision every ``every`` ticks."""
    deck: dict[str, Any] = {"card": None, "used": []}

    def player_system(state: GameState, ctx: TickContext) -> None:
        if state.term.over or ctx.tick_number % every != 0:
            return
        card: PolicyCard | None = deck["card"]
        if card is None:
            card = ctx.random.choice(initial_cards())
        outcome = MiniGameOutcome(
            approved=ctx.random.random() < win_rate,
            misses=ctx.random.randint(0, 3),
        )
        res = resolve(state, card.id, card.difficulty, outcome, advisor)
        if res is None:
            return
        s = state.stats
        print(
            f"[{state.elapsed:>3}s] {card.title:<32} {res.entry.decision:<7} "
            f"{res.delta.approval:+d}/{res.delta.power:+d}/{res.delta.standing:+d} "
            f"-> {s.approval}/{s.power}/{s.standing}"
        )
        if res.comment:
            print(f"        advisor: {res.comment}")
        deck["used"].append(card.id)
        deck["card"] = next_card(card.id, res.entry.decision, deck["used"], ctx.random)
        if deck["card"] is None:
            ctx.request_stop()

    return player_system


def _print_signal(name: str, data: dict[str, Any]) -> None:
    if name == "world_event":
        event = data["event"]
        print(f"        NEWS ({event.urgency}): {event.headline}")
    elif name == "remark":
        print(f"        secretary: {data['remark'].text}")
    elif name == "cabinet_resigned":
        print(f"        RESIGNED: {data['name']} ({data['key']})")
    elif name == "game_over":
        print(f"        GAME OVER: {data['result']}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = JsonFileStore(args.legacy_file) if args.legacy_file else MemoryStore()
    config = GameConfig(term_seconds=args.seconds)
    state = GameState(config, seed=args.seed, store=store)
    advisor = Advisor.from_config(AdvisorConfig.from_env(), rng=state.random)

    for name in ("world_event", "remark", "cabinet_resigned", "game_over"):
        state.bus.subscribe(name, _print_signal)

    engine = Engine(state)
    engine.on_start(lambda s, c: s.start_term())
    engine.add_system(make_term_system())
    engine.add_system(make_poll_drift_system())
    engine.add_system(make_player_system(args.every, args.win_rate, advisor))
    # Shuffle right after a resignation; the player always acknowledges.
    engine.add_system(lambda s, c: s.shuffle_cabinet())
    engine.add_system(make_signal_system(state.bus))

    print("=" * 70)
    print(f"  PERSONA POLITICS - seed {state.seed}, {args.seconds}s term")
    print("=" * 70)

    try:
        if args.realtime:
            engine.run_forever()
        else:
            engine.run(args.seconds + 1)
    finally:
        advisor.shutdown()

    if not state.term.over:
        state.end_term()
    state.bus.flush()

    s = state.stats
    tier = tier_copy(get_tier(sum(s.values())))
    print("-" * 70)
    print(f"  Final stats: approval {s.approval}, power {s.power}, standing {s.standing}")
    print(f"  Result:      {state.ledger.result or 'undecided'}")
    print(f"  Tier:        {tier.title} - {tier.line}")
    print(f"  Legacy:      {state.legacy_index():.1f}")
    print(f"  Best legacy: {state.legacy.best_index:.1f} ({state.legacy.best_title})")


if __name__ == "__main__":
    main()
