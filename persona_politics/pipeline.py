"""Policy resolution: turns a mini-game outcome into committed state changes.

Resolution is split in two. ``begin_resolution`` captures the policy and
the term generation before the mini-game runs; ``resolve_policy`` takes
the outcome, optionally asks the advisor, re-checks that the term is still
the same live term, and then commits every sub-model in a fixed order:

    stats -> economy -> foreign -> exit poll -> cabinet
          -> policy log -> world event -> secretary remark

A resolution whose term ended or was replaced while the mini-game ran is
dropped without touching state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from persona_politics.advisor import Advisor, AdvisorRequest
from persona_politics.cabinet import CabinetContext, CabinetDelta, ShuffleNotice, cabinet_deltas
from persona_politics.economy import EconDelta, realized_impact
from persona_politics.effects import EffectTable
from persona_politics.events import generate_world_event
from persona_politics.foreign import GeoContext, GeoImpact, realized_geo_impact
from persona_politics.policies import policy_title
from persona_politics.poll import PollContext, PollShift, poll_shift
from persona_politics.remarks import SecretaryRemark, pick_secretary_remark
from persona_politics.state import GameState
from persona_politics.types import (
    Decision,
    Difficulty,
    GameResult,
    MiniGameOutcome,
    PolicyLogEntry,
    StatDelta,
    WorldEvent,
)

logger = logging.getLogger(__name__)

DEFENSE_POLICY = "military"

_DEFAULT_EFFECTS = EffectTable()


@dataclass(frozen=True)
class DecisionContext:
    """Streak counters derived from the policy log for one decision."""

    consecutive_wins: int = 0
    consecutive_losses: int = 0
    defense_approvals_in_row: int = 0


def _trailing(log: Sequence[PolicyLogEntry], pred) -> int:
    n = 0
    for entry in reversed(log):
        if not pred(entry):
            break
        n += 1
    return n


def decision_context(
    log: Sequence[PolicyLogEntry], policy_id: str, decision: Decision
) -> DecisionContext:
    """Counters for the decision about to be logged.

    Win and loss streaks count the entries already in ``log``. The defense
    count includes the current decision: it is zero unless this decision
    approves the defense policy.
    """
    defense = 0
    if policy_id == DEFENSE_POLICY and decision == "approve":
        defense = 1 + _trailing(
            log, lambda e: e.id == DEFENSE_POLICY and e.decision == "approve"
        )
    return DecisionContext(
        consecutive_wins=_trailing(log, lambda e: e.result == "win"),
        consecutive_losses=_trailing(log, lambda e: e.result == "loss"),
        defense_approvals_in_row=defense,
    )


@dataclass(frozen=True)
class PendingResolution:
    policy_id: str
    difficulty: Difficulty
    generation: int


@dataclass(frozen=True)
class Resolution:
    """Everything one committed resolution applied."""

    entry: PolicyLogEntry
    econ: EconDelta
    geo: list[GeoImpact] = field(default_factory=list)
    poll: PollShift = field(default_factory=PollShift)
    cabinet: list[CabinetDelta] = field(default_factory=list)
    resignations: list[ShuffleNotice] = field(default_factory=list)
    event: WorldEvent | None = None
    remark: SecretaryRemark | None = None
    comment: str | None = None
    game_result: GameResult | None = None

    @property
    def delta(self) -> StatDelta:
        return self.entry.delta


def begin_resolution(
    state: GameState, policy_id: str, difficulty: Difficulty
) -> PendingResolution | None:
    """Capture a policy before its mini-game. Starts an idle term.

    Returns None when the term or the game is over; nothing can be
    resolved until reset.
    """
    if state.term.over or state.ledger.game_over:
        logger.debug("Resolution of %r refused: term or game is over", policy_id)
        return None
    if not state.term.started:
        state.start_term()
    return PendingResolution(policy_id, difficulty, state.term.generation)


def resolve_policy(
    state: GameState,
    pending: PendingResolution,
    outcome: MiniGameOutcome,
    advisor: Advisor | None = None,
    effects: EffectTable | None = None,
) -> Resolution | None:
    table = effects if effects is not None else _DEFAULT_EFFECTS
    policy_id = pending.policy_id
    delta = table.lookup(policy_id, pending.difficulty, outcome.approved)

    comment = None
    if advisor is not None:
        comment = advisor.comment(
            AdvisorRequest(policy_id, pending.difficulty, outcome.approved, outcome.misses)
        )

    term = state.term
    if not term.started or term.generation != pending.generation or state.ledger.game_over:
        logger.debug(
            "Dropping stale resolution of %r (generation %d, now %d, state %s)",
            policy_id, pending.generation, term.generation, term.state,
        )
        return None

    rng = state.random
    t = state.elapsed
    decision = outcome.decision
    result = outcome.result
    ctx = decision_context(state.policy_log, policy_id, decision)

    state.update_stats(delta, defer_end=True)

    econ = realized_impact(policy_id, pending.difficulty, decision, result, rng)
    state.economy.apply_delta(econ, t)

    geo = realized_geo_impact(
        policy_id,
        decision,
        result,
        GeoContext(
            difficulty=pending.difficulty,
            consecutive_wins=ctx.consecutive_wins,
            consecutive_losses=ctx.consecutive_losses,
            defense_approvals_in_row=ctx.defense_approvals_in_row,
        ),
        rng,
    )
    for impact in geo:
        state.foreign.apply_delta(impact.bloc, impact.delta, impact.reason, t)
        state.foreign.recompute_stance(impact.bloc)

    s = state.stats
    econ_now = state.economy
    shift = poll_shift(
        PollContext(
            approval=s.approval,
            power=s.power,
            standing=s.standing,
            gdp=econ_now.gdp,
            infl=econ_now.infl,
            unemp=econ_now.unemp,
            conf=econ_now.conf,
            policy_id=policy_id,
            decision=decision,
            result=result,
            difficulty=pending.difficulty,
        ),
        rng,
    )
    state.poll.apply_shift(shift, t, rng)

    cabinet = cabinet_deltas(
        policy_id, decision, result, CabinetContext(ctx.defense_approvals_in_row), rng
    )
    resignations: list[ShuffleNotice] = []
    for change in cabinet:
        state.cabinet.bump_loyalty(change.key, change.delta, change.reason)
        notice = state.resign_check(change.key)
        if notice is not None:
            resignations.append(notice)

    entry = PolicyLogEntry(
        id=policy_id,
        title=policy_title(policy_id),
        decision=decision,
        result=result,
        delta=delta,
        time=t,
    )
    state.add_policy_log(entry)

    event = None
    draft = generate_world_event(
        state.triggers, state.stats, state.policy_log, rng, state.is_headline_used
    )
    if draft is not None:
        event = state.add_world_event(draft.headline, draft.detail, draft.urgency)

    remark = state.push_remark(pick_secretary_remark(delta.total, rng))

    logger.debug("Resolved %s/%s: %s %s %s", policy_id, pending.difficulty, decision, result, delta)
    state.end_if_decided()

    return Resolution(
        entry=entry,
        econ=econ,
        geo=geo,
        poll=shift,
        cabinet=cabinet,
        resignations=resignations,
        event=event,
        remark=remark,
        comment=comment,
        game_result=state.ledger.result,
    )


def resolve(
    state: GameState,
    policy_id: str,
    difficulty: Difficulty,
    outcome: MiniGameOutcome,
    advisor: Advisor | None = None,
    effects: EffectTable | None = None,
) -> Resolution | None:
    """``begin_resolution`` and ``resolve_policy`` back to back."""
    pending = begin_resolution(state, policy_id, difficulty)
    if pending is None:
        return None
    return resolve_policy(state, pending, outcome, advisor, effects)
