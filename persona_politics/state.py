"""The game state aggregate and its named transition functions.

``GameState`` owns every sub-model. Mutation goes through the methods
below; readers take ``snapshot()`` dictionaries. Notifications are queued
on ``bus`` and delivered when the bus is flushed.
"""
from __future__ import annotations

import logging
import os
import random
from collections import deque
from typing import Any

from persona_politics.cabinet import Cabinet, ShuffleNotice
from persona_politics.clock import TermClock
from persona_politics.config import GameConfig
from persona_politics.economy import Economy
from persona_politics.events import HeadlineWindow, TriggerRegistry, default_registry
from persona_politics.foreign import ForeignRelations
from persona_politics.legacy import LegacyTracker, compute_legacy_index, legacy_title
from persona_politics.poll import ExitPoll
from persona_politics.remarks import Remark, SecretaryRemark
from persona_politics.signals import SignalBus
from persona_politics.stats import StatLedger, Stats
from persona_politics.storage import KeyValueStore
from persona_politics.types import PolicyLogEntry, StatDelta, Urgency, WorldEvent

logger = logging.getLogger(__name__)


class GameState:
    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        store: KeyValueStore | None = None,
        triggers: TriggerRegistry | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self.random = random.Random(seed)

        self.term = TermClock(self.config.term_seconds)
        self.ledger = StatLedger()
        self.economy = Economy()
        self.foreign = ForeignRelations()
        self.poll = ExitPoll()
        self.cabinet = Cabinet()
        self.legacy = LegacyTracker(store, key=self.config.legacy_key)
        self.triggers = triggers if triggers is not None else default_registry()
        self.headlines = HeadlineWindow(self.config.headline_window)
        self.bus = SignalBus()

        self.policy_log: list[PolicyLogEntry] = []
        self.world_events: list[WorldEvent] = []
        self.secretary: deque[SecretaryRemark] = deque()
        self._ids = 0
        self._term_closed = False

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def stats(self) -> Stats:
        return self.ledger.stats

    @property
    def elapsed(self) -> int:
        """Elapsed term seconds; the time stamp for history points."""
        return self.term.elapsed

    def _next_id(self, prefix: str) -> str:
        self._ids += 1
        return f"{prefix}-{self._ids}"

    # --- Stats ---------------------------------------------------------------

    def update_stats(self, delta: StatDelta, defer_end: bool = False) -> bool:
        """Apply a stat delta. Refused while the term is over.

        Reaching a terminal result publishes ``game_over`` and ends the term,
        unless ``defer_end`` is set, in which case the caller must call
        ``end_if_decided`` once its own commit is finished.
        """
        if self.term.over:
            logger.debug("Stat update ignored: term is over")
            return False
        if not self.ledger.apply(delta):
            return False
        if self.ledger.game_over:
            logger.info("Game over: %s at %s", self.ledger.result, self.stats.values())
            self.bus.publish("game_over", result=self.ledger.result, stats=self.stats.values())
            if not defer_end:
                self.end_if_decided()
        return True

    def end_if_decided(self) -> bool:
        if self.ledger.game_over and self.term.started:
            return self.end_term(reason=self.ledger.result or "decided")
        return False

    def reset_game(self) -> None:
        self.ledger.reset()

    # --- Satellite models ----------------------------------------------------

    def init_economy(self) -> None:
        self.economy.reset()

    def init_foreign(self) -> None:
        self.foreign.reset()

    def init_poll(self) -> None:
        self.poll.reset()

    def init_cabinet(self) -> None:
        self.cabinet.reset()

    def _init_satellites(self) -> None:
        self.init_economy()
        self.init_foreign()
        self.init_poll()
        self.init_cabinet()

    # --- Term lifecycle ------------------------------------------------------

    def start_term(self) -> bool:
        """idle -> running, re-seeding the satellite models.

        Refused once the game is decided; ``reset_term`` clears the result.
        """
        if self.ledger.game_over:
            logger.debug("Term start refused: game already %s", self.ledger.result)
            return False
        if not self.term.start():
            return False
        self._init_satellites()
        self._term_closed = False
        logger.info("Term started (%ds)", self.term.seconds_total)
        return True

    def tick_term(self) -> bool:
        """Advance the countdown one second. Returns True when the term expired."""
        if not self.term.tick():
            return False
        self._close_term("timeout")
        return True

    def end_term(self, reason: str = "ended") -> bool:
        if not self.term.end():
            return False
        self._close_term(reason)
        return True

    def _close_term(self, reason: str) -> None:
        # Legacy is evaluated once per term, however it ended.
        if self._term_closed:
            return
        self._term_closed = True
        index = self.legacy_index()
        new_best = self.legacy.record(index, self.elapsed)
        logger.info("Term over (%s): legacy %.1f", reason, index)
        self.bus.publish(
            "term_over",
            reason=reason,
            legacy_index=index,
            legacy_title=legacy_title(index),
            new_best=new_best,
            result=self.ledger.result,
        )

    def reset_term(self, seconds_total: int | None = None) -> None:
        """Any state -> idle. Clears the term's history; keeps the legacy best."""
        self.term.reset(seconds_total)
        self.reset_game()
        self.policy_log.clear()
        self.clear_world_events()
        self.headlines.clear()
        self.secretary.clear()
        self._init_satellites()
        self.bus.clear()
        self._term_closed = False
        logger.info("Term reset")

    # --- Logs ----------------------------------------------------------------

    def add_policy_log(self, entry: PolicyLogEntry) -> bool:
        if self.term.over:
            return False
        self.policy_log.append(entry)
        return True

    def add_world_event(self, headline: str, detail: str, urgency: Urgency) -> WorldEvent:
        event = WorldEvent(
            id=self._next_id("event"),
            headline=headline,
            detail=detail,
            urgency=urgency,
            time=self.elapsed,
        )
        self.world_events.append(event)
        self.mark_headline_used(headline)
        self.bus.publish("world_event", event=event)
        return event

    def remove_world_event(self, event_id: str) -> bool:
        for i, event in enumerate(self.world_events):
            if event.id == event_id:
                del self.world_events[i]
                return True
        return False

    def clear_world_events(self) -> None:
        self.world_events.clear()

    def mark_headline_used(self, headline: str) -> None:
        self.headlines.mark(headline)

    def is_headline_used(self, headline: str) -> bool:
        return headline in self.headlines

    # --- Secretary -----------------------------------------------------------

    def push_remark(self, remark: Remark) -> SecretaryRemark:
        queued = SecretaryRemark(
            id=self._next_id("remark"),
            text=remark.text,
            tone=remark.tone,
            time=self.elapsed,
        )
        self.secretary.append(queued)
        self.bus.publish("remark", remark=queued)
        return queued

    def shift_remark(self) -> SecretaryRemark | None:
        return self.secretary.popleft() if self.secretary else None

    # --- Cabinet -------------------------------------------------------------

    def resign_check(self, key: str) -> ShuffleNotice | None:
        notice = self.cabinet.maybe_resign(key)
        if notice is not None:
            logger.info("%s resigned (%s)", notice.name, notice.key)
            self.bus.publish("cabinet_resigned", key=notice.key, name=notice.name)
        return notice

    def shuffle_cabinet(self) -> str | None:
        """Acknowledge the oldest resignation and seat an appointee."""
        notice = self.cabinet.shuffle_pending
        if self.cabinet.shuffle(self.random) is None:
            return None
        assert notice is not None
        return notice.key

    # --- Legacy --------------------------------------------------------------

    def legacy_index(self) -> float:
        s = self.stats
        return compute_legacy_index(
            s.approval, s.power, s.standing, self.economy.gdp, self.economy.unemp
        )

    # --- Snapshot ------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        return {
            "seed": self._seed,
            "term": self.term.snapshot(),
            "ledger": self.ledger.snapshot(),
            "economy": self.economy.snapshot(),
            "foreign": self.foreign.snapshot(),
            "poll": self.poll.snapshot(),
            "cabinet": self.cabinet.snapshot(),
            "legacy": self.legacy.snapshot(),
            "policy_log": [
                {
                    "id": e.id,
                    "title": e.title,
                    "decision": e.decision,
                    "result": e.result,
                    "delta": e.delta.as_dict(),
                    "time": e.time,
                }
                for e in self.policy_log
            ],
            "world_events": [
                {
                    "id": e.id,
                    "headline": e.headline,
                    "detail": e.detail,
                    "urgency": e.urgency,
                    "time": e.time,
                }
                for e in self.world_events
            ],
            "secretary": [
                {"id": r.id, "text": r.text, "tone": r.tone, "time": r.time}
                for r in self.secretary
            ],
        }
