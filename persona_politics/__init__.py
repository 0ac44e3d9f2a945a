"""persona-politics - simulation core for a political decision game."""
from __future__ import annotations

from persona_politics.advisor import (
    Advisor,
    AdvisorClient,
    AdvisorError,
    AdvisorRequest,
    MockClient,
    OllamaClient,
)
from persona_politics.cabinet import Cabinet, Minister
from persona_politics.clock import TermClock
from persona_politics.config import AdvisorConfig, GameConfig
from persona_politics.economy import Economy
from persona_politics.effects import EffectTable
from persona_politics.engine import Engine
from persona_politics.events import EventTrigger, TriggerRegistry, generate_world_event
from persona_politics.foreign import ForeignRelations, stance_for
from persona_politics.legacy import LegacyTracker, compute_legacy_index, legacy_title
from persona_politics.parsers import AdvisorBriefing, strip_code_fences
from persona_politics.pipeline import (
    PendingResolution,
    Resolution,
    begin_resolution,
    decision_context,
    resolve,
    resolve_policy,
)
from persona_politics.poll import ExitPoll
from persona_politics.signals import SignalBus
from persona_politics.state import GameState
from persona_politics.stats import StatLedger, Stats
from persona_politics.storage import JsonFileStore, KeyValueStore, MemoryStore
from persona_politics.systems import make_poll_drift_system, make_signal_system, make_term_system
from persona_politics.types import (
    MiniGameOutcome,
    PolicyLogEntry,
    StatDelta,
    TickContext,
    UnknownKeyError,
    WorldEvent,
)

__all__ = [
    "Advisor",
    "AdvisorBriefing",
    "AdvisorClient",
    "AdvisorConfig",
    "AdvisorError",
    "AdvisorRequest",
    "Cabinet",
    "Economy",
    "EffectTable",
    "Engine",
    "EventTrigger",
    "ExitPoll",
    "ForeignRelations",
    "GameConfig",
    "GameState",
    "JsonFileStore",
    "KeyValueStore",
    "LegacyTracker",
    "MemoryStore",
    "MiniGameOutcome",
    "Minister",
    "MockClient",
    "OllamaClient",
    "PendingResolution",
    "PolicyLogEntry",
    "Resolution",
    "SignalBus",
    "StatDelta",
    "StatLedger",
    "Stats",
    "TermClock",
    "TickContext",
    "TriggerRegistry",
    "UnknownKeyError",
    "WorldEvent",
    "begin_resolution",
    "compute_legacy_index",
    "decision_context",
    "generate_world_event",
    "legacy_title",
    "make_poll_drift_system",
    "make_signal_system",
    "make_term_system",
    "resolve",
    "resolve_policy",
    "stance_for",
    "strip_code_fences",
]
