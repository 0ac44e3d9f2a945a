"""Configuration dataclasses for the game core and the advisor service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from persona_politics.clock import DEFAULT_TERM_SECONDS
from persona_politics.events import HEADLINE_WINDOW
from persona_politics.legacy import LEGACY_KEY

DEFAULT_OLLAMA_URL = "http://127.0.0.1:11434/api/generate"
DEFAULT_OLLAMA_MODEL = "mistral"


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for one game.

    Attributes:
        term_seconds: Length of a term in clock ticks.
        headline_window: How many recent headlines are kept out of rotation.
        poll_drift_interval: Ticks between background exit-poll drifts.
        legacy_key: Storage key of the persisted best legacy record.
        tps: Ticks per second for the wall-clock driver.
    """

    term_seconds: int = DEFAULT_TERM_SECONDS
    headline_window: int = HEADLINE_WINDOW
    poll_drift_interval: int = 10
    legacy_key: str = LEGACY_KEY
    tps: int = 1

    def __post_init__(self) -> None:
        if self.term_seconds <= 0:
            raise ValueError("term_seconds must be positive")
        if self.headline_window <= 0:
            raise ValueError("headline_window must be positive")
        if self.poll_drift_interval <= 0:
            raise ValueError("poll_drift_interval must be positive")
        if self.tps <= 0:
            raise ValueError("tps must be positive")


@dataclass(frozen=True)
class AdvisorConfig:
    """Immutable configuration for the advisory comment service.

    Attributes:
        url: Generate endpoint of the language-model server. None disables
            remote calls and every request gets a fallback.
        model: Model name sent with each request.
        timeout: Seconds to wait for a reply before falling back.
        max_comment_length: Comments this long or longer are discarded.
        thread_pool_size: ThreadPoolExecutor max workers.
    """

    url: str | None = None
    model: str = DEFAULT_OLLAMA_MODEL
    timeout: float = 5.0
    max_comment_length: int = 100
    thread_pool_size: int = 2

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_comment_length <= 0:
            raise ValueError("max_comment_length must be positive")
        if self.thread_pool_size <= 0:
            raise ValueError("thread_pool_size must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AdvisorConfig:
        """Read ``OLLAMA_URL`` and ``OLLAMA_MODEL``; unset values keep defaults."""
        env = os.environ if environ is None else environ
        return cls(
            url=env.get("OLLAMA_URL") or None,
            model=env.get("OLLAMA_MODEL") or DEFAULT_OLLAMA_MODEL,
        )
