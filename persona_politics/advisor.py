"""Advisory comment service: client protocol, HTTP and mock clients, and
the ``Advisor`` front end that bounds every call with a timeout.

The advisor is advisory only. Every failure path (no server configured,
transport error, non-2xx status, timeout, empty or malformed reply) ends in
a fixed fallback, logged at warning level, and never reaches game state.
"""
from __future__ import annotations

import json
import logging
import random as _random_mod
import time
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol, runtime_checkable

from persona_politics.config import AdvisorConfig
from persona_politics.parsers import (
    FALLBACK_BRIEFING,
    AdvisorBriefing,
    clean_comment,
    parse_briefing,
)

logger = logging.getLogger(__name__)

FALLBACK_COMMENTS: tuple[str, ...] = (
    "Interesting choice. Let's see how this plays out.",
    "The people have spoken... sort of.",
    "Bold move. History will be the judge.",
    "Well, that's one way to govern.",
    "Democracy in action, for better or worse.",
)

COMMENT_SYSTEM_PROMPT = (
    "You are a witty political advisor. A policy decision was just made. "
    "Respond with ONE short, clever comment (max 15 words, no emojis)."
)

BRIEFING_SYSTEM_PROMPT = """You are a political advisor. A policy decision has been made. Return ONLY valid JSON matching this exact schema:

{
  "decision_effect": "string (short sentence describing the outcome)",
  "approval_change": "integer (-10 to +10)",
  "power_change": "integer (-15 to +15)",
  "standing_change": "integer (-10 to +10)",
  "advisor_comment": "string (witty one-liner, no emojis)"
}

Example:

Policy: Infrastructure Deal, Outcome: approved, Stats: {"approval": 50, "power": 50, "standing": 50}
{"decision_effect":"The infrastructure bill passes with bipartisan support.","approval_change":8,"power_change":-5,"standing_change":6,"advisor_comment":"Building bridges, literally and politically."}

Return ONLY the JSON object, no markdown, no code fences, no additional text."""


class AdvisorError(Exception):
    """Exception raised by advisor client operations."""


@runtime_checkable
class AdvisorClient(Protocol):
    """Protocol for advisor client implementations.

    Implementations make blocking calls (invoked inside a thread pool worker).
    Any exception may be raised on failure; ``Advisor`` catches it and falls
    back.
    """

    def query(self, system_prompt: str, user_message: str) -> str:
        """Send a prompt to the model and return the response string."""
        ...


class OllamaClient:
    """Client for an Ollama-style ``/api/generate`` endpoint.

    Sends ``{model, prompt, stream: false}`` and returns ``body["response"]``.
    """

    def __init__(self, url: str, model: str = "mistral", timeout: float = 5.0) -> None:
        self._url = url
        self._model = model
        self._timeout = timeout

    def query(self, system_prompt: str, user_message: str) -> str:
        payload = json.dumps({
            "model": self._model,
            "prompt": f"{system_prompt}\n\n{user_message}",
            "stream": False,
        }).encode("utf-8")

        req = urllib.request.Request(
            self._url,
            data=payload,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        # urlopen raises HTTPError for non-2xx statuses.
        with urllib.request.urlopen(req, timeout=self._timeout) as resp:
            body = json.loads(resp.read().decode("utf-8"))

        if not isinstance(body, dict) or not isinstance(body.get("response"), str):
            raise AdvisorError("Reply has no 'response' string")
        return body["response"]


class MockClient:
    """Deterministic advisor client for testing.

    Args:
        responses: A dict mapping (system_prompt, user_message) tuples to
            response strings, OR a callable (str, str) -> str.
        latency: Simulated delay in seconds before returning.
        error: Exception raised on every call when set.
    """

    def __init__(
        self,
        responses: Mapping[tuple[str, str], str] | Callable[[str, str], str],
        latency: float = 0.0,
        error: BaseException | None = None,
    ) -> None:
        self._responses = responses
        self._latency = latency
        self._error = error
        self.calls: list[tuple[str, str]] = []

    def query(self, system_prompt: str, user_message: str) -> str:
        self.calls.append((system_prompt, user_message))
        if self._error is not None:
            raise self._error
        if self._latency > 0.0:
            time.sleep(self._latency)
        if callable(self._responses):
            return self._responses(system_prompt, user_message)
        return self._responses.get((system_prompt, user_message), "")


@dataclass(frozen=True)
class AdvisorRequest:
    policy_id: str
    difficulty: str
    approved: bool
    misses: int = 0

    def user_message(self) -> str:
        return (
            f"Policy: {self.policy_id}\n"
            f"Difficulty: {self.difficulty}\n"
            f"Outcome: {'approved' if self.approved else 'rejected'}\n"
            f"Performance: {self.misses} mistakes\n\n"
            "Comment:"
        )


class Advisor:
    """Front end that runs client calls on a worker with a timeout.

    With no client every call returns a fallback immediately.
    """

    def __init__(
        self,
        client: AdvisorClient | None = None,
        config: AdvisorConfig | None = None,
        rng: _random_mod.Random | None = None,
    ) -> None:
        self._config = config if config is not None else AdvisorConfig()
        self._client = client
        self._rng = rng if rng is not None else _random_mod.Random()
        self._executor: ThreadPoolExecutor | None = None

    @classmethod
    def from_config(cls, config: AdvisorConfig, rng: _random_mod.Random | None = None) -> Advisor:
        """Build an advisor backed by ``OllamaClient`` when ``config.url`` is set."""
        client = (
            OllamaClient(config.url, config.model, config.timeout)
            if config.url else None
        )
        return cls(client, config, rng)

    @property
    def config(self) -> AdvisorConfig:
        return self._config

    def fallback_comment(self) -> str:
        return self._rng.choice(FALLBACK_COMMENTS)

    def comment(self, request: AdvisorRequest) -> str:
        """One-liner for a resolved policy, or a fallback."""
        if self._client is None:
            return self.fallback_comment()
        reply = self._call(COMMENT_SYSTEM_PROMPT, request.user_message())
        if reply is None:
            return self.fallback_comment()
        comment = clean_comment(reply, self._config.max_comment_length)
        if comment is None:
            logger.warning("Advisor comment rejected (length %d)", len(reply.strip()))
            return self.fallback_comment()
        return comment

    def briefing(self, policy: str, outcome: str, stats: Mapping[str, int]) -> AdvisorBriefing:
        """Structured briefing parsed from JSON, or ``FALLBACK_BRIEFING``."""
        if self._client is None:
            return FALLBACK_BRIEFING
        message = (
            f"Now respond for:\nPolicy: {policy}, Outcome: {outcome}, "
            f"Stats: {json.dumps(dict(stats))}"
        )
        reply = self._call(BRIEFING_SYSTEM_PROMPT, message)
        if reply is None:
            return FALLBACK_BRIEFING
        if not reply.strip():
            logger.warning("Advisor briefing was empty")
            return FALLBACK_BRIEFING
        try:
            return parse_briefing(reply)
        except ValueError as exc:
            logger.warning("Advisor briefing malformed: %s", exc)
            return FALLBACK_BRIEFING

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def __enter__(self) -> Advisor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _call(self, system_prompt: str, user_message: str) -> str | None:
        assert self._client is not None
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._config.thread_pool_size,
                thread_name_prefix="advisor",
            )
        future = self._executor.submit(self._client.query, system_prompt, user_message)
        try:
            return future.result(timeout=self._config.timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.warning("Advisor timed out after %.1fs", self._config.timeout)
        except Exception as exc:
            logger.warning("Advisor unavailable: %s", exc)
        return None
