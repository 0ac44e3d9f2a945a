"""Tests for the advisor clients and the Advisor front end."""
import io
import json
import logging
import urllib.error
import urllib.request

import pytest

from persona_politics.advisor import (
    FALLBACK_COMMENTS,
    Advisor,
    AdvisorClient,
    AdvisorError,
    AdvisorRequest,
    MockClient,
    OllamaClient,
)
from persona_politics.config import AdvisorConfig
from persona_politics.parsers import FALLBACK_BRIEFING

REQUEST = AdvisorRequest(policy_id="military", difficulty="hard", approved=True, misses=2)
STATS = {"approval": 50, "power": 50, "standing": 50}


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class TestClients:
    def test_clients_conform_to_protocol(self):
        assert isinstance(MockClient(responses={}), AdvisorClient)
        assert isinstance(OllamaClient("http://localhost/api/generate"), AdvisorClient)

    def test_mock_client_records_calls(self):
        client = MockClient(responses=lambda s, u: "ok")
        assert client.query("sys", "usr") == "ok"
        assert client.calls == [("sys", "usr")]

    def test_mock_client_dict_and_error(self):
        assert MockClient({("a", "b"): "c"}).query("a", "b") == "c"
        assert MockClient({}).query("a", "b") == ""
        with pytest.raises(AdvisorError):
            MockClient({}, error=AdvisorError("down")).query("a", "b")

    def test_ollama_client_posts_generate_body(self, monkeypatch):
        seen = {}

        def fake_urlopen(req, timeout=None):
            seen["url"] = req.full_url
            seen["body"] = json.loads(req.data.decode("utf-8"))
            seen["timeout"] = timeout
            return FakeResponse(json.dumps({"response": "Nice."}).encode("utf-8"))

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        client = OllamaClient("http://ollama:11434/api/generate", model="llama3", timeout=2.0)
        assert client.query("system", "user") == "Nice."
        assert seen["url"] == "http://ollama:11434/api/generate"
        assert seen["body"]["model"] == "llama3"
        assert seen["body"]["stream"] is False
        assert "system" in seen["body"]["prompt"] and "user" in seen["body"]["prompt"]
        assert seen["timeout"] == 2.0

    def test_ollama_client_rejects_reply_without_response(self, monkeypatch):
        monkeypatch.setattr(
            urllib.request, "urlopen",
            lambda req, timeout=None: FakeResponse(b'{"error": "model not found"}'),
        )
        with pytest.raises(AdvisorError):
            OllamaClient("http://x/api/generate").query("s", "u")


class TestComment:
    def test_no_client_gives_fallback(self):
        assert Advisor().comment(REQUEST) in FALLBACK_COMMENTS

    def test_from_config_without_url_uses_fallbacks(self):
        advisor = Advisor.from_config(AdvisorConfig())
        assert advisor.comment(REQUEST) in FALLBACK_COMMENTS

    def test_client_comment_is_trimmed(self):
        client = MockClient(responses=lambda s, u: "  Guns and butter, mostly guns. \n")
        with Advisor(client) as advisor:
            assert advisor.comment(REQUEST) == "Guns and butter, mostly guns."
        system, user = client.calls[0]
        assert "Policy: military" in user
        assert "Outcome: approved" in user
        assert "Performance: 2 mistakes" in user

    def test_long_comment_falls_back(self, caplog):
        client = MockClient(responses=lambda s, u: "word " * 40)
        with Advisor(client) as advisor, caplog.at_level(logging.WARNING):
            assert advisor.comment(REQUEST) in FALLBACK_COMMENTS
        assert "rejected" in caplog.text

    def test_client_error_falls_back(self, caplog):
        client = MockClient({}, error=urllib.error.URLError("refused"))
        with Advisor(client) as advisor, caplog.at_level(logging.WARNING):
            assert advisor.comment(REQUEST) in FALLBACK_COMMENTS
        assert "unavailable" in caplog.text

    def test_http_error_falls_back(self):
        err = urllib.error.HTTPError("http://x", 500, "boom", {}, io.BytesIO(b""))
        with Advisor(MockClient({}, error=err)) as advisor:
            assert advisor.comment(REQUEST) in FALLBACK_COMMENTS

    def test_timeout_falls_back(self, caplog):
        client = MockClient(responses=lambda s, u: "Too slow.", latency=0.5)
        config = AdvisorConfig(timeout=0.05)
        with Advisor(client, config) as advisor, caplog.at_level(logging.WARNING):
            assert advisor.comment(REQUEST) in FALLBACK_COMMENTS
        assert "timed out" in caplog.text


class TestBriefing:
    def test_parses_reply(self):
        reply = json.dumps({
            "decision_effect": "Hawks cheer.",
            "approval_change": -4,
            "power_change": 9,
            "standing_change": 5,
            "advisor_comment": "Peace through strength, allegedly.",
        })
        with Advisor(MockClient(responses=lambda s, u: reply)) as advisor:
            briefing = advisor.briefing("Military Spending", "approved", STATS)
        assert briefing.power_change == 9

    def test_request_names_policy_and_stats(self):
        client = MockClient(responses=lambda s, u: "{}")
        with Advisor(client) as advisor:
            advisor.briefing("Military Spending", "rejected", STATS)
        _, user = client.calls[0]
        assert "Policy: Military Spending, Outcome: rejected" in user
        assert '"approval": 50' in user

    @pytest.mark.parametrize("reply", ["", "   ", "not json", "[]", '{"approval_change": 1}'])
    def test_bad_replies_fall_back(self, reply):
        with Advisor(MockClient(responses=lambda s, u: reply)) as advisor:
            assert advisor.briefing("X", "approved", STATS) == FALLBACK_BRIEFING

    def test_no_client(self):
        assert Advisor().briefing("X", "approved", STATS) == FALLBACK_BRIEFING
