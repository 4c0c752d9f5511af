"""Tests for the Claude-backed extractor (Anthropic client is always mocked)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock

from eve.extraction.errors import ModelError, ModelErrorKind
from eve.extraction.extractor import build_prompt, extract_via_model, parse_reply
from eve.extraction.models import Level, MeetingType, ProcessingMethod

TRANSCRIPT = "We moeten morgen de planning afronden. Jan zal het rapport schrijven."

REPLY = {
    "meetingType": "planning",
    "summary": "Korte planningssessie.",
    "keyDecisions": [],
    "actionItems": [
        {"task": "Planning afronden", "owner": "Team", "dueHint": "morgen", "priority": "hoog"},
        {"task": "Rapport schrijven", "owner": "Jan", "priority": "gemiddeld"},
    ],
    "participants": ["Jan"],
    "sentiment": "neutraal",
    "urgency": "hoog",
}

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _client_replying(text: str) -> MagicMock:
    client = MagicMock()
    client.messages.create.return_value = MagicMock(content=[TextBlock(type="text", text=text)])
    return client


def _client_raising(exc: Exception) -> MagicMock:
    client = MagicMock()
    client.messages.create.side_effect = exc
    return client


def _status_error(cls: type[anthropic.APIStatusError], status: int) -> anthropic.APIStatusError:
    return cls("error", response=httpx.Response(status, request=_REQUEST), body=None)


class TestParseReply:
    def test_plain_json(self) -> None:
        assert parse_reply('{"summary": "ok"}') == {"summary": "ok"}

    def test_fenced_json(self) -> None:
        assert parse_reply('Hier is het:\n```json\n{"summary": "ok"}\n```') == {"summary": "ok"}

    def test_not_json_is_malformed(self) -> None:
        with pytest.raises(ModelError) as exc_info:
            parse_reply("not json")
        assert exc_info.value.kind is ModelErrorKind.MALFORMED

    def test_non_object_is_malformed(self) -> None:
        with pytest.raises(ModelError) as exc_info:
            parse_reply("[1, 2, 3]")
        assert exc_info.value.kind is ModelErrorKind.MALFORMED


def test_prompt_contains_transcript_verbatim() -> None:
    prompt = build_prompt(TRANSCRIPT)
    assert prompt.endswith(TRANSCRIPT)
    assert '"meetingType"' in prompt


class TestExtractViaModel:
    def test_success(self) -> None:
        client = _client_replying(json.dumps(REPLY))
        record = extract_via_model(TRANSCRIPT, 60, client=client)

        assert record.processing_method is ProcessingMethod.MODEL
        assert record.meeting_type is MeetingType.PLANNING
        assert record.action_items[1].owner == "Jan"
        assert record.action_items[0].priority is Level.HIGH
        assert record.stats.word_count == 11
        client.messages.create.assert_called_once()

    def test_request_parameters(self) -> None:
        client = _client_replying(json.dumps(REPLY))
        with patch("eve.extraction.extractor.settings") as mock_settings:
            mock_settings.llm_model = "claude-test"
            mock_settings.llm_max_tokens = 1234
            extract_via_model(TRANSCRIPT, client=client)

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["max_tokens"] == 1234
        assert kwargs["temperature"] == 0.3
        assert kwargs["messages"][0]["content"].endswith(TRANSCRIPT)

    def test_missing_key_is_auth_without_a_call(self) -> None:
        with (
            patch("eve.extraction.extractor.settings") as mock_settings,
            patch("eve.extraction.extractor.Anthropic") as mock_anthropic,
        ):
            mock_settings.anthropic_api_key = ""
            with pytest.raises(ModelError) as exc_info:
                extract_via_model(TRANSCRIPT)
        assert exc_info.value.kind is ModelErrorKind.AUTH
        mock_anthropic.assert_not_called()

    def test_client_built_without_retries(self) -> None:
        with (
            patch("eve.extraction.extractor.settings") as mock_settings,
            patch("eve.extraction.extractor.Anthropic") as mock_anthropic,
        ):
            mock_settings.anthropic_api_key = "sk-test"
            mock_settings.llm_timeout_seconds = 30.0
            mock_anthropic.return_value = _client_replying(json.dumps(REPLY))
            extract_via_model(TRANSCRIPT)
        mock_anthropic.assert_called_once_with(api_key="sk-test", max_retries=0, timeout=30.0)

    def test_malformed_reply(self) -> None:
        with pytest.raises(ModelError) as exc_info:
            extract_via_model(TRANSCRIPT, client=_client_replying("not json"))
        assert exc_info.value.kind is ModelErrorKind.MALFORMED

    def test_reply_without_text_block(self) -> None:
        client = MagicMock()
        client.messages.create.return_value = MagicMock(content=[])
        with pytest.raises(ModelError) as exc_info:
            extract_via_model(TRANSCRIPT, client=client)
        assert exc_info.value.kind is ModelErrorKind.MALFORMED

    @pytest.mark.parametrize(
        ("exc", "kind"),
        [
            (_status_error(anthropic.AuthenticationError, 401), ModelErrorKind.AUTH),
            (_status_error(anthropic.PermissionDeniedError, 403), ModelErrorKind.AUTH),
            (_status_error(anthropic.RateLimitError, 429), ModelErrorKind.QUOTA),
            (_status_error(anthropic.APIStatusError, 529), ModelErrorKind.QUOTA),
            (_status_error(anthropic.InternalServerError, 500), ModelErrorKind.NETWORK),
            (anthropic.APIConnectionError(request=_REQUEST), ModelErrorKind.NETWORK),
            (anthropic.APITimeoutError(request=_REQUEST), ModelErrorKind.NETWORK),
        ],
    )
    def test_api_errors_are_classified(self, exc: Exception, kind: ModelErrorKind) -> None:
        with pytest.raises(ModelError) as exc_info:
            extract_via_model(TRANSCRIPT, client=_client_raising(exc))
        assert exc_info.value.kind is kind
        assert exc_info.value.__cause__ is exc
