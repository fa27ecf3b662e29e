"""Tests for the tutor client: history building, replies and JSON parsing."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from mwanafrika.errors import ContentParseError, UpstreamError
from mwanafrika.models.tutoring import ImageData, TutorMessage
from mwanafrika.tutor.client import TutorClient, build_history, strip_code_fences
from mwanafrika.tutor.prompts import TUTOR_GUARDRAILS


def completion(content: str) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


@pytest.fixture
def tutor():
    client = TutorClient(api_key="test-key", model="gemini-test")
    client.client = MagicMock()
    client.client.chat.completions.create = AsyncMock(return_value=completion("Hello!"))
    return client


class TestBuildHistory:
    def test_excludes_last_message(self):
        messages = [
            TutorMessage(sender="user", content="What is 2+2?"),
            TutorMessage(sender="ai", content="4"),
            TutorMessage(sender="user", content="And 3+3?"),
        ]
        history = build_history(messages)
        assert history == [
            {"role": "user", "content": [{"type": "text", "text": "What is 2+2?"}]},
            {"role": "assistant", "content": "4"},
        ]

    def test_leading_assistant_turns_dropped(self):
        messages = [
            TutorMessage(sender="ai", content="Welcome!"),
            TutorMessage(sender="user", content="Hi"),
            TutorMessage(sender="ai", content="Hello"),
            TutorMessage(sender="user", content="Help me"),
        ]
        history = build_history(messages)
        assert history[0]["role"] == "user"
        assert len(history) == 2

    def test_only_assistant_turns_gives_empty_history(self):
        messages = [
            TutorMessage(sender="ai", content="Welcome!"),
            TutorMessage(sender="user", content="Hi"),
        ]
        assert build_history(messages) == []

    def test_unknown_senders_and_blank_turns_dropped(self):
        messages = [
            TutorMessage(sender="system", content="ignored"),
            TutorMessage(sender="user", content="   "),
            TutorMessage(sender="user", content="Real question"),
            TutorMessage(sender="user", content="last"),
        ]
        history = build_history(messages)
        assert len(history) == 1
        assert history[0]["content"][0]["text"] == "Real question"

    def test_inline_image_becomes_data_url(self):
        messages = [
            TutorMessage(
                sender="user",
                content="What shape is this?",
                image_data=ImageData(data="aGVsbG8=", mime_type="image/png"),
            ),
            TutorMessage(sender="user", content="last"),
        ]
        parts = build_history(messages)[0]["content"]
        assert parts[1] == {
            "type": "image_url",
            "image_url": {"url": "data:image/png;base64,aGVsbG8="},
        }

    def test_image_without_mime_type_ignored(self):
        messages = [
            TutorMessage(sender="user", content="x", image_data=ImageData(data="aGVsbG8=")),
            TutorMessage(sender="user", content="last"),
        ]
        assert len(build_history(messages)[0]["content"]) == 1

    def test_image_only_assistant_turn_dropped(self):
        messages = [
            TutorMessage(sender="user", content="Draw a triangle"),
            TutorMessage(
                sender="ai", content="", image_data=ImageData(data="eA==", mime_type="image/png")
            ),
            TutorMessage(sender="user", content="Thanks"),
        ]
        assert build_history(messages) == [
            {"role": "user", "content": [{"type": "text", "text": "Draw a triangle"}]},
        ]

    def test_accepts_camel_case_payload(self):
        message = TutorMessage.model_validate(
            {"sender": "user", "imageData": {"data": "eA==", "mimeType": "image/jpeg"}}
        )
        assert message.image_data.mime_type == "image/jpeg"


class TestStripCodeFences:
    def test_removes_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_text_unchanged(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestGenerateReply:
    async def test_sends_guardrails_and_last_message(self, tutor):
        messages = [
            TutorMessage(sender="user", content="Hi"),
            TutorMessage(sender="ai", content="Hello"),
            TutorMessage(sender="user", content="Explain gravity"),
        ]
        reply = await tutor.generate_reply(messages, subject="Science")

        assert reply == "Hello!"
        kwargs = tutor.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        sent = kwargs["messages"]
        assert sent[0]["role"] == "system"
        assert sent[0]["content"].startswith(TUTOR_GUARDRAILS)
        assert "The subject is: Science." in sent[0]["content"]
        assert sent[-1] == {
            "role": "user",
            "content": [{"type": "text", "text": "Explain gravity"}],
        }
        assert len(sent) == 4

    async def test_empty_conversation_sends_empty_text(self, tutor):
        await tutor.generate_reply([])
        sent = tutor.client.chat.completions.create.call_args.kwargs["messages"]
        assert sent[-1]["content"] == [{"type": "text", "text": ""}]

    async def test_rate_limit_maps_to_quota_error(self, tutor):
        request = httpx.Request("POST", "https://example.invalid/chat/completions")
        tutor.client.chat.completions.create.side_effect = openai.RateLimitError(
            "Too Many Requests", response=httpx.Response(429, request=request), body=None
        )
        with pytest.raises(UpstreamError) as info:
            await tutor.generate_reply([TutorMessage(sender="user", content="hi")])
        assert info.value.status == 429
        assert info.value.quota_exceeded


class TestGenerateJson:
    async def test_parses_fenced_json(self, tutor):
        tutor.client.chat.completions.create.return_value = completion(
            '```json\n{"title": "Fractions"}\n```'
        )
        assert await tutor.generate_json("prompt") == {"title": "Fractions"}

    async def test_unparsable_output_keeps_raw_response(self, tutor):
        tutor.client.chat.completions.create.return_value = completion("Sure! Here is a lesson")
        with pytest.raises(ContentParseError) as info:
            await tutor.generate_json("prompt")
        assert info.value.raw_response == "Sure! Here is a lesson"
