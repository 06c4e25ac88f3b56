"""
Test the AI concierge with the OpenAI client's chat completions call patched
"""

from unittest.mock import AsyncMock, patch

import httpx
import openai
import pytest

from mystay_integrations.adapters.ai import AIConcierge, detect_escalation, parse_json_content
from mystay_integrations.contracts import InvalidConfigError, ProviderApiError, SentimentResult


@pytest.fixture
def concierge(concierge_config):
    return AIConcierge(concierge_config)


@pytest.fixture
def completions(concierge):
    """AsyncMock standing in for client.chat.completions.create"""
    with patch.object(concierge.client.chat.completions, "create", new_callable=AsyncMock) as create:
        yield create


def api_status_error(status_code: int, message: str = "boom") -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request, json={"error": {"message": message}})
    return openai.APIStatusError(message, response=response, body={"error": {"message": message}})


def sent_kwargs(completions: AsyncMock) -> dict:
    return completions.await_args.kwargs


class TestEscalation:
    @pytest.mark.parametrize(
        "message",
        ["The shower is BROKEN", "This is an emergency", "I want a refund", "the wifi is not working"],
    )
    def test_keywords(self, message):
        assert detect_escalation(message) is True

    @pytest.mark.parametrize("message", ["Where is breakfast served?", "", None])
    def test_ordinary_messages(self, message):
        assert detect_escalation(message) is False


class TestParseJsonContent:
    def test_plain_json(self):
        assert parse_json_content('{"a": 1}').value == {"a": 1}

    def test_fenced_json(self):
        result = parse_json_content('```json\n[{"label": "Spa", "action": "spa_booking"}]\n```')

        assert result.ok
        assert result.value == [{"label": "Spa", "action": "spa_booking"}]

    def test_invalid_json_keeps_raw_text(self):
        result = parse_json_content("Sure! Here are some ideas")

        assert not result.ok
        assert result.raw == "Sure! Here are some ideas"
        assert result.value_or([]) == []

    def test_empty(self):
        assert parse_json_content(None).error == "empty response"


class TestConciergePrompting:
    def test_requires_api_key(self, clean_env):
        with pytest.raises(InvalidConfigError) as exc_info:
            AIConcierge({"model": "gpt-4"})

        assert exc_info.value.missing == ["apiKey"]

    def test_system_prompt_uses_hotel_profile(self, concierge):
        assert "AI concierge assistant for Hotel Lumiere" in concierge.system_prompt
        assert "Location: Lyon" in concierge.system_prompt
        assert "Amenities: Spa, Rooftop bar" in concierge.system_prompt
        assert "A luxury hotel" in concierge.system_prompt

    def test_system_prompt_defaults(self, clean_env):
        prompt = AIConcierge({"apiKey": "k"}).system_prompt

        assert "for MyStay Hotel" in prompt
        assert "Location: City Center" in prompt
        assert "Amenities: Restaurant, Spa, Gym, Pool" in prompt

    def test_history_is_trimmed_and_mapped(self, concierge):
        history = [
            {"role": "guest" if i % 2 == 0 else "concierge", "content": f"turn {i}"} for i in range(25)
        ]

        messages = concierge.build_messages("And now?", history)

        assert len(messages) == 22
        assert messages[0]["role"] == "system"
        assert messages[1] == {"role": "assistant", "content": "turn 5"}
        assert messages[2] == {"role": "user", "content": "turn 6"}
        assert messages[-1] == {"role": "user", "content": "And now?"}

    def test_guest_info_suffix(self, concierge):
        named = concierge.build_messages("Hi", guest_info={"name": "Ana", "roomNumber": "402"})
        no_room = concierge.build_messages("Hi", guest_info={"name": "Ana"})
        anonymous = concierge.build_messages("Hi", guest_info={"roomNumber": "402"})

        assert named[-1]["content"] == "Hi (Guest: Ana, Room: 402)"
        assert no_room[-1]["content"] == "Hi (Guest: Ana, Room: N/A)"
        assert anonymous[-1]["content"] == "Hi"


class TestConciergeCompletions:
    @pytest.mark.asyncio
    async def test_process_message(self, concierge, completions, chat_completion):
        completions.return_value = chat_completion("Breakfast is served from 7am.", 57)

        reply = await concierge.process_message("When is breakfast?")

        assert reply.response == "Breakfast is served from 7am."
        assert reply.requires_escalation is False
        assert reply.tokens_used == 57
        assert reply.timestamp.endswith("Z")

        kwargs = sent_kwargs(completions)
        assert kwargs["model"] == "gpt-4"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 500
        assert kwargs["messages"][-1] == {"role": "user", "content": "When is breakfast?"}

    def test_client_settings(self, concierge):
        assert concierge.client.api_key == "sk-openai-test"
        assert concierge.client.max_retries == 0

    @pytest.mark.asyncio
    async def test_escalation_ignores_model_reply(self, concierge, completions, chat_completion):
        completions.return_value = chat_completion("Happy to help!")

        reply = await concierge.process_message("There is a fire alarm going off")

        assert reply.requires_escalation is True

    @pytest.mark.asyncio
    async def test_process_message_failure(self, concierge, completions):
        completions.side_effect = api_status_error(500)

        with pytest.raises(ProviderApiError) as exc_info:
            await concierge.process_message("Hello")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message.startswith("OpenAI API error:")

    @pytest.mark.asyncio
    async def test_suggestions(self, concierge, completions, chat_completion):
        content = '```json\n[{"label": "Book spa treatment", "action": "spa_booking"}]\n```'
        completions.return_value = chat_completion(content)

        result = await concierge.generate_suggestions("I need to relax", {"name": "Ana"})

        assert result.ok
        assert result.value[0]["action"] == "spa_booking"
        kwargs = sent_kwargs(completions)
        assert kwargs["max_tokens"] == 200
        assert '"name": "Ana"' in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_suggestions_must_be_a_list(self, concierge, completions, chat_completion):
        completions.return_value = chat_completion('{"label": "x"}')

        result = await concierge.generate_suggestions("Anything")

        assert not result.ok
        assert result.raw == '{"label": "x"}'

    @pytest.mark.asyncio
    async def test_suggestions_on_api_failure(self, concierge, completions):
        completions.side_effect = api_status_error(500)

        result = await concierge.generate_suggestions("Anything")

        assert not result.ok
        assert result.value_or([]) == []

    @pytest.mark.asyncio
    async def test_recommendations(self, concierge, completions, chat_completion):
        completions.return_value = chat_completion("Try Le Bouchon, a short walk away.")

        result = await concierge.get_recommendations("restaurants", {"cuisine": "French"})

        assert result["category"] == "restaurants"
        assert not result["recommendations"].ok
        assert result["recommendations"].raw == "Try Le Bouchon, a short walk away."
        assert "generatedAt" in result

    @pytest.mark.asyncio
    async def test_recommendations_failure(self, concierge, completions):
        completions.side_effect = api_status_error(500)

        with pytest.raises(ProviderApiError):
            await concierge.get_recommendations("bars")

    @pytest.mark.asyncio
    async def test_sentiment(self, concierge, completions, chat_completion):
        completions.return_value = chat_completion(
            '{"sentiment": "negative", "confidence": 0.9, "urgency": "high"}'
        )

        result = await concierge.analyze_sentiment("Nobody answered my call")

        assert result == SentimentResult(sentiment="negative", confidence=0.9, urgency="high")

    @pytest.mark.asyncio
    async def test_sentiment_confidence_is_clamped(self, concierge, completions, chat_completion):
        completions.return_value = chat_completion('{"sentiment": "positive", "confidence": 1.7, "urgency": "low"}')

        assert (await concierge.analyze_sentiment("Lovely stay")).confidence == 1.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            "I think the guest is upset",
            '{"sentiment": "furious", "confidence": 0.9, "urgency": "high"}',
            '{"sentiment": "negative", "urgency": "high"}',
        ],
    )
    async def test_sentiment_defaults(self, concierge, completions, chat_completion, content):
        completions.return_value = chat_completion(content)

        assert await concierge.analyze_sentiment("...") == SentimentResult()

    @pytest.mark.asyncio
    async def test_sentiment_on_api_failure(self, concierge, completions):
        completions.side_effect = api_status_error(503)

        assert await concierge.analyze_sentiment("...") == SentimentResult()
