"""
AI concierge
Answers guest questions through the OpenAI chat completions API while no
human concierge is on duty, and flags messages that need staff attention.
"""

import json
import time
from typing import Any, Dict, List, Optional

from openai import APIError, AsyncOpenAI

from ...contracts import (
    BaseProvider,
    ConciergeReply,
    ParseResult,
    ProviderApiError,
    SentimentResult,
    utc_now_iso,
)
from ...factory import register_provider
from ...metrics import record_provider_call
from ...normalization import as_dict, as_list
from ...provider_configs import parse_provider_config
from ...utils.logging import log_performance

ESCALATION_KEYWORDS = (
    "emergency",
    "urgent",
    "complaint",
    "problem",
    "issue",
    "not working",
    "broken",
    "angry",
    "disappointed",
    "refund",
    "cancel",
    "medical",
    "police",
    "fire",
)

MAX_HISTORY_TURNS = 20

SENTIMENTS = ("positive", "neutral", "negative")
URGENCIES = ("low", "medium", "high")

SUGGESTIONS_SYSTEM_PROMPT = (
    "You are a helpful assistant that generates action suggestions. Always respond with valid JSON only."
)
SENTIMENT_SYSTEM_PROMPT = (
    "Analyze the sentiment of the message. Respond with JSON: "
    '{"sentiment": "positive|neutral|negative", "confidence": 0-1, "urgency": "low|medium|high"}'
)


def detect_escalation(message: Optional[str]) -> bool:
    """Case-insensitive keyword match; independent of the model's reply"""
    text = (message or "").lower()
    return any(keyword in text for keyword in ESCALATION_KEYWORDS)


def parse_json_content(content: Optional[str]) -> ParseResult:
    """Parse model output as JSON, tolerating a surrounding ``` fence"""
    if not content:
        return ParseResult.failure("empty response", raw=content)

    text = content.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    try:
        return ParseResult.success(json.loads(text), raw=content)
    except ValueError as e:
        return ParseResult.failure(f"invalid JSON: {e}", raw=content)


def build_system_prompt(
    name: Optional[str] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    amenities: Optional[List[str]] = None,
) -> str:
    amenity_list = ", ".join(amenities) if amenities else "Restaurant, Spa, Gym, Pool"
    return f"""You are a helpful and knowledgeable AI concierge assistant for {name or "the hotel"}.
Your role is to assist guests with:
- Local recommendations (restaurants, attractions, transportation)
- Hotel services and amenities information
- Booking assistance for hotel services
- General travel advice
- Emergency contacts and procedures

Hotel Information:
{description or "A luxury hotel"}
Location: {location or "City Center"}
Amenities: {amenity_list}

Guidelines:
- Be warm, professional, and helpful
- Provide specific, actionable recommendations
- If you don't know something, admit it and offer to connect with human staff
- For urgent matters (emergencies, complaints), always escalate to human staff
- Keep responses concise but informative
- Use guest's name if provided for personalization

Important: You are assisting guests during off-hours. For reservations, payments, or urgent issues, inform guests that a staff member will follow up during business hours."""


@register_provider("aiConcierge", "openai")
class AIConcierge(BaseProvider):
    domain = "aiConcierge"
    vendor_name = "openai"
    api_label = "OpenAI"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()
        self.model = self.settings.model
        self.client = AsyncOpenAI(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url or None,
            max_retries=0,
        )
        self.system_prompt = build_system_prompt(
            self.settings.hotel_name,
            self.settings.hotel_description,
            self.settings.hotel_location,
            self.settings.hotel_amenities,
        )

    async def _complete(self, messages: List[Dict[str, str]], temperature: float, max_tokens: int):
        start_time = time.perf_counter()
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIError as e:
            duration = time.perf_counter() - start_time
            status_code = getattr(e, "status_code", None)
            record_provider_call(
                self.domain, self.vendor_name, "POST", str(status_code or "transport_error"), duration
            )
            error = self.api_error(e.message, status_code=status_code)
            self.logger.log_api_call(operation="chat.completions", duration_ms=duration * 1000, error=error)
            raise error from e

        duration = time.perf_counter() - start_time
        record_provider_call(self.domain, self.vendor_name, "POST", "200", duration)
        self.logger.log_api_call(operation="chat.completions", status_code=200, duration_ms=duration * 1000)
        return completion

    @staticmethod
    def _content(completion) -> Optional[str]:
        if not completion.choices:
            return None
        return completion.choices[0].message.content

    def build_messages(
        self,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
        guest_info: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": self.system_prompt}]

        for turn in as_list(history)[-MAX_HISTORY_TURNS:]:
            turn = as_dict(turn)
            messages.append(
                {
                    "role": "user" if turn.get("role") == "guest" else "assistant",
                    "content": turn.get("content") or "",
                }
            )

        guest_info = as_dict(guest_info)
        if guest_info.get("name"):
            message = f"{message} (Guest: {guest_info['name']}, Room: {guest_info.get('roomNumber') or 'N/A'})"
        messages.append({"role": "user", "content": message})
        return messages

    @log_performance("process_message")
    async def process_message(
        self,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
        guest_info: Optional[Dict[str, Any]] = None,
    ) -> ConciergeReply:
        """
        Answer a guest message

        Args:
            message: The guest's message
            history: Prior turns as {role, content}; role "guest" maps to the user
            guest_info: Optional {name, roomNumber} for personalization

        Raises:
            ProviderApiError: the completion request failed
        """
        completion = await self._complete(
            self.build_messages(message, history, guest_info), temperature=0.7, max_tokens=500
        )
        usage = getattr(completion, "usage", None)
        return ConciergeReply(
            response=self._content(completion),
            requires_escalation=detect_escalation(message),
            tokens_used=getattr(usage, "total_tokens", None),
            timestamp=utc_now_iso(),
        )

    async def generate_suggestions(self, query: str, guest_info: Optional[Dict[str, Any]] = None) -> ParseResult:
        """Quick-action suggestions as a list of {label, action}"""
        prompt = f"""Given this guest query: "{query}"

Guest context: {json.dumps(guest_info or {})}

Generate 3-5 quick action suggestions that would be helpful. Return as JSON array of objects with "label" and "action" fields.

Example format:
[
  {{"label": "Show nearby restaurants", "action": "restaurants"}},
  {{"label": "Book spa treatment", "action": "spa_booking"}}
]"""
        try:
            completion = await self._complete(
                [
                    {"role": "system", "content": SUGGESTIONS_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.5,
                max_tokens=200,
            )
        except ProviderApiError as e:
            return ParseResult.failure(e.message)

        result = parse_json_content(self._content(completion))
        if result.ok and not isinstance(result.value, list):
            return ParseResult.failure("expected a JSON array", raw=result.raw)
        return result

    async def get_recommendations(self, category: str, preferences: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Top local recommendations for a category

        Returns {category, recommendations: ParseResult, generatedAt}; the raw
        model text stays available on the ParseResult when it is not JSON.
        """
        prompt = f"""Provide top 5 {category} recommendations near the hotel.

Preferences: {json.dumps(preferences or {})}

For each recommendation, include:
- Name
- Brief description (1-2 sentences)
- Distance from hotel
- Price range
- Why it's recommended

Format as JSON array."""
        completion = await self._complete(
            [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=0.7,
            max_tokens=800,
        )
        return {
            "category": category,
            "recommendations": parse_json_content(self._content(completion)),
            "generatedAt": utc_now_iso(),
        }

    async def analyze_sentiment(self, message: str) -> SentimentResult:
        """Sentiment of a guest message; neutral/0.5/low whenever analysis fails"""
        try:
            completion = await self._complete(
                [
                    {"role": "system", "content": SENTIMENT_SYSTEM_PROMPT},
                    {"role": "user", "content": message},
                ],
                temperature=0.3,
                max_tokens=100,
            )
        except ProviderApiError:
            return SentimentResult()

        parsed = parse_json_content(self._content(completion))
        data = as_dict(parsed.value)
        try:
            confidence = float(data.get("confidence"))
        except (TypeError, ValueError):
            return SentimentResult()
        if data.get("sentiment") not in SENTIMENTS or data.get("urgency") not in URGENCIES:
            return SentimentResult()
        return SentimentResult(
            sentiment=data["sentiment"],
            confidence=min(max(confidence, 0.0), 1.0),
            urgency=data["urgency"],
        )
