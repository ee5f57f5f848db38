"""Chat model client — streams one model step as text fragments and tool calls."""
import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, List, Protocol, Sequence, Union

import httpx
import openai
from openai import AsyncOpenAI

from .config import settings
from .errors import TransportError
from .protocol import Message

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
- you help users book flights!
- always answer in the language the user is speaking
- keep your responses limited to a sentence.
- DO NOT output lists.
- after every tool call, pretend you're showing the result to the user and keep your response limited to a phrase.
- today's date is {current_date}.
- ask follow up questions to nudge user into the optimal flow
- always ask for any details you don't know, like name of passenger, etc.
- C and D are aisle seats, A and F are window seats, B and E are middle seats
- assume the most popular airports for the origin and destination
- here's the optimal flow
  - search for flights
  - choose flight
  - select seats
  - create reservation (ask user whether to proceed with payment or change reservation)
  - authorize payment (requires user consent, wait for user to finish payment and let you know when done)
  - display boarding pass (DO NOT display boarding pass without verifying payment)
"""


@dataclass
class TextDelta:
    text: str


@dataclass
class ToolCallRequest:
    id: str
    name: str
    arguments: str


@dataclass
class Finish:
    reason: str = "stop"


ModelEvent = Union[TextDelta, ToolCallRequest, Finish]


class ChatModel(Protocol):
    def stream_turn(self, history: Sequence[Message], tools: List[dict]) -> AsyncIterator[ModelEvent]: ...


def get_client() -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )


def system_prompt() -> str:
    return SYSTEM_PROMPT.replace("{current_date}", datetime.now().strftime("%Y-%m-%d"))


def to_openai_messages(history: Sequence[Message]) -> List[dict]:
    """Convert stored messages to chat-completions format."""
    out = [{"role": "system", "content": system_prompt()}]
    for msg in history:
        if msg.role == "tool":
            content = msg.content if isinstance(msg.content, str) else json.dumps(msg.content, ensure_ascii=False)
            out.append({"role": "tool", "tool_call_id": msg.tool_call_id, "content": content})
        elif msg.role == "assistant" and msg.tool_calls:
            out.append({
                "role": "assistant",
                "content": msg.content or None,
                "tool_calls": [
                    {"id": c.id, "type": "function", "function": {"name": c.name, "arguments": c.arguments}}
                    for c in msg.tool_calls
                ],
            })
        else:
            content = msg.content if isinstance(msg.content, str) else json.dumps(msg.content, ensure_ascii=False)
            out.append({"role": msg.role, "content": content})
    return out


class OpenAIChatModel:
    """ChatModel backed by an OpenAI-compatible streaming chat completion."""

    def __init__(self, client: AsyncOpenAI = None, model: str = ""):
        self._client = client or get_client()
        self._model = model or settings.openai_chat_model

    async def stream_turn(self, history: Sequence[Message], tools: List[dict]) -> AsyncIterator[ModelEvent]:
        pending = {}  # tool-call index -> {"id", "name", "arguments"}
        finish_reason = "stop"
        stream = None
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=to_openai_messages(history),
                tools=tools or openai.NOT_GIVEN,
                stream=True,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                choice = chunk.choices[0]
                delta = choice.delta
                if delta and delta.content:
                    yield TextDelta(delta.content)
                for tc in (delta.tool_calls if delta else None) or []:
                    slot = pending.setdefault(tc.index, {"id": "", "name": "", "arguments": ""})
                    if tc.id:
                        slot["id"] = tc.id
                    if tc.function:
                        slot["name"] += tc.function.name or ""
                        slot["arguments"] += tc.function.arguments or ""
                if choice.finish_reason:
                    finish_reason = choice.finish_reason
        except (openai.APIError, httpx.HTTPError) as e:
            logger.error(f"Model stream failed: {type(e).__name__}: {e}")
            raise TransportError(f"Model request failed: {type(e).__name__}") from e
        finally:
            # release the HTTP response even when the consumer stops early
            if stream is not None:
                await stream.close()

        # Tool calls complete only once the stream ends; emit them in index order.
        for index in sorted(pending):
            slot = pending[index]
            yield ToolCallRequest(id=slot["id"] or f"call_{uuid.uuid4().hex[:12]}", name=slot["name"], arguments=slot["arguments"] or "{}")
        yield Finish(finish_reason)
