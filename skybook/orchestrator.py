"""Turn orchestrator — drives one chat turn through model steps and tool calls.

A turn alternates model steps and tool dispatch:

    init → model step → (tool calls? dispatch each in order → model step)* → commit → finish

Text is relayed to the client as it arrives. Tool results are appended to the
history strictly in the order the model issued the calls, so the next model
step sees every answer in cause/effect order. The transcript is committed only
after the loop reaches its terminal state; transport failures, the round
limit and client disconnects all skip the commit.
"""
import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional, Sequence

from . import persistence
from .config import settings
from .errors import AuthorizationError, ChatError, TransportError
from .llm import ChatModel, Finish, TextDelta, ToolCallRequest
from .protocol import (
    ErrorPart, FinishMessagePart, FinishStepPart, Message, StreamPart, TextPart, ToolCall,
    ToolCallPart, ToolResultPart,
)
from .session import SessionContext
from .tools import dispatch_tool_call, openai_tool_specs

logger = logging.getLogger(__name__)


class HistoryError(ChatError):
    """Inbound history violates message invariants."""


@dataclass
class TurnResult:
    status: str  # "finished" | "error" | "cancelled"
    transcript: List[Message] = field(default_factory=list)
    error: str = ""
    persisted: bool = False


def prepare_history(messages: Sequence[Message]) -> List[Message]:
    """Drop empty user/assistant messages and check tool-message references."""
    history = [m for m in messages if not m.is_empty()]

    issued = set()
    answered = set()
    for msg in history:
        if msg.role == "assistant" and msg.tool_calls:
            issued.update(c.id for c in msg.tool_calls)
        elif msg.role == "tool":
            if not msg.tool_call_id or msg.tool_call_id not in issued:
                raise HistoryError(f"Tool message references unknown tool call {msg.tool_call_id!r}")
            if msg.tool_call_id in answered:
                raise HistoryError(f"Tool call {msg.tool_call_id!r} answered twice")
            answered.add(msg.tool_call_id)
    return history


def _parse_args(raw: str):
    try:
        return json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        return raw


class Turn:
    """One request/response cycle over a borrowed conversation."""

    def __init__(self, conversation_id: str, messages: Sequence[Message], ctx: SessionContext, model: ChatModel):
        if not ctx.is_authenticated:
            raise AuthorizationError("Sign in to chat")
        self.conversation_id = conversation_id
        self.ctx = ctx
        self.model = model
        self.history = prepare_history(messages)
        self.generated: List[Message] = []
        self.result: Optional[TurnResult] = None

    @property
    def transcript(self) -> List[Message]:
        return self.history + self.generated

    async def stream(self) -> AsyncIterator[StreamPart]:
        sid = self.ctx.session_id
        tools = openai_tool_specs()
        logger.info(f"[{sid}] Turn start: chat={self.conversation_id}, {len(self.history)} messages")

        try:
            for step in range(settings.max_tool_rounds):
                text_parts: List[str] = []
                calls: List[ToolCall] = []
                finish_reason = "stop"

                try:
                    async for event in self.model.stream_turn(self.transcript, tools):
                        if isinstance(event, TextDelta):
                            text_parts.append(event.text)
                            yield TextPart(text=event.text)
                        elif isinstance(event, ToolCallRequest):
                            call = ToolCall(id=event.id, name=event.name, arguments=event.arguments)
                            calls.append(call)
                            yield ToolCallPart(tool_call_id=call.id, tool_name=call.name, args=_parse_args(call.arguments))
                        elif isinstance(event, Finish):
                            finish_reason = event.reason
                except TransportError as e:
                    logger.error(f"[{sid}] Turn aborted at step {step}: {e}")
                    self.result = TurnResult(status="error", transcript=self.transcript, error=str(e))
                    yield ErrorPart(message=str(e))
                    return

                text = "".join(text_parts)
                if text or calls:
                    self.generated.append(Message(role="assistant", content=text, tool_calls=calls or None))

                if not calls:
                    break

                for call in calls:
                    result = await dispatch_tool_call(call, self.ctx)
                    payload = result.payload()
                    self.generated.append(
                        Message(role="tool", content=payload, tool_call_id=call.id, name=call.name)
                    )
                    yield ToolResultPart(tool_call_id=call.id, result=payload)

                yield FinishStepPart(finish_reason="tool-calls", is_continued=True)
            else:
                logger.warning(f"[{sid}] Turn hit the tool round limit ({settings.max_tool_rounds})")
                message = "Tool round limit reached"
                self.result = TurnResult(status="error", transcript=self.transcript, error=message)
                yield ErrorPart(message=message)
                return
        except (GeneratorExit, asyncio.CancelledError):
            # client went away mid-turn
            if self.result is None:
                logger.info(f"[{sid}] Turn cancelled, transcript not persisted")
                self.result = TurnResult(status="cancelled", transcript=self.transcript)
            raise

        transcript = self.transcript
        persisted = await persistence.commit(
            self.conversation_id,
            self.ctx.user_id,
            [m.model_dump(exclude_none=True) for m in transcript],
        )
        self.result = TurnResult(status="finished", transcript=transcript, persisted=persisted)
        logger.info(f"[{sid}] Turn finished: {len(self.generated)} new messages, persisted={persisted}")
        yield FinishStepPart(finish_reason=finish_reason)
        yield FinishMessagePart(finish_reason=finish_reason)
