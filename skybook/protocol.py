"""Conversation messages and the streamed wire format.

The chat response is a line-delimited data stream: each line is
``<code>:<json>\\n``, e.g. ``0:"Hello"`` for a text fragment or
``a:{"toolCallId": ..., "result": ...}`` for a tool result.
"""
import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

DATA_STREAM_HEADERS = {"x-vercel-ai-data-stream": "v1"}


class ToolCall(BaseModel):
    id: str
    name: str
    arguments: str = "{}"  # raw JSON as produced by the model


class Message(BaseModel):
    role: Literal["user", "assistant", "tool"]
    content: Union[str, Dict[str, Any], List[Any]] = ""
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None

    def is_empty(self) -> bool:
        return self.role != "tool" and len(self.content) == 0 and not self.tool_calls


# ── Stream parts ──────────────────────────────────────────────

class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallPart(BaseModel):
    type: Literal["tool_call"] = "tool_call"
    tool_call_id: str
    tool_name: str
    args: Any


class ToolResultPart(BaseModel):
    type: Literal["tool_result"] = "tool_result"
    tool_call_id: str
    result: Dict[str, Any]


class FinishStepPart(BaseModel):
    type: Literal["finish_step"] = "finish_step"
    finish_reason: str
    is_continued: bool = False


class FinishMessagePart(BaseModel):
    type: Literal["finish_message"] = "finish_message"
    finish_reason: str


class ErrorPart(BaseModel):
    type: Literal["error"] = "error"
    message: str


StreamPart = Union[TextPart, ToolCallPart, ToolResultPart, FinishStepPart, FinishMessagePart, ErrorPart]


def encode_part(part: StreamPart) -> str:
    """Serialize a stream part as one data-stream line."""
    if isinstance(part, TextPart):
        code, value = "0", part.text
    elif isinstance(part, ToolCallPart):
        code, value = "9", {"toolCallId": part.tool_call_id, "toolName": part.tool_name, "args": part.args}
    elif isinstance(part, ToolResultPart):
        code, value = "a", {"toolCallId": part.tool_call_id, "result": part.result}
    elif isinstance(part, FinishStepPart):
        code, value = "e", {"finishReason": part.finish_reason, "isContinued": part.is_continued}
    elif isinstance(part, FinishMessagePart):
        code, value = "d", {"finishReason": part.finish_reason}
    elif isinstance(part, ErrorPart):
        code, value = "3", part.message
    else:
        raise TypeError(f"Unknown stream part: {type(part).__name__}")
    return f"{code}:{json.dumps(value, ensure_ascii=False)}\n"


def decode_line(line: str):
    """Split one data-stream line into (code, value)."""
    code, _, payload = line.partition(":")
    return code, json.loads(payload)


class ChatRequest(BaseModel):
    id: str = Field(alias="conversationId")
    messages: List[Message]

    model_config = {"populate_by_name": True}
