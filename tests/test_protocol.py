"""Tests for skybook/protocol.py — messages and data-stream encoding."""
from skybook.protocol import (
    ChatRequest, ErrorPart, FinishMessagePart, FinishStepPart, Message, TextPart, ToolCallPart,
    ToolResultPart, decode_line, encode_part,
)


class TestEncodePart:
    def test_text(self):
        assert encode_part(TextPart(text='Say "hi"')) == '0:"Say \\"hi\\""\n'

    def test_tool_call(self):
        line = encode_part(ToolCallPart(tool_call_id="c1", tool_name="searchFlights", args={"origin": "SFO"}))
        assert decode_line(line) == ("9", {"toolCallId": "c1", "toolName": "searchFlights", "args": {"origin": "SFO"}})

    def test_tool_result(self):
        line = encode_part(ToolResultPart(tool_call_id="c1", result={"error": "Reservation not found"}))
        assert line.startswith("a:")
        assert decode_line(line)[1]["result"] == {"error": "Reservation not found"}

    def test_finish_parts(self):
        assert decode_line(encode_part(FinishStepPart(finish_reason="tool-calls", is_continued=True))) == (
            "e", {"finishReason": "tool-calls", "isContinued": True}
        )
        assert decode_line(encode_part(FinishMessagePart(finish_reason="stop"))) == ("d", {"finishReason": "stop"})

    def test_error(self):
        assert encode_part(ErrorPart(message="Model request failed")) == '3:"Model request failed"\n'

    def test_non_ascii_kept(self):
        assert encode_part(TextPart(text="São Paulo")) == '0:"São Paulo"\n'


class TestMessages:
    def test_empty_user_message(self):
        assert Message(role="user", content="").is_empty()

    def test_assistant_with_calls_not_empty(self):
        msg = Message(role="assistant", content="", tool_calls=[{"id": "c1", "name": "searchFlights"}])
        assert not msg.is_empty()

    def test_tool_message_never_empty(self):
        assert not Message(role="tool", content={}, tool_call_id="c1").is_empty()


class TestChatRequest:
    def test_accepts_id(self):
        req = ChatRequest.model_validate({"id": "chat-1", "messages": [{"role": "user", "content": "hi"}]})
        assert req.id == "chat-1"

    def test_accepts_conversation_id(self):
        req = ChatRequest.model_validate({"conversationId": "chat-2", "messages": []})
        assert req.id == "chat-2"
