"""Shared fixtures: temporary database, caller contexts, scripted chat model."""
import json
import os

os.environ.setdefault("SECRET_KEY", "skybook-test-secret-key-0123456789")

import pytest
import pytest_asyncio

from skybook import database
from skybook.llm import Finish, TextDelta, ToolCallRequest
from skybook.session import SessionContext


@pytest_asyncio.fixture
async def db(tmp_path):
    """Fresh SQLite file per test."""
    engine = database.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.init_db()
    yield engine
    await engine.dispose()


@pytest.fixture
def alice():
    return SessionContext(user_id="user-alice", email="alice@example.com")


@pytest.fixture
def bob():
    return SessionContext(user_id="user-bob", email="bob@example.com")


@pytest.fixture
def anonymous():
    return SessionContext()


def tool_call(call_id: str, name: str, **args) -> ToolCallRequest:
    return ToolCallRequest(id=call_id, name=name, arguments=json.dumps(args))


class ScriptedModel:
    """ChatModel that replays a fixed list of steps.

    Each step is a list of model events, or an exception to raise mid-stream.
    Every history the model was shown is kept in ``seen``.
    """

    def __init__(self, *steps):
        self.steps = list(steps)
        self.seen = []

    async def stream_turn(self, history, tools):
        self.seen.append(list(history))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        for event in step:
            if isinstance(event, Exception):
                raise event
            yield event
        if not any(isinstance(e, Finish) for e in step):
            yield Finish("tool_calls" if any(isinstance(e, ToolCallRequest) for e in step) else "stop")


def text(*fragments):
    return [TextDelta(f) for f in fragments]
