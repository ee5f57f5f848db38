"""Tool executor — lookup, validation and guarded execution of tool calls."""
import asyncio
import logging
import time

from pydantic import BaseModel

from ..config import settings
from ..errors import ChatError, ToolValidationError
from ..protocol import ToolCall
from ..session import SessionContext
from .registry import ToolDef, ToolResult, get_tool
from .validator import validate_args

logger = logging.getLogger(__name__)

NOT_SIGNED_IN = "User is not signed in to perform this action!"


async def dispatch_tool_call(call: ToolCall, ctx: SessionContext) -> ToolResult:
    """Resolve a model-issued tool call and run it. Never raises on tool failure."""
    tool = get_tool(call.name)
    if not tool:
        logger.warning(f"[{ctx.session_id}] Unknown tool: {call.name}")
        return ToolResult(type="error", text=f"Unknown tool: {call.name}")

    try:
        validated = validate_args(tool, call.arguments)
    except ToolValidationError as e:
        logger.warning(f"[{ctx.session_id}] Invalid args for {call.name}: {e}")
        return ToolResult(
            type="error",
            text=f"Invalid arguments for {call.name}",
            data={"field": e.field, "reason": e.reason},
        )

    return await execute_tool(tool, validated, ctx)


async def execute_tool(tool: ToolDef, validated: BaseModel, ctx: SessionContext) -> ToolResult:
    """Execute a validated tool call.

    Write tools need an identity. A handler that overruns the tool timeout is
    cancelled. If the turn itself is cancelled the handler keeps running to
    completion and only its result is dropped.
    """
    if tool.requires_identity and not ctx.is_authenticated:
        logger.warning(f"[{ctx.session_id}] {tool.name} refused: no signed-in user")
        return ToolResult(type="error", text=NOT_SIGNED_IN)

    args = validated.model_dump()
    arg_str = ", ".join(f"{k}={v!r}" for k, v in args.items())
    logger.info(f"[{ctx.session_id}] Executing tool: {tool.name}({arg_str})")
    t0 = time.monotonic()

    task = asyncio.ensure_future(tool.handler(**args, session=ctx))
    try:
        result = await asyncio.wait_for(asyncio.shield(task), timeout=settings.tool_timeout_s)
    except asyncio.TimeoutError:
        task.cancel()
        logger.error(f"[{ctx.session_id}] Tool {tool.name} timed out after {settings.tool_timeout_s}s")
        result = ToolResult(type="error", text=f"{tool.name} timed out")
    except asyncio.CancelledError:
        logger.info(f"[{ctx.session_id}] Turn cancelled, letting {tool.name} finish")
        task.add_done_callback(_log_orphaned_result)
        raise
    except ChatError as e:
        logger.warning(f"[{ctx.session_id}] Tool {tool.name} failed: {e}")
        result = ToolResult(type="error", text=str(e))
    except Exception as e:
        logger.error(f"[{ctx.session_id}] Tool {tool.name} failed: {e}", exc_info=True)
        result = ToolResult(type="error", text=f"{tool.name} failed")

    elapsed = time.monotonic() - t0
    logger.info(f"[{ctx.session_id}] Tool {tool.name}: {elapsed:.1f}s -> {result.type}")
    return result


def _log_orphaned_result(task: asyncio.Task):
    if task.cancelled():
        return
    exc = task.exception()
    if exc:
        logger.error(f"Detached tool call failed: {exc}")
    else:
        logger.info(f"Detached tool call finished -> {task.result().type}")
