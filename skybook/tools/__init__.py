"""Tool system — registry, validator, executor."""
from .registry import (
    register_tool, get_tool, all_tools, openai_tool_specs,
    seal_registry, ToolDef, ToolResult,
)
from .validator import validate_args
from .executor import dispatch_tool_call, execute_tool

# Auto-import builtin tools to trigger @register_tool decorators
from .builtin import *  # noqa

seal_registry()
