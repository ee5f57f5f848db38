"""Tool registry — decorator-based tool registration and lookup."""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Literal, Mapping, Optional, Type

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SideEffect = Literal["pure", "external-read", "external-write"]


@dataclass
class ToolResult:
    type: str  # "ok" | "error"
    text: str = ""
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.type == "error"

    def payload(self) -> Dict[str, Any]:
        """Structured result as seen by the model and the client."""
        if self.is_error:
            return {"error": self.text, **self.data}
        return dict(self.data)


@dataclass(frozen=True)
class ToolDef:
    name: str
    description: str
    params: Type[BaseModel]
    handler: Callable[..., Awaitable[ToolResult]]
    side_effect: SideEffect = "pure"

    @property
    def requires_identity(self) -> bool:
        return self.side_effect == "external-write"


_tools: Dict[str, ToolDef] = {}
_sealed = False


def register_tool(
    name: str,
    params: Type[BaseModel],
    description: str = "",
    side_effect: SideEffect = "pure",
):
    """Decorator to register a tool function."""
    def decorator(func):
        if _sealed:
            raise RuntimeError(f"Tool registry is sealed, cannot register {name}")
        if name in _tools:
            raise RuntimeError(f"Tool {name} is already registered")
        _tools[name] = ToolDef(
            name=name,
            description=description or func.__doc__ or "",
            params=params,
            handler=func,
            side_effect=side_effect,
        )
        logger.info(f"Registered tool: {name} ({side_effect})")
        return func
    return decorator


def seal_registry():
    """Freeze the registry once all builtin tools are imported."""
    global _sealed
    _sealed = True


def get_tool(name: str) -> Optional[ToolDef]:
    return _tools.get(name)


def all_tools() -> Mapping[str, ToolDef]:
    return MappingProxyType(_tools)


def openai_tool_specs() -> List[dict]:
    """Render every tool as an OpenAI function-calling spec."""
    specs = []
    for name, tool in sorted(_tools.items()):
        specs.append({
            "type": "function",
            "function": {
                "name": name,
                "description": tool.description,
                "parameters": tool.params.model_json_schema(),
            },
        })
    return specs
