"""Tool argument validation against a tool's closed parameter schema."""
import json
from typing import Any, Mapping, Union

from pydantic import BaseModel, ValidationError

from ..errors import ToolValidationError
from .registry import ToolDef

ARGUMENTS_FIELD = "<arguments>"


def validate_args(tool: ToolDef, raw_args: Union[str, Mapping[str, Any], None]) -> BaseModel:
    """Parse and validate raw model-produced arguments.

    Raises ToolValidationError naming the first offending field.
    """
    if raw_args is None or raw_args == "":
        raw_args = {}
    if isinstance(raw_args, str):
        try:
            raw_args = json.loads(raw_args)
        except json.JSONDecodeError as e:
            raise ToolValidationError(ARGUMENTS_FIELD, f"invalid JSON: {e.msg}")
    if not isinstance(raw_args, Mapping):
        raise ToolValidationError(ARGUMENTS_FIELD, "arguments must be a JSON object")

    try:
        return tool.params.model_validate(dict(raw_args))
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err.get("loc", ())) or ARGUMENTS_FIELD
        raise ToolValidationError(field, err.get("msg", "invalid value"))
