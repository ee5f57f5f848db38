"""Auto-import builtin tool modules to trigger @register_tool decorators."""
from . import weather
from . import flights
from . import booking
