"""Error taxonomy for chat turns.

Failures inside a single tool are converted to tool results and never unwind
the turn. ``TransportError`` is the only error that ends a turn early.
"""


class ChatError(Exception):
    """Base class for all SkyBook errors."""


class TransportError(ChatError):
    """The model (or the network in front of it) could not be reached."""


class ToolValidationError(ChatError):
    """Tool arguments did not match the tool's parameter schema."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class AuthorizationError(ChatError):
    """Write without an identity, or access to someone else's resource."""


class NotFoundError(ChatError):
    """Missing conversation or reservation."""


class ExternalServiceError(ChatError):
    """A third-party API (weather, flight-data generator) failed."""
