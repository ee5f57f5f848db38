"""Per-request session context."""
import uuid
from dataclasses import dataclass, field
from typing import Optional


def _short_id() -> str:
    return str(uuid.uuid4())[:8]


@dataclass(frozen=True)
class SessionContext:
    """Identity of the caller for one request.

    Passed explicitly into the orchestrator, the tool executor and the
    persistence gateway. Never rendered into the model's context.
    """
    user_id: Optional[str] = None
    email: str = ""
    session_id: str = field(default_factory=_short_id)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)
