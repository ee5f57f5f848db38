"""Bearer-token auth — turns an Authorization header into a SessionContext."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header, HTTPException

from .config import settings
from .session import SessionContext

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TTL = timedelta(days=7)


def create_access_token(user_id: str, email: str = "", expires_in: timedelta = ACCESS_TOKEN_TTL) -> str:
    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "email": email, "iat": now, "exp": now + expires_in}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.info(f"Rejected token: {e}")
        return None


def session_from_header(authorization: Optional[str]) -> SessionContext:
    """Anonymous context when the header is missing or the token is invalid."""
    if not authorization or not authorization.startswith("Bearer "):
        return SessionContext()
    payload = decode_token(authorization.split(" ", 1)[1])
    if not payload or not payload.get("sub"):
        return SessionContext()
    return SessionContext(user_id=str(payload["sub"]), email=payload.get("email", ""))


async def get_current_user(authorization: Optional[str] = Header(None)) -> SessionContext:
    """FastAPI dependency: authenticated caller or 401."""
    ctx = session_from_header(authorization)
    if not ctx.is_authenticated:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return ctx
