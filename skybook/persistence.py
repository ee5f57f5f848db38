"""Session persistence gateway — commit transcripts, ownership-checked delete.

Commit failures are logged and reported as ``False``, never raised. The answer
has already been streamed when a transcript is committed.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from . import queries
from .errors import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)


async def commit(conversation_id: str, owner_id: Optional[str], transcript: List[dict]) -> bool:
    """Upsert the full transcript of a conversation. Returns True if written."""
    if not owner_id:
        logger.info(f"Chat {conversation_id}: no owner, transcript not persisted")
        return False

    try:
        # owner is checked in the same session as the write
        saved = await queries.upsert_chat(conversation_id, owner_id, transcript)
    except SQLAlchemyError as e:
        # includes a concurrent first insert losing the primary-key race
        logger.error(f"Failed to save chat {conversation_id}: {e}")
        return False
    if saved is None:
        logger.warning(f"Chat {conversation_id}: owned by another user, refusing save from {owner_id}")
        return False

    logger.info(f"Chat {conversation_id}: saved {len(transcript)} messages")
    return True


async def delete(conversation_id: str, requester_id: str):
    """Delete a conversation after checking that the requester owns it."""
    chat = await queries.get_chat(conversation_id)
    if not chat:
        raise NotFoundError(f"Chat {conversation_id} not found")
    if chat.user_id != requester_id:
        logger.warning(f"User {requester_id} attempted to delete chat {conversation_id} of {chat.user_id}")
        raise AuthorizationError("Not the owner of this chat")
    await queries.delete_chat(conversation_id)
    logger.info(f"Chat {conversation_id} deleted by {requester_id}")
