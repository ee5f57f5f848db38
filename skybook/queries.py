"""Storage queries for chats and reservations.

Each function opens its own short-lived session; nothing is held across a turn.
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select

from . import database
from .models import Chat, Reservation

logger = logging.getLogger(__name__)


async def get_chat(chat_id: str) -> Optional[Chat]:
    async with database.async_session_factory() as db:
        return await db.get(Chat, chat_id)


async def upsert_chat(chat_id: str, user_id: str, messages: List[dict]) -> Optional[Chat]:
    """Insert a chat or replace its transcript, keyed by chat id.

    Returns None without writing when the chat belongs to another user.
    """
    async with database.async_session_factory() as db:
        chat = await db.get(Chat, chat_id)
        if chat and chat.user_id != user_id:
            return None
        if chat:
            chat.messages = list(messages)
        else:
            chat = Chat(id=chat_id, user_id=user_id, messages=list(messages))
            db.add(chat)
        await db.commit()
        await db.refresh(chat)
        return chat


async def delete_chat(chat_id: str) -> bool:
    async with database.async_session_factory() as db:
        chat = await db.get(Chat, chat_id)
        if not chat:
            return False
        await db.delete(chat)
        await db.commit()
        return True


async def list_chats(user_id: str) -> List[Chat]:
    async with database.async_session_factory() as db:
        result = await db.execute(
            select(Chat).where(Chat.user_id == user_id).order_by(Chat.created_at.desc())
        )
        return list(result.scalars().all())


async def get_reservation(reservation_id: str) -> Optional[Reservation]:
    async with database.async_session_factory() as db:
        return await db.get(Reservation, reservation_id)


async def create_reservation(user_id: str, details: dict, reservation_id: Optional[str] = None) -> Reservation:
    async with database.async_session_factory() as db:
        reservation = Reservation(
            id=reservation_id or str(uuid.uuid4()),
            user_id=user_id,
            details=details,
        )
        db.add(reservation)
        await db.commit()
        await db.refresh(reservation)
        logger.info(f"Reservation {reservation.id} created for user {user_id}")
        return reservation


async def set_reservation_paid(reservation_id: str, paid: bool) -> Optional[Reservation]:
    """Record the outcome of the external payment flow."""
    async with database.async_session_factory() as db:
        reservation = await db.get(Reservation, reservation_id)
        if not reservation:
            return None
        reservation.has_completed_payment = paid
        await db.commit()
        await db.refresh(reservation)
        return reservation
