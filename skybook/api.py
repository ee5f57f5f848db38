"""REST API routes: chat turns, history, reservations."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from . import persistence, queries
from .auth import get_current_user
from .errors import AuthorizationError, NotFoundError
from .llm import ChatModel, OpenAIChatModel
from .orchestrator import HistoryError, Turn
from .protocol import DATA_STREAM_HEADERS, ChatRequest, ErrorPart, encode_part
from .session import SessionContext

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


# ── Pydantic schemas ──────────────────────────────────────────

class ChatOut(BaseModel):
    id: str
    created_at: Optional[datetime] = None
    messages: List[Dict[str, Any]]

    model_config = {"from_attributes": True}


class ReservationOut(BaseModel):
    id: str
    details: Dict[str, Any]
    has_completed_payment: bool = Field(serialization_alias="hasCompletedPayment")
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PaymentUpdate(BaseModel):
    hasCompletedPayment: bool


def get_chat_model() -> ChatModel:
    """FastAPI dependency: the model driving chat turns (overridden in tests)."""
    return OpenAIChatModel()


# ── Chat ──────────────────────────────────────────────────────

async def _encode_stream(turn: Turn):
    try:
        async for part in turn.stream():
            yield encode_part(part)
    except Exception as e:
        # Unexpected failure after headers went out; end with an error marker
        logger.error(f"[{turn.ctx.session_id}] Turn crashed: {e}", exc_info=True)
        yield encode_part(ErrorPart(message="An error occurred while processing your request"))


@router.post("/chat")
async def chat(
    req: ChatRequest,
    user: SessionContext = Depends(get_current_user),
    model: ChatModel = Depends(get_chat_model),
):
    try:
        turn = Turn(req.id, req.messages, user, model)
    except HistoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthorizationError:
        raise HTTPException(status_code=401, detail="Unauthorized")

    return StreamingResponse(
        _encode_stream(turn),
        media_type="text/plain; charset=utf-8",
        headers=DATA_STREAM_HEADERS,
    )


@router.delete("/chat")
async def delete_chat(
    id: Optional[str] = None,
    user: SessionContext = Depends(get_current_user),
):
    if not id:
        raise HTTPException(status_code=404, detail="Not Found")
    try:
        await persistence.delete(id, user.user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Chat not found")
    except AuthorizationError:
        raise HTTPException(status_code=401, detail="Unauthorized")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete chat {id}: {e}")
        raise HTTPException(status_code=500, detail="An error occurred while processing your request")
    return {"ok": True}


@router.get("/history", response_model=List[ChatOut])
async def history(user: SessionContext = Depends(get_current_user)):
    return await queries.list_chats(user.user_id)


# ── Reservations ─────────────────────────────────────────────

async def _owned_reservation(reservation_id: Optional[str], user: SessionContext):
    if not reservation_id:
        raise HTTPException(status_code=404, detail="Not Found")
    reservation = await queries.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    if reservation.user_id != user.user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return reservation


@router.get("/reservation", response_model=ReservationOut, response_model_by_alias=True)
async def get_reservation(
    id: Optional[str] = None,
    user: SessionContext = Depends(get_current_user),
):
    return await _owned_reservation(id, user)


@router.patch("/reservation", response_model=ReservationOut, response_model_by_alias=True)
async def update_reservation(
    req: PaymentUpdate,
    id: Optional[str] = None,
    user: SessionContext = Depends(get_current_user),
):
    """Payment-completion callback from the client's payment flow."""
    await _owned_reservation(id, user)
    reservation = await queries.set_reservation_paid(id, req.hasCompletedPayment)
    logger.info(f"Reservation {id}: hasCompletedPayment={req.hasCompletedPayment} (user {user.user_id})")
    return reservation
