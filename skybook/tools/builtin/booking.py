"""Booking tools — reservations, payment and boarding passes.

Nothing here enforces the search → select → reserve → pay → board order; the
system prompt asks the model to follow it.
"""
import logging
import uuid

from ... import generators, queries
from ..executor import NOT_SIGNED_IN
from ..registry import register_tool, ToolResult
from ..schemas import BoardingPassParams, CreateReservationParams, ReservationIdParams

logger = logging.getLogger(__name__)


@register_tool(
    "createReservation",
    params=CreateReservationParams,
    description="Display pending reservation details",
    side_effect="external-write",
)
async def create_reservation(session=None, **details) -> ToolResult:
    # also reachable without going through execute_tool
    if not session or not session.is_authenticated:
        return ToolResult(type="error", text=NOT_SIGNED_IN)

    price = await generators.generate_reservation_price(details)
    reservation_id = str(uuid.uuid4())
    stored = {**details, "totalPriceInUSD": price.totalPriceInUSD}
    await queries.create_reservation(session.user_id, stored, reservation_id=reservation_id)
    return ToolResult(type="ok", data={"id": reservation_id, **stored})


@register_tool(
    "authorizePayment",
    params=ReservationIdParams,
    description="User will enter credentials to authorize payment, wait for user to repond when they are done",
)
async def authorize_payment(reservationId: str, session=None, **kwargs) -> ToolResult:
    # The client renders the payment form; completion arrives via PATCH /api/reservation.
    return ToolResult(type="ok", data={"reservationId": reservationId})


@register_tool(
    "verifyPayment",
    params=ReservationIdParams,
    description="Verify payment status",
    side_effect="external-read",
)
async def verify_payment(reservationId: str, session=None, **kwargs) -> ToolResult:
    reservation = await queries.get_reservation(reservationId)
    # other users' reservations look the same as missing ones
    if not reservation or not session or reservation.user_id != session.user_id:
        return ToolResult(type="error", text="Reservation not found")
    return ToolResult(type="ok", data={"hasCompletedPayment": bool(reservation.has_completed_payment)})


@register_tool(
    "displayBoardingPass",
    params=BoardingPassParams,
    description="Display a boarding pass",
)
async def display_boarding_pass(session=None, **boarding_pass) -> ToolResult:
    return ToolResult(type="ok", data=boarding_pass)
