"""Flight lookup tools — search, status and seat maps."""
import logging

from ... import generators
from ..registry import register_tool, ToolResult
from ..schemas import FlightStatusParams, SearchFlightsParams, SelectSeatsParams

logger = logging.getLogger(__name__)


@register_tool(
    "displayFlightStatus",
    params=FlightStatusParams,
    description="Display the status of a flight",
    side_effect="external-read",
)
async def display_flight_status(flightNumber: str, date: str, session=None, **kwargs) -> ToolResult:
    status = await generators.generate_flight_status(flightNumber, date)
    return ToolResult(type="ok", data=status.model_dump())


@register_tool(
    "searchFlights",
    params=SearchFlightsParams,
    description="Search for flights based on the given parameters",
    side_effect="external-read",
)
async def search_flights(origin: str, destination: str, session=None, **kwargs) -> ToolResult:
    results = await generators.generate_flight_search_results(origin, destination)
    logger.info(f"searchFlights {origin} -> {destination}: {len(results.flights)} flights")
    return ToolResult(type="ok", data=results.model_dump())


@register_tool(
    "selectSeats",
    params=SelectSeatsParams,
    description="Select seats for a flight",
    side_effect="external-read",
)
async def select_seats(flightNumber: str, session=None, **kwargs) -> ToolResult:
    selection = await generators.generate_seat_selection(flightNumber)
    return ToolResult(type="ok", data=selection.model_dump())
