"""Model-backed generators for sample flight data.

There is no real airline backend: search results, flight status, seat maps and
reservation prices are generated by the chat model in JSON mode and checked
against a pydantic shape before they reach a tool result.
"""
import json
import logging
from typing import List, Type, TypeVar

import httpx
import openai
from pydantic import BaseModel, ValidationError

from .config import settings
from .errors import ExternalServiceError
from .llm import get_client

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Endpoint(BaseModel):
    cityName: str
    airportCode: str
    timestamp: str


class FlightOption(BaseModel):
    id: str
    departure: Endpoint
    arrival: Endpoint
    airlines: List[str]
    priceInUSD: float
    numberOfStops: int


class FlightSearchResults(BaseModel):
    flights: List[FlightOption]


class StatusEndpoint(Endpoint):
    airportName: str
    terminal: str
    gate: str


class FlightStatus(BaseModel):
    flightNumber: str
    departure: StatusEndpoint
    arrival: StatusEndpoint
    totalDistanceInMiles: float


class Seat(BaseModel):
    seatNumber: str
    priceInUSD: float
    isAvailable: bool


class SeatSelection(BaseModel):
    seats: List[List[Seat]]


class ReservationPrice(BaseModel):
    totalPriceInUSD: float


async def _complete_json(prompt: str) -> str:
    client = get_client()
    response = await client.chat.completions.create(
        model=settings.openai_chat_model,
        messages=[
            {"role": "system", "content": "You generate realistic sample airline data. Respond with valid JSON only."},
            {"role": "user", "content": prompt},
        ],
        response_format={"type": "json_object"},
    )
    return (response.choices[0].message.content or "").strip()


async def _generate(prompt: str, shape: Type[T]) -> T:
    try:
        raw = await _complete_json(prompt)
    except (openai.APIError, httpx.HTTPError) as e:
        logger.error(f"Flight data generator unavailable: {e}")
        raise ExternalServiceError("Flight data service is unavailable, please try again later.") from e

    try:
        return shape.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Generator returned malformed {shape.__name__}: {raw[:200]}")
        raise ExternalServiceError("Flight data service returned malformed data.") from e


async def generate_flight_search_results(origin: str, destination: str) -> FlightSearchResults:
    return await _generate(
        f"Generate 4 search results for flights from {origin} to {destination}, limit to 4 results. "
        "Return an object with a 'flights' array; each flight has id, departure and arrival "
        "(cityName, airportCode, timestamp as ISO 8601), airlines (array of names), "
        "priceInUSD and numberOfStops.",
        FlightSearchResults,
    )


async def generate_flight_status(flight_number: str, date: str) -> FlightStatus:
    return await _generate(
        f"Flight status for flight number {flight_number} on {date}. "
        "Return flightNumber, departure and arrival (cityName, airportCode, airportName, "
        "timestamp as ISO 8601, terminal, gate) and totalDistanceInMiles.",
        FlightStatus,
    )


async def generate_seat_selection(flight_number: str) -> SeatSelection:
    return await _generate(
        f"Simulate available seats for flight number {flight_number}, 6 seats on each row and 5 rows "
        "in total, adjust pricing based on location of seat. Return an object with 'seats': an array "
        "of rows, each row an array of {seatNumber, priceInUSD, isAvailable}.",
        SeatSelection,
    )


async def generate_reservation_price(details: dict) -> ReservationPrice:
    return await _generate(
        "Generate price for the following reservation "
        f"{json.dumps(details, ensure_ascii=False)}. Return an object with totalPriceInUSD.",
        ReservationPrice,
    )
