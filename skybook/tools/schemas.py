"""Parameter schemas for the builtin tools.

Every schema is closed (unknown fields are rejected) and its leaves are strict
(no silent coercion, so 42 is not accepted where a string is expected). Timestamps
stay ISO-8601 strings; handlers decide what a valid date is.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ToolParams(BaseModel):
    model_config = ConfigDict(extra="forbid")


class WeatherParams(ToolParams):
    location: StrictStr = Field(description="The city name to get the weather for")


class FlightStatusParams(ToolParams):
    flightNumber: StrictStr = Field(description="Flight number")
    date: StrictStr = Field(description="Date of the flight")


class SearchFlightsParams(ToolParams):
    origin: StrictStr = Field(description="Origin airport or city")
    destination: StrictStr = Field(description="Destination airport or city")


class SelectSeatsParams(ToolParams):
    flightNumber: StrictStr = Field(description="Flight number")


class ReservationEndpoint(ToolParams):
    cityName: StrictStr = Field(description="Name of the city")
    airportCode: StrictStr = Field(description="Code of the airport")
    timestamp: StrictStr = Field(description="ISO 8601 date")
    gate: StrictStr = Field(description="Gate")
    terminal: StrictStr = Field(description="Terminal")


class CreateReservationParams(ToolParams):
    seats: List[StrictStr] = Field(description="Array of selected seat numbers")
    flightNumber: StrictStr = Field(description="Flight number")
    departure: ReservationEndpoint = Field(description="Departure details")
    arrival: ReservationEndpoint = Field(description="Arrival details")
    passengerName: StrictStr = Field(description="Name of the passenger")


class ReservationIdParams(ToolParams):
    reservationId: StrictStr = Field(description="Unique identifier for the reservation")


class BoardingPassEndpoint(ReservationEndpoint):
    airportName: StrictStr = Field(description="Name of the airport")


class BoardingPassParams(ToolParams):
    reservationId: StrictStr = Field(description="Unique identifier for the reservation")
    passengerName: StrictStr = Field(description="Name of the passenger, in title case")
    flightNumber: StrictStr = Field(description="Flight number")
    seat: StrictStr = Field(description="Seat number")
    departure: BoardingPassEndpoint = Field(description="Departure details")
    arrival: BoardingPassEndpoint = Field(description="Arrival details")
