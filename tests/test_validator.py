"""Tests for skybook/tools/validator.py — closed, strict tool argument schemas."""
import json

import pytest

from skybook.errors import ToolValidationError
from skybook.tools import get_tool, validate_args


def _reservation_args(**overrides):
    endpoint = {
        "cityName": "San Francisco",
        "airportCode": "SFO",
        "timestamp": "2026-11-02T08:30:00Z",
        "gate": "A12",
        "terminal": "2",
    }
    args = {
        "seats": ["12A"],
        "flightNumber": "UA123",
        "departure": dict(endpoint),
        "arrival": {**endpoint, "cityName": "New York", "airportCode": "JFK"},
        "passengerName": "Ada Lovelace",
    }
    args.update(overrides)
    return args


class TestValidArgs:
    def test_json_string(self):
        v = validate_args(get_tool("searchFlights"), '{"origin": "SFO", "destination": "JFK"}')
        assert v.origin == "SFO"
        assert v.destination == "JFK"

    def test_mapping(self):
        v = validate_args(get_tool("searchFlights"), {"origin": "SFO", "destination": "JFK"})
        assert v.model_dump() == {"origin": "SFO", "destination": "JFK"}

    def test_nested_reservation(self):
        v = validate_args(get_tool("createReservation"), json.dumps(_reservation_args()))
        assert v.departure.airportCode == "SFO"
        assert v.seats == ["12A"]

    def test_timestamp_kept_as_string(self):
        v = validate_args(get_tool("createReservation"), _reservation_args())
        assert v.arrival.timestamp == "2026-11-02T08:30:00Z"


class TestRejectedArgs:
    def test_missing_required_field(self):
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("searchFlights"), {"origin": "SFO"})
        assert exc.value.field == "destination"

    def test_unknown_field_rejected(self):
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("searchFlights"), {"origin": "SFO", "destination": "JFK", "cabin": "first"})
        assert exc.value.field == "cabin"

    def test_no_type_coercion(self):
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("selectSeats"), {"flightNumber": 123})
        assert exc.value.field == "flightNumber"

    def test_nested_missing_field(self):
        args = _reservation_args()
        del args["departure"]["gate"]
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("createReservation"), args)
        assert exc.value.field == "departure.gate"

    def test_nested_unknown_field(self):
        args = _reservation_args()
        args["arrival"]["lounge"] = "yes"
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("createReservation"), args)
        assert exc.value.field == "arrival.lounge"

    def test_array_item_type(self):
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("createReservation"), _reservation_args(seats=["12A", 13]))
        assert exc.value.field == "seats.1"

    def test_invalid_json(self):
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("searchFlights"), '{"origin": "SFO",')
        assert exc.value.field == "<arguments>"
        assert "invalid JSON" in exc.value.reason

    def test_non_object_json(self):
        with pytest.raises(ToolValidationError) as exc:
            validate_args(get_tool("searchFlights"), '["SFO", "JFK"]')
        assert exc.value.field == "<arguments>"

    def test_empty_arguments_for_required_params(self):
        with pytest.raises(ToolValidationError):
            validate_args(get_tool("verifyPayment"), "")
