"""Tests for skybook/tools/registry.py — registration, lookup, model-facing specs."""
import pytest

from skybook.tools import all_tools, get_tool, openai_tool_specs, register_tool
from skybook.tools.schemas import WeatherParams


EXPECTED = {
    "getWeather": "external-read",
    "displayFlightStatus": "external-read",
    "searchFlights": "external-read",
    "selectSeats": "external-read",
    "createReservation": "external-write",
    "authorizePayment": "pure",
    "verifyPayment": "external-read",
    "displayBoardingPass": "pure",
}


class TestLookup:
    def test_all_builtin_tools_registered(self):
        assert set(all_tools()) == set(EXPECTED)

    @pytest.mark.parametrize("name,side_effect", sorted(EXPECTED.items()))
    def test_side_effect_class(self, name, side_effect):
        assert get_tool(name).side_effect == side_effect

    def test_only_create_reservation_requires_identity(self):
        needs_identity = {name for name, tool in all_tools().items() if tool.requires_identity}
        assert needs_identity == {"createReservation"}

    def test_unknown_tool(self):
        assert get_tool("bookHotel") is None

    def test_all_tools_is_read_only(self):
        with pytest.raises(TypeError):
            all_tools()["bookHotel"] = get_tool("getWeather")


class TestSealedRegistry:
    def test_register_after_seal_fails(self):
        with pytest.raises(RuntimeError, match="sealed"):
            @register_tool("lateTool", params=WeatherParams)
            async def late_tool(session=None, **kwargs):
                pass
        assert get_tool("lateTool") is None


class TestModelFacingSpecs:
    def test_openai_specs_cover_every_tool(self):
        specs = openai_tool_specs()
        assert [s["function"]["name"] for s in specs] == sorted(EXPECTED)
        assert all(s["type"] == "function" for s in specs)

    def test_schemas_are_closed(self):
        spec = next(s for s in openai_tool_specs() if s["function"]["name"] == "searchFlights")
        params = spec["function"]["parameters"]
        assert params["additionalProperties"] is False
        assert set(params["required"]) == {"origin", "destination"}
