"""Weather lookup tool backed by synthetic data."""

from typing import Any

from google.genai import types

from genai_samples.exceptions import ValidationError
from genai_samples.tools.registry import ToolRegistry

WEATHER_FUNCTION = types.FunctionDeclaration(
    name="getCurrentWeather",
    description="Get the current weather in a given location",
    parameters=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "location": types.Schema(
                type=types.Type.STRING,
                description=(
                    "The location for which to get the weather. "
                    "It can be a city name, a city name and state, or a zip code. "
                    "Examples: 'San Francisco', 'San Francisco, CA', '95616', etc."
                ),
            ),
        },
        required=["location"],
    ),
)

# Stand-in for a real weather API.
_SYNTHETIC_WEATHER: dict[str, dict[str, str]] = {
    "new delhi": {
        "location": "New Delhi",
        "temperature": "42",
        "temperature_unit": "C",
        "description": "Hot and humid",
        "humidity": "65",
    },
    "san francisco": {
        "location": "San Francisco",
        "temperature": "36",
        "temperature_unit": "F",
        "description": "Cold and cloudy",
        "humidity": "N/A",
    },
}


async def get_current_weather(args: dict[str, Any]) -> dict[str, Any]:
    """Return synthetic weather for ``args["location"]``."""
    location = str(args.get("location", "")).strip()
    if not location:
        raise ValidationError("location is required", details={"args": args})

    # "San Francisco, CA" -> "san francisco"
    key = location.split(",")[0].strip().lower()
    weather = _SYNTHETIC_WEATHER.get(key)
    if weather is None:
        return {
            "location": location,
            "temperature": "unknown",
            "temperature_unit": "",
            "description": "No data",
            "humidity": "unknown",
        }
    return dict(weather)


def register_weather_tool(registry: ToolRegistry) -> ToolRegistry:
    """Register the weather function and return the registry."""
    registry.register(WEATHER_FUNCTION, get_current_weather)
    return registry
