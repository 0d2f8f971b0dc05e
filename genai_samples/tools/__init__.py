"""Function calling module."""

from genai_samples.tools.agent import FunctionCallingAgent
from genai_samples.tools.models import FunctionCallingResult, ToolCallRecord
from genai_samples.tools.registry import ToolHandler, ToolRegistry
from genai_samples.tools.weather import WEATHER_FUNCTION, get_current_weather, register_weather_tool

__all__ = [
    "FunctionCallingAgent",
    "FunctionCallingResult",
    "ToolCallRecord",
    "ToolHandler",
    "ToolRegistry",
    "WEATHER_FUNCTION",
    "get_current_weather",
    "register_weather_tool",
]
