"""Registry of functions the model may call."""

from collections.abc import Awaitable, Callable
from typing import Any

from google.genai import types

from genai_samples.exceptions import ErrorCode, GenAISamplesError, ToolError, ValidationError
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_tool_call

logger = get_logger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class ToolRegistry:
    """Maps function declarations to the coroutines that implement them."""

    def __init__(self) -> None:
        self._declarations: dict[str, types.FunctionDeclaration] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    @property
    def names(self) -> list[str]:
        return list(self._handlers)

    def register(self, declaration: types.FunctionDeclaration, handler: ToolHandler) -> None:
        """Register a function.

        Raises:
            ValidationError: If the declaration is unnamed or already registered.
        """
        name = declaration.name
        if not name:
            raise ValidationError("Function declaration must have a name")
        if name in self._handlers:
            raise ValidationError(
                f"Function already registered: {name}",
                details={"name": name},
            )
        self._declarations[name] = declaration
        self._handlers[name] = handler

    def as_tool(self) -> types.Tool:
        """Bundle every declaration into one tool for the model."""
        if not self._declarations:
            raise ToolError("No functions registered")
        return types.Tool(function_declarations=list(self._declarations.values()))

    async def invoke(self, name: str, args: dict[str, Any]) -> dict[str, Any]:
        """Run the handler for a model-requested call.

        Raises:
            ToolError: If the function is unknown or its handler fails.
        """
        handler = self._handlers.get(name)
        if handler is None:
            track_tool_call(name, success=False)
            raise ToolError(
                f"Model requested unknown function: {name}",
                code=ErrorCode.UNKNOWN_TOOL,
                details={"name": name, "registered": self.names},
            )

        try:
            result = await handler(args)
        except GenAISamplesError:
            track_tool_call(name, success=False)
            raise
        except Exception as e:
            track_tool_call(name, success=False)
            logger.error(f"Function {name} failed: {e}")
            raise ToolError(
                f"Function {name} failed: {e}",
                code=ErrorCode.TOOL_ERROR,
                details={"name": name, "error": str(e)},
            ) from e

        track_tool_call(name)
        return result
