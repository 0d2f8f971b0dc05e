"""Function calling data models."""

from typing import Any

from pydantic import BaseModel, Field


class ToolCallRecord(BaseModel):
    """A function call the model asked for and what it returned.

    Attributes:
        name: Function name.
        args: Arguments chosen by the model.
        response: Handler output sent back to the model.
        round: Model turn (0-based) that requested the call.
    """

    name: str = Field(description="Function name")
    args: dict[str, Any] = Field(default_factory=dict, description="Call arguments")
    response: dict[str, Any] = Field(default_factory=dict, description="Handler output")
    round: int = Field(default=0, ge=0, description="Model turn index")


class FunctionCallingResult(BaseModel):
    """Outcome of a function calling conversation.

    Attributes:
        answer: Final text answer from the model.
        calls: Every function call executed, in request order.
        rounds: Number of model turns that requested calls.
    """

    answer: str = Field(description="Final answer")
    calls: list[ToolCallRecord] = Field(default_factory=list, description="Executed calls")
    rounds: int = Field(default=0, ge=0, description="Tool rounds")
