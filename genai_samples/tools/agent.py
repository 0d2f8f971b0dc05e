"""Function calling loop with parallel execution of model-requested calls."""

import asyncio
from typing import Any

from google.genai import types

from genai_samples.exceptions import ErrorCode, LLMError, ToolError
from genai_samples.llm.client import GeminiClient
from genai_samples.logging_config import get_logger
from genai_samples.tools.models import FunctionCallingResult, ToolCallRecord
from genai_samples.tools.registry import ToolRegistry

logger = get_logger(__name__)


class FunctionCallingAgent:
    """Lets the model call registered functions until it can answer.

    All calls the model requests in one turn are executed concurrently and
    their responses go back to the model together in a single turn, in the
    order the model asked for them.
    """

    def __init__(
        self,
        llm_client: GeminiClient,
        registry: ToolRegistry,
        max_rounds: int = 5,
        require_function_call: bool = True,
        temperature: float = 0.0,
    ) -> None:
        """Initialize the agent.

        Args:
            llm_client: Gemini client used for every turn.
            registry: Functions the model may call.
            max_rounds: Maximum model turns that may request calls.
            require_function_call: Fail if the first turn requests no calls.
            temperature: Sampling temperature; 0.0 keeps call selection stable.
        """
        self._llm_client = llm_client
        self._registry = registry
        self._max_rounds = max_rounds
        self._require_function_call = require_function_call
        self._temperature = temperature

    async def run(self, prompt: str) -> FunctionCallingResult:
        """Answer a prompt, executing whatever functions the model asks for.

        Raises:
            ToolError: If no calls are suggested when required, a call fails,
                or the round limit is reached.
            LLMError: If a model turn fails or the final answer is empty.
        """
        tool = self._registry.as_tool()
        contents: list[types.Content] = [
            types.Content(role="user", parts=[types.Part.from_text(text=prompt)])
        ]
        records: list[ToolCallRecord] = []

        for round_index in range(self._max_rounds + 1):
            response = await self._llm_client.generate_with_tools(
                contents,
                tools=[tool],
                temperature=self._temperature,
            )
            calls = response.function_calls or []

            if not calls:
                if round_index == 0 and self._require_function_call:
                    raise ToolError(
                        "Got no function call suggestions from model",
                        code=ErrorCode.NO_FUNCTION_CALLS,
                        details={"tools": self._registry.names},
                    )
                return self._final_result(response, records, round_index)

            if round_index == self._max_rounds:
                break

            for call in calls:
                logger.info(
                    f"Model suggests calling {call.name}",
                    extra={"function": call.name, "args": call.args},
                )

            results = await self._invoke_all(calls)

            contents.append(response.candidates[0].content)
            contents.append(
                types.Content(
                    role="user",
                    parts=[
                        types.Part(
                            function_response=types.FunctionResponse(
                                id=call.id,
                                name=call.name,
                                response={"content": result},
                            )
                        )
                        for call, result in zip(calls, results)
                    ],
                )
            )
            records.extend(
                ToolCallRecord(
                    name=call.name or "",
                    args=dict(call.args or {}),
                    response=result,
                    round=round_index,
                )
                for call, result in zip(calls, results)
            )

        raise ToolError(
            f"Model still requesting functions after {self._max_rounds} rounds",
            code=ErrorCode.TOOL_ROUNDS_EXCEEDED,
            details={"max_rounds": self._max_rounds, "calls": len(records)},
        )

    async def _invoke_all(self, calls: list[types.FunctionCall]) -> list[dict[str, Any]]:
        """Run one turn's calls concurrently, results in call order.

        The first failing call cancels the others and is raised as-is.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(
                        self._registry.invoke(call.name or "", dict(call.args or {}))
                    )
                    for call in calls
                ]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]

        return [task.result() for task in tasks]

    def _final_result(
        self,
        response: types.GenerateContentResponse,
        records: list[ToolCallRecord],
        rounds: int,
    ) -> FunctionCallingResult:
        answer = response.text
        if not answer:
            raise LLMError(
                "Got empty response from model",
                code=ErrorCode.LLM_EMPTY_RESPONSE,
                details={"rounds": rounds},
            )

        logger.info(
            "Function calling completed",
            extra={"rounds": rounds, "calls": len(records)},
        )
        return FunctionCallingResult(answer=answer, calls=records, rounds=rounds)
