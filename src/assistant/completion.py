import logging
from typing import Any, Protocol

from openai import AsyncOpenAI

from src.assistant.dtos import CompletionDTO, ToolCallDTO

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Protocol for a hosted chat-completion endpoint."""

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        tool_choice: str | None = None,
        temperature: float = 0.2,
    ) -> CompletionDTO: ...


class OpenAIConfig(Protocol):
    openai_api_key: str
    openai_model: str


class OpenAICompletionClient:
    """Completion client backed by the OpenAI chat completions API."""

    def __init__(self, config: OpenAIConfig, client: AsyncOpenAI | None = None):
        self._config = config
        self._client = client

    def _sdk(self) -> AsyncOpenAI:
        # one SDK client, and its connection pool, per completion client
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._config.openai_api_key)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        tool_choice: str | None = None,
        temperature: float = 0.2,
    ) -> CompletionDTO:
        options: dict[str, Any] = {}
        if tools:
            options["tools"] = tools
            if tool_choice:
                options["tool_choice"] = tool_choice

        response = await self._sdk().chat.completions.create(
            model=self._config.openai_model,
            messages=messages,
            temperature=temperature,
            **options,
        )
        message = response.choices[0].message
        logger.debug(f"Completion finished: {response.choices[0].finish_reason}")

        return CompletionDTO(
            content=message.content,
            tool_calls=[
                ToolCallDTO(
                    id=call.id,
                    name=call.function.name,
                    arguments=call.function.arguments or "",
                )
                for call in message.tool_calls or []
            ],
        )
