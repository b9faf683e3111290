"""Two-round, tool-augmented chat exchange with the language model.

    Start -> AwaitingFirstCompletion -> NoToolsNeeded -> Done
                                     -> ToolsRequested -> ExecutingTools
                                        -> AwaitingSecondCompletion -> Done

There is never a third completion round.
"""

import json
import logging
from enum import Enum
from typing import Any, Protocol

from src.assistant.completion import CompletionClient
from src.assistant.dtos import ChatReplyDTO, CompletionDTO, ToolCallDTO
from src.assistant.tools import GuestTools

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an assistant for a wedding admin dashboard. You can query the guests "
    "database via tools to answer questions about guests, attendance, meals, and "
    "accommodations. Always be concise and answer in the user's language. If needed, "
    "call tools to fetch exact numbers or lists."
)

MISSING_CREDENTIAL_REPLY = (
    "The OpenAI API key is missing. Please configure OPENAI_API_KEY."
)


class ChatState(str, Enum):
    START = "start"
    AWAITING_FIRST_COMPLETION = "awaiting_first_completion"
    NO_TOOLS_NEEDED = "no_tools_needed"
    TOOLS_REQUESTED = "tools_requested"
    EXECUTING_TOOLS = "executing_tools"
    AWAITING_SECOND_COMPLETION = "awaiting_second_completion"
    DONE = "done"


class AssistantConfig(Protocol):
    openai_api_key: str
    openai_model: str
    openai_temperature: float


class ChatOrchestrator:
    def __init__(
        self,
        config: AssistantConfig,
        tools: GuestTools,
        completion_client: CompletionClient,
    ):
        self._config = config
        self._tools = tools
        self._completion_client = completion_client

    @staticmethod
    def _transition(current: ChatState, new: ChatState) -> ChatState:
        logger.debug(f"Chat state {current.value} -> {new.value}")
        return new

    async def converse(self, user_message: str) -> ChatReplyDTO:
        state = ChatState.START

        if not self._config.openai_api_key:
            logger.warning("Chat requested but OPENAI_API_KEY is not configured")
            self._transition(state, ChatState.DONE)
            return ChatReplyDTO(reply=MISSING_CREDENTIAL_REPLY, rounds=0)

        messages: list[dict[str, Any]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_message},
        ]

        state = self._transition(state, ChatState.AWAITING_FIRST_COMPLETION)
        first = await self._completion_client.complete(
            messages,
            tools=self._tools.definitions,
            tool_choice="auto",
            temperature=self._config.openai_temperature,
        )

        if not first.tool_calls:
            state = self._transition(state, ChatState.NO_TOOLS_NEEDED)
            self._transition(state, ChatState.DONE)
            return ChatReplyDTO(reply=first.content or "", rounds=1)

        state = self._transition(state, ChatState.TOOLS_REQUESTED)
        messages.append(self._assistant_tool_request(first))

        state = self._transition(state, ChatState.EXECUTING_TOOLS)
        for call in first.tool_calls:
            result = await self._execute_tool_call(call)
            messages.append(
                {
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": json.dumps(result, default=str),
                }
            )

        state = self._transition(state, ChatState.AWAITING_SECOND_COMPLETION)
        second = await self._completion_client.complete(
            messages,
            temperature=self._config.openai_temperature,
        )
        if second.tool_calls:
            logger.warning(
                f"Ignoring {len(second.tool_calls)} tool call(s) requested in the final round"
            )

        self._transition(state, ChatState.DONE)
        return ChatReplyDTO(reply=second.content or "", rounds=2)

    async def _execute_tool_call(self, call: ToolCallDTO) -> dict[str, Any]:
        try:
            return await self._tools.run(call)
        except Exception as e:
            logger.error(f"Tool {call.name} ({call.id}) failed: {e}")
            return {"error": True, "message": str(e) or "Tool error"}

    @staticmethod
    def _assistant_tool_request(completion: CompletionDTO) -> dict[str, Any]:
        return {
            "role": "assistant",
            "content": completion.content or "",
            "tool_calls": [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {"name": call.name, "arguments": call.arguments},
                }
                for call in completion.tool_calls
            ],
        }
