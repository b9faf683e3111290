from dataclasses import dataclass, field


@dataclass(frozen=True)
class ToolCallDTO:
    """A function call requested by the model."""

    id: str
    name: str
    # raw JSON text as produced by the model, may be empty
    arguments: str = ""


@dataclass(frozen=True)
class CompletionDTO:
    """One completion round's assistant message."""

    content: str | None = None
    tool_calls: list[ToolCallDTO] = field(default_factory=list)


@dataclass(frozen=True)
class ChatReplyDTO:
    reply: str
    # completion calls made: 0 when short-circuited, at most 2
    rounds: int = 0
