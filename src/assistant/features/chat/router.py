import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from src.assistant.completion import OpenAICompletionClient
from src.assistant.orchestrator import ChatOrchestrator
from src.assistant.tools import GuestTools
from src.auth.security import require_admin
from src.config.settings import settings
from src.guests.repository.read_models import SqlGuestReadModel
from src.responses import DataResponse, error_response

logger = logging.getLogger(__name__)

router = APIRouter()

CHAT_URL = "/api/ai/chat"


class ChatRequest(BaseModel):
    message: str = Field(default=None, validate_default=True)

    @field_validator("message", mode="before")
    @classmethod
    def require_message(cls, v):
        if not isinstance(v, str) or not v:
            raise PydanticCustomError("missing", "'message' is required")
        return v


class ChatReplyResponse(BaseModel):
    reply: str


@lru_cache
def get_completion_client() -> OpenAICompletionClient:
    """Process-wide completion client; closed by the app lifespan."""
    return OpenAICompletionClient(config=settings)


def get_chat_orchestrator(
    completion_client: OpenAICompletionClient = Depends(get_completion_client),
) -> ChatOrchestrator:
    """Dependency to get a chat orchestrator wired to the guest store."""
    return ChatOrchestrator(
        config=settings,
        tools=GuestTools(SqlGuestReadModel()),
        completion_client=completion_client,
    )


@router.post(
    CHAT_URL,
    response_model=DataResponse[ChatReplyResponse],
    dependencies=[Depends(require_admin)],
)
async def chat(
    request: ChatRequest | None = None,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
):
    """
    Answer an admin question about the guest list.
    The model may call read-only guest tools once before replying.
    """
    if request is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="'message' is required")

    try:
        result = await orchestrator.converse(request.message)
    except Exception:
        logger.exception("Chat request failed")
        return error_response("Chat error", 500)

    return DataResponse(data=ChatReplyResponse(reply=result.reply))
