"""Chat endpoint - one user message in, one assistant message out."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cosmos.dependencies import get_conversation_service
from cosmos.services.conversation import ConversationService

router = APIRouter()


class ChatRequest(BaseModel):
    # Optional so that missing fields are reported by the service as a 400
    conversation_id: Optional[str] = None
    message: Optional[str] = None


@router.post("")
async def chat(body: ChatRequest, service: ConversationService = Depends(get_conversation_service)):
    reply = await service.send_message(body.conversation_id, body.message)
    return {
        "id": reply.id,
        "conversation_id": reply.conversation_id,
        "role": reply.role,
        "content": reply.content,
        "created_at": reply.created_at.isoformat(),
    }
