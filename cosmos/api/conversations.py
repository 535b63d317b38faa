"""REST API for conversation history management."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cosmos.dependencies import get_conversation_service
from cosmos.models.conversation import Conversation
from cosmos.services.conversation import ConversationService

router = APIRouter()


class ConversationCreate(BaseModel):
    title: Optional[str] = None


def _summary(conv: Conversation) -> dict:
    return {
        "id": conv.id,
        "title": conv.title,
        "created_at": conv.created_at.isoformat(),
        "updated_at": conv.updated_at.isoformat(),
    }


@router.get("")
async def list_conversations(service: ConversationService = Depends(get_conversation_service)):
    return [_summary(c) for c in service.list_conversations()]


@router.post("", status_code=201)
async def create_conversation(
    body: ConversationCreate | None = None,
    service: ConversationService = Depends(get_conversation_service),
):
    conv = service.create_conversation(body.title if body else None)
    return _summary(conv)


@router.get("/{conversation_id}")
async def get_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
):
    conv, messages = service.get_conversation(conversation_id)
    return {
        **_summary(conv),
        "messages": [
            {
                "id": m.id,
                "role": m.role,
                "content": m.content,
                "created_at": m.created_at.isoformat(),
            }
            for m in messages
        ],
    }


@router.delete("/{conversation_id}")
async def delete_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
):
    service.delete_conversation(conversation_id)
    return {"success": True, "message": "Conversation deleted"}
