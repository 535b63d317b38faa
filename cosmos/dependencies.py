"""FastAPI dependency injection functions."""

from fastapi import Request

from cosmos.services.conversation import ConversationService


def get_conversation_service(request: Request) -> ConversationService:
    """Return the ConversationService built at startup and kept in app state."""
    return request.app.state.conversation_service
