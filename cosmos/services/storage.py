"""Storage accessor for conversations, messages and memory summaries.

Every public method opens its own short-lived session and commits on its own.
Database failures surface as StorageError.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from sqlalchemy import delete, literal_column
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from cosmos.core.errors import StorageError
from cosmos.models.conversation import ChatMessage, Conversation, ConversationMemory, _new_id

logger = logging.getLogger(__name__)


class ConversationStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self.engine) as session:
                yield session
        except SQLAlchemyError as e:
            raise StorageError(f"Database error: {e}") from e

    def create_conversation(self, title: str) -> Conversation:
        with self._session() as session:
            conv = Conversation(title=title)
            session.add(conv)
            session.commit()
            session.refresh(conv)
            return conv

    def list_conversations(self) -> list[Conversation]:
        with self._session() as session:
            return list(session.exec(
                select(Conversation).order_by(Conversation.updated_at.desc())  # type: ignore
            ).all())

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        with self._session() as session:
            return session.get(Conversation, conversation_id)

    def delete_conversation(self, conversation_id: str) -> bool:
        """Delete a conversation; messages and memory go with it via ON DELETE CASCADE."""
        with self._session() as session:
            result = session.exec(delete(Conversation).where(Conversation.id == conversation_id))  # type: ignore
            session.commit()
            return result.rowcount > 0

    def list_messages(self, conversation_id: str) -> list[ChatMessage]:
        with self._session() as session:
            return list(session.exec(
                select(ChatMessage)
                .where(ChatMessage.conversation_id == conversation_id)
                # rowid breaks ties between messages stored within the same instant
                .order_by(ChatMessage.created_at, literal_column("messages.rowid"))  # type: ignore
            ).all())

    def add_message(self, conversation_id: str, role: str, content: str) -> ChatMessage:
        with self._session() as session:
            msg = ChatMessage(conversation_id=conversation_id, role=role, content=content)
            session.add(msg)
            session.commit()
            session.refresh(msg)
            return msg

    def touch_conversation(self, conversation_id: str) -> None:
        with self._session() as session:
            conv = session.get(Conversation, conversation_id)
            if conv:
                conv.updated_at = datetime.now(timezone.utc)
                session.add(conv)
                session.commit()

    def get_memory(self, conversation_id: str) -> str | None:
        with self._session() as session:
            memory = session.exec(
                select(ConversationMemory).where(ConversationMemory.conversation_id == conversation_id)
            ).first()
            return memory.summary if memory else None

    def upsert_memory(self, conversation_id: str, summary: str) -> None:
        """Insert the conversation's summary, or replace it if one is already stored."""
        stmt = sqlite_insert(ConversationMemory).values(
            id=_new_id(),
            conversation_id=conversation_id,
            summary=summary,
            created_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["conversation_id"],
            set_={"summary": stmt.excluded.summary},
        )
        with self._session() as session:
            session.exec(stmt)  # type: ignore
            session.commit()
        logger.debug(f"Memory updated for conversation {conversation_id}")

    def close(self) -> None:
        self.engine.dispose()
