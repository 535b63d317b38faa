"""Conversation orchestration - history, prompt assembly, completion and memory."""

import logging

from cosmos.core.config import Settings
from cosmos.core.database import create_db_engine, init_db
from cosmos.core.errors import NotFoundError, ValidationError
from cosmos.models.conversation import ChatMessage, Conversation
from cosmos.services.llm import get_llm_provider
from cosmos.services.llm.base import BaseLLMProvider, Message
from cosmos.services.memory import MemorySummarizer
from cosmos.services.storage import ConversationStore

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a friendly and helpful assistant. Always respond in {language}."

MEMORY_CONTEXT = "Context from earlier in this conversation: {summary}"


class ConversationService:
    def __init__(
        self,
        store: ConversationStore,
        llm: BaseLLMProvider,
        summarizer: MemorySummarizer,
        language: str,
        default_title: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ):
        self.store = store
        self.llm = llm
        self.summarizer = summarizer
        self.language = language
        self.default_title = default_title
        self.temperature = temperature
        self.max_tokens = max_tokens

    def create_conversation(self, title: str | None = None) -> Conversation:
        conv = self.store.create_conversation(title or self.default_title)
        logger.debug(f"Created conversation {conv.id}")
        return conv

    def list_conversations(self) -> list[Conversation]:
        return self.store.list_conversations()

    def get_conversation(self, conversation_id: str) -> tuple[Conversation, list[ChatMessage]]:
        conv = self.store.get_conversation(conversation_id)
        if not conv:
            logger.debug(f"Conversation {conversation_id} not found")
            raise NotFoundError("Conversation not found")
        return conv, self.store.list_messages(conversation_id)

    def delete_conversation(self, conversation_id: str) -> None:
        if not self.store.delete_conversation(conversation_id):
            logger.debug(f"Delete: conversation {conversation_id} not found")
            raise NotFoundError("Conversation not found")
        logger.debug(f"Deleted conversation {conversation_id}")

    def build_prompt(self, history: list[Message], memory: str | None, text: str) -> list[Message]:
        """System instruction (plus memory when present), full history, then the new user turn."""
        system = SYSTEM_PROMPT.format(language=self.language)
        if memory:
            system += " " + MEMORY_CONTEXT.format(summary=memory)
        return [
            Message(role="system", content=system),
            *history,
            Message(role="user", content=text),
        ]

    async def send_message(self, conversation_id: str | None, text: str | None) -> ChatMessage:
        """Run one chat turn and return the stored assistant message.

        Nothing is persisted unless the completion succeeds. The memory summary is
        refreshed in the background after the reply is stored.
        """
        if not conversation_id or not text or not text.strip():
            raise ValidationError("conversation_id and message are required")

        if not self.store.get_conversation(conversation_id):
            raise NotFoundError("Conversation not found")

        history = [
            Message(role=m.role, content=m.content)
            for m in self.store.list_messages(conversation_id)
        ]
        memory = self.store.get_memory(conversation_id)
        prompt = self.build_prompt(history, memory, text)

        logger.info(
            f"Chat turn for conversation {conversation_id}: "
            f"{len(history)} history messages, memory={'yes' if memory else 'no'}"
        )
        response = await self.llm.chat(
            prompt,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        # Two separate writes: a crash in between leaves the user message without a reply
        self.store.add_message(conversation_id, "user", text)
        reply = self.store.add_message(conversation_id, "assistant", response.content)
        self.store.touch_conversation(conversation_id)

        self.summarizer.schedule(
            conversation_id,
            history + [
                Message(role="user", content=text),
                Message(role="assistant", content=response.content),
            ],
        )
        return reply


def build_conversation_service(settings: Settings) -> ConversationService:
    """Wire the database, completion provider and summarizer for the process."""
    engine = create_db_engine(f"sqlite:///{settings.db_path}", echo=settings.debug)
    init_db(engine)

    store = ConversationStore(engine)
    llm = get_llm_provider(settings)
    summarizer = MemorySummarizer(
        store,
        llm,
        language=settings.response_language,
        window=settings.memory_window,
        temperature=settings.summary_temperature,
    )
    return ConversationService(
        store,
        llm,
        summarizer,
        language=settings.response_language,
        default_title=settings.default_conversation_title,
        temperature=settings.chat_temperature,
        max_tokens=settings.chat_max_tokens,
    )
