"""Shared test fixtures for backend tests."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from cosmos.core.database import create_db_engine, init_db
from cosmos.core.errors import UpstreamError
from cosmos.services.conversation import ConversationService
from cosmos.services.llm.base import BaseLLMProvider, LLMResponse, Message
from cosmos.services.memory import MemorySummarizer
from cosmos.services.storage import ConversationStore

# In-memory SQLite with StaticPool so all connections (including threads) share one DB
test_engine = create_db_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


class FakeLLMProvider(BaseLLMProvider):
    """Completion double that records every call and answers with canned text."""

    def __init__(self, reply: str = "Oi!", summary: str = "Resumo da conversa."):
        self.reply = reply
        self.summary = summary
        self.fail_chat = False
        self.fail_summary = False
        self.calls: list[dict] = []

    @staticmethod
    def _is_summary(messages: list[Message]) -> bool:
        return messages[-1].content.startswith("Summarize this conversation")

    @property
    def chat_calls(self) -> list[dict]:
        return [c for c in self.calls if not self._is_summary(c["messages"])]

    @property
    def summary_calls(self) -> list[dict]:
        return [c for c in self.calls if self._is_summary(c["messages"])]

    async def chat(self, messages, temperature=None, max_tokens=None):
        self.calls.append({"messages": list(messages), "temperature": temperature, "max_tokens": max_tokens})
        if self._is_summary(messages):
            if self.fail_summary:
                raise UpstreamError("summary quota exceeded")
            return LLMResponse(content=self.summary)
        if self.fail_chat:
            raise UpstreamError("network unreachable")
        return LLMResponse(content=self.reply)


@pytest.fixture(autouse=True)
def setup_test_db():
    """Create all tables before each test, drop after."""
    init_db(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def fake_llm():
    return FakeLLMProvider()


@pytest.fixture
def store():
    return ConversationStore(test_engine)


@pytest.fixture
def service(store, fake_llm):
    summarizer = MemorySummarizer(store, fake_llm, language="Brazilian Portuguese", window=10, temperature=0.3)
    return ConversationService(
        store,
        fake_llm,
        summarizer,
        language="Brazilian Portuguese",
        default_title="Nova Conversa",
        temperature=0.7,
        max_tokens=500,
    )


@pytest.fixture
def client(service):
    """FastAPI TestClient with the service factory patched to use the test DB and fake LLM."""
    with patch("cosmos.main.build_conversation_service", return_value=service):
        from cosmos.main import app

        with TestClient(app) as c:
            yield c
