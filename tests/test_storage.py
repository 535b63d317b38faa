"""Tests for the storage accessor and the database constraints behind it."""

from datetime import datetime, timezone

import pytest
from sqlmodel import Session

from tests.conftest import test_engine
from cosmos.core.errors import StorageError
from cosmos.models.conversation import ChatMessage


def test_upsert_memory_replaces_summary(store):
    conv = store.create_conversation("Memória")

    store.upsert_memory(conv.id, "primeiro")
    store.upsert_memory(conv.id, "segundo")

    assert store.get_memory(conv.id) == "segundo"


def test_get_memory_absent(store):
    conv = store.create_conversation("Sem memória")
    assert store.get_memory(conv.id) is None


def test_message_requires_existing_conversation(store):
    with pytest.raises(StorageError):
        store.add_message("missing", "user", "Olá")


def test_memory_requires_existing_conversation(store):
    with pytest.raises(StorageError):
        store.upsert_memory("missing", "resumo")


def test_messages_with_same_timestamp_keep_insertion_order(store):
    conv = store.create_conversation("Empate")
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    with Session(test_engine) as session:
        for i in range(5):
            session.add(ChatMessage(conversation_id=conv.id, role="user", content=f"m{i}", created_at=stamp))
            session.commit()

    assert [m.content for m in store.list_messages(conv.id)] == ["m0", "m1", "m2", "m3", "m4"]


def test_delete_conversation_reports_missing(store):
    conv = store.create_conversation("Apagar")
    assert store.delete_conversation(conv.id) is True
    assert store.delete_conversation(conv.id) is False
    assert store.get_conversation(conv.id) is None


def test_ids_are_unique(store):
    ids = {store.create_conversation("x").id for _ in range(50)}
    assert len(ids) == 50
