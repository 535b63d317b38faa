"""Rolling conversation memory - keeps a short summary of each conversation."""

import asyncio
import logging

from cosmos.services.llm.base import BaseLLMProvider, Message
from cosmos.services.storage import ConversationStore

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are an assistant that writes concise summaries of conversations. "
    "Summarize the main points of the conversation in {language} in 2-3 sentences."
)

SUMMARY_REQUEST = "Summarize this conversation:\n{transcript}"


class MemorySummarizer:
    """Summarizes the most recent messages of a conversation and stores the result.

    Summaries run as detached asyncio tasks. Failures are logged and never reach
    the request that scheduled them.
    """

    def __init__(
        self,
        store: ConversationStore,
        llm: BaseLLMProvider,
        language: str,
        window: int = 10,
        temperature: float = 0.3,
    ):
        self.store = store
        self.llm = llm
        self.language = language
        self.window = window
        self.temperature = temperature
        self._tasks: set[asyncio.Task] = set()

    def schedule(self, conversation_id: str, messages: list[Message]) -> asyncio.Task:
        """Start a summary in the background and return without waiting for it."""
        task = asyncio.create_task(self.summarize(conversation_id, list(messages)))
        # The event loop only keeps weak references to tasks
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def summarize(self, conversation_id: str, messages: list[Message]) -> None:
        if not messages:
            return

        recent = messages[-self.window:]
        transcript = "\n".join(f"{m.role}: {m.content}" for m in recent)
        prompt = [
            Message(role="system", content=SUMMARY_SYSTEM_PROMPT.format(language=self.language)),
            Message(role="user", content=SUMMARY_REQUEST.format(transcript=transcript)),
        ]

        try:
            response = await self.llm.chat(prompt, temperature=self.temperature)
            self.store.upsert_memory(conversation_id, response.content)
        except Exception:
            logger.exception(f"Failed to update memory for conversation {conversation_id}")

    async def join(self) -> None:
        """Wait for every summary that is still running."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
