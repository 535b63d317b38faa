"""OpenAI chat completions provider."""

from openai import AsyncOpenAI, OpenAIError

from cosmos.core.errors import UpstreamError
from cosmos.services.llm.base import BaseLLMProvider, LLMResponse, Message


class OpenAIProvider(BaseLLMProvider):
    def __init__(self, api_key: str = "", model: str = ""):
        # None lets the SDK fall back to OPENAI_API_KEY
        self.client = AsyncOpenAI(api_key=api_key or None)
        self.model = model or "gpt-4o-mini"

    async def chat(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        params = {}
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": m.role, "content": m.content} for m in messages],
                **params,
            )
        except OpenAIError as e:
            raise UpstreamError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("OpenAI returned an empty completion")
        return LLMResponse(content=content)
