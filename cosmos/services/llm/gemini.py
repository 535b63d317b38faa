"""Google Gemini LLM provider."""

import httpx
from google import genai
from google.genai import errors, types

from cosmos.core.errors import UpstreamError
from cosmos.services.llm.base import BaseLLMProvider, LLMResponse, Message


class GeminiProvider(BaseLLMProvider):
    def __init__(self, api_key: str = "", model: str = ""):
        # None lets the SDK fall back to GOOGLE_API_KEY
        self.client = genai.Client(api_key=api_key or None)
        self.model = model or "gemini-2.0-flash"

    async def chat(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        # Gemini takes system text separately and calls the assistant "model"
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
            for m in messages
            if m.role != "system"
        ]
        config = types.GenerateContentConfig(
            system_instruction=system or None,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e

        if not response.text:
            raise UpstreamError("Gemini returned an empty response")
        return LLMResponse(content=response.text)
