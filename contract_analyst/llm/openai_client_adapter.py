from collections.abc import Iterator

import httpx
import openai

from contract_analyst.llm.client_base import BaseChatClient
from contract_analyst.llm.exceptions import ChatNetworkError
from contract_analyst.llm.models import ChatMessage


class OpenAIClientAdapter(BaseChatClient):
    """Chat client adapter built on the OpenAI-compatible streaming chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> Iterator[str]:
        try:
            stream = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[message.to_payload() for message in messages],  # type: ignore[misc]
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ChatNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ChatNetworkError(f"AI provider API error: {exc}") from exc
