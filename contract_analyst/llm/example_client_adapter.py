"""Offline chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in ChatTransportFactory.
"""

from collections.abc import Iterator
from typing import ClassVar

from contract_analyst.llm.client_base import BaseChatClient
from contract_analyst.llm.models import ChatMessage


class ExampleClientAdapter(BaseChatClient):
    """Streams a fixed reply word by word. No network calls."""

    DEFAULT_REPLY: ClassVar[str] = (
        "I cannot find this information in the provided documents."
    )

    def __init__(self, reply: str | None = None) -> None:
        self._reply = reply if reply is not None else self.DEFAULT_REPLY

    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> Iterator[str]:
        _ = model, temperature, messages
        words = self._reply.split(" ")
        for index, word in enumerate(words):
            yield word if index == len(words) - 1 else word + " "
