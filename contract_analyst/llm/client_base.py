from abc import ABC, abstractmethod
from collections.abc import Iterator

from contract_analyst.llm.models import ChatMessage


class BaseChatClient(ABC):
    """Contract for provider-specific streaming chat clients."""

    @abstractmethod
    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[ChatMessage],
    ) -> Iterator[str]:
        """Yield the assistant reply as text chunks, in order."""
