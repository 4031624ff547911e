import uuid
from dataclasses import dataclass, field
from typing import Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """An OpenAI-style chat message."""

    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatSession:
    """Conversation state for one loaded document context."""

    system_prompt: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    history: list[ChatMessage] = field(default_factory=list)

    def messages(self) -> list[ChatMessage]:
        return [ChatMessage(role="system", content=self.system_prompt), *self.history]
