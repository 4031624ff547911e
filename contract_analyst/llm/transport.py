"""Chat transport: one session per loaded document context."""

from collections.abc import Iterator
from pathlib import Path

from contract_analyst.llm.client_base import BaseChatClient
from contract_analyst.llm.exceptions import EmptyContextError
from contract_analyst.llm.models import ChatMessage, ChatSession
from contract_analyst.llm.prompt_loader import load_prompt_template
from contract_analyst.logging.logger import Log


class ChatTransport:
    """Creates chat sessions around a context blob and streams replies."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.2,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._prompt_template = load_prompt_template(prompt_template_path)

    def initialize(self, context_blob: str) -> ChatSession:
        """Start a session whose system prompt embeds ``context_blob``.

        Raises:
            EmptyContextError: if the blob holds no text.
        """
        if not context_blob.strip():
            raise EmptyContextError("No readable text content found.")
        session = ChatSession(system_prompt=self._prompt_template.format(context=context_blob))
        Log.info(f"Chat session {session.id} initialized with {len(context_blob)} chars of context")
        return session

    def send(self, session: ChatSession, message: str) -> Iterator[str]:
        """Stream the reply to ``message``.

        The exchange is appended to the session history once the stream is
        fully consumed; an abandoned or failed stream leaves the history as
        it was.
        """
        messages = [*session.messages(), ChatMessage(role="user", content=message)]
        Log.debug(f"Sending message on session {session.id} ({len(messages)} messages)")
        chunks: list[str] = []
        for chunk in self._client.stream_chat_completion(
            model=self._model,
            temperature=self._temperature,
            messages=messages,
        ):
            chunks.append(chunk)
            yield chunk
        session.history.append(ChatMessage(role="user", content=message))
        session.history.append(ChatMessage(role="assistant", content="".join(chunks)))
