from typing import ClassVar

from contract_analyst.config.settings import Settings
from contract_analyst.llm.example_client_adapter import ExampleClientAdapter
from contract_analyst.llm.openai_client_adapter import OpenAIClientAdapter
from contract_analyst.llm.transport import ChatTransport


class ChatTransportFactory:
    """Creates the configured chat transport."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> ChatTransport:
        """Create a chat transport from application settings."""
        provider = settings.chat_provider.lower()
        if provider == "example":
            return ChatTransport(client=ExampleClientAdapter(), model="example", temperature=0.0)
        client = OpenAIClientAdapter(
            api_key=settings.chat_api_key,
            timeout_seconds=settings.chat_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return ChatTransport(
            client=client,
            model=settings.chat_model_name,
            temperature=settings.chat_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.chat_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "chat_base_url is required for chat_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown chat provider '{provider}'. Choose from: {supported}")
