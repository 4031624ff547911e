from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    inline_render_scale: float = 1.0
    preview_render_scale: float = 2.0

    document_store_dir: str = ".contract_analyst/documents"

    chat_provider: str = "openai"
    chat_api_key: str = ""
    chat_model_name: str = "gpt-4o-mini"
    chat_base_url: str = ""
    chat_timeout_seconds: int = 120
    chat_temperature: float = 0.2

    tokens_per_page_estimate: int = 650
    context_token_warning_threshold: int = 2_000_000
