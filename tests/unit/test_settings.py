import pytest
from pydantic import ValidationError

from contract_analyst.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        assert Settings().app_env == "dev"

    def test_default_pdf_engine(self) -> None:
        assert Settings().pdf_engine == "pymupdf"

    def test_default_render_scales(self) -> None:
        s = Settings()
        assert s.inline_render_scale == 1.0
        assert s.preview_render_scale == 2.0

    def test_default_chat_settings(self) -> None:
        s = Settings()
        assert s.chat_provider == "openai"
        assert s.chat_temperature == 0.2

    def test_default_context_budget(self) -> None:
        s = Settings()
        assert s.tokens_per_page_estimate == 650
        assert s.context_token_warning_threshold == 2_000_000


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings().log_level == "DEBUG"

    def test_loads_pdf_engine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_ENGINE", "pdfplumber")
        assert Settings().pdf_engine == "pdfplumber"

    def test_loads_preview_scale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREVIEW_RENDER_SCALE", "3.5")
        assert Settings().preview_render_scale == 3.5

    def test_loads_chat_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHAT_PROVIDER", "example")
        assert Settings().chat_provider == "example"


class TestSettingsValidation:
    def test_invalid_scale_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREVIEW_RENDER_SCALE", "large")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHAT_TIMEOUT_SECONDS", "abc")
        with pytest.raises(ValidationError):
            Settings()
