"""Unit tests for the server settings model."""

import pytest

from mindful_heaven.server.core.config import (
    AuthConfig,
    CORSConfig,
    OpenAIConfig,
    PasswordResetConfig,
    ResendConfig,
    Settings,
    StorageConfig,
)


class TestGroupedDefaults:
    def test_openai_defaults(self):
        config = OpenAIConfig()
        assert config.api_key is None
        assert config.base_url == "https://api.openai.com/v1"

    def test_resend_defaults(self):
        config = ResendConfig()
        assert config.api_key is None
        assert config.base_url == "https://api.resend.com"
        assert "onboarding@resend.dev" in config.from_address

    def test_auth_defaults(self):
        config = AuthConfig()
        assert config.jwt_algorithm == "HS256"
        assert config.min_password_length == 6

    def test_storage_limits(self):
        config = StorageConfig()
        assert config.max_image_bytes == 5 * 1024 * 1024
        assert config.max_video_bytes == 50 * 1024 * 1024

    def test_password_reset_defaults(self):
        config = PasswordResetConfig()
        assert config.code_length == 6
        assert config.code_ttl_minutes == 10

    def test_cors_allows_everything_by_default(self):
        assert CORSConfig().origins == ["*"]


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_server_port_binding(self, monkeypatch):
        monkeypatch.setenv("MINDFUL_HEAVEN_SERVER_PORT", "9001")
        assert Settings(_env_file=None).server_port == 9001

    def test_database_url_binding(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/app")
        assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@db:5432/app"

    def test_nested_openai_binding(self, monkeypatch):
        monkeypatch.setenv("OPENAI__API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI__MODEL", "gpt-4o-mini")
        settings = Settings(_env_file=None)
        assert settings.openai.api_key == "sk-test"
        assert settings.openai.model == "gpt-4o-mini"

    def test_nested_password_reset_binding(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_RESET__CODE_TTL_MINUTES", "15")
        assert Settings(_env_file=None).password_reset.code_ttl_minutes == 15

    @pytest.mark.parametrize("value,expected", [("true", True), ("false", False), ("0", False)])
    def test_auto_create_tables_binding(self, monkeypatch, value, expected):
        monkeypatch.setenv("AUTO_CREATE_TABLES", value)
        assert Settings(_env_file=None).auto_create_tables is expected
