"""Unit tests for environment-sourced configuration."""

import pytest
from reading_counter_bot.config import load_registration_settings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "DISCORD_APP_PUBLIC_KEY",
        "UNKNOWN_COMMAND_MODE",
        "INTERACTIONS_MAX_AGE_SECONDS",
        "DISCORD_BOT_TOKEN",
        "DISCORD_APP_ID",
        "DISCORD_GUILD_ID",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self, monkeypatch, public_key_hex):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", public_key_hex)
        s = load_settings()
        assert s.unknown_command_mode == "silent"
        assert s.max_age_seconds is None

    def test_missing_public_key(self):
        with pytest.raises(RuntimeError, match="DISCORD_APP_PUBLIC_KEY must be set"):
            load_settings()

    def test_malformed_public_key(self, monkeypatch):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", "definitely-not-hex")
        with pytest.raises(RuntimeError, match="Failed to decode"):
            load_settings()

    def test_reply_mode(self, monkeypatch, public_key_hex):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", public_key_hex)
        monkeypatch.setenv("UNKNOWN_COMMAND_MODE", "Reply")
        assert load_settings().unknown_command_mode == "reply"

    def test_invalid_mode(self, monkeypatch, public_key_hex):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", public_key_hex)
        monkeypatch.setenv("UNKNOWN_COMMAND_MODE", "shout")
        with pytest.raises(RuntimeError, match="UNKNOWN_COMMAND_MODE"):
            load_settings()

    def test_max_age(self, monkeypatch, public_key_hex):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", public_key_hex)
        monkeypatch.setenv("INTERACTIONS_MAX_AGE_SECONDS", "300")
        assert load_settings().max_age_seconds == 300

    def test_max_age_zero_disables(self, monkeypatch, public_key_hex):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", public_key_hex)
        monkeypatch.setenv("INTERACTIONS_MAX_AGE_SECONDS", "0")
        assert load_settings().max_age_seconds is None

    def test_max_age_not_numeric(self, monkeypatch, public_key_hex):
        monkeypatch.setenv("DISCORD_APP_PUBLIC_KEY", public_key_hex)
        monkeypatch.setenv("INTERACTIONS_MAX_AGE_SECONDS", "five minutes")
        with pytest.raises(RuntimeError, match="must be an integer"):
            load_settings()


class TestLoadRegistrationSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "bot-token")
        monkeypatch.setenv("DISCORD_APP_ID", "123")
        s = load_registration_settings()
        assert s.bot_token == "bot-token"
        assert s.app_id == "123"
        assert s.guild_id is None

    def test_arguments_override_env(self, monkeypatch):
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "env-token")
        monkeypatch.setenv("DISCORD_APP_ID", "123")
        monkeypatch.setenv("DISCORD_GUILD_ID", "777")
        s = load_registration_settings(bot_token="cli-token", guild_id="888")
        assert s.bot_token == "cli-token"
        assert s.guild_id == "888"

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setenv("DISCORD_APP_ID", "123")
        with pytest.raises(RuntimeError, match="DISCORD_BOT_TOKEN and DISCORD_APP_ID"):
            load_registration_settings()
