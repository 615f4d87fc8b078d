from settings import load_dotenv_values, load_settings

_KEYS = ("OPENAI_API_KEY", "OPENAI_MODEL", "PORT", "PLAYGROUND_DB_PATH", "LOG_LEVEL", "OPENAI_CALL_MAX_ATTEMPTS")


class TestSettings:
    def test_defaults(self, tmp_path, monkeypatch):
        for key in _KEYS:
            monkeypatch.delenv(key, raising=False)
        settings = load_settings(str(tmp_path / "missing.env"))
        assert settings.openai_model == "gpt-4.1"
        assert settings.port == 4000
        assert settings.openai_call_max_attempts == 1
        assert settings.db_path == "data/playground.db"
        assert settings.openai_configured is False

    def test_dotenv_values(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text('# comment\nOPENAI_API_KEY="sk-file"\nPORT=5000\nbroken line\n', encoding="utf-8")
        assert load_dotenv_values(str(env)) == {"OPENAI_API_KEY": "sk-file", "PORT": "5000"}

    def test_environment_overrides_dotenv(self, tmp_path, monkeypatch):
        for key in _KEYS:
            monkeypatch.delenv(key, raising=False)
        env = tmp_path / ".env"
        env.write_text("OPENAI_API_KEY=sk-file\nPORT=5000\nLOG_LEVEL=debug\n", encoding="utf-8")
        monkeypatch.setenv("PORT", "6000")
        settings = load_settings(str(env))
        assert settings.openai_api_key == "sk-file"
        assert settings.openai_configured is True
        assert settings.port == 6000
        assert settings.log_level == "DEBUG"
