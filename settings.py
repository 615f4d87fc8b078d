from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1"
    openai_max_output_tokens: int = 600
    openai_call_max_attempts: int = 1
    openai_base_backoff_sec: float = 0.5
    openai_max_backoff_sec: float = 8.0
    db_path: str = "data/playground.db"
    run_sql_row_limit: int = 500
    host: str = "127.0.0.1"
    port: int = 4000
    log_level: str = "INFO"

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)


def load_dotenv_values(dotenv_path: str = ".env") -> dict[str, str]:
    path = Path(dotenv_path)
    if not path.exists():
        return {}
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def load_settings(dotenv_path: str = ".env") -> Settings:
    dotenv = load_dotenv_values(dotenv_path)

    def _get(key: str, default: str) -> str:
        return os.getenv(key) or dotenv.get(key) or default

    return Settings(
        openai_api_key=_get("OPENAI_API_KEY", ""),
        openai_model=_get("OPENAI_MODEL", "gpt-4.1"),
        openai_max_output_tokens=int(_get("OPENAI_MAX_OUTPUT_TOKENS", "600")),
        openai_call_max_attempts=max(1, int(_get("OPENAI_CALL_MAX_ATTEMPTS", "1"))),
        openai_base_backoff_sec=float(_get("OPENAI_CALL_BASE_BACKOFF_SEC", "0.5")),
        openai_max_backoff_sec=float(_get("OPENAI_CALL_MAX_BACKOFF_SEC", "8.0")),
        db_path=_get("PLAYGROUND_DB_PATH", "data/playground.db"),
        run_sql_row_limit=int(_get("RUN_SQL_ROW_LIMIT", "500")),
        host=_get("HOST", "127.0.0.1"),
        port=int(_get("PORT", "4000")),
        log_level=_get("LOG_LEVEL", "INFO").upper(),
    )
