from __future__ import annotations

from typing import Any

import pytest

from db import bootstrap_database
from llm_client import LLMClient
from settings import Settings


class FakeLLM(LLMClient):
    def __init__(self, sql: str = "SELECT full_name FROM customers", error: Exception | None = None) -> None:
        self.sql = sql
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def generate_sql(self, prompt: str, schema_hints: dict[str, Any]) -> str:
        self.calls.append((prompt, schema_hints))
        if self.error is not None:
            raise self.error
        return self.sql


@pytest.fixture
def settings(tmp_path):
    return Settings(db_path=str(tmp_path / "data" / "playground.db"), openai_api_key="sk-test")


@pytest.fixture
def seeded_db(settings):
    bootstrap_database(settings.db_path)
    return settings.db_path


@pytest.fixture
def make_llm():
    return FakeLLM
