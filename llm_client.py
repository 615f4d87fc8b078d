from __future__ import annotations

import json
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Any

try:
    from openai import OpenAI
except ModuleNotFoundError as exc:
    raise SystemExit("Missing dependency. Install with: pip install openai") from exc

from prompts import TEXT_TO_SQL_SYSTEM_PROMPT
from settings import Settings

logger = logging.getLogger(__name__)


class LLMNotConfiguredError(ValueError):
    pass


class EmptyModelResponseError(RuntimeError):
    pass


class LLMClient(ABC):
    @abstractmethod
    def generate_sql(self, prompt: str, schema_hints: dict[str, Any]) -> str:
        raise NotImplementedError


class OpenAIClient(LLMClient):
    def __init__(self, settings: Settings) -> None:
        if not settings.openai_api_key:
            raise LLMNotConfiguredError("OPENAI_API_KEY is not configured on the server.")
        self.api_key = settings.openai_api_key
        self.model = settings.openai_model
        self.max_output_tokens = settings.openai_max_output_tokens
        self.max_attempts = max(1, settings.openai_call_max_attempts)
        self.base_backoff_sec = settings.openai_base_backoff_sec
        self.max_backoff_sec = settings.openai_max_backoff_sec

    def _call_text(self, system: str, user: str) -> str:
        last_exc: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                client = OpenAI(api_key=self.api_key)
                resp = client.responses.create(
                    model=self.model,
                    input=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": user},
                    ],
                    max_output_tokens=self.max_output_tokens,
                )
            except Exception as exc:  # noqa: BLE001
                last_exc = exc
                if attempt >= self.max_attempts or not _is_transient_connectivity_error(exc):
                    break
                backoff = min(self.base_backoff_sec * (2 ** (attempt - 1)), self.max_backoff_sec)
                logger.warning("OpenAI call attempt %d failed (%s); retrying in %.2fs", attempt, exc, backoff)
                time.sleep(backoff + random.uniform(0.0, 0.2))
                continue

            text = (getattr(resp, "output_text", "") or "").strip()
            if not text:
                raise EmptyModelResponseError("OpenAI returned an empty response.")
            return text
        raise RuntimeError(f"OpenAI call failed after {self.max_attempts} attempt(s): {last_exc!r}") from last_exc

    def generate_sql(self, prompt: str, schema_hints: dict[str, Any]) -> str:
        user_message = json.dumps({"prompt": prompt, "schemaHints": schema_hints})
        return self._call_text(TEXT_TO_SQL_SYSTEM_PROMPT, user_message)


def text_to_sql(prompt: str, schema_hints: dict[str, Any], client: LLMClient) -> str:
    """Forward ``prompt`` to the hosted model; the returned SQL is opaque text."""
    if not prompt or not prompt.strip():
        raise ValueError("Prompt is required.")
    return client.generate_sql(prompt, schema_hints).strip()


def _is_transient_connectivity_error(exc: Exception) -> bool:
    message = str(exc).lower()
    tokens = (
        "connection error",
        "temporary failure in name resolution",
        "timed out",
        "timeout",
        "name resolution",
        "connecterror",
        "apiconnectionerror",
    )
    return any(t in message for t in tokens)
