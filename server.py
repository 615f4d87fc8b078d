#!/usr/bin/env python3
from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import Any, Callable

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from converter import convert
from db import bootstrap_database, count_customers, run_sql
from llm_client import EmptyModelResponseError, LLMClient, LLMNotConfiguredError, OpenAIClient, text_to_sql
from schema_catalog import schema_hints as default_schema_hints
from settings import Settings, load_settings

logger = logging.getLogger(__name__)


class ConvertRequest(BaseModel):
    prompt: str | None = None


class TextToSqlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str | None = None
    schema_hints: dict[str, Any] | None = Field(default=None, alias="schemaHints")


class RunSqlRequest(BaseModel):
    sql: str | None = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _build_llm_client(settings: Settings) -> LLMClient | None:
    if not settings.openai_configured:
        return None
    try:
        return OpenAIClient(settings)
    except LLMNotConfiguredError:
        return None


def create_app(
    settings: Settings | None = None,
    llm_factory: Callable[[Settings], LLMClient | None] = _build_llm_client,
) -> FastAPI:
    settings = settings or load_settings()
    llm = llm_factory(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        bootstrap_database(settings.db_path)
        logger.info("Playground database ready at %s", settings.db_path)
        yield

    app = FastAPI(title="Text-to-SQL Playground", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=False, allow_methods=["*"], allow_headers=["*"])

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "openAIConfigured": llm is not None,
            "sampleData": {"customers": count_customers(settings.db_path)},
        }

    @app.post("/api/convert")
    def convert_prompt(request: ConvertRequest):
        prompt = (request.prompt or "").strip()
        if not prompt:
            return _error(400, "Please enter a prompt before converting.")
        return convert(prompt).to_dict()

    @app.post("/api/text-to-sql")
    def text_to_sql_endpoint(request: TextToSqlRequest):
        if llm is None:
            return _error(503, "OPENAI_API_KEY is not configured on the server.")
        if not request.prompt or not request.prompt.strip():
            return _error(400, "Prompt is required.")

        try:
            sql = text_to_sql(request.prompt, request.schema_hints or default_schema_hints(), llm)
        except EmptyModelResponseError as exc:
            return _error(502, str(exc))
        except Exception:
            logger.exception("OpenAI error")
            return _error(500, "Failed to generate SQL with OpenAI.")

        if not sql:
            return _error(502, "OpenAI returned an empty response.")
        return {"sql": sql}

    @app.post("/api/run-sql")
    def run_sql_endpoint(request: RunSqlRequest):
        try:
            result = run_sql(settings.db_path, request.sql or "", row_limit=settings.run_sql_row_limit)
        except ValueError as exc:
            return _error(400, str(exc))
        except sqlite3.Error as exc:
            logger.exception("SQL execution error")
            return _error(400, str(exc) or "Failed to run SQL.")
        return result.to_dict()

    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Text-to-SQL server listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
