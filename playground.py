#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import random
import time
from dataclasses import replace
from pathlib import Path
from typing import Any

from converter import convert
from db import bootstrap_database, run_sql
from llm_client import LLMClient, OpenAIClient, text_to_sql
from prompts import EXAMPLE_PROMPTS, LLM_EXPLANATION
from schema_catalog import schema_hints
from settings import Settings, load_settings

logger = logging.getLogger(__name__)


def run_once(
    prompt: str,
    settings: Settings,
    use_llm: bool = False,
    execute: bool = False,
    llm: LLMClient | None = None,
) -> dict[str, Any]:
    started = time.time()
    prompt = prompt.strip()
    if not prompt:
        return {"ok": False, "error": "Please enter a prompt before converting.", "prompt": prompt, "sql": "", "explanation": []}

    if use_llm:
        try:
            client = llm or OpenAIClient(settings)
            sql = text_to_sql(prompt, schema_hints(), client)
        except Exception as exc:
            logger.debug("LLM conversion failed", exc_info=True)
            return {
                "ok": False,
                "error": f"LLM conversion failed: {exc}",
                "prompt": prompt,
                "sql": "",
                "explanation": [],
                "elapsed_sec": round(time.time() - started, 3),
            }
        result: dict[str, Any] = {"sql": sql, "explanation": list(LLM_EXPLANATION)}
    else:
        result = convert(prompt).to_dict()

    out: dict[str, Any] = {"ok": True, "error": None, "prompt": prompt, **result}
    if execute:
        try:
            bootstrap_database(settings.db_path)
            out["results"] = run_sql(settings.db_path, result["sql"], row_limit=settings.run_sql_row_limit).to_dict()
        except Exception as exc:
            out["ok"] = False
            out["error"] = f"SQL execution failed: {exc}"
    out["elapsed_sec"] = round(time.time() - started, 3)
    return out


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn natural-language prompts into illustrative SQL.")
    parser.add_argument("--prompt", help="Single prompt to convert.")
    parser.add_argument("--interactive", action="store_true")
    parser.add_argument("--example", action="store_true", help="Convert a random example prompt.")
    parser.add_argument("--list-examples", action="store_true")
    parser.add_argument("--llm", action="store_true", help="Use the hosted model instead of the heuristic engine.")
    parser.add_argument("--run", action="store_true", help="Execute the SQL against the demo database.")
    parser.add_argument("--db-path", default=None)
    parser.add_argument("--out", default=None, help="Write the generated SQL to this file (e.g. query.sql).")
    parser.add_argument("--json", action="store_true")
    return parser.parse_args()


def print_result(result: dict[str, Any], as_json: bool) -> None:
    if as_json:
        print(json.dumps(result, indent=2, default=str))
        return
    print(f"ok: {result['ok']}")
    print(f"prompt: {result['prompt']}")
    if result.get("sql"):
        print("\nSQL:")
        print(result["sql"])
    if result.get("explanation"):
        print("\nexplanation:")
        for item in result["explanation"]:
            print(f"- {item}")
    if result.get("results"):
        rows = result["results"]["rows"]
        print(f"\nrows ({len(rows)} row{'' if len(rows) == 1 else 's'}):")
        if not rows:
            print("No rows returned.")
        for row in rows[:20]:
            print({col: ("—" if row.get(col) is None else row.get(col)) for col in result["results"]["columns"]})
    if not result["ok"]:
        print("\nerror:")
        print(result["error"])


def write_sql(path: str, sql: str) -> None:
    Path(path).write_text(sql + "\n", encoding="utf-8")
    print(f"Downloaded {path}")


def main() -> None:
    args = parse_args()
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    if args.db_path:
        settings = replace(settings, db_path=args.db_path)

    if args.list_examples:
        for i, example in enumerate(EXAMPLE_PROMPTS, start=1):
            print(f"{i:2d}. {example}")
        return

    if args.interactive:
        while True:
            q = input("prompt> ").strip()
            if q.lower() in {"quit", "exit"}:
                break
            if not q:
                continue
            print_result(run_once(q, settings, use_llm=args.llm, execute=args.run), args.json)
            print()
        return

    prompt = random.choice(EXAMPLE_PROMPTS) if args.example else args.prompt
    if not prompt:
        raise SystemExit("Provide --prompt, --example or use --interactive")
    result = run_once(prompt, settings, use_llm=args.llm, execute=args.run)
    print_result(result, args.json)
    if args.out and result.get("sql"):
        write_sql(args.out, result["sql"])


if __name__ == "__main__":
    main()
