from __future__ import annotations

import re
from dataclasses import dataclass

BLOCKED_KEYWORDS = {
    "insert", "update", "delete", "drop", "alter", "truncate", "create", "execute",
    "attach", "detach", "pragma", "vacuum", "reindex",
}

@dataclass
class ValidationResult:
    ok: bool
    error: str | None = None


def strip_sql_comments(sql: str) -> str:
    sql = re.sub(r"--.*?$", "", sql, flags=re.MULTILINE)
    sql = re.sub(r"/\*.*?\*/", "", sql, flags=re.DOTALL)
    return sql


def validate_select(sql: str | None) -> ValidationResult:
    if not sql or not isinstance(sql, str) or not sql.strip():
        return ValidationResult(False, "SQL is required.")

    cleaned = strip_sql_comments(sql).strip()
    if not cleaned:
        return ValidationResult(False, "SQL is empty after removing comments.")

    lowered = cleaned.lower()
    if not lowered.startswith("select"):
        return ValidationResult(False, "Only SELECT statements are allowed.")

    tokens = re.findall(r"[a-zA-Z_]+", lowered)
    found_blocked = sorted({t for t in tokens if t in BLOCKED_KEYWORDS})
    if found_blocked:
        return ValidationResult(False, f"Statement contains forbidden keywords: {', '.join(found_blocked)}")

    segments = [segment for segment in cleaned.split(";") if segment.strip()]
    if len(segments) > 1:
        return ValidationResult(False, "Only a single statement is allowed.")

    return ValidationResult(True)
