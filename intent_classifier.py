from __future__ import annotations

import re
from enum import Enum

from normalizer import normalize_text


class Intent(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_TABLE = "create-table"
    ALTER_TABLE = "alter-table"
    DROP_TABLE = "drop-table"
    CREATE_VIEW = "create-view"
    NESTED_SELECT = "nested-select"
    PLSQL = "plsql"


# First match wins; DDL outranks DML, DML outranks plain SELECT.
INTENT_RULES: tuple[tuple[Intent, re.Pattern[str]], ...] = (
    (Intent.PLSQL, re.compile(r"pl/?sql|procedure|function|anonymous\s+block", re.IGNORECASE)),
    (Intent.NESTED_SELECT, re.compile(r"nested\s+query|subquery|exists\s*\(|in\s*\(\s*select", re.IGNORECASE)),
    (Intent.DROP_TABLE, re.compile(r"drop\s+table", re.IGNORECASE)),
    (Intent.ALTER_TABLE, re.compile(r"alter\s+table|add\s+column|drop\s+column|rename\s+column", re.IGNORECASE)),
    (Intent.CREATE_VIEW, re.compile(r"create\s+view", re.IGNORECASE)),
    (Intent.CREATE_TABLE, re.compile(r"create\s+table|define\s+table|schema", re.IGNORECASE)),
    (Intent.INSERT, re.compile(r"insert|(add|create)\s+(a\s+)?new\s+(row|record|order|customer|entry)", re.IGNORECASE)),
    (Intent.UPDATE, re.compile(r"update|modify|change|set\s+[a-z_]+\s*=", re.IGNORECASE)),
    (Intent.DELETE, re.compile(r"delete|remove|drop\s+rows?|purge", re.IGNORECASE)),
)


def classify(prompt: str) -> Intent:
    normalized = normalize_text(prompt)
    for intent, pattern in INTENT_RULES:
        if pattern.search(normalized):
            return intent
    return Intent.SELECT
