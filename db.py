from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from seed_data import create_schema, seed_sample_data
from sql_guardrails import strip_sql_comments, validate_select

logger = logging.getLogger(__name__)


@dataclass
class SqlResult:
    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"columns": self.columns, "rows": self.rows}


def bootstrap_database(db_path: str) -> None:
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path))
    try:
        conn.execute("PRAGMA journal_mode = WAL;")
        create_schema(conn)
        if seed_sample_data(conn):
            logger.info("Seeded sample data into %s", path)
    finally:
        conn.close()


def count_customers(db_path: str) -> int:
    conn = sqlite3.connect(db_path)
    try:
        return int(conn.execute("SELECT COUNT(*) FROM customers").fetchone()[0])
    finally:
        conn.close()


def run_sql(db_path: str, sql: str, row_limit: int = 500) -> SqlResult:
    validation = validate_select(sql)
    if not validation.ok:
        raise ValueError(validation.error)

    normalized = strip_sql_comments(sql).strip().rstrip(";").strip()
    limited_sql = f"SELECT * FROM ({normalized}) LIMIT {int(row_limit)}"

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        cur = conn.cursor()
        cur.execute(limited_sql)
        rows = cur.fetchall()
        columns = [d[0] for d in cur.description or ()]
        return SqlResult(columns=columns, rows=[dict(r) for r in rows])
    finally:
        conn.close()
