from __future__ import annotations

import re
from dataclasses import dataclass

_ID_SUFFIX_RE = re.compile(r"_?id$")
_PK_RE = re.compile(r"(_id|id)$")


@dataclass(frozen=True)
class SchemaTable:
    name: str
    synonyms: tuple[str, ...]
    columns: tuple[str, ...]


CATALOG: tuple[SchemaTable, ...] = (
    SchemaTable(
        name="customers",
        synonyms=("customers", "client", "buyer", "customer"),
        columns=("customer_id", "full_name", "email", "created_at", "total_spent", "status"),
    ),
    SchemaTable(
        name="orders",
        synonyms=("orders", "purchases", "order"),
        columns=("order_id", "customer_id", "order_date", "status", "total_amount"),
    ),
    SchemaTable(
        name="employees",
        synonyms=("employees", "staff", "team members", "employee"),
        columns=("employee_id", "first_name", "last_name", "department", "hire_date", "salary"),
    ),
    SchemaTable(
        name="products",
        synonyms=("products", "inventory", "items", "catalog", "product"),
        columns=("product_id", "product_name", "stock_quantity", "status", "category", "last_restocked"),
    ),
    SchemaTable(
        name="sessions",
        synonyms=("sessions", "visits", "analytics", "events", "session"),
        columns=("session_id", "customer_id", "country", "duration_seconds", "started_at"),
    ),
    SchemaTable(
        name="reviews",
        synonyms=("reviews", "feedback", "ratings", "review"),
        columns=("review_id", "product_id", "rating", "comment", "created_at"),
    ),
)

DEFAULT_TABLE = "orders"

_BY_NAME: dict[str, SchemaTable] = {table.name: table for table in CATALOG}


def get_table(name: str) -> SchemaTable | None:
    return _BY_NAME.get(name)


def table_names() -> list[str]:
    return [table.name for table in CATALOG]


def columns(table: str) -> list[str]:
    """Catalog columns for ``table``; ``['*']`` when the table is unknown."""
    entry = get_table(table)
    if entry is None:
        return ["*"]
    return list(entry.columns)


def writable_columns(table: str) -> list[str]:
    return [column for column in columns(table) if not _ID_SUFFIX_RE.search(column)]


def primary_key(table: str) -> str:
    candidates = columns(table)
    for column in candidates:
        if _PK_RE.search(column):
            return column
    for column in candidates:
        if "id" in column:
            return column
    return "id"


def schema_hints() -> dict[str, object]:
    return {
        "tables": table_names(),
        "columns": {table.name: list(table.columns) for table in CATALOG},
    }
