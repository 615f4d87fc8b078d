from __future__ import annotations

INDENT = "    "
LIST_SEPARATOR = ",\n" + INDENT


def _listing(items: list[str]) -> str:
    return LIST_SEPARATOR.join(items)


def render_select(
    table: str,
    columns: list[str],
    joins: str = "",
    where: str = "",
    group_by: str = "",
    order_by: str = "",
    limit: int | None = None,
) -> str:
    sql = f"SELECT\n{INDENT}{_listing(columns)}\nFROM\n{INDENT}{table}\n"
    if joins:
        sql += f"{joins}\n"
    if where:
        sql += f"WHERE\n{INDENT}{where}\n"
    if group_by:
        sql += f"GROUP BY\n{INDENT}{group_by}\n"
    if order_by:
        sql += f"ORDER BY\n{INDENT}{order_by}\n"
    if limit:
        sql += f"LIMIT {limit}"
    return f"{sql};".strip()


def render_insert(table: str, columns: list[str], values: list[str]) -> str:
    return f"INSERT INTO {table} (\n{INDENT}{_listing(columns)}\n)\nVALUES (\n{INDENT}{_listing(values)}\n);"


def render_update(table: str, assignments: list[str], where: str = "") -> str:
    sql = f"UPDATE {table}\nSET\n{INDENT}{_listing(assignments)}\n"
    if where:
        sql += f"WHERE\n{INDENT}{where}"
    return f"{sql};"


def render_delete(table: str, where: str = "") -> str:
    sql = f"DELETE FROM {table}\n"
    if where:
        sql += f"WHERE\n{INDENT}{where}"
    return f"{sql};"


def render_create_table(table: str, columns: list[str]) -> str:
    return f"CREATE TABLE {table} (\n{INDENT}{_listing(columns)}\n);"


def render_alter_table(table: str, operations: list[str]) -> str:
    return f"ALTER TABLE {table}\n{INDENT}{_listing(operations)};"


def render_drop_table(table: str) -> str:
    return f"DROP TABLE IF EXISTS {table};"


def render_create_view(view_name: str, select_sql: str) -> str:
    return f"CREATE OR REPLACE VIEW {view_name} AS\n{select_sql}\n;"


def render_nested_select(table: str, columns: list[str], comparison_column: str, aggregator: str) -> str:
    return (
        f"SELECT\n{INDENT}{_listing(columns)}\n"
        f"FROM\n{INDENT}{table}\n"
        f"WHERE\n{INDENT}{comparison_column} > (\n"
        f"{INDENT * 2}SELECT\n{INDENT * 3}{aggregator}({comparison_column})\n"
        f"{INDENT * 2}FROM\n{INDENT * 3}{table}\n"
        f"{INDENT});"
    )


PLSQL_BLOCK_TEMPLATE = """DECLARE
    v_count NUMBER;
BEGIN
    SELECT
        COUNT(*)
    INTO
        v_count
    FROM
        {table}
    WHERE
        {numeric_column} > {threshold};

    DBMS_OUTPUT.PUT_LINE('Found ' || v_count || ' records exceeding threshold.');
END;
/"""


def render_plsql_block(table: str, numeric_column: str, threshold: str) -> str:
    return PLSQL_BLOCK_TEMPLATE.format(table=table, numeric_column=numeric_column, threshold=threshold)
