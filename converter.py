from __future__ import annotations

import logging
from typing import Callable

import sql_templates
from clause_builders import (
    build_alter_operations,
    build_create_table_columns,
    build_group_by,
    build_insert_values,
    build_join,
    build_order_by,
    build_update_assignments,
    build_view_name,
    build_where,
    detect_aggregations,
    parse_limit,
    parse_threshold,
    pick_comparison_aggregator,
    pick_numeric_column,
    select_columns,
)
from entity_resolver import resolve_tables
from explanation import build_explanation
from intent_classifier import Intent, classify
from models import ConversionResult, QueryPlan
from schema_catalog import columns as catalog_columns
from schema_catalog import primary_key, writable_columns

logger = logging.getLogger(__name__)

Assembler = Callable[[str, list[str], str], tuple[str, QueryPlan]]


def _assemble_insert(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    columns = writable_columns(table)[:4]
    values = build_insert_values(columns)
    return sql_templates.render_insert(table, columns, values), QueryPlan(table=table, columns=columns)


def _assemble_update(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    columns = writable_columns(table)[:3]
    scoped_where = where or f"{primary_key(table)} = ?"
    sql = sql_templates.render_update(table, build_update_assignments(columns), scoped_where)
    return sql, QueryPlan(table=table, columns=columns, where=scoped_where)


def _assemble_delete(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    scoped_where = where or f"{primary_key(table)} = ?"
    return sql_templates.render_delete(table, scoped_where), QueryPlan(table=table, where=scoped_where)


def _assemble_create_table(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    columns = build_create_table_columns(table, catalog_columns(table))
    return sql_templates.render_create_table(table, columns), QueryPlan(table=table, columns=columns)


def _assemble_alter_table(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    operations = build_alter_operations(prompt, table)
    return sql_templates.render_alter_table(table, operations), QueryPlan(table=table)


def _assemble_drop_table(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    return sql_templates.render_drop_table(table), QueryPlan(table=table)


def _assemble_nested_select(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    columns = select_columns(prompt, table, [])
    comparison_column = pick_numeric_column(catalog_columns(table))
    aggregator = pick_comparison_aggregator(prompt)
    sql = sql_templates.render_nested_select(table, columns, comparison_column, aggregator)
    plan = QueryPlan(table=table, columns=columns, where=f"{comparison_column} > {aggregator}(subquery)")
    return sql, plan


def _assemble_plsql(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    table = tables[0]
    numeric_column = pick_numeric_column(catalog_columns(table))
    threshold = parse_threshold(prompt)
    return sql_templates.render_plsql_block(table, numeric_column, threshold), QueryPlan(table=table)


def _select_plan(prompt: str, tables: list[str], where: str, with_limit: bool) -> QueryPlan:
    table = tables[0]
    aggregations = detect_aggregations(prompt)
    columns = select_columns(prompt, table, aggregations)
    return QueryPlan(
        table=table,
        columns=columns,
        joins=build_join(tables),
        where=where,
        group_by=build_group_by(prompt, columns),
        order_by=build_order_by(prompt, columns),
        limit=parse_limit(prompt) if with_limit else None,
        aggregations=aggregations,
    )


def _render_plan(plan: QueryPlan) -> str:
    return sql_templates.render_select(
        plan.table,
        plan.columns,
        joins=plan.joins,
        where=plan.where,
        group_by=plan.group_by,
        order_by=plan.order_by,
        limit=plan.limit,
    )


def _assemble_create_view(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    plan = _select_plan(prompt, tables, where, with_limit=False)
    return sql_templates.render_create_view(build_view_name(tables), _render_plan(plan)), plan


def _assemble_select(prompt: str, tables: list[str], where: str) -> tuple[str, QueryPlan]:
    plan = _select_plan(prompt, tables, where, with_limit=True)
    return _render_plan(plan), plan


ASSEMBLERS: dict[Intent, Assembler] = {
    Intent.INSERT: _assemble_insert,
    Intent.UPDATE: _assemble_update,
    Intent.DELETE: _assemble_delete,
    Intent.CREATE_TABLE: _assemble_create_table,
    Intent.ALTER_TABLE: _assemble_alter_table,
    Intent.DROP_TABLE: _assemble_drop_table,
    Intent.NESTED_SELECT: _assemble_nested_select,
    Intent.PLSQL: _assemble_plsql,
    Intent.CREATE_VIEW: _assemble_create_view,
    Intent.SELECT: _assemble_select,
}


def convert(prompt: str) -> ConversionResult:
    tables = resolve_tables(prompt)
    intent = classify(prompt)
    where = build_where(prompt)
    logger.debug("Classified prompt as %s against tables %s", intent.value, tables)

    sql, plan = ASSEMBLERS[intent](prompt, tables, where)
    return ConversionResult(sql=sql, explanation=tuple(build_explanation(intent, tables, plan)))
