from __future__ import annotations

from intent_classifier import Intent
from models import QueryPlan

INTENT_NOTES: dict[Intent, str] = {
    Intent.INSERT: "Populated illustrative column values. Replace with real data before running.",
    Intent.UPDATE: "Included example WHERE clause to scope the change.",
    Intent.DELETE: "Included example WHERE clause to scope the change.",
    Intent.CREATE_TABLE: "Mapped known fields to representative SQL data types.",
    Intent.ALTER_TABLE: "Generated example ALTER operations (adjust as needed).",
    Intent.DROP_TABLE: "Uses IF EXISTS for safe deletion in demos.",
    Intent.CREATE_VIEW: "Wrapped a SELECT statement inside CREATE VIEW.",
    Intent.NESTED_SELECT: "Added correlated subquery comparing against an aggregate of the same table.",
    Intent.PLSQL: "Generated anonymous PL/SQL block template with SELECT INTO.",
}


def build_explanation(intent: Intent, tables: list[str], plan: QueryPlan) -> list[str]:
    """Bullet list describing the choices recorded in ``plan``.

    Filters, grouping, aggregations and limit are only reported for plain
    SELECT statements; the other intents get one fixed note each.
    """
    items = [
        f"Detected intent: {intent.value.upper()} statement.",
        f"Primary target table: {tables[0]}",
    ]

    if plan.joins:
        items.append("Added sample JOIN between related tables.")

    if intent is Intent.SELECT:
        if plan.aggregations:
            items.append(f"Applied aggregations: {', '.join(plan.aggregations)}")
        if plan.where:
            items.append("Added filters based on temporal or keyword hints.")
        if plan.group_by:
            items.append(f"Grouped results by {plan.group_by}.")
        if plan.limit:
            items.append(f"Limited results to top {plan.limit}.")

    note = INTENT_NOTES.get(intent)
    if note:
        items.append(note)

    return items
