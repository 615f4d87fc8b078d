from __future__ import annotations

from normalizer import normalize_text
from schema_catalog import CATALOG, DEFAULT_TABLE


def resolve_tables(prompt: str) -> list[str]:
    """Tables whose synonyms occur in the prompt, in catalog order.

    Never empty: prompts that name no known table resolve to ``orders``.
    """
    normalized = normalize_text(prompt)
    matches: list[str] = []
    for table in CATALOG:
        if table.name in matches:
            continue
        if any(variant in normalized for variant in table.synonyms):
            matches.append(table.name)

    if not matches and "view" in normalized:
        matches.append(DEFAULT_TABLE)

    return matches or [DEFAULT_TABLE]
