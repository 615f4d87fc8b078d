from __future__ import annotations


def normalize_text(text: str) -> str:
    return text.lower()


def humanize(column: str) -> str:
    return column.replace("_", " ")
