from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class QueryPlan:
    table: str
    columns: list[str] = field(default_factory=list)
    joins: str = ""
    where: str = ""
    group_by: str = ""
    order_by: str = ""
    limit: int | None = None
    aggregations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ConversionResult:
    sql: str
    explanation: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"sql": self.sql, "explanation": list(self.explanation)}
