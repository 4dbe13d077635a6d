from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Query


@dataclass
class Page:
    """Length-aware slice of a query result."""

    items: list[Any] = field(default_factory=list)
    total: int = 0
    per_page: int = 20
    current_page: int = 1

    @property
    def last_page(self) -> int:
        return max(int(math.ceil(self.total / self.per_page)), 1)

    @property
    def first_item(self) -> int | None:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def last_item(self) -> int | None:
        first = self.first_item
        if first is None:
            return None
        return first + len(self.items) - 1

    def map(self, callback: Callable[[Any], Any]) -> Page:
        return Page(
            items=[callback(item) for item in self.items],
            total=self.total,
            per_page=self.per_page,
            current_page=self.current_page,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": list(self.items),
            "total": self.total,
            "perPage": self.per_page,
            "currentPage": self.current_page,
            "lastPage": self.last_page,
            "from": self.first_item,
            "to": self.last_item,
        }


def paginate(query: Query, per_page: int, page: int = 1) -> Page:
    """Count the query, then fetch one page of it.

    Ordering is left to the caller. Pages past the end are returned empty
    with the real total.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all() if total else []
    return Page(items=items, total=total, per_page=per_page, current_page=page)
