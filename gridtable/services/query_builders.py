"""Reusable query-builder helpers for table search, filters and sorting."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from gridtable.errors import TableConfigurationError

LIKE_ESCAPE = "\\"


def query_entity(query: Query) -> type:
    """Return the mapped class the query selects from."""
    descriptions = query.column_descriptions
    if not descriptions or descriptions[0].get("entity") is None:
        raise TableConfigurationError("Query does not select a mapped entity")
    return descriptions[0]["entity"]


def column_expression(model: type, attribute: str) -> ColumnElement:
    """Resolve ``name`` or ``relation.name`` to a column expression on ``model``.

    Relations must already be joined by the caller for the expression to be
    usable in a WHERE or ORDER BY clause.
    """
    target: Any = model
    parts = attribute.split(".")
    for index, part in enumerate(parts):
        expression = getattr(target, part, None)
        if expression is None:
            raise TableConfigurationError(
                f"Attribute '{attribute}' is not present on model {model.__name__}"
            )
        if index == len(parts) - 1:
            return expression
        prop = getattr(expression, "property", None)
        mapper = getattr(prop, "mapper", None)
        if mapper is None:
            raise TableConfigurationError(
                f"Attribute '{part}' on model {model.__name__} is not a relationship"
            )
        target = mapper.class_
    raise TableConfigurationError(f"Attribute '{attribute}' is empty")


def escape_like(value: Any) -> str:
    text = "" if value is None else str(value)
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def ilike(expression: ColumnElement, value: Any, *, prefix: str = "", suffix: str = ""):
    """Case-insensitive LIKE with the user value matched literally."""
    return expression.ilike(f"{prefix}{escape_like(value)}{suffix}", escape=LIKE_ESCAPE)


def apply_search(query: Query, expressions: list[ColumnElement], term: str) -> Query:
    """AND one OR-group of ``column ILIKE '%term%'`` onto the query."""
    if not expressions:
        return query
    return query.filter(or_(*(ilike(expr, term, prefix="%", suffix="%") for expr in expressions)))


def apply_ordering(query: Query, expression: ColumnElement, order_dir: str) -> Query:
    if order_dir == "desc":
        return query.order_by(expression.desc())
    return query.order_by(expression.asc())
