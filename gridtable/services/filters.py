"""Table filters.

A filter is declared once with a label and an attribute. The case (operator)
and the value are bound per request from the table's filter parameter and
applied to the query before pagination.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from typing import Any

from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement
from starlette.requests import Request

from gridtable.errors import FilterError
from gridtable.services.elements import Element
from gridtable.services.query_builders import column_expression, ilike, query_entity


class TextFilterCase(str, enum.Enum):
    contains = "contains"
    not_contains = "not_contains"
    equals = "equals"
    not_equals = "not_equals"
    starts_with = "starts_with"
    ends_with = "ends_with"
    not_starts_with = "not_starts_with"
    not_ends_with = "not_ends_with"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class Filter(Element):
    case_enum: type[enum.Enum] | None = None

    def __init__(self, label: str, attribute: str) -> None:
        super().__init__()
        self.label = label
        self.attribute = attribute
        self.case: str | None = None
        self.value: Any = None
        self.cases: list[enum.Enum] = list(self.case_enum) if self.case_enum else []

    def options(self, cases: Iterable[enum.Enum | str]) -> Filter:
        """Replace the cases offered by this filter, keeping the given order."""
        self.cases = [self._coerce_case(case) for case in cases]
        return self

    def bind(self, case: Any, value: Any) -> Filter:
        self.case = None if case is None else str(getattr(case, "value", case))
        self.value = value
        return self

    def expression(self, query: Query) -> ColumnElement:
        return column_expression(query_entity(query), self.attribute)

    def apply(self, request: Request, query: Query) -> Query:
        raise NotImplementedError(f"{type(self).__name__} must implement apply()")

    def _coerce_case(self, case: enum.Enum | str) -> enum.Enum:
        if self.case_enum is None:
            raise FilterError(f"{type(self).__name__} does not declare cases.")
        try:
            return self.case_enum(getattr(case, "value", case))
        except ValueError as exc:
            raise FilterError(f"Invalid case for {type(self).__name__}.") from exc

    def enabled_case(self) -> enum.Enum:
        """Return the bound case, rejecting cases this filter does not offer."""
        case = self._coerce_case(self.case) if self.case is not None else None
        if case is None or case not in self.cases:
            raise FilterError(f"Invalid case for {type(self).__name__}.")
        return case

    def json_serialize(self, request: Request) -> dict[str, Any]:
        return {
            **super().json_serialize(request),
            "label": self.label,
            "attribute": self.attribute,
            "options": {case.value: getattr(case, "label", case.value) for case in self.cases},
            "case": self.case,
            "value": self.value,
        }


PredicateBuilder = Callable[[ColumnElement, Any], Any]

TEXT_PREDICATES: dict[TextFilterCase, PredicateBuilder] = {
    TextFilterCase.contains: lambda col, v: ilike(col, v, prefix="%", suffix="%"),
    TextFilterCase.not_contains: lambda col, v: ~ilike(col, v, prefix="%", suffix="%"),
    TextFilterCase.equals: lambda col, v: col == v,
    TextFilterCase.not_equals: lambda col, v: col != v,
    TextFilterCase.starts_with: lambda col, v: ilike(col, v, suffix="%"),
    TextFilterCase.ends_with: lambda col, v: ilike(col, v, prefix="%"),
    TextFilterCase.not_starts_with: lambda col, v: ~ilike(col, v, suffix="%"),
    TextFilterCase.not_ends_with: lambda col, v: ~ilike(col, v, prefix="%"),
}


class TextFilter(Filter):
    case_enum = TextFilterCase

    def apply(self, request: Request, query: Query) -> Query:
        case = self.enabled_case()
        builder = TEXT_PREDICATES.get(case)
        if builder is None:
            raise FilterError(f"Invalid case for {type(self).__name__}.")
        return query.filter(builder(self.expression(query), self.value))
