from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.orm import Query, Session
from starlette.requests import Request

from gridtable.config import TableConfig, table_settings
from gridtable.errors import FilterError, TableConfigurationError, TableNotFoundError
from gridtable.services.actions import Action
from gridtable.services.bindings import Binding
from gridtable.services.columns import Column
from gridtable.services.common import parse_positive_int, snake_case
from gridtable.services.elements import authorized
from gridtable.services.filters import Filter
from gridtable.services.pagination import Page, paginate
from gridtable.services.query_builders import apply_ordering, apply_search, column_expression

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.5
SORT_DIRECTIONS = {"asc", "desc"}
# Largest row offset a signed 64-bit OFFSET clause accepts.
MAX_OFFSET = 2**63 - 1
FILTER_VALUE_TYPES = (str, int, float, bool)


class Table:
    """Base class for a paginated, searchable table over one mapped model.

    Subclasses implement ``model`` and ``columns`` and may override the
    other hooks. Every request parameter the table reads is prefixed with
    its URI key, so several tables can share one page.
    """

    uri_key: str | None = None
    debounce: int | float | None = None

    def __init__(self, config: TableConfig | None = None) -> None:
        self.config = config or table_settings
        self.bindings = Binding(classes=["table"])
        self.authorized_columns: list[Column] = []
        self.headings: list[dict[str, Any]] = []

    # Declaration hooks

    def model(self) -> type:
        raise NotImplementedError(f"{type(self).__name__} must implement model()")

    def columns(self, request: Request) -> list[Column]:
        raise NotImplementedError(f"{type(self).__name__} must implement columns()")

    def search(self, request: Request) -> list[str]:
        return []

    def query(self, request: Request, query: Query) -> Query:
        return query

    def per_page_options(self, request: Request) -> list[int]:
        return list(self.config.per_page_options)

    def actions(self, request: Request) -> list[Action]:
        return []

    def standalone_actions(self, request: Request) -> list[Action]:
        return []

    def filters(self, request: Request) -> list[Filter]:
        return []

    # Request parameters

    @classmethod
    def default_uri_key(cls) -> str:
        return snake_case(cls.__name__)

    def resolve_uri_key(self, request: Request) -> str:
        if self.uri_key and self.uri_key.strip():
            self.uri_key = self.uri_key.strip().lower()
        else:
            self.uri_key = self.default_uri_key()
        return self.uri_key

    def param(self, request: Request, name: str) -> str | None:
        return request.query_params.get(f"{self.uri_key}_{name}")

    def per_page(self, request: Request) -> int:
        """Requested page size, or the first option when missing or above the largest option."""
        options = self.per_page_options(request)
        requested = parse_positive_int(self.param(request, "per_page"))
        if requested is None or requested > max(options):
            return options[0]
        return requested

    def page(self, request: Request, per_page: int) -> int:
        requested = parse_positive_int(self.param(request, "page"))
        if requested is None or (requested - 1) * per_page > MAX_OFFSET:
            return 1
        return requested

    def debounce_for(self, request: Request) -> int | float:
        if self.debounce is not None and self.debounce > 0:
            return self.debounce
        debounce = self.config.get("search_debounce", DEFAULT_DEBOUNCE)
        if isinstance(debounce, (int, float)) and not isinstance(debounce, bool):
            return debounce
        return DEFAULT_DEBOUNCE

    # Columns

    def resolve_columns(self, request: Request) -> list[Column]:
        self.authorized_columns = authorized(self.columns(request), request)
        return self.authorized_columns

    def resolve_headings(self) -> list[dict[str, Any]]:
        self.headings = [column.heading_dict() for column in self.authorized_columns]
        return self.headings

    # Query composition

    def new_query(self, db: Session) -> Query:
        return db.query(self.model())

    def apply_search(self, request: Request, query: Query) -> Query:
        term = self.param(request, "search")
        if term is None or not term.strip():
            return query
        searchable = self.search(request)
        if not searchable:
            return query
        model = self.model()
        expressions = [column_expression(model, attribute) for attribute in searchable]
        logger.debug("Table %s searching %s for %r", self.uri_key, searchable, term.strip())
        return apply_search(query, expressions, term.strip())

    def filter_payload(self, request: Request) -> list[dict[str, Any]]:
        """Parse ``<key>_filters`` into ``{"attribute", "case", "value"}`` entries.

        Accepted payloads:
        - object keyed by attribute: {"email": {"case": "contains", "value": "acme"}}
        - list of rows: [{"attribute": "email", "case": "contains", "value": "acme"}]
        """
        raw = self.param(request, "filters")
        if raw is None or raw.strip() == "":
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise FilterError("Invalid JSON in filters payload") from exc

        if isinstance(parsed, dict):
            rows = []
            for attribute, spec in parsed.items():
                if not isinstance(spec, dict):
                    raise FilterError(f"Filter '{attribute}' must be an object with case and value")
                rows.append({**spec, "attribute": attribute})
        elif isinstance(parsed, list):
            rows = parsed
        else:
            raise FilterError("Filters payload must be a list or object")

        entries: list[dict[str, Any]] = []
        for row in rows:
            if not isinstance(row, dict) or not row.get("attribute"):
                raise FilterError("Each filter must name an attribute")
            value = row.get("value")
            if value is not None and not isinstance(value, FILTER_VALUE_TYPES):
                raise FilterError(
                    f"Filter '{row['attribute']}' value must be a string, number or boolean"
                )
            entries.append({"attribute": str(row["attribute"]), "case": row.get("case"), "value": value})
        return entries

    def apply_filters(self, request: Request, query: Query, filters: list[Filter]) -> Query:
        by_attribute = {item.attribute: item for item in filters}
        for entry in self.filter_payload(request):
            target = by_attribute.get(entry["attribute"])
            if target is None:
                raise FilterError(f"Field '{entry['attribute']}' is not filterable")
            target.bind(entry["case"], entry["value"])
            target.enabled_case()
            if entry["value"] is None or entry["value"] == "":
                continue
            logger.debug(
                "Table %s applying %s %s", self.uri_key, type(target).__name__, entry["attribute"]
            )
            query = target.apply(request, query)
        return query

    def sort_state(self, request: Request) -> tuple[str | None, str]:
        """Return the requested ``(order_by, order_dir)`` or ``(None, "asc")``.

        Only authorized sortable columns that map onto the model are honored.
        """
        order_by = self.param(request, "order_by")
        order_dir = (self.param(request, "order_dir") or "asc").strip().lower()
        if order_dir not in SORT_DIRECTIONS:
            order_dir = "asc"
        sortable = {column.attribute for column in self.authorized_columns if column.is_sortable}
        if not order_by or order_by not in sortable:
            return None, "asc"
        try:
            column_expression(self.model(), order_by)
        except TableConfigurationError:
            logger.debug("Table %s cannot sort by %s", self.uri_key, order_by)
            return None, "asc"
        return order_by, order_dir

    def apply_sort(self, query: Query, order_by: str | None, order_dir: str) -> Query:
        if order_by is None:
            return query
        # A requested sort replaces any default ordering set by the query hook.
        query = query.order_by(None)
        return apply_ordering(query, column_expression(self.model(), order_by), order_dir)

    def paginator(
        self, request: Request, db: Session, filters: list[Filter], order_by: str | None, order_dir: str
    ) -> Page:
        query = self.query(request, self.new_query(db))
        query = self.apply_search(request, query)
        query = self.apply_filters(request, query, filters)
        query = self.apply_sort(query, order_by, order_dir)

        per_page = self.per_page(request)
        page = paginate(query, per_page, self.page(request, per_page))
        logger.debug(
            "Table %s page %d/%d (%d of %d rows)",
            self.uri_key,
            page.current_page,
            page.last_page,
            len(page.items),
            page.total,
        )
        return page.map(lambda resource: self.map_resource(resource, request))

    def map_resource(self, resource: Any, request: Request) -> list[dict[str, Any]]:
        return [column.serialize(resource, request, self.config) for column in self.authorized_columns]

    # Elements

    def resolve_actions(self, request: Request) -> list[dict[str, Any]]:
        return [action.json_serialize(request) for action in authorized(self.actions(request), request)]

    def resolve_standalone_actions(self, request: Request) -> list[dict[str, Any]]:
        return [
            action.json_serialize(request)
            for action in authorized(self.standalone_actions(request), request)
        ]

    def render(self, request: Request, db: Session) -> dict[str, Any]:
        """Build the JSON document the grid component consumes."""
        self.resolve_uri_key(request)
        self.resolve_columns(request)
        self.resolve_headings()
        logger.debug(
            "Rendering table %s with %d column(s)", self.uri_key, len(self.authorized_columns)
        )

        actions = self.resolve_actions(request)
        standalone_actions = self.resolve_standalone_actions(request)
        filters = authorized(self.filters(request), request)
        order_by, order_dir = self.sort_state(request)
        page = self.paginator(request, db, filters, order_by, order_dir)

        return {
            **page.to_dict(),
            "key": self.uri_key,
            "headings": self.headings,
            "isSearchable": bool(self.search(request)),
            "actions": actions,
            "standaloneActions": standalone_actions,
            "filters": [item.json_serialize(request) for item in filters],
            "hasActions": bool(actions) or bool(standalone_actions),
            "debounce": self.debounce_for(request),
            "bindings": self.bindings.to_dict(),
            "orderBy": order_by,
            "orderDir": order_dir,
        }


class TableRegistry:
    _tables: dict[str, type[Table]] = {}

    @classmethod
    def register(cls, table_cls: type[Table], table_key: str | None = None) -> type[Table]:
        key = (table_key or table_cls.uri_key or table_cls.default_uri_key()).strip().lower()
        if not key:
            raise ValueError("table_key is required")
        existing = cls._tables.get(key)
        if existing is not None and existing is not table_cls:
            raise ValueError(f"Duplicate table key in registry: {key}")
        cls._tables[key] = table_cls
        return table_cls

    @classmethod
    def unregister(cls, table_key: str) -> None:
        cls._tables.pop(table_key, None)

    @classmethod
    def get(cls, table_key: str) -> type[Table]:
        table_cls = cls._tables.get(table_key)
        if table_cls is None:
            raise TableNotFoundError(f"Unregistered table key: {table_key}")
        return table_cls

    @classmethod
    def exists(cls, table_key: str) -> bool:
        return table_key in cls._tables

    @classmethod
    def keys(cls) -> list[str]:
        return sorted(cls._tables)


def register_table(table_cls: type[Table]) -> type[Table]:
    """Class decorator registering a table under its URI key."""
    return TableRegistry.register(table_cls)
