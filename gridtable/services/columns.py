"""Table columns.

A column turns one row into one cell. The row is always passed in, so a
single column instance can serve every row of a page.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from starlette.requests import Request

from gridtable.config import TableConfig, table_settings
from gridtable.services.bindings import Binding
from gridtable.services.common import data_get, is_blank, unique_merge
from gridtable.services.elements import Element

ResolveCallback = Callable[[Any, Request], Any]

_UNSET = object()


class Column(Element):
    def __init__(
        self,
        name: str,
        attribute: str,
        resolve_attribute_callback: ResolveCallback | None = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.attribute = attribute
        self.resolve_attribute_callback = resolve_attribute_callback
        self.default_value: Any = _UNSET
        self.is_sortable = False
        self.render_html = False
        self.td = Binding()
        self.td_classes_replaced = False
        self.heading = Binding()

    def default(self, value: Any) -> Column:
        self.default_value = value
        return self

    def sortable(self, value: bool = True) -> Column:
        self.is_sortable = value
        return self

    def as_html(self, value: bool = True) -> Column:
        self.render_html = value
        return self

    def set_td_classes(self, classes: str | Iterable[str]) -> Column:
        self.td.set_classes(classes)
        self.td_classes_replaced = True
        return self

    def add_td_classes(self, classes: str | Iterable[str]) -> Column:
        self.td.add_classes(classes)
        return self

    def set_td_styles(self, styles: str | Iterable[str]) -> Column:
        self.td.set_styles(styles)
        return self

    def add_td_styles(self, styles: str | Iterable[str]) -> Column:
        self.td.add_styles(styles)
        return self

    def set_heading_classes(self, classes: str | Iterable[str]) -> Column:
        self.heading.set_classes(classes)
        return self

    def add_heading_classes(self, classes: str | Iterable[str]) -> Column:
        self.heading.add_classes(classes)
        return self

    def set_heading_styles(self, styles: str | Iterable[str]) -> Column:
        self.heading.set_styles(styles)
        return self

    def add_heading_styles(self, styles: str | Iterable[str]) -> Column:
        self.heading.add_styles(styles)
        return self

    def resolve_default_value(self, config: TableConfig) -> Any:
        if self.default_value is not _UNSET and self.default_value is not None:
            return self.default_value
        return config.get("default_value")

    def resolve(self, resource: Any, request: Request, config: TableConfig | None = None) -> Any:
        """Resolve the display value of this column for ``resource``.

        Booleans and integers are always shown as-is so that ``False`` and
        ``0`` are never replaced by the default.
        """
        config = config or table_settings
        if self.resolve_attribute_callback is not None:
            value = self.resolve_attribute_callback(resource, request)
        else:
            value = data_get(resource, self.attribute)

        if not isinstance(value, (bool, int)) and is_blank(value):
            return self.resolve_default_value(config)
        return value

    def resolve_td_classes(self, config: TableConfig) -> list[str]:
        """Cell classes: the configured defaults plus added ones, unless replaced."""
        if self.td_classes_replaced:
            return list(self.td.classes)
        return unique_merge(config.get("td_classes", []), self.td.classes)

    def heading_dict(self) -> dict[str, Any]:
        return {
            "attribute": self.attribute,
            "name": self.name,
            "classes": list(self.heading.classes),
            "styles": list(self.heading.styles),
        }

    def serialize(
        self, resource: Any, request: Request, config: TableConfig | None = None
    ) -> dict[str, Any]:
        config = config or table_settings
        return {
            "component": self.component(request),
            "value": self.resolve(resource, request, config),
            "sortable": self.is_sortable,
            "asHtml": self.render_html,
            "attribute": self.attribute,
            "bindings": {
                "td": {
                    "styles": list(self.td.styles),
                    "classes": self.resolve_td_classes(config),
                },
            },
        }


class TextColumn(Column):
    pass


class BooleanColumn(Column):
    """Column for true/false attributes; ``None`` still falls back to the default."""
