from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BindingPayload(CamelModel):
    classes: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)


class CellBindings(CamelModel):
    td: BindingPayload


class TableCell(CamelModel):
    component: str
    value: Any = None
    sortable: bool = False
    as_html: bool = False
    attribute: str
    bindings: CellBindings


class TableHeading(CamelModel):
    attribute: str
    name: str
    classes: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)


class ElementPayload(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    component: str
    shared_data: dict[str, Any] = Field(default_factory=dict)
    bindings: BindingPayload | None = None


class FilterPayload(ElementPayload):
    label: str
    attribute: str
    options: dict[str, str] = Field(default_factory=dict)
    case: str | None = None
    value: Any = None


class ActionPayload(ElementPayload):
    name: str
    uri_key: str
    standalone: bool = False
    confirm_text: str | None = None


class TableResponse(CamelModel):
    items: list[list[TableCell]]
    total: int
    per_page: int
    current_page: int
    last_page: int
    from_: int | None = Field(default=None, alias="from")
    to: int | None = None
    key: str
    headings: list[TableHeading]
    is_searchable: bool
    actions: list[ActionPayload]
    standalone_actions: list[ActionPayload]
    filters: list[FilterPayload]
    has_actions: bool
    debounce: int | float
    bindings: BindingPayload
    order_by: str | None = None
    order_dir: str = "asc"


class TableListResponse(BaseModel):
    tables: list[str]
