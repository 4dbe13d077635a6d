from __future__ import annotations

from typing import Any

from starlette.requests import Request

from gridtable.services.common import snake_case
from gridtable.services.elements import Element


class Action(Element):
    """An operation the grid offers on selected rows or on the table itself.

    Executing the action belongs to the application; the table only tells
    the front end which actions the current request may see.
    """

    def __init__(self, name: str, uri_key: str | None = None) -> None:
        super().__init__()
        self.name = name
        self.uri_key = (uri_key or snake_case(name)).strip().lower()
        self.standalone = False
        self.confirm_text: str | None = None

    def as_standalone(self, value: bool = True) -> Action:
        self.standalone = value
        return self

    def confirm(self, text: str) -> Action:
        self.confirm_text = text
        return self

    def json_serialize(self, request: Request) -> dict[str, Any]:
        return {
            **super().json_serialize(request),
            "name": self.name,
            "uriKey": self.uri_key,
            "standalone": self.standalone,
            "confirmText": self.confirm_text,
        }
