"""Capabilities shared by every column, filter and action of a table."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from starlette.requests import Request

from gridtable.services.bindings import Binding
from gridtable.services.common import kebab_case

logger = logging.getLogger(__name__)

AuthorizationCallback = Callable[[Request], bool]


class Element:
    """Base for anything the grid renders next to the rows.

    Subclasses may pin ``component_name``; otherwise the component is
    derived from the class name (``TextColumn`` becomes ``text-column``).
    """

    component_name: str | None = None

    def __init__(self) -> None:
        self.bindings = Binding()
        self.shared_data: dict[str, Any] = {}
        self._see_callback: AuthorizationCallback | None = None

    @classmethod
    def make(cls, *args: Any, **kwargs: Any):
        return cls(*args, **kwargs)

    def can_see(self, callback: AuthorizationCallback):
        """Restrict the element to requests for which ``callback`` returns True."""
        self._see_callback = callback
        return self

    def authorize(self, request: Request) -> bool:
        if self._see_callback is None:
            return True
        return bool(self._see_callback(request))

    def component(self, request: Request) -> str:
        return self.component_name or kebab_case(type(self).__name__)

    def with_component(self, name: str):
        self.component_name = name
        return self

    def with_meta(self, **data: Any):
        self.shared_data.update(data)
        return self

    def json_serialize(self, request: Request) -> dict[str, Any]:
        return {
            "component": self.component(request),
            "sharedData": dict(self.shared_data),
            "bindings": self.bindings.to_dict(),
        }


def authorized(elements, request: Request) -> list:
    """Keep the elements that authorize ``request``, in declaration order."""
    elements = list(elements)
    allowed = [element for element in elements if element.authorize(request)]
    skipped = len(elements) - len(allowed)
    if skipped:
        logger.debug("Skipped %d unauthorized element(s)", skipped)
    return allowed
