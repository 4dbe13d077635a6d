from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from gridtable.services.common import as_list, unique_merge


@dataclass
class Binding:
    """Class and style lists bound to one rendered element."""

    classes: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)

    def set_classes(self, classes: str | Iterable[str]) -> Binding:
        self.classes = as_list(classes)
        return self

    def add_classes(self, classes: str | Iterable[str]) -> Binding:
        self.classes = unique_merge(self.classes, as_list(classes))
        return self

    def set_styles(self, styles: str | Iterable[str]) -> Binding:
        self.styles = as_list(styles)
        return self

    def add_styles(self, styles: str | Iterable[str]) -> Binding:
        self.styles = unique_merge(self.styles, as_list(styles))
        return self

    def to_dict(self) -> dict[str, list[str]]:
        return {"classes": list(self.classes), "styles": list(self.styles)}
