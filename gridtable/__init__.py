"""Paginated, filterable table views serialized for a front-end grid."""

from gridtable.services.actions import Action
from gridtable.services.bindings import Binding
from gridtable.services.columns import BooleanColumn, Column, TextColumn
from gridtable.services.filters import Filter, TextFilter, TextFilterCase
from gridtable.services.tables import Table, TableRegistry, register_table

__all__ = [
    "Action",
    "Binding",
    "BooleanColumn",
    "Column",
    "Filter",
    "Table",
    "TableRegistry",
    "TextColumn",
    "TextFilter",
    "TextFilterCase",
    "register_table",
]
