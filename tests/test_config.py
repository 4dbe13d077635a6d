from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from gridtable.config import TableConfig
from gridtable.logging import configure_logging


def test_get_returns_value_or_default():
    config = TableConfig(default_value="-", td_classes=["cell"])

    assert config.get("default_value") == "-"
    assert config.get("td_classes") == ["cell"]
    assert config.get("missing_key", 3) == 3


def test_search_debounce_strings_are_parsed():
    assert TableConfig(search_debounce="0.75").search_debounce == 0.75


@pytest.mark.parametrize("options", [[], [0, 10], [-5]])
def test_per_page_options_must_be_positive(options):
    with pytest.raises(ValidationError):
        TableConfig(per_page_options=options)


def test_config_is_frozen():
    config = TableConfig()

    with pytest.raises(ValidationError):
        config.default_value = "x"


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    previous_level = root.level
    try:
        configure_logging("debug")
        configure_logging("DEBUG")

        handlers = [handler for handler in root.handlers if getattr(handler, "_gridtable", False)]
        assert len(handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous_level)
