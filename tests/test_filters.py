from __future__ import annotations

import pytest

from gridtable import Filter, TextFilter, TextFilterCase
from gridtable.errors import FilterError
from tests.helpers import make_request
from tests.models import Contact


def _names(query) -> list[str]:
    return [contact.name for contact in query.all()]


def _base_query(db_session):
    return db_session.query(Contact).order_by(Contact.id)


def test_text_filter_case_labels():
    assert TextFilterCase.contains.label == "Contains"
    assert TextFilterCase.not_starts_with.label == "Not starts with"


def test_text_filter_offers_every_case_by_default():
    payload = TextFilter("Email", "email").json_serialize(make_request())

    assert list(payload["options"]) == [case.value for case in TextFilterCase]
    assert payload["options"]["ends_with"] == "Ends with"
    assert payload["label"] == "Email"
    assert payload["attribute"] == "email"
    assert payload["component"] == "text-filter"
    assert payload["case"] is None
    assert payload["value"] is None


def test_contains_composes_case_insensitive_like(db_session):
    text_filter = TextFilter("Email", "email").bind("contains", "acme")

    query = text_filter.apply(make_request(), db_session.query(Contact))
    compiled = query.statement.compile()

    assert "contacts.email" in str(compiled)
    assert "LIKE" in str(compiled).upper()
    assert "%acme%" in compiled.params.values()


@pytest.mark.parametrize(
    ("case", "value", "expected"),
    [
        (TextFilterCase.contains, "a", ["Alice", "Carol", "Dave"]),
        (TextFilterCase.not_contains, "a", ["Bob", "Eve_1"]),
        (TextFilterCase.equals, "Bob", ["Bob"]),
        (TextFilterCase.not_equals, "Bob", ["Alice", "Carol", "Dave", "Eve_1"]),
        (TextFilterCase.starts_with, "ca", ["Carol"]),
        (TextFilterCase.ends_with, "e", ["Alice", "Dave"]),
        (TextFilterCase.not_starts_with, "ca", ["Alice", "Bob", "Dave", "Eve_1"]),
        (TextFilterCase.not_ends_with, "e", ["Bob", "Carol", "Eve_1"]),
    ],
)
def test_text_filter_cases(db_session, contacts, case, value, expected):
    text_filter = TextFilter("Name", "name").bind(case, value)

    assert _names(text_filter.apply(make_request(), _base_query(db_session))) == expected


def test_like_wildcards_in_value_match_literally(db_session, contacts):
    text_filter = TextFilter("Name", "name").bind("contains", "_")

    assert _names(text_filter.apply(make_request(), _base_query(db_session))) == ["Eve_1"]


@pytest.mark.parametrize("case", ["bogus", "CONTAINS", "", None])
def test_unknown_case_raises_filter_error(db_session, case):
    text_filter = TextFilter("Name", "name").bind(case, "x")

    with pytest.raises(FilterError, match="Invalid case for TextFilter"):
        text_filter.apply(make_request(), _base_query(db_session))


def test_restricted_options_reject_other_cases(db_session, contacts):
    text_filter = TextFilter("Name", "name").options(
        [TextFilterCase.equals, "contains"]
    )

    payload = text_filter.json_serialize(make_request())
    assert payload["options"] == {"equals": "Equals", "contains": "Contains"}

    with pytest.raises(FilterError):
        text_filter.bind("starts_with", "A").apply(make_request(), _base_query(db_session))

    assert _names(text_filter.bind("equals", "Dave").apply(make_request(), _base_query(db_session))) == [
        "Dave"
    ]


def test_options_rejects_unknown_cases():
    with pytest.raises(FilterError):
        TextFilter("Name", "name").options(["between"])


def test_base_filter_requires_apply(db_session):
    with pytest.raises(NotImplementedError):
        Filter("Name", "name").apply(make_request(), _base_query(db_session))


def test_bind_accepts_enum_members():
    text_filter = TextFilter("Name", "name").bind(TextFilterCase.ends_with, "e")

    assert text_filter.case == "ends_with"
    assert text_filter.json_serialize(make_request())["value"] == "e"
