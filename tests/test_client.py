"""Tests for the blocking SwellForm wrapper."""

import pytest

from swellforms import ErrorCode, SwellForm, SwellformsError


@pytest.fixture
def make_form():
    forms = []

    def _make(*args, **kwargs):
        form = SwellForm(*args, **kwargs)
        forms.append(form)
        return form

    yield _make
    for form in forms:
        form.close()


def test_local_state(make_form):
    form = make_form("f1", {"a": 1})
    form.set_field("b", 2)
    form.set_fields({"c": 3})
    assert form.form_id == "f1"
    assert form.get_fields() == {"a": 1, "b": 2, "c": 3}
    assert form.get_field("b") == 2
    assert form.is_valid()
    assert not form.is_processing()
    assert not form.definitions_fetched


def test_fetch_validate_submit(make_form, stub):
    fetch = stub(
        (200, [{"id": "1", "name": "email", "required": True}]),
        (422, {"errors": {"email": ["taken"]}}),
        (201, {"id": 5}),
    )
    form = make_form("f1", fetch=fetch)
    assert [f.key for f in form.fetch_fields().fields] == ["email"]
    assert form.definitions_fetched
    assert [f.key for f in form.get_definitions()] == ["email"]

    result = form.validate_field("email")
    assert result.errors == {"email": ["This field is required."]}
    assert len(fetch.calls) == 1

    form.set_field("email", "a@b.c")
    result = form.validate()
    assert not result.valid
    assert form.get_field_error("email") == "taken"
    assert form.has_error("email")
    assert form.has_form_errors()
    assert form.get_form_errors() == {"email": ["taken"]}
    assert not form.is_valid("email")

    result = form.submit(fields={"extra": True})
    assert result.ok
    assert result.data == {"id": 5}
    assert fetch.sent()["fields"] == {"email": "a@b.c", "extra": True}
    assert form.is_valid()


def test_errors_propagate(make_form, stub):
    form = make_form("f1", fetch=stub((429, None)))
    with pytest.raises(SwellformsError) as exc:
        form.submit()
    assert exc.value.code == ErrorCode.RATE_LIMITED


def test_clear_errors(make_form, stub):
    form = make_form("f1", fetch=stub((422, {"a": ["x"]})))
    form.validate()
    assert form.has_error("a")
    form.clear_errors()
    assert not form.has_form_errors()
