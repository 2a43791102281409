import pytest

from neuromkt_api.app.core.fields import FieldUpdate, UpdateKind, blank_to_none, normalize_email
from neuromkt_api.app.schemas.project import ProjectUpdate


def test_from_input_classifies_the_three_states():
    assert FieldUpdate.from_input("x", provided=False).kind is UpdateKind.UNCHANGED
    assert FieldUpdate.from_input(None).kind is UpdateKind.CLEARED
    assert FieldUpdate.from_input("   ").kind is UpdateKind.CLEARED
    update = FieldUpdate.from_input("  Aromas SA ")
    assert update.kind is UpdateKind.SET
    assert update.value == "Aromas SA"


def test_non_clearable_blank_is_unchanged():
    assert FieldUpdate.from_input("", clearable=False).is_unchanged
    assert FieldUpdate.from_input(None, clearable=False).is_unchanged


def test_to_param_encoding():
    assert FieldUpdate.unchanged().to_param() is None
    assert FieldUpdate.cleared().to_param() == ""
    assert FieldUpdate.set("v").to_param() == "v"


def test_set_requires_a_value():
    with pytest.raises(ValueError):
        FieldUpdate.set(None)


def test_of_model_uses_fields_sent_by_the_client():
    data = ProjectUpdate.model_validate({"description": None})
    assert FieldUpdate.of_model(data, "provider").is_unchanged
    assert FieldUpdate.of_model(data, "description").kind is UpdateKind.CLEARED


def test_normalize_email():
    assert normalize_email("  Jane@Test.COM ") == "jane@test.com"
    assert normalize_email(None) == ""


def test_blank_to_none():
    assert blank_to_none("  ") is None
    assert blank_to_none(None) is None
    assert blank_to_none(" P1 ") == "P1"
